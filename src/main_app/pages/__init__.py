"""
pages - Pages Blueprint

This blueprint handles the wiki page routes:
- Viewing a rendered page (/view/<id>)
- Editing a page, new or existing (/edit/<id>)
- Saving or cancelling an edit (/save/<id>)
"""

from flask import Blueprint

bp = Blueprint("pages", __name__)

from main_app.pages import routes  # Import routes after bp is created
