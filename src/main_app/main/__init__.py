"""
main - Main Blueprint

This blueprint handles the application-level routes including:
- The /go/ shortcut that jumps to a page by name
- The landing page (redirects to the front page)
- Health check
"""

from flask import Blueprint

bp = Blueprint("main", __name__)

from main_app.main import routes  # Import routes after bp is created
