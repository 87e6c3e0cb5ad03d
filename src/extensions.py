"""
extensions.py - Flask Extensions Module

This module initializes Flask extensions without binding them to a specific
application instance. This allows the extensions to be imported anywhere in
the application without creating circular import issues.

The extensions are bound to the Flask app in the application factory function
(create_app) using the init_app pattern. The page repository is not a Flask
extension class, but it is registered on ``app.extensions`` the same way so
handlers can reach it through ``current_app``.

Example:
    from extensions import csrf, get_repository

    def create_app(config_class=Config):
        app = Flask(__name__)
        app.config.from_object(config_class)

        # Initialize extensions with the app
        csrf.init_app(app)

        return app
"""

from __future__ import annotations

from flask import current_app
from flask_wtf.csrf import CSRFProtect

from pageops.repository import PageRepository

# Initialize extensions without app (deferred initialization)
# These will be bound to the app in create_app()
csrf = CSRFProtect()

REPOSITORY_KEY = "page_repository"


def get_repository() -> PageRepository:
    """Return the page repository owned by the current application."""
    return current_app.extensions[REPOSITORY_KEY]
