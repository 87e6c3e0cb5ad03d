"""
main_app - Flask Application Package

This package contains the markwiki Flask application using the factory pattern.
The create_app() function is the entry point for creating application instances.

Usage:
    # Development
    from main_app import create_app
    app = create_app()

    # Production
    from main_app import create_app
    from config import ProductionConfig
    app = create_app(ProductionConfig)

    # Testing
    from main_app import create_app
    from config import TestingConfig
    app = create_app(TestingConfig)
"""

from __future__ import annotations

import logging
import os
import weakref
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import Flask, Response, current_app, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from config import Config, DevelopmentConfig
from extensions import REPOSITORY_KEY, csrf
from pageops.errors import RenderError, StorageError
from pageops.repository import PageRepository
from pageops.storage import create_store


def create_app(config_class: Optional[type] = None) -> Flask:
    """
    Create and configure a Flask application with extensions, the page repository, blueprints, error handlers, and request hooks registered.

    Parameters:
        config_class (type, optional): Configuration class to apply to the app. If omitted, uses DevelopmentConfig when the environment variable FLASK_DEBUG is "1", otherwise uses Config.

    Returns:
        Flask: The configured Flask application instance.

    Raises:
        StorageError: if the configured store cannot be opened or created. Startup must not continue without storage.
    """
    # Determine config class if not provided
    if config_class is None:
        if os.environ.get("FLASK_DEBUG") == "1":
            config_class = DevelopmentConfig
        else:
            config_class = Config

    # Use absolute paths for template and static folders
    # __file__ is in main_app/, so parent is src/
    src_dir = Path(__file__).parent.parent
    app = Flask(
        __name__,
        template_folder=str(src_dir / "templates"),
        static_folder=str(src_dir / "static")
    )
    app.config.from_object(config_class)

    # Configure logging for production
    if not app.debug and not app.testing:
        _configure_logging(app)

    # Initialize extensions
    csrf.init_app(app)

    # Open the page store; failures abort startup. It is closed when the
    # app is garbage collected or at interpreter exit.
    repository = _open_repository(app)
    app.extensions[REPOSITORY_KEY] = repository
    weakref.finalize(app, repository.close)

    # Register blueprints
    from main_app.main import bp as main_bp
    from main_app.pages import bp as pages_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(pages_bp)

    # Register error handlers
    app.register_error_handler(RequestEntityTooLarge, _handle_large_request)
    app.register_error_handler(StorageError, _handle_wiki_error)
    app.register_error_handler(RenderError, _handle_wiki_error)

    # Register request handlers
    app.after_request(_add_security_headers)

    return app


def _open_repository(app: Flask) -> PageRepository:
    """
    Build the store selected by WIKI_STORAGE and open it inside a PageRepository.

    Parameters:
        app (Flask): The application whose config selects the backend.

    Returns:
        PageRepository: An opened repository.
    """
    data_root = Path(app.config["WIKI_DATA_ROOT"])
    store = create_store(
        app.config.get("WIKI_STORAGE", "file"),
        data_root,
        app.config.get("WIKI_DATABASE"),
    )
    repository = PageRepository(store)
    try:
        repository.open()
    except StorageError:
        app.logger.exception("Cannot open page store %r", store)
        raise
    return repository


def _handle_large_request(e: RequestEntityTooLarge) -> tuple[Response, int]:
    """
    Return a 413 JSON response for requests that exceed the configured maximum content length.

    Parameters:
        e (RequestEntityTooLarge): The exception raised for an oversized request.

    Returns:
        tuple[Response, int]: A JSON response containing `error` and `message` fields, and the HTTP status code 413.
    """
    return jsonify({
        "error": "Request too large",
        "message": "Submitted page exceeds the allowed size limit"
    }), 413


def _handle_wiki_error(e: Exception) -> tuple[str, int, dict]:
    """
    Return a plain-text 500 response carrying the error message.

    Storage and render failures are shown verbatim; this is a personal tool,
    not a hardened API.
    """
    current_app.logger.error("Request failed: %s", e)
    return str(e), 500, {"Content-Type": "text/plain; charset=utf-8"}


def _add_security_headers(response: Response) -> Response:
    """
    Attach common security-related HTTP headers to the given response.

    Adds the following headers to mitigate common web vulnerabilities:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: SAMEORIGIN
    - X-XSS-Protection: 1; mode=block

    If the application's SESSION_COOKIE_SECURE config is enabled, also adds
    Strict-Transport-Security set to "max-age=31536000; includeSubDomains".
    """
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "SAMEORIGIN"
    response.headers["X-XSS-Protection"] = "1; mode=block"

    # Only add HSTS in production with HTTPS
    if current_app.config.get("SESSION_COOKIE_SECURE"):
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

    return response


def _configure_logging(app: Flask) -> None:
    """
    Set up rotating file logging for production.

    Creates the LOG_DIR directory if it does not exist, attaches a RotatingFileHandler writing to "markwiki.log" (max 10240 bytes per file, 10 backup files) to both the application logger and the pageops package logger, and logs a startup message.

    Parameters:
        app (Flask): The Flask application instance to configure.
    """
    log_dir = Path(app.config.get("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        str(log_dir / "markwiki.log"),
        maxBytes=10240,  # 10KB per file
        backupCount=10
    )
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
    ))
    file_handler.setLevel(logging.INFO)

    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)

    pageops_logger = logging.getLogger("pageops")
    pageops_logger.addHandler(file_handler)
    pageops_logger.setLevel(logging.INFO)

    app.logger.info("markwiki startup")
