# config.py
# Flask application configuration

import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    """Read an integer setting from the environment, falling back to default."""
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    """Flask configuration class."""

    # Secret key for session security (CSRF tokens live in the session)
    _secret_key = os.environ.get("FLASK_SECRET_KEY")
    if not _secret_key:
        warnings.warn(
            "FLASK_SECRET_KEY not set. Using default key which is insecure for production!",
            UserWarning,
            stacklevel=2
        )
        _secret_key = "change-me-in-production"
    SECRET_KEY = _secret_key

    # Directory holding page files and the SQLite database
    WIKI_DATA_ROOT = Path(os.environ.get("WIKI_DATA_ROOT", "./data")).resolve()

    # Storage backend: "file" or "sqlite"
    WIKI_STORAGE = os.environ.get("WIKI_STORAGE", "file").lower()

    # SQLite database file; defaults to <data root>/wiki.db when unset
    WIKI_DATABASE = os.environ.get("WIKI_DATABASE")

    # Page shown by /go/ when no title is given
    WIKI_FRONT_PAGE = "front"

    # Maximum content length (5MB)
    MAX_CONTENT_LENGTH = _int_from_env("MAX_CONTENT_LENGTH", 5 * 1024 * 1024)

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"

    # WTF CSRF protection
    WTF_CSRF_ENABLED = True

    # Session cookie hardening
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = False

    # Log directory used outside debug/testing
    LOG_DIR = os.environ.get("WIKI_LOG_DIR", "logs")


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG = True
    SESSION_COOKIE_SECURE = False


class TestingConfig(Config):
    """Configuration for the test suite."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False
    SESSION_COOKIE_SECURE = False
    WIKI_DATA_ROOT = Path("./test-data").resolve()


class ProductionConfig(Config):
    """Configuration for production deployments behind HTTPS."""

    DEBUG = False
    SESSION_COOKIE_SECURE = True
