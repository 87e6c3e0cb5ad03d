"""
pageops - Page Operations Package

This package provides the core page pipeline for markwiki:

Modules:
    validation: Identifier and request path validation
    render: Markdown to sanitized HTML conversion (Python-Markdown + bleach)
    storage: Flat-file and SQLite page stores behind one interface
    repository: Load/save of fully rendered pages
    models: Page dataclasses
    errors: Exception hierarchy

Typical Usage:
    >>> from pageops import FileStore, Page, PageRepository
    >>>
    >>> repo = PageRepository(FileStore(Path("data")))
    >>> repo.open()
    >>> repo.save(Page(identifier="front", body="Hello **world**"))
    >>> repo.load("front").rendered_body
    Markup('<p>Hello <strong>world</strong></p>')

Security:
    Every identifier is validated against ``\\w{1,20}`` before it is used
    as a file name or database key.
"""

from __future__ import annotations

# Re-export commonly used names for convenience.
from .errors import InvalidIdentifier, RenderError, StorageError, WikiError
from .models import Page, StoredPage
from .render import render_markdown, sanitize_html
from .repository import PageRepository
from .storage import FileStore, PageStore, SQLiteStore, create_store
from .validation import IdentifierCheck, check_identifier, match_page_path, require_identifier

__all__ = [
    # errors module
    "WikiError",
    "InvalidIdentifier",
    "StorageError",
    "RenderError",
    # models module
    "Page",
    "StoredPage",
    # render module
    "render_markdown",
    "sanitize_html",
    # repository module
    "PageRepository",
    # storage module
    "PageStore",
    "FileStore",
    "SQLiteStore",
    "create_store",
    # validation module
    "IdentifierCheck",
    "check_identifier",
    "match_page_path",
    "require_identifier",
]

__version__ = "1.0.0"
