# tests/conftest.py
# Shared pytest fixtures for markwiki tests

from pathlib import Path

import pytest

from config import TestingConfig
from main_app import create_app
from pageops.storage import FileStore, SQLiteStore


def make_config(data_root: Path, **overrides) -> type:
    """Build a TestingConfig subclass rooted at ``data_root``."""
    attrs = {"WIKI_DATA_ROOT": data_root, "LOG_DIR": str(data_root / "logs")}
    attrs.update(overrides)
    return type("TestConfig", (TestingConfig,), attrs)


@pytest.fixture(params=["file", "sqlite"])
def app(request, tmp_path):
    """Application under test, once per storage backend."""
    app = create_app(make_config(tmp_path, WIKI_STORAGE=request.param))
    yield app
    app.extensions["page_repository"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def repository(app):
    return app.extensions["page_repository"]


@pytest.fixture
def file_store(tmp_path):
    store = FileStore(tmp_path / "pages")
    store.open()
    return store


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteStore(tmp_path / "wiki.db")
    store.open()
    yield store
    store.close()


@pytest.fixture(params=["file", "sqlite"])
def store(request, file_store, sqlite_store):
    """Each storage backend in turn."""
    return file_store if request.param == "file" else sqlite_store


@pytest.fixture
def markdown_with_script():
    return (
        "# Notes\n"
        "\n"
        "Some *text* here.\n"
        "\n"
        "<script>alert('xss')</script>\n"
        "\n"
        "[click me](javascript:alert(1))\n"
    )
