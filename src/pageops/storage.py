# pageops/storage.py
# Page storage backends: flat files and SQLite

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import Optional

from .errors import StorageError
from .models import StoredPage
from .validation import require_identifier

logger = logging.getLogger(__name__)

BACKENDS = ("file", "sqlite")


def atomic_write(path: Path, content: bytes) -> None:
    """
    Write content to a file atomically using a temporary file.

    The temporary file is created with mode 0600, which the final file keeps.
    """
    # Create temp file in the same directory to ensure atomic rename
    dir_path = path.parent
    dir_path.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(dir=str(dir_path), suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        # Atomic rename
        os.replace(temp_path, path)
    except Exception:
        # Clean up temp file if something goes wrong
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def read_json(path: Path) -> dict:
    """
    Read JSON content from a file.
    """
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, data: dict) -> None:
    """
    Write JSON content to a file atomically.
    """
    content = json.dumps(data, ensure_ascii=False, indent=2)
    atomic_write(path, content.encode("utf-8"))


class PageStore:
    """
    Base class for page storage backends.

    Stores never render anything; they only keep ``StoredPage`` records
    keyed by a validated identifier.
    """

    def open(self) -> None:
        """Acquire the underlying resource. Failures raise StorageError."""

    def close(self) -> None:
        """Release the underlying resource."""

    def read(self, identifier: str) -> Optional[StoredPage]:
        """Return the stored page, or None if it has never been saved."""
        raise NotImplementedError(f"read not implemented in {self.__class__.__name__}")

    def write(self, page: StoredPage) -> None:
        """Create or replace the page keyed by ``page.identifier``."""
        raise NotImplementedError(f"write not implemented in {self.__class__.__name__}")

    def __enter__(self) -> "PageStore":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class FileStore(PageStore):
    """
    One ``<identifier>.txt`` file per page holding the raw body, plus a
    ``<identifier>.json`` sidecar holding the title.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"<FileStore root={self.root}>"

    def open(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create data directory {self.root}: {e}") from e

    def body_path(self, identifier: str) -> Path:
        return self.root / f"{require_identifier(identifier)}.txt"

    def meta_path(self, identifier: str) -> Path:
        return self.root / f"{require_identifier(identifier)}.json"

    def read(self, identifier: str) -> Optional[StoredPage]:
        body_path = self.body_path(identifier)
        meta_path = self.meta_path(identifier)

        try:
            body = body_path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"cannot read page {identifier}: {e}") from e

        return StoredPage(
            identifier=identifier,
            title=self._read_title(identifier, meta_path),
            body=body.decode("utf-8", errors="replace"),
        )

    def _read_title(self, identifier: str, meta_path: Path) -> str:
        """Title from the sidecar; a missing or damaged sidecar only loses the title."""
        if not meta_path.exists():
            return ""
        try:
            meta = read_json(meta_path)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable metadata for page=%s: %s", identifier, e)
            return ""

        title = meta.get("title", "") if isinstance(meta, dict) else None
        if not isinstance(title, str):
            logger.warning("Ignoring malformed metadata for page=%s", identifier)
            return ""
        return title

    def write(self, page: StoredPage) -> None:
        """
        Replace the body, then the title sidecar.

        If the sidecar cannot be written the previous body is put back, so a
        failed save leaves the old page as it was.
        """
        body_path = self.body_path(page.identifier)
        meta_path = self.meta_path(page.identifier)

        try:
            previous = body_path.read_bytes()
        except FileNotFoundError:
            previous = None
        except OSError as e:
            raise StorageError(f"cannot write page {page.identifier}: {e}") from e

        try:
            atomic_write(body_path, page.body.encode("utf-8"))
        except OSError as e:
            raise StorageError(f"cannot write page {page.identifier}: {e}") from e

        try:
            write_json(meta_path, {"title": page.title})
        except OSError as e:
            self._restore_body(body_path, previous)
            raise StorageError(f"cannot write page {page.identifier}: {e}") from e

    def _restore_body(self, body_path: Path, previous: Optional[bytes]) -> None:
        try:
            if previous is None:
                body_path.unlink()
            else:
                atomic_write(body_path, previous)
        except OSError as e:
            logger.error("Could not roll back %s after a failed save: %s", body_path, e)


class SQLiteStore(PageStore):
    """
    Single ``pages`` table keyed by identifier.

    The connection is opened once and shared by all requests for the
    lifetime of the store.
    """

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS pages (
            identifier TEXT NOT NULL PRIMARY KEY,
            title TEXT NOT NULL DEFAULT '',
            body TEXT NOT NULL
        )
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.conn: Optional[sqlite3.Connection] = None

    def __repr__(self) -> str:
        return f"<SQLiteStore path={self.path}>"

    def open(self) -> None:
        if self.conn is not None:
            return

        is_new = not self.path.exists()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            if is_new:
                logger.info("Creating database for the first time: %s", self.path)
            with conn:
                conn.execute(self.SCHEMA)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"cannot open database {self.path}: {e}") from e

        self.conn = conn

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageError(f"database {self.path} is not open")
        return self.conn

    def read(self, identifier: str) -> Optional[StoredPage]:
        identifier = require_identifier(identifier)
        try:
            row = self._connection().execute(
                "SELECT title, body FROM pages WHERE identifier = ?", (identifier,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"cannot read page {identifier}: {e}") from e

        if row is None:
            return None
        return StoredPage(identifier=identifier, title=row["title"], body=row["body"])

    def write(self, page: StoredPage) -> None:
        """Upsert: update the row, insert it if no row was updated."""
        identifier = require_identifier(page.identifier)
        conn = self._connection()
        try:
            with conn:
                cursor = conn.execute(
                    "UPDATE pages SET title = ?, body = ? WHERE identifier = ?",
                    (page.title, page.body, identifier),
                )
                if cursor.rowcount == 0:
                    conn.execute(
                        "INSERT OR IGNORE INTO pages (identifier, title, body) VALUES (?, ?, ?)",
                        (identifier, page.title, page.body),
                    )
        except sqlite3.Error as e:
            raise StorageError(f"cannot write page {identifier}: {e}") from e


def create_store(backend: str, data_root: Path, database: Optional[Path] = None) -> PageStore:
    """
    Build the store selected by configuration.

    Parameters:
        backend: "file" or "sqlite".
        data_root: Directory for page files and the default database.
        database: SQLite file; defaults to ``data_root / "wiki.db"``.
    """
    if backend == "file":
        return FileStore(data_root)
    if backend == "sqlite":
        return SQLiteStore(Path(database) if database else Path(data_root) / "wiki.db")
    raise StorageError(f"unknown storage backend {backend!r}, expected one of {', '.join(BACKENDS)}")
