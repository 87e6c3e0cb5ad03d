# pageops/models.py
# Dataclasses for wiki pages

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from markupsafe import Markup


@dataclass(frozen=True)
class StoredPage:
    """Raw page content as kept by a storage backend."""
    identifier: str
    title: str
    body: str


@dataclass
class Page:
    """A wiki page.

    ``rendered_body`` is derived from ``body`` on every load and is never
    written back to storage.
    """
    identifier: str
    title: str = ""
    body: str = ""
    rendered_body: Optional[Markup] = None

    @property
    def display_title(self) -> str:
        return self.title or self.identifier

    @classmethod
    def from_stored(cls, stored: StoredPage, rendered_body: Optional[Markup] = None) -> "Page":
        return cls(
            identifier=stored.identifier,
            title=stored.title,
            body=stored.body,
            rendered_body=rendered_body,
        )

    def to_stored(self) -> StoredPage:
        return StoredPage(identifier=self.identifier, title=self.title, body=self.body)
