# pageops/repository.py
# Load and save pages through a store and the renderer

from __future__ import annotations

import logging
from typing import Callable, Optional

from markupsafe import Markup

from .models import Page
from .render import render_markdown
from .storage import PageStore
from .validation import require_identifier

logger = logging.getLogger(__name__)

Renderer = Callable[[str], Markup]


class PageRepository:
    """
    Combines a PageStore with the Markdown renderer.

    The repository owns the store: ``open()`` acquires it at application
    start and ``close()`` releases it at shutdown.
    """

    def __init__(self, store: PageStore, renderer: Renderer = render_markdown):
        self.store = store
        self.renderer = renderer

    def __repr__(self) -> str:
        return f"<PageRepository store={self.store!r}>"

    def open(self) -> None:
        self.store.open()
        logger.info("Opened page store %r", self.store)

    def close(self) -> None:
        self.store.close()

    def load(self, identifier: str) -> Optional[Page]:
        """
        Load a page and render its body.

        Returns:
            The populated Page, or None if no page was ever saved under
            ``identifier``.

        Raises:
            InvalidIdentifier: if ``identifier`` is malformed.
            StorageError: if the store cannot be read.
            RenderError: if the body cannot be rendered.
        """
        stored = self.store.read(require_identifier(identifier))
        if stored is None:
            return None
        return Page.from_stored(stored, rendered_body=self.renderer(stored.body))

    def save(self, page: Page) -> None:
        """
        Persist a page's title and body, creating it if needed.

        Raises:
            InvalidIdentifier: if ``page.identifier`` is malformed.
            StorageError: if the store cannot be written.
        """
        require_identifier(page.identifier)
        self.store.write(page.to_stored())
        logger.debug("Saved page=%s (%d characters)", page.identifier, len(page.body))
