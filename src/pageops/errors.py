# pageops/errors.py
# Exceptions raised by the page pipeline


class WikiError(Exception):
    """Base class for page pipeline errors."""


class InvalidIdentifier(WikiError):
    """A request path or page name does not match the identifier grammar."""

    def __init__(self, value: str, reason: str):
        super().__init__(f"invalid page identifier {value!r}: {reason}")
        self.value = value
        self.reason = reason


class StorageError(WikiError):
    """The storage backend could not be opened, read or written."""


class RenderError(WikiError):
    """Markup or template rendering failed."""
