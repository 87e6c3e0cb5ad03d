# pageops/validation.py
# Page identifier and request path validation

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from .errors import InvalidIdentifier

MAX_IDENTIFIER_LENGTH = 20

# Identifiers double as file names, so \w is restricted to ASCII
IDENTIFIER_PATTERN = re.compile(r"\w{1,%d}" % MAX_IDENTIFIER_LENGTH, re.ASCII)
PAGE_PATH_PATTERN = re.compile(
    r"/(edit|save|view)/(\w{1,%d})" % MAX_IDENTIFIER_LENGTH, re.ASCII
)


class IdentifierCheck(NamedTuple):
    """Outcome of validating a page identifier or page path.

    Exactly one of ``identifier`` and ``reason`` is set.
    """
    identifier: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.identifier is not None


def check_identifier(value: str) -> IdentifierCheck:
    """
    Validate a bare page identifier.

    Returns an IdentifierCheck carrying the identifier when ``value`` is 1 to
    20 ASCII word characters, or a rejection reason otherwise.
    """
    if not value:
        return IdentifierCheck(reason="identifier is empty")
    if len(value) > MAX_IDENTIFIER_LENGTH:
        return IdentifierCheck(
            reason=f"identifier is longer than {MAX_IDENTIFIER_LENGTH} characters"
        )
    if IDENTIFIER_PATTERN.fullmatch(value) is None:
        return IdentifierCheck(reason="identifier may only contain letters, digits and underscores")
    return IdentifierCheck(identifier=value)


def match_page_path(path: str) -> IdentifierCheck:
    """
    Extract the page identifier from a request path like ``/view/<id>``.

    Only the ``edit``, ``save`` and ``view`` actions are recognised.
    """
    match = PAGE_PATH_PATTERN.fullmatch(path)
    if match is None:
        return IdentifierCheck(reason=f"path {path!r} is not a page path")
    return IdentifierCheck(identifier=match.group(2))


def require_identifier(value: str) -> str:
    """Return ``value`` unchanged or raise InvalidIdentifier."""
    check = check_identifier(value)
    if not check.ok:
        raise InvalidIdentifier(value, check.reason)
    return check.identifier
