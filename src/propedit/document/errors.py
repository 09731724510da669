"""Exceptions raised when callers hand the document malformed text."""

from __future__ import annotations


class PropertiesError(ValueError):
    """Base class for rejected keys and line entries."""

    def __init__(self, message: str, *, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class InvalidKeyError(PropertiesError):
    """Raised for keys holding the separator or a line break, or starting with '#'."""


class LineEntryError(PropertiesError):
    """Raised for line entries (or values) that contain a line break."""


__all__ = ["PropertiesError", "InvalidKeyError", "LineEntryError"]
