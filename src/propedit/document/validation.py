"""Validation helpers run before any document mutation."""

from __future__ import annotations

from propedit.config import COMMENT_MARKER

from .errors import InvalidKeyError, LineEntryError

INVALID_KEY_MESSAGE = (
    "A key should not contain '{separator}' nor a line break, "
    "and should not start with '#'."
)
LINE_ENTRY_MESSAGE = "An entry should not contain a line break."


def _has_line_break(text: str, newline: str) -> bool:
    return newline in text or "\n" in text or "\r" in text


def check_key_valid(key: str, separator: str, newline: str) -> str:
    if (
        separator in key
        or _has_line_break(key, newline)
        or key.lstrip().startswith(COMMENT_MARKER)
    ):
        raise InvalidKeyError(INVALID_KEY_MESSAGE.format(separator=separator), text=key)
    return key


def check_line_entry_valid(text: str, newline: str) -> str:
    if _has_line_break(text, newline):
        raise LineEntryError(LINE_ENTRY_MESSAGE, text=text)
    return text


__all__ = ["check_key_valid", "check_line_entry_valid"]
