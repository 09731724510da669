"""Single physical lines of a properties file."""

from __future__ import annotations

from dataclasses import dataclass

from propedit.config import COMMENT_MARKER, DEFAULT_SEPARATOR


def is_property_line(line: str, comment: str = COMMENT_MARKER) -> bool:
    """Return ``True`` for lines that are neither blank nor comments."""

    stripped = line.lstrip()
    return bool(stripped) and not stripped.startswith(comment)


def index_of_non_whitespace(source: str | None, start: int = 0) -> int:
    if start < 0:
        raise IndexError("start index should not be negative")
    if source is not None:
        for index in range(start, len(source)):
            if not source[index].isspace():
                return index
    return -1


@dataclass(frozen=True, slots=True)
class LineEntry:
    """Stored text of one line.

    Property lines keep only their prefix (``key<sep>`` plus any padding
    before the value); the value itself lives in the owning document's map.
    """

    text: str = ""
    separator: str = DEFAULT_SEPARATOR

    @property
    def is_property(self) -> bool:
        return is_property_line(self.text)

    @property
    def key(self) -> str:
        stripped = self.text.strip()
        if stripped.endswith(self.separator):
            stripped = stripped[: -len(self.separator)].strip()
        return stripped

    @property
    def has_separator(self) -> bool:
        return self.separator in self.text


__all__ = ["LineEntry", "is_property_line", "index_of_non_whitespace"]
