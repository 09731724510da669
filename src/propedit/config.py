"""Document defaults and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

ENV_PREFIX = "PROPEDIT_"
DEFAULT_ENCODING = "utf-8"
DEFAULT_SEPARATOR = "="
COMMENT_MARKER = "#"

_NEWLINE_ALIASES = {
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
    "native": os.linesep,
}


def _resolve_newline(raw: str) -> str:
    return _NEWLINE_ALIASES.get(raw.strip().lower(), raw)


@dataclass(frozen=True, slots=True)
class DocumentOptions:
    """Encoding, line terminator and key/value separator for a document.

    The encoding falls back to UTF-8 rather than the host locale so a file
    reads the same on every machine.
    """

    encoding: str = DEFAULT_ENCODING
    newline: str = field(default_factory=lambda: os.linesep)
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        if not self.encoding:
            raise ValueError("encoding cannot be empty")
        if not self.newline:
            raise ValueError("newline cannot be empty")
        if len(self.separator) != 1:
            raise ValueError("separator must be a single character")
        if self.separator == COMMENT_MARKER or self.separator in "\r\n":
            raise ValueError(f"separator {self.separator!r} is reserved")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DocumentOptions":
        env = os.environ if environ is None else environ
        options = cls()
        encoding = env.get(f"{ENV_PREFIX}ENCODING")
        newline = env.get(f"{ENV_PREFIX}NEWLINE")
        separator = env.get(f"{ENV_PREFIX}SEPARATOR")
        return options.merged(
            encoding=encoding or None,
            newline=_resolve_newline(newline) if newline else None,
            separator=separator or None,
        )

    def merged(
        self,
        *,
        encoding: Optional[str] = None,
        newline: Optional[str] = None,
        separator: Optional[str] = None,
    ) -> "DocumentOptions":
        """Return a copy with every non-``None`` argument applied."""

        changes = {
            name: value
            for name, value in (
                ("encoding", encoding),
                ("newline", newline),
                ("separator", separator),
            )
            if value is not None
        }
        return replace(self, **changes) if changes else self


__all__ = ["COMMENT_MARKER", "DocumentOptions"]
