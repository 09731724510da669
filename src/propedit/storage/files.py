"""File access used by documents at construction, load and save time."""

from __future__ import annotations

from pathlib import Path
from typing import List, Protocol, Union

PathLike = Union[str, Path]


class FileStore(Protocol):
    """Whole-file operations a document needs from its host."""

    def read_all_lines(self, path: PathLike, encoding: str) -> List[str]:
        """Return every line of ``path`` without terminators."""
        ...

    def write_all_bytes(self, path: PathLike, data: bytes) -> None:
        """Replace the content of ``path`` with ``data``."""
        ...

    def file_exists(self, path: PathLike) -> bool:
        ...

    def create_empty_file(self, path: PathLike) -> None:
        ...


def split_lines(text: str) -> List[str]:
    """Split on ``\\r\\n``, ``\\n`` or ``\\r``; a final terminator adds no line."""

    if not text:
        return []
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = normalized.split("\n")
    if normalized.endswith("\n"):
        lines.pop()
    return lines


class LocalFileStore:
    """``FileStore`` backed by the local filesystem.

    Writes are plain truncating writes; ``OSError`` is left to the caller.
    """

    def read_all_lines(self, path: PathLike, encoding: str) -> List[str]:
        with Path(path).open("r", encoding=encoding, newline="") as handle:
            return split_lines(handle.read())

    def write_all_bytes(self, path: PathLike, data: bytes) -> None:
        Path(path).write_bytes(data)

    def file_exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def create_empty_file(self, path: PathLike) -> None:
        Path(path).touch()


__all__ = ["FileStore", "LocalFileStore", "PathLike", "split_lines"]
