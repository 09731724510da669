"""File access boundary for properties documents."""

from .files import FileStore, LocalFileStore, PathLike, split_lines

__all__ = ["FileStore", "LocalFileStore", "PathLike", "split_lines"]
