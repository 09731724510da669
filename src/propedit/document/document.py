"""Line-preserving properties document.

A document owns two structures: the ordered list of ``LineEntry`` records
that mirrors the file, and a key -> value map. Property lines store only
their prefix, so every read resolves the value from the map. All writes go
through ``_parse_line`` (pure, may raise) followed by ``_commit`` (mutates),
which keeps a rejected call from touching either structure.
"""

from __future__ import annotations

import functools
import operator
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from propedit.coercion import (
    MIN_DATETIME,
    NAN,
    NUL_CHAR,
    ZERO,
    parse_bool,
    parse_char,
    parse_datetime,
    parse_double,
    parse_integer,
    parse_single,
    parse_with_fallback,
)
from propedit.config import DocumentOptions
from propedit.runtime import telemetry
from propedit.storage import FileStore, LocalFileStore, PathLike

from .line_entry import LineEntry, index_of_non_whitespace, is_property_line
from .validation import check_key_valid, check_line_entry_valid

Property = Tuple[str, str]


class PropertiesDocument:
    """Editable view of one properties file."""

    def __init__(
        self,
        path: PathLike,
        encoding: Optional[str] = None,
        newline: Optional[str] = None,
        separator: Optional[str] = None,
        *,
        store: Optional[FileStore] = None,
        options: Optional[DocumentOptions] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        base = options or DocumentOptions.from_env()
        self._options = base.merged(
            encoding=encoding, newline=newline, separator=separator
        )
        self.path = Path(path)
        self._store: FileStore = store or LocalFileStore()
        self._logger_name = logger_name
        self._lines: List[LineEntry] = []
        self._properties: Dict[str, str] = {}
        if not self._store.file_exists(self.path):
            self._store.create_empty_file(self.path)

    @classmethod
    def open(cls, path: PathLike, **kwargs: object) -> "PropertiesDocument":
        """Construct a document and load the file right away."""

        document = cls(path, **kwargs)  # type: ignore[arg-type]
        document.load()
        return document

    # -- settings -----------------------------------------------------------

    @property
    def options(self) -> DocumentOptions:
        return self._options

    @property
    def separator(self) -> str:
        return self._options.separator

    @property
    def encoding(self) -> str:
        return self._options.encoding

    @encoding.setter
    def encoding(self, value: str) -> None:
        self._options = self._options.merged(encoding=value)

    @property
    def newline(self) -> str:
        return self._options.newline

    @newline.setter
    def newline(self, value: str) -> None:
        self._options = self._options.merged(newline=value)

    @property
    def properties(self) -> Mapping[str, str]:
        return MappingProxyType(self._properties)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def entries(self) -> Tuple[LineEntry, ...]:
        """Return the stored line records without exposing the list."""

        return tuple(self._lines)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._properties)

    # -- line access ----------------------------------------------------------

    def get_line_entry(self, index: int) -> str:
        return self._render(self._lines[self._check_index(index, self.line_count)])

    def set_line_entry(self, index: int, text: str = "") -> None:
        entry, prop = self._parse_line(text)
        slot = self._check_index(index, self.line_count)
        self._lines[slot] = entry
        self._commit(prop)

    def add_line_entry(self, text: str = "") -> None:
        entry, prop = self._parse_line(text)
        self._lines.append(entry)
        self._commit(prop)

    def insert_line_entry(self, index: int = 0, text: str = "") -> None:
        entry, prop = self._parse_line(text)
        slot = self._check_index(index, self.line_count + 1)
        self._lines.insert(slot, entry)
        self._commit(prop)

    def remove_line_entry_at(self, index: int) -> None:
        """Drop a line; its key (if any) stays in the property map."""

        del self._lines[self._check_index(index, self.line_count)]

    def get_all_lines(self) -> List[str]:
        return [self._render(entry) for entry in self._lines]

    def get_full_text(self) -> str:
        newline = self.newline
        return "".join(self._render(entry) + newline for entry in self._lines)

    # -- property access ------------------------------------------------------

    def get_property_entry_index(self, key: str) -> int:
        """Index of the first line defining ``key``, or ``-1``."""

        check_key_valid(key, self.separator, self.newline)
        return self._find_line(key.strip())

    def get_property(self, key: str) -> Optional[str]:
        check_key_valid(key, self.separator, self.newline)
        return self._properties.get(key.strip())

    def set_property(self, key: str, value: object) -> None:
        """Store ``value`` under ``key``, appending ``key<sep>`` if no line has it.

        Existing lines for the key are left alone; they pick up the new
        value on the next read.
        """

        check_key_valid(key, self.separator, self.newline)
        text = value if isinstance(value, str) else str(value)
        check_line_entry_valid(text, self.newline)
        normalized = key.strip()
        self._properties[normalized] = text.strip()
        if self._find_line(normalized) == -1:
            self._lines.append(LineEntry(normalized + self.separator, self.separator))
            telemetry.record_event(
                "document.append_property",
                level="debug",
                data={"path": str(self.path), "key": normalized},
                logger_name=self._logger_name,
            )

    def has_property(self, key: str) -> bool:
        return key in self._properties

    def clear_all(self) -> None:
        self._lines.clear()
        self._properties.clear()

    # -- persistence ------------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory state with the file's current content."""

        with telemetry.span(
            "document::load",
            logger_name=self._logger_name,
            component="document",
            metadata={"path": str(self.path), "encoding": self.encoding},
        ) as handle:
            lines = self._store.read_all_lines(self.path, self.encoding)
            parsed = [self._parse_line(line) for line in lines]
            self.clear_all()
            for entry, prop in parsed:
                self._lines.append(entry)
                self._commit(prop)
            handle.add_metadata("lines", self.line_count)
            handle.add_metadata("properties", len(self._properties))

    def save(self) -> None:
        with telemetry.span(
            "document::save",
            logger_name=self._logger_name,
            component="document",
            metadata={"path": str(self.path), "encoding": self.encoding},
        ) as handle:
            data = self.get_full_text().encode(self.encoding)
            self._store.write_all_bytes(self.path, data)
            handle.add_metadata("bytes", len(data))

    # -- typed accessors --------------------------------------------------------

    def get_string(self, key: str) -> Optional[str]:
        return self.get_property(key)

    def get_short(self, key: str, default: int = ZERO) -> int:
        return self._get_integer(key, 16, True, default)

    def get_unsigned_short(self, key: str, default: int = ZERO) -> int:
        return self._get_integer(key, 16, False, default)

    def get_int(self, key: str, default: int = ZERO) -> int:
        return self._get_integer(key, 32, True, default)

    def get_unsigned_int(self, key: str, default: int = ZERO) -> int:
        return self._get_integer(key, 32, False, default)

    def get_long(self, key: str, default: int = ZERO) -> int:
        return self._get_integer(key, 64, True, default)

    def get_unsigned_long(self, key: str, default: int = ZERO) -> int:
        return self._get_integer(key, 64, False, default)

    def get_byte(self, key: str, default: int = ZERO) -> int:
        return self._get_integer(key, 8, False, default)

    def get_float(self, key: str, default: float = NAN) -> float:
        return parse_with_fallback(self.get_string(key), parse_single, default)

    def get_double(self, key: str, default: float = NAN) -> float:
        return parse_with_fallback(self.get_string(key), parse_double, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return parse_with_fallback(self.get_string(key), parse_bool, default)

    def get_char(self, key: str, default: str = NUL_CHAR) -> str:
        return parse_with_fallback(self.get_string(key), parse_char, default)

    def get_datetime(self, key: str, default: datetime = MIN_DATETIME) -> datetime:
        return parse_with_fallback(self.get_string(key), parse_datetime, default)

    # -- dunder protocol ----------------------------------------------------------

    def __getitem__(self, item: int | str) -> Optional[str]:
        if isinstance(item, str):
            return self.get_property(item)
        return self.get_line_entry(item)

    def __setitem__(self, item: int | str, value: object) -> None:
        if isinstance(item, str):
            self.set_property(item, value)
        else:
            self.set_line_entry(item, str(value))

    def __delitem__(self, index: int) -> None:
        self.remove_line_entry_at(index)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_property(key)

    def __len__(self) -> int:
        return self.line_count

    def __iter__(self) -> Iterator[str]:
        return iter(self.get_all_lines())

    def __repr__(self) -> str:
        return (
            f"PropertiesDocument(path={str(self.path)!r}, lines={self.line_count}, "
            f"properties={len(self._properties)})"
        )

    # -- internals ------------------------------------------------------------------

    def _parse_line(self, text: str) -> Tuple[LineEntry, Optional[Property]]:
        check_line_entry_valid(text, self.newline)
        separator = self.separator
        if not is_property_line(text):
            return LineEntry(text, separator), None

        head, found, tail = text.partition(separator)
        if not found:
            key = text.strip()
            return LineEntry(key, separator), (key, "")

        # keep the padding between separator and value, drop the value
        start = index_of_non_whitespace(tail)
        padding = tail[:start] if start != -1 else ""
        return LineEntry(head + separator + padding, separator), (
            head.strip(),
            tail.strip(),
        )

    def _commit(self, prop: Optional[Property]) -> None:
        if prop is not None:
            key, value = prop
            self._properties[key] = value

    def _render(self, entry: LineEntry) -> str:
        if not entry.is_property:
            return entry.text
        value = self._properties.get(entry.key, "")
        if value and not entry.has_separator:
            return entry.text + self.separator + value
        return entry.text + value

    def _get_integer(self, key: str, bits: int, signed: bool, default: int) -> int:
        parser = functools.partial(parse_integer, bits=bits, signed=signed)
        return parse_with_fallback(self.get_string(key), parser, default)

    def _find_line(self, key: str) -> int:
        for index, entry in enumerate(self._lines):
            if entry.is_property and entry.key == key:
                return index
        return -1

    @staticmethod
    def _check_index(index: int, upper: int) -> int:
        position = operator.index(index)
        if not 0 <= position < upper:
            raise IndexError(f"line index {position} out of range [0, {upper})")
        return position


__all__ = ["PropertiesDocument"]
