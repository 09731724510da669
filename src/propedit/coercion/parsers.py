"""Lenient conversions from raw property strings to typed values.

Every typed accessor goes through ``parse_with_fallback`` so a missing or
malformed value turns into a default instead of an exception.
"""

from __future__ import annotations

import math
import re
import struct
from datetime import datetime
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

ZERO = 0
NAN = math.nan
NUL_CHAR = "\0"
MIN_DATETIME = datetime.min

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+(?:,[0-9]{3})*(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?",
    re.ASCII,
)
_FLOAT_SPECIALS = {
    "nan": math.nan,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
}
_DATETIME_FORMATS = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%d %B %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%b %d, %Y",
)


def parse_with_fallback(
    raw: Optional[str], parser: Callable[[str], T], default: T
) -> T:
    """Run ``parser`` on ``raw``, returning ``default`` when it cannot."""

    if raw is None:
        return default
    try:
        return parser(raw)
    except (ValueError, TypeError, OverflowError):
        return default


def parse_integer(raw: str, *, bits: int = 32, signed: bool = True) -> int:
    text = raw.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"not an integer: {raw!r}")
    value = int(text)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        raise OverflowError(f"{value} outside [{low}, {high}]")
    return value


def parse_double(raw: str) -> float:
    text = raw.strip()
    special = _FLOAT_SPECIALS.get(text.lower())
    if special is not None:
        return special
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError(f"not a number: {raw!r}")
    return float(text.replace(",", ""))


def parse_single(raw: str) -> float:
    """Like ``parse_double`` but rounded to 32-bit precision."""

    value = parse_double(raw)
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def parse_char(raw: str) -> str:
    if len(raw) != 1:
        raise ValueError(f"not a single character: {raw!r}")
    return raw


def parse_datetime(raw: str) -> datetime:
    text = raw.strip()
    if not text:
        raise ValueError("empty date")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"not a date: {raw!r}")


__all__ = [
    "MIN_DATETIME",
    "NAN",
    "NUL_CHAR",
    "ZERO",
    "parse_bool",
    "parse_char",
    "parse_datetime",
    "parse_double",
    "parse_integer",
    "parse_single",
    "parse_with_fallback",
]
