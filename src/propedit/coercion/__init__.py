"""Best-effort typed parsing for property values."""

from .parsers import (
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
