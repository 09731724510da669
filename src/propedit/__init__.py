"""Line-preserving editor for ``.properties`` files."""

from .config import DocumentOptions
from .document import (
    InvalidKeyError,
    LineEntry,
    LineEntryError,
    PropertiesDocument,
    PropertiesError,
    is_property_line,
)

__all__ = [
    "DocumentOptions",
    "PropertiesDocument",
    "LineEntry",
    "PropertiesError",
    "InvalidKeyError",
    "LineEntryError",
    "is_property_line",
    "coercion",
    "config",
    "document",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
