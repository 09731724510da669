"""Line entries, validation and the properties document."""

from .document import PropertiesDocument
from .errors import InvalidKeyError, LineEntryError, PropertiesError
from .line_entry import LineEntry, index_of_non_whitespace, is_property_line
from .validation import check_key_valid, check_line_entry_valid

__all__ = [
    "PropertiesDocument",
    "LineEntry",
    "PropertiesError",
    "InvalidKeyError",
    "LineEntryError",
    "is_property_line",
    "index_of_non_whitespace",
    "check_key_valid",
    "check_line_entry_valid",
]
