"""Customer service helpers."""

from .importer import UnsupportedFileError, match_columns, parse_customer_file

__all__ = [
    "parse_customer_file",
    "match_columns",
    "UnsupportedFileError",
]
