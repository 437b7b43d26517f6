"""Workbook and update-feed exporters."""

from exporters.sheet_names import make_unique_sheet_name, sanitize_sheet_name
from exporters.update_feed import format_update_feed, parse_update_feed, write_update_feed

__all__ = [
    "format_update_feed",
    "make_unique_sheet_name",
    "parse_update_feed",
    "sanitize_sheet_name",
    "write_update_feed",
]
