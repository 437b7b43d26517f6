"""Worksheet naming rules."""

from __future__ import annotations

import re

MAX_SHEET_NAME_LENGTH = 31
DEFAULT_SHEET_NAME = "Group"

_EXTENSION = re.compile(r"\.[^/.]+$")
_FORBIDDEN = re.compile(r"[:\\/?*\[\]]")


def sanitize_sheet_name(name: str) -> str:
    """Drop a file extension, replace characters Excel rejects and cap the length."""
    cleaned = _FORBIDDEN.sub("_", _EXTENSION.sub("", str(name))).strip()
    return (cleaned or DEFAULT_SHEET_NAME)[:MAX_SHEET_NAME_LENGTH]


def make_unique_sheet_name(base_name: str, existing: set[str]) -> str:
    """Return ``base_name`` or the first free ``base_name_N`` (N >= 2) and record it."""
    name = base_name[:MAX_SHEET_NAME_LENGTH]
    if name not in existing:
        existing.add(name)
        return name

    index = 2
    while True:
        suffix = f"_{index}"
        candidate = f"{base_name[: max(0, MAX_SHEET_NAME_LENGTH - len(suffix))]}{suffix}"
        if candidate not in existing:
            existing.add(candidate)
            return candidate
        index += 1


__all__ = [
    "DEFAULT_SHEET_NAME",
    "MAX_SHEET_NAME_LENGTH",
    "make_unique_sheet_name",
    "sanitize_sheet_name",
]
