"""Bulk import parsing.

Pasted text arrives either one name per line or as a single comma-separated
line. Parsing never de-duplicates: the store refuses repeated names at insert
time, and `validate_file_names` reports them up front.
"""

from __future__ import annotations

import re

from core.domain.models import ImportValidation


EMPTY_INPUT_ERROR = "Input is empty"
NO_VALID_NAMES_ERROR = "No valid file names found"
DUPLICATE_ENTRIES_PREFIX = "Duplicate entries found: "

_LINE_BREAK = re.compile(r"\r?\n")


def _clean(pieces: list[str]) -> list[str]:
    return [piece.strip() for piece in pieces if piece.strip()]


def parse_file_names(text: str | None) -> list[str]:
    """Split pasted text into trimmed, non-empty names, preserving order."""

    if not text or not text.strip():
        return []

    names = _clean(_LINE_BREAK.split(text))

    # A single line with commas is a comma-delimited list.
    if len(names) == 1 and "," in names[0]:
        names = _clean(names[0].split(","))

    return names


def find_duplicates(names: list[str]) -> list[str]:
    """Names that repeat an earlier one, in the order the repeats appear."""

    seen: set[str] = set()
    repeats: list[str] = []
    for name in names:
        if name in seen:
            repeats.append(name)
        seen.add(name)
    return repeats


def validate_file_names(text: str | None) -> ImportValidation:
    errors: list[str] = []

    if not text or not text.strip():
        errors.append(EMPTY_INPUT_ERROR)
        return ImportValidation(valid=False, errors=errors, file_count=0)

    names = parse_file_names(text)
    if not names:
        errors.append(NO_VALID_NAMES_ERROR)

    duplicates = find_duplicates(names)
    if duplicates:
        errors.append(DUPLICATE_ENTRIES_PREFIX + ", ".join(duplicates))

    return ImportValidation(valid=not errors, errors=errors, file_count=len(names))
