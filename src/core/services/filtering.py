"""Search and status filtering over catalog entries.

Pure functions: they receive the entries to inspect and never touch the store
or storage. Results keep the input order and are independent copies.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from core.domain.models import STATUS_FILTER_ALL, CatalogEntry, FileStatus


def parse_status_filter(value: str | FileStatus | None) -> FileStatus | None:
    """Normalize a status filter; `None` means "all statuses".

    Raises `ValueError` for values outside the status set.
    """

    if value is None:
        return None
    if isinstance(value, FileStatus):
        return value
    cleaned = value.strip()
    if not cleaned or cleaned == STATUS_FILTER_ALL:
        return None
    return FileStatus(cleaned)


def matches(entry: CatalogEntry, term: str, status: FileStatus | None) -> bool:
    if term and term not in entry.file_name.lower():
        return False
    if status is not None and entry.status is not status:
        return False
    return True


def filter_entries(
    entries: Iterable[CatalogEntry],
    search_term: str | None = "",
    status_filter: str | FileStatus | None = STATUS_FILTER_ALL,
) -> list[CatalogEntry]:
    """Entries whose name contains `search_term` (case-insensitive) AND whose
    status equals `status_filter` (or any status for "all")."""

    term = (search_term or "").strip().lower()
    status = parse_status_filter(status_filter)
    return [entry.model_copy() for entry in entries if matches(entry, term, status)]


def status_counts(entries: Sequence[CatalogEntry]) -> dict[FileStatus, int]:
    """Entry count per status, every status present (zero when unused)."""

    counter = Counter(entry.status for entry in entries)
    return {status: counter.get(status, 0) for status in FileStatus}
