"""Catalog use cases for presentation layers.

This module sits between the CLI (or any other front end) and the core
pieces: it trims user input, turns store results into notifications, and
assembles the filtered and paginated view the front end renders. It also
holds `open_catalog`, the composition root that wires storage, persistence
and the store together for one session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from adapters.persistence import CatalogPersistence
from adapters.storage_backends import FileStorage
from core.config import AppSettings
from core.domain.errors import DuplicateNameError, EntryNotFoundError
from core.domain.models import (
    STATUS_FILTER_ALL,
    CatalogEntry,
    FileStatus,
    ImportValidation,
    NotificationLevel,
    PaginationState,
)
from core.interfaces.notifier import Notifier, silent_notifier
from core.services.bulk_parser import (
    EMPTY_INPUT_ERROR,
    NO_VALID_NAMES_ERROR,
    parse_file_names,
    validate_file_names,
)
from core.services.catalog_store import CatalogStore
from core.services.filtering import filter_entries, status_counts
from core.services.pagination import DEFAULT_MAX_VISIBLE_PAGES, Paginator


logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """Outcome of a bulk import."""

    validation: ImportValidation
    added: list[CatalogEntry] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass
class CatalogPage:
    """Everything a front end needs to render one page of the list."""

    items: list[CatalogEntry]
    state: PaginationState
    window: list[int]
    matched: int
    total: int
    counts: dict[FileStatus, int]


class CatalogService:
    def __init__(
        self,
        store: CatalogStore,
        *,
        notify: Notifier = silent_notifier,
        paginator: Paginator | None = None,
        max_visible_pages: int = DEFAULT_MAX_VISIBLE_PAGES,
    ) -> None:
        self.store = store
        self.paginator = paginator or Paginator()
        self._notify = notify
        self._max_visible_pages = max_visible_pages

    def add_file(self, raw_name: str) -> CatalogEntry | None:
        file_name = (raw_name or "").strip()
        if not file_name:
            self._notify("Please enter a file name", NotificationLevel.ERROR)
            return None

        try:
            entry = self.store.add(file_name)
        except DuplicateNameError as exc:
            self._notify(str(exc), NotificationLevel.ERROR)
            return None

        self._notify(f"File '{file_name}' added successfully!", NotificationLevel.SUCCESS)
        return entry

    def import_text(self, text: str) -> ImportSummary:
        """Add every name from pasted text.

        Empty input aborts the import. Names repeated inside the text are
        reported and then skipped like names that already exist.
        """

        validation = validate_file_names(text)
        summary = ImportSummary(validation=validation)

        blocking = [e for e in validation.errors if e in (EMPTY_INPUT_ERROR, NO_VALID_NAMES_ERROR)]
        if blocking:
            self._notify("; ".join(blocking), NotificationLevel.ERROR)
            return summary

        for message in validation.errors:
            self._notify(message, NotificationLevel.INFO)

        for name in parse_file_names(text):
            try:
                summary.added.append(self.store.add(name))
            except DuplicateNameError:
                summary.skipped.append(name)

        logger.info("Bulk import: %d added, %d skipped", len(summary.added), len(summary.skipped))
        level = NotificationLevel.SUCCESS if summary.added else NotificationLevel.INFO
        message = f"Added {len(summary.added)} file(s)"
        if summary.skipped:
            message += f", skipped {len(summary.skipped)} duplicate(s)"
        self._notify(message, level)
        return summary

    def set_status(self, entry_id: str, status: FileStatus | str) -> CatalogEntry:
        new_status = FileStatus(status)
        if not self.store.update_status(entry_id, new_status):
            raise EntryNotFoundError(entry_id)

        entry = self.store.get_by_id(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        self._notify(
            f"File '{entry.file_name}' marked as {new_status.label()}",
            NotificationLevel.SUCCESS,
        )
        return entry

    def remove(self, entry_id: str) -> CatalogEntry:
        entry = self.store.get_by_id(entry_id)
        if entry is None or not self.store.delete(entry_id):
            raise EntryNotFoundError(entry_id)

        self._notify(f"File '{entry.file_name}' removed", NotificationLevel.SUCCESS)
        return entry

    def clear(self) -> None:
        self.store.clear()
        self._notify("All files cleared", NotificationLevel.INFO)

    def view(
        self,
        search: str | None = "",
        status: str | FileStatus | None = STATUS_FILTER_ALL,
        page: int | None = None,
    ) -> CatalogPage:
        """Filter, then paginate. An out of range `page` keeps the current page."""

        everything = self.store.list()
        matched = filter_entries(everything, search, status)

        self.paginator.initialize(len(matched))
        if page is not None:
            self.paginator.set_page(page)

        return CatalogPage(
            items=self.paginator.current_slice(matched),
            state=self.paginator.state,
            window=self.paginator.page_window(self._max_visible_pages),
            matched=len(matched),
            total=len(everything),
            counts=status_counts(everything),
        )


def open_catalog(
    settings: AppSettings | None = None,
    *,
    notify: Notifier = silent_notifier,
) -> CatalogService:
    """Composition root: storage -> persistence -> store, loaded from disk."""

    settings = settings or AppSettings()
    storage = FileStorage(settings.resolved_data_dir(), quota_bytes=settings.storage_quota_bytes)
    persistence = CatalogPersistence(storage, key=settings.storage_key, notify=notify)

    store = CatalogStore(persistence)
    store.replace_all(persistence.load())
    logger.debug("Opened catalog with %d entries from %s", len(store), storage.directory)

    return CatalogService(
        store,
        notify=notify,
        paginator=Paginator(settings.items_per_page),
        max_visible_pages=settings.max_visible_pages,
    )
