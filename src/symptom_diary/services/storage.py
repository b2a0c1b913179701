"""Local entry snapshot storage using TinyDB."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError
from tinydb import Query, TinyDB

from ..models.entry import DiaryEntry, parse_entry
from ..utils.config import Settings, get_settings
from .validation import EntryValidationError, EntryValidator

logger = logging.getLogger(__name__)


class EntryStorage:
    """
    Local storage for diary entries using TinyDB.

    Entries are stored as JSON in the data directory, one document per
    entry keyed by entry id. Readers get a list snapshot; nothing here is
    shared with the analysis code.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._db: Optional[TinyDB] = None

    @property
    def db_path(self) -> Path:
        """Path to the database file."""
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        return self.settings.entries_path

    @property
    def db(self) -> TinyDB:
        """Get the TinyDB instance."""
        if self._db is None:
            self._db = TinyDB(self.db_path)
        return self._db

    def save_entry(self, entry: DiaryEntry, validate: bool = True) -> None:
        """
        Save or update a diary entry.

        Raises:
            EntryValidationError: if ``validate`` is set and the entry is invalid
        """
        if validate:
            result = EntryValidator.validate_entry(entry)
            if not result.is_valid:
                raise EntryValidationError(result.errors)

        Entry = Query()
        entry_dict = entry.model_dump(mode="json")
        self.db.upsert(entry_dict, Entry.id == entry.id)

    def save_entries(self, entries: Iterable[DiaryEntry], validate: bool = True) -> int:
        """Save several entries, stopping at the first invalid one."""
        count = 0
        for entry in entries:
            self.save_entry(entry, validate=validate)
            count += 1
        return count

    def get_entry(self, entry_id: str) -> Optional[DiaryEntry]:
        """Get an entry by id, or None if it is missing or unreadable."""
        Entry = Query()
        results = self.db.search(Entry.id == entry_id)

        entries = self._load(results[:1])
        return entries[0] if entries else None

    def get_entries(self, user_id: Optional[str] = None) -> list[DiaryEntry]:
        """Get all entries, optionally for one user, oldest first."""
        if user_id is None:
            records = self.db.all()
        else:
            Entry = Query()
            records = self.db.search(Entry.user_id == user_id)

        entries = self._load(records)
        entries.sort(key=lambda e: e.timestamp)
        return entries

    def get_entries_in_range(
        self,
        start: datetime,
        end: datetime,
        user_id: Optional[str] = None,
    ) -> list[DiaryEntry]:
        """Get all entries with start <= timestamp <= end."""
        # Stored offsets differ, so compare parsed datetimes rather than strings
        start = start if start.tzinfo else start.astimezone()
        end = end if end.tzinfo else end.astimezone()
        return [e for e in self.get_entries(user_id) if start <= e.timestamp <= end]

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry by id."""
        Entry = Query()
        removed = self.db.remove(Entry.id == entry_id)
        return len(removed) > 0

    def _load(self, records: list[dict]) -> list[DiaryEntry]:
        entries = []
        for record in records:
            try:
                entries.append(parse_entry(record))
            except ValidationError as e:
                logger.warning(
                    "Skipping unreadable entry %s: %d validation errors",
                    record.get("id"), e.error_count(),
                )
        return entries

    def close(self) -> None:
        """Close the database connection."""
        if self._db:
            self._db.close()
            self._db = None

    def __enter__(self) -> "EntryStorage":
        return self

    def __exit__(self, *args) -> None:
        self.close()
