"""Durable restoration history.

The whole collection is serialized as one JSON list (newest first) under a
single key of a key-value store. It is loaded on first use (or by an explicit
`load()`) and rewritten on every mutation. Reads and writes of the backing
store never raise out of this module: a failed write leaves the in-memory
collection authoritative for the session.
"""

import json
import logging
from datetime import datetime, timezone as dt_timezone
from typing import Iterator, List, Optional

from django.conf import settings
from django.core.cache import caches
from django.utils.dateparse import parse_datetime

from restora.models import RestorationEntry
from restora.serializers import RestorationEntrySerializer

logger = logging.getLogger(__name__)


class CacheStorage:
    """Key-value persistence backed by a Django cache alias."""

    def __init__(self, cache=None, alias: Optional[str] = None):
        self.cache = cache if cache is not None else caches[alias or settings.RESTORA_HISTORY_CACHE]

    def read(self, key: str) -> Optional[str]:
        return self.cache.get(key)

    def write(self, key: str, value: str) -> None:
        self.cache.set(key, value, timeout=None)


def _sort_key(entry: RestorationEntry) -> datetime:
    try:
        parsed = parse_datetime(entry.timestamp)
    except ValueError:
        parsed = None
    if parsed is None:
        return datetime.min.replace(tzinfo=dt_timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt_timezone.utc)
    return parsed


class HistoryStore:
    """Ordered collection of past restorations, newest insertion first"""

    def __init__(self, storage=None, key: Optional[str] = None):
        self.storage = storage if storage is not None else CacheStorage()
        self.key = key or settings.RESTORA_HISTORY_KEY
        self._entries: List[RestorationEntry] = []
        self._loaded = False

    def __len__(self):
        self._ensure_loaded()
        return len(self._entries)

    def __iter__(self) -> Iterator[RestorationEntry]:
        self._ensure_loaded()
        return iter(list(self._entries))

    @property
    def entries(self) -> List[RestorationEntry]:
        self._ensure_loaded()
        return list(self._entries)

    def load(self) -> List[RestorationEntry]:
        """
        Replace the in-memory collection with the persisted one.

        Absent or malformed data yields an empty collection; entries that
        fail validation are dropped individually.
        """
        self._entries = []
        self._loaded = True

        try:
            raw = self.storage.read(self.key)
        except Exception as exc:
            logger.warning(f"Could not read restoration history: {exc}")
            return self.entries

        if not raw:
            return self.entries

        try:
            items = json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning(f"Ignoring malformed restoration history: {exc}")
            return self.entries

        if not isinstance(items, list):
            logger.warning("Ignoring restoration history that is not a list")
            return self.entries

        for item in items:
            serializer = RestorationEntrySerializer(data=item)
            if serializer.is_valid():
                self._entries.append(serializer.save())
            else:
                logger.warning(f"Dropping invalid history entry: {serializer.errors}")

        logger.info(f"Loaded {len(self._entries)} restoration history entries")
        return self.entries

    def append(self, entry: RestorationEntry) -> None:
        self._ensure_loaded()
        self._entries.insert(0, entry)
        self._persist()

    def remove(self, entry_id: str) -> bool:
        """Remove the first entry with `entry_id`; returns False if absent."""
        self._ensure_loaded()
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                del self._entries[index]
                self._persist()
                return True
        return False

    def get(self, entry_id: str) -> Optional[RestorationEntry]:
        self._ensure_loaded()
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def search(self, query: str = "", newest_first: bool = True) -> List[RestorationEntry]:
        """Filter by case-insensitive file name substring, sorted by timestamp."""
        self._ensure_loaded()
        items = list(self._entries)
        needle = (query or "").strip().lower()
        if needle:
            items = [entry for entry in items if needle in entry.file_name.lower()]
        items.sort(key=_sort_key, reverse=newest_first)
        return items

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _persist(self) -> None:
        try:
            payload = json.dumps(RestorationEntrySerializer(self._entries, many=True).data)
            self.storage.write(self.key, payload)
        except Exception as exc:
            logger.warning(f"Could not persist restoration history: {exc}")
