import json

from django.core.cache import caches
from django.test import SimpleTestCase

from restora.models import RestorationEntry
from restora.services import CacheStorage, HistoryStore

KEY = "test-history"


class MemoryStorage:
    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.writes = 0

    def read(self, key):
        return self.data.get(key)

    def write(self, key, value):
        self.writes += 1
        self.data[key] = value


class FailingStorage(MemoryStorage):
    def write(self, key, value):
        raise OSError("No space left on device")


class BrokenReadStorage(MemoryStorage):
    def read(self, key):
        raise ConnectionError("cache offline")


def _entry(entry_id, file_name="photo.jpg", timestamp="2026-01-01T10:00:00+00:00"):
    return RestorationEntry(
        id=entry_id,
        original_ref="data:image/jpeg;base64,AAAA",
        restored_ref=f"https://cdn.example.com/{entry_id}.png",
        file_name=file_name,
        file_size_bytes=2048,
        analysis_text="Sharpened.",
        presets=["Sharpness Boost"],
        timestamp=timestamp,
    )


class HistoryStoreTest(SimpleTestCase):
    def test_append_then_remove_yields_empty(self):
        store = HistoryStore(storage=MemoryStorage(), key=KEY)
        store.load()

        store.append(_entry("a"))
        removed = store.remove("a")

        self.assertTrue(removed)
        self.assertEqual(store.entries, [])
        self.assertEqual(json.loads(store.storage.data[KEY]), [])

    def test_append_prepends(self):
        store = HistoryStore(storage=MemoryStorage(), key=KEY)

        store.append(_entry("a"))
        store.append(_entry("b"))

        self.assertEqual([entry.id for entry in store], ["b", "a"])

    def test_every_mutation_rewrites_collection(self):
        storage = MemoryStorage()
        store = HistoryStore(storage=storage, key=KEY)

        store.append(_entry("a"))
        store.append(_entry("b"))
        store.remove("a")

        self.assertEqual(storage.writes, 3)
        persisted = json.loads(storage.data[KEY])
        self.assertEqual([item["id"] for item in persisted], ["b"])

    def test_remove_missing_id_is_noop(self):
        storage = MemoryStorage()
        store = HistoryStore(storage=storage, key=KEY)
        store.append(_entry("a"))

        self.assertFalse(store.remove("zzz"))
        self.assertEqual(len(store), 1)
        self.assertEqual(storage.writes, 1)

    def test_remove_only_first_match(self):
        store = HistoryStore(storage=MemoryStorage(), key=KEY)
        store.append(_entry("dup", file_name="old.jpg"))
        store.append(_entry("dup", file_name="new.jpg"))

        store.remove("dup")

        self.assertEqual([entry.file_name for entry in store], ["old.jpg"])

    def test_interchange_format_uses_camel_case_keys(self):
        storage = MemoryStorage()
        store = HistoryStore(storage=storage, key=KEY)

        store.append(_entry("a"))

        item = json.loads(storage.data[KEY])[0]
        self.assertEqual(
            set(item),
            {
                "id", "originalRef", "restoredRef", "fileName", "fileSizeBytes",
                "analysisText", "timestamp", "presets", "aspectRatio",
            },
        )
        self.assertEqual(item["fileName"], "photo.jpg")
        self.assertIsNone(item["aspectRatio"])

    def test_reload_restores_entries(self):
        storage = MemoryStorage()
        first = HistoryStore(storage=storage, key=KEY)
        first.append(_entry("a"))
        first.append(_entry("b"))

        second = HistoryStore(storage=storage, key=KEY)
        loaded = second.load()

        self.assertEqual([entry.id for entry in loaded], ["b", "a"])
        self.assertEqual(loaded[0], first.entries[0])

    def test_load_absent_data_is_empty(self):
        store = HistoryStore(storage=MemoryStorage(), key=KEY)

        self.assertEqual(store.load(), [])

    def test_load_malformed_data_is_empty(self):
        for raw in ("not json", '{"id": "a"}', "42", "null", ""):
            with self.subTest(raw=raw):
                store = HistoryStore(storage=MemoryStorage({KEY: raw}), key=KEY)
                self.assertEqual(store.load(), [])

    def test_load_drops_invalid_entries(self):
        valid = {
            "id": "ok",
            "originalRef": "data:image/png;base64,AAAA",
            "restoredRef": "https://cdn.example.com/ok.png",
            "fileName": "ok.png",
            "fileSizeBytes": 10,
            "analysisText": "",
            "timestamp": "2026-01-01T00:00:00+00:00",
            "presets": [],
        }
        raw = json.dumps([valid, {"id": "broken"}, "junk"])
        store = HistoryStore(storage=MemoryStorage({KEY: raw}), key=KEY)

        loaded = store.load()

        self.assertEqual([entry.id for entry in loaded], ["ok"])
        self.assertIsNone(loaded[0].aspect_ratio)

    def test_load_survives_read_failure(self):
        store = HistoryStore(storage=BrokenReadStorage(), key=KEY)

        self.assertEqual(store.load(), [])

    def test_persistence_failure_is_swallowed(self):
        store = HistoryStore(storage=FailingStorage(), key=KEY)

        store.append(_entry("a"))
        store.append(_entry("b"))
        store.remove("a")

        self.assertEqual([entry.id for entry in store], ["b"])

    def test_search_filters_and_sorts(self):
        store = HistoryStore(storage=MemoryStorage(), key=KEY)
        store.append(_entry("1", "Family_Portrait.jpg", "2026-01-02T00:00:00+00:00"))
        store.append(_entry("2", "wedding.png", "2026-01-03T00:00:00+00:00"))
        store.append(_entry("3", "portrait-old.webp", "2026-01-01T00:00:00+00:00"))

        newest = store.search("PORTRAIT")
        oldest = store.search("portrait", newest_first=False)

        self.assertEqual([entry.id for entry in newest], ["1", "3"])
        self.assertEqual([entry.id for entry in oldest], ["3", "1"])
        self.assertEqual([entry.id for entry in store.search()], ["2", "1", "3"])

    def test_get(self):
        store = HistoryStore(storage=MemoryStorage(), key=KEY)
        store.append(_entry("a"))

        self.assertEqual(store.get("a").id, "a")
        self.assertIsNone(store.get("b"))

    def test_append_before_load_keeps_persisted_entries(self):
        storage = MemoryStorage()
        HistoryStore(storage=storage, key=KEY).append(_entry("old"))

        fresh = HistoryStore(storage=storage, key=KEY)
        fresh.append(_entry("new"))

        persisted = json.loads(storage.data[KEY])
        self.assertEqual([item["id"] for item in persisted], ["new", "old"])

    def test_reads_load_on_first_use(self):
        storage = MemoryStorage()
        HistoryStore(storage=storage, key=KEY).append(_entry("old"))

        fresh = HistoryStore(storage=storage, key=KEY)

        self.assertEqual(len(fresh), 1)
        self.assertEqual(fresh.get("old").id, "old")

    def test_remove_before_load_keeps_other_entries(self):
        storage = MemoryStorage()
        seeded = HistoryStore(storage=storage, key=KEY)
        seeded.append(_entry("a"))
        seeded.append(_entry("b"))

        self.assertTrue(HistoryStore(storage=storage, key=KEY).remove("a"))

        self.assertEqual([item["id"] for item in json.loads(storage.data[KEY])], ["b"])

    def test_presets_are_immutable(self):
        entry = RestorationEntry(
            original_ref="", restored_ref="https://cdn.example.com/x.png",
            file_name="x.png", file_size_bytes=1, presets=["Sharpness Boost"],
        )

        self.assertEqual(entry.presets, ("Sharpness Boost",))
        with self.assertRaises(AttributeError):
            entry.presets.append("Lighting Balance")


class CacheStorageTest(SimpleTestCase):
    def setUp(self):
        self.cache = caches["default"]
        self.cache.clear()

    def test_history_roundtrip_through_cache(self):
        store = HistoryStore(storage=CacheStorage(cache=self.cache), key=KEY)
        store.append(_entry("a"))

        reloaded = HistoryStore(storage=CacheStorage(cache=self.cache), key=KEY)

        self.assertEqual([entry.id for entry in reloaded.load()], ["a"])

    def test_read_missing_key(self):
        self.assertIsNone(CacheStorage(cache=self.cache).read("missing"))

    def test_default_alias_comes_from_settings(self):
        storage = CacheStorage()

        self.assertIs(storage.cache, caches["history"])
