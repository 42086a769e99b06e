"""Tests for the blob-backed reading and profile stores."""

import json
import logging
from datetime import date

from pregnancy_bp.models.profile import UserProfile
from pregnancy_bp.models.stored_blob import StoredBlob
from pregnancy_bp.storage import (
    PROFILE_KEY,
    READINGS_KEY,
    MemoryBlobStore,
    ProfileStore,
    ReadingStore,
    SqlBlobStore,
)

from conftest import make_reading


class TestReadingStore:

    def test_missing_blob_loads_empty(self):
        store = ReadingStore(MemoryBlobStore())
        assert store.load() == []
        assert len(store) == 0

    def test_append_prepends_and_persists(self):
        blobs = MemoryBlobStore()
        store = ReadingStore(blobs)
        first = store.append(make_reading(110, 70))
        second = store.append(make_reading(150, 95))

        assert [r.id for r in store.all()] == [second.id, first.id]
        assert blobs.writes == 2

        stored = json.loads(blobs.get(READINGS_KEY))
        assert [item["id"] for item in stored] == [second.id, first.id]
        assert stored[0]["pregnancyWeek"] == 10
        assert stored[0]["category"] == "stage2"

    def test_reload_from_same_blob(self):
        blobs = MemoryBlobStore()
        original = ReadingStore(blobs)
        reading = original.append(make_reading(125, 80, symptoms=["Headache"], notes="after walk"))

        reloaded = ReadingStore(blobs).load()
        assert reloaded == [reading]
        assert reloaded[0].symptoms == ("Headache",)

    def test_remove_keeps_relative_order(self):
        store = ReadingStore(MemoryBlobStore())
        readings = [store.append(make_reading(100 + i, 70)) for i in range(4)]
        ids_newest_first = [r.id for r in reversed(readings)]

        assert store.remove(ids_newest_first[1]) is True

        assert [r.id for r in store.all()] == [ids_newest_first[0]] + ids_newest_first[2:]

    def test_remove_unknown_id_is_noop(self):
        blobs = MemoryBlobStore()
        store = ReadingStore(blobs)
        store.append(make_reading())
        writes = blobs.writes
        before = store.all()

        assert store.remove("does-not-exist") is False
        assert store.all() == before
        assert blobs.writes == writes

    def test_all_returns_copy(self):
        store = ReadingStore(MemoryBlobStore())
        store.append(make_reading())
        store.all().clear()
        assert len(store) == 1

    def test_corrupt_blob_resets_to_empty(self, caplog):
        blobs = MemoryBlobStore({READINGS_KEY: "{not json"})
        with caplog.at_level(logging.WARNING):
            assert ReadingStore(blobs).load() == []
        assert "Discarding unreadable" in caplog.text

    def test_wrong_shape_resets_to_empty(self):
        assert ReadingStore(MemoryBlobStore({READINGS_KEY: '{"a": 1}'})).load() == []
        assert ReadingStore(MemoryBlobStore({READINGS_KEY: '[{"id": "x"}]'})).load() == []

    def test_clear(self):
        blobs = MemoryBlobStore()
        store = ReadingStore(blobs)
        store.append(make_reading())
        store.clear()

        assert store.all() == []
        assert blobs.get(READINGS_KEY) is None


class TestProfileStore:

    def test_round_trip(self):
        blobs = MemoryBlobStore()
        store = ProfileStore(blobs)
        store.save(UserProfile("Jane Doe", date(2026, 9, 1), 14, True,
                               doctor_name="Dr. Rivera", preferred_reminders="weekly"))

        profile = store.load()
        assert profile.name == "Jane Doe"
        assert profile.due_date == date(2026, 9, 1)
        assert profile.current_week == 14
        assert profile.first_pregnancy is True
        assert profile.preferred_reminders == "weekly"

    def test_save_overwrites_wholesale(self):
        store = ProfileStore(MemoryBlobStore())
        store.save(UserProfile("Jane", date(2026, 9, 1), 14, True, doctor_name="Dr. A"))
        store.save(UserProfile("Jane", date(2026, 9, 8), 13, True))

        profile = store.load()
        assert profile.due_date == date(2026, 9, 8)
        assert profile.doctor_name == ""

    def test_missing_and_corrupt(self):
        assert ProfileStore(MemoryBlobStore()).load() is None
        assert ProfileStore(MemoryBlobStore({PROFILE_KEY: "[]"})).load() is None
        assert ProfileStore(MemoryBlobStore({PROFILE_KEY: "nope"})).load() is None


class TestSqlBlobStore:

    def test_set_get_clear(self, app):
        blobs = SqlBlobStore("user-1")
        assert blobs.get(READINGS_KEY) is None

        blobs.set(READINGS_KEY, "[]")
        blobs.set(READINGS_KEY, "[1]")
        assert blobs.get(READINGS_KEY) == "[1]"
        assert StoredBlob.query.filter_by(owner_id="user-1").count() == 1

        blobs.clear(READINGS_KEY)
        assert blobs.get(READINGS_KEY) is None

    def test_owners_are_isolated(self, app):
        SqlBlobStore("user-1").set(PROFILE_KEY, "a")
        SqlBlobStore("user-2").set(PROFILE_KEY, "b")

        assert SqlBlobStore("user-1").get(PROFILE_KEY) == "a"
        assert SqlBlobStore("user-2").get(PROFILE_KEY) == "b"

    def test_reading_store_over_sql(self, app):
        reading = ReadingStore(SqlBlobStore("user-1")).append(make_reading(141, 88))
        assert ReadingStore(SqlBlobStore("user-1")).load() == [reading]
