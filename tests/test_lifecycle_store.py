"""Best-effort persistence tests for menu expansion and known URL ids."""
import os
import sqlite3
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from app.services.frame_lifecycle import FrameLifecycleManager
from app.services.lifecycle_store import KNOWN_URL_IDS_KEY, OPEN_GROUPS_KEY, LifecycleStore
from core import storage
from tests.fakes import FakeScheduler, sample_groups


class LifecycleStoreTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        os.environ["APP_DB_PATH"] = str(Path(self.temp_dir.name) / "Data" / "app.db")
        self.store = LifecycleStore(namespace="user-1")

    def tearDown(self):
        os.environ.pop("APP_DB_PATH", None)

    def test_round_trip(self):
        self.store.save_open_groups({"g1": True, "g2": False})
        self.store.save_known_url_ids({"b", "a"})
        self.assertEqual(self.store.load_open_groups(), {"g1": True, "g2": False})
        self.assertEqual(self.store.load_known_url_ids(), {"a", "b"})
        self.assertEqual(storage.get_app_state(f"{KNOWN_URL_IDS_KEY}:user-1"), '["a", "b"]')

    def test_namespaces_are_separate(self):
        self.store.save_open_groups({"g1": True})
        self.assertEqual(LifecycleStore(namespace="user-2").load_open_groups(), {})

    def test_missing_values_load_empty(self):
        self.assertEqual(self.store.load_open_groups(), {})
        self.assertEqual(self.store.load_known_url_ids(), set())

    def test_malformed_values_load_empty(self):
        storage.set_app_state(f"{OPEN_GROUPS_KEY}:user-1", "{not json")
        storage.set_app_state(f"{KNOWN_URL_IDS_KEY}:user-1", '{"a": 1}')
        self.assertEqual(self.store.load_open_groups(), {})
        self.assertEqual(self.store.load_known_url_ids(), set())

    def test_pair_list_and_bad_entries(self):
        storage.set_app_state(f"{OPEN_GROUPS_KEY}:user-1", '[["g1", true], ["g2", "yes"], "junk"]')
        self.assertEqual(self.store.load_open_groups(), {"g1": True})

    def test_storage_failures_are_swallowed(self):
        failure = sqlite3.OperationalError("disk I/O error")
        with mock.patch.object(storage, "set_app_state", side_effect=failure), \
                mock.patch.object(storage, "get_app_state", side_effect=failure):
            with self.assertLogs(level="WARNING"):
                self.store.save_open_groups({"g1": True})
                self.assertEqual(self.store.load_open_groups(), {})

    def test_manager_keeps_working_when_storage_fails(self):
        failure = sqlite3.OperationalError("database is locked")
        with mock.patch.object(storage, "set_app_state", side_effect=failure), \
                mock.patch.object(storage, "get_app_state", side_effect=failure):
            manager = FrameLifecycleManager.create(sample_groups(), FakeScheduler(), store=self.store)
            self.assertTrue(manager.select_url("a"))
            self.assertTrue(manager.mark_loaded("a"))
            self.assertTrue(manager.toggle_group("g2"))
        self.assertIn("a", manager.loaded_url_ids)

    def test_manager_rehydrates_menu_but_not_frames(self):
        scheduler = FakeScheduler()
        first = FrameLifecycleManager.create(sample_groups(), scheduler, store=self.store)
        first.select_url("c")
        first.mark_loaded("c")
        first.dispose()

        second = FrameLifecycleManager.create(sample_groups(), scheduler, store=self.store)
        self.assertTrue(second.is_group_open("g2"))
        self.assertTrue(second.was_previously_loaded("c"))
        self.assertIsNone(second.active_url_id)
        self.assertEqual(second.loaded_url_ids, frozenset())


if __name__ == "__main__":
    unittest.main()
