"""Storage tests for SQLite users, URL groups and memberships."""
import os
import tempfile
import unittest
from pathlib import Path

from core import storage


class StorageTests(unittest.TestCase):
    """Validate SQLite storage behavior."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        os.environ["APP_DB_PATH"] = str(Path(self.temp_dir.name) / "Data" / "app.db")

    def tearDown(self):
        os.environ.pop("APP_DB_PATH", None)

    def test_init_creates_database(self):
        storage.init_db()
        self.assertTrue(Path(os.environ["APP_DB_PATH"]).exists())

    def test_user_fields_update(self):
        user_id = storage.create_user("alice")
        storage.update_user_fields(user_id, menu_position="side")
        storage.update_user_fields(user_id, last_active_url_id="u1")
        user = storage.get_user(user_id)
        self.assertEqual(user.menu_position, "side")
        self.assertEqual(user.last_active_url_id, "u1")
        self.assertEqual(storage.get_user_by_name("alice").id, user_id)
        self.assertIsNone(storage.get_user("missing"))

    def test_group_urls_in_display_order(self):
        group_id = storage.create_url_group("Tools")
        first = storage.create_url("Zeta", "https://zeta.example.com")
        second = storage.create_url("Alpha", "https://alpha.example.com")
        third = storage.create_url("Beta", "https://beta.example.com")
        storage.add_url_to_group(group_id, first)
        storage.add_url_to_group(group_id, second)
        storage.add_url_to_group(group_id, third, display_order=0)
        pairs = storage.list_group_urls(group_id)
        # Ties on display_order fall back to title
        self.assertEqual([url.title for url, _ in pairs], ["Beta", "Zeta", "Alpha"])
        self.assertEqual([order for _, order in pairs], [0, 0, 1])

    def test_reorder_existing_membership(self):
        group_id = storage.create_url_group("Tools")
        url_id = storage.create_url("Docs", "https://docs.example.com")
        storage.add_url_to_group(group_id, url_id)
        storage.add_url_to_group(group_id, url_id, display_order=7)
        self.assertEqual(storage.list_group_urls(group_id)[0][1], 7)

    def test_delete_cascades(self):
        user_id = storage.create_user("bob")
        group_id = storage.create_url_group("Ops")
        url_id = storage.create_url("Grafana", "https://grafana.example.com")
        storage.add_url_to_group(group_id, url_id)
        storage.assign_group_to_user(user_id, group_id)
        storage.delete_url(url_id)
        self.assertEqual(storage.list_group_urls(group_id), [])
        storage.delete_url_group(group_id)
        self.assertEqual(storage.list_user_groups(user_id), [])

    def test_user_groups_sorted_by_name(self):
        user_id = storage.create_user("carol")
        for name in ("beta", "Alpha", "gamma"):
            storage.assign_group_to_user(user_id, storage.create_url_group(name))
        self.assertEqual([g.name for g in storage.list_user_groups(user_id)], ["Alpha", "beta", "gamma"])

    def test_app_state_set_and_clear(self):
        storage.set_app_state("k", "v1")
        storage.set_app_state("k", "v2")
        self.assertEqual(storage.get_app_state("k"), "v2")
        storage.set_app_state("k", None)
        self.assertIsNone(storage.get_app_state("k"))


if __name__ == "__main__":
    unittest.main()
