"""User selection and catalog import controller tests."""
import os
import tempfile
import unittest
from pathlib import Path

from app.app_state import app_state
from app.controllers.user_controller import DEFAULT_USERNAME, UserController
from core import catalog, storage


class UserControllerTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        os.environ["APP_DB_PATH"] = str(Path(self.temp_dir.name) / "Data" / "app.db")
        app_state.current_user_id = None
        self.controller = UserController()

    def tearDown(self):
        app_state.current_user_id = None
        os.environ.pop("APP_DB_PATH", None)

    def test_select_user_persists(self):
        success, message = self.controller.select_user(" alice ")
        self.assertTrue(success)
        self.assertEqual(message, "Signed in as alice.")
        user_id = app_state.current_user_id
        app_state.current_user_id = None
        self.assertTrue(self.controller.restore_user()[0])
        self.assertEqual(app_state.current_user_id, user_id)

    def test_restore_falls_back_to_default_user(self):
        storage.set_app_state("current_user", "deleted-user")
        self.assertTrue(self.controller.restore_user()[0])
        self.assertEqual(storage.get_user(app_state.current_user_id).username, DEFAULT_USERNAME)

    def test_select_user_rejects_blank_names(self):
        self.assertEqual(self.controller.select_user(""), (False, "Username cannot be empty."))

    def test_import_requires_user(self):
        self.assertEqual(self.controller.import_catalog("x.json"), (False, "No user selected."))

    def test_invalid_catalog_is_reported(self):
        self.controller.select_user("alice")
        path = Path(self.temp_dir.name) / "catalog.json"
        path.write_text("[]", encoding="utf-8")
        with self.assertLogs(level="WARNING"):
            success, message = self.controller.import_catalog(path)
        self.assertFalse(success)
        self.assertIn("'groups'", message)

    def test_non_object_url_entry_is_reported(self):
        self.controller.select_user("alice")
        path = Path(self.temp_dir.name) / "catalog.json"
        path.write_text('{"groups": [{"name": "G", "urls": ["https://x.example.com/"]}]}', encoding="utf-8")
        with self.assertLogs(level="WARNING"):
            success, message = self.controller.import_catalog(path)
        self.assertFalse(success)
        self.assertEqual(message, "Each URL entry must be an object.")

    def test_import_assigns_groups(self):
        self.controller.select_user("alice")
        path = Path(self.temp_dir.name) / "catalog.json"
        path.write_text('{"groups": [{"name": "Ops", "urls": []}]}', encoding="utf-8")
        self.assertTrue(self.controller.import_catalog(path)[0])
        groups = catalog.list_url_groups_for_user(app_state.current_user_id)
        self.assertEqual([group.name for group in groups], ["Ops"])


if __name__ == "__main__":
    unittest.main()
