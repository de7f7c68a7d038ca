"""Menu position resolution and preference controller tests."""
import os
import tempfile
import unittest
from pathlib import Path

from app.app_state import app_state
from app.controllers.preferences_controller import PreferencesController, resolve_menu_position
from app.services.lifecycle_config import LifecycleConfig
from core import catalog


class ResolveMenuPositionTests(unittest.TestCase):
    def test_narrow_always_side(self):
        self.assertEqual(resolve_menu_position(True, "top", override="top"), "side")

    def test_override_then_preference_then_default(self):
        self.assertEqual(resolve_menu_position(False, "top", override="side"), "side")
        self.assertEqual(resolve_menu_position(False, "side"), "side")
        self.assertEqual(resolve_menu_position(False, None), "top")
        self.assertEqual(resolve_menu_position(False, "bogus", override="bogus"), "top")


class PreferencesControllerTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        os.environ["APP_DB_PATH"] = str(Path(self.temp_dir.name) / "Data" / "app.db")
        app_state.set_current_user(catalog.ensure_user("alice"))
        app_state.menu_position_override = None
        self.controller = PreferencesController()

    def tearDown(self):
        app_state.current_user_id = None
        app_state.menu_position_override = None
        os.environ.pop("APP_DB_PATH", None)

    def test_persisted_preference(self):
        self.assertEqual(self.controller.menu_position(narrow=False), "top")
        self.assertTrue(self.controller.set_menu_position("side")[0])
        self.assertEqual(self.controller.menu_position(narrow=False), "side")

    def test_override(self):
        self.assertFalse(self.controller.set_override("left")[0])
        self.assertTrue(self.controller.set_override("side")[0])
        self.assertEqual(self.controller.menu_position(narrow=False), "side")
        self.controller.set_override(None)
        self.assertEqual(self.controller.menu_position(narrow=False), "top")

    def test_toggle_clears_override(self):
        self.controller.set_override("side")
        self.assertTrue(self.controller.toggle_menu_position(narrow=False)[0])
        self.assertIsNone(app_state.menu_position_override)
        self.assertEqual(self.controller.menu_position(narrow=False), "top")
        self.controller.toggle_menu_position(narrow=False)
        self.assertEqual(self.controller.menu_position(narrow=False), "side")

    def test_no_user(self):
        app_state.current_user_id = None
        self.assertEqual(self.controller.set_menu_position("side"), (False, "No user selected."))
        self.assertEqual(self.controller.menu_position(narrow=False), "top")


class LifecycleConfigTests(unittest.TestCase):
    def tearDown(self):
        for name in ("DASHBOARD_LONG_PRESS_MS", "DASHBOARD_CLICK_SUPPRESS_MS"):
            os.environ.pop(name, None)

    def test_defaults(self):
        config = LifecycleConfig.from_env()
        self.assertEqual((config.long_press_ms, config.click_suppress_ms), (800, 500))
        self.assertTrue(config.is_narrow(600))
        self.assertFalse(config.is_narrow(1200))

    def test_env_overrides_and_invalid_values(self):
        os.environ["DASHBOARD_LONG_PRESS_MS"] = "1200"
        os.environ["DASHBOARD_CLICK_SUPPRESS_MS"] = "soon"
        with self.assertLogs(level="WARNING"):
            config = LifecycleConfig.from_env()
        self.assertEqual(config.long_press_ms, 1200)
        self.assertEqual(config.click_suppress_ms, 500)


if __name__ == "__main__":
    unittest.main()
