"""UI behavior tests for menus and URL buttons."""
import os
import subprocess
import sys
import unittest

from tests.fakes import FakeScheduler, sample_groups


def _module_importable(module: str) -> bool:
    """Return True when module can be imported in a subprocess."""
    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        check=False,
    )
    return result.returncode == 0


QT_AVAILABLE = _module_importable("PyQt6.QtWidgets")


@unittest.skipUnless(QT_AVAILABLE, "PyQt6 unavailable in test environment")
class UiBehaviorTests(unittest.TestCase):
    """Validate menu widgets against lifecycle changes."""

    @classmethod
    def setUpClass(cls):
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        from PyQt6.QtWidgets import QApplication

        cls._app = QApplication.instance() or QApplication([])

    def setUp(self):
        from app.services.frame_lifecycle import FrameLifecycleManager
        from app.ui.side_menu import SideMenu
        from app.ui.top_menu import TopMenu

        self.scheduler = FakeScheduler()
        self.manager = FrameLifecycleManager(sample_groups(), self.scheduler)
        self.side_menu = SideMenu(self.manager)
        self.top_menu = TopMenu(self.manager)

    def tearDown(self):
        self.side_menu.detach()
        self.top_menu.detach()
        self.manager.dispose()

    def test_side_menu_expands_active_group(self):
        """Selecting a URL expands its group header."""
        self.assertFalse(self.manager.is_group_open("g2"))
        self.manager.select_url("c")
        self.assertTrue(self.side_menu.group_headers["g2"].text().startswith("▾"))
        self.assertFalse(self.side_menu.group_bodies["g2"].isHidden())
        self.assertTrue(self.side_menu.group_bodies["g1"].isHidden())

    def test_header_click_toggles_group(self):
        self.side_menu.group_headers["g1"].click()
        self.assertTrue(self.manager.is_group_open("g1"))
        self.side_menu.group_headers["g1"].click()
        self.assertFalse(self.manager.is_group_open("g1"))

    def test_button_click_selects_url(self):
        button = self.side_menu.url_buttons["b"][0]
        button.click()
        self.assertEqual(self.manager.active_url_id, "b")
        self.assertIn("Currently active", button.toolTip())

    def test_loaded_tooltip_and_previously_opened_hint(self):
        self.manager.mark_loaded("a")
        button = self.side_menu.url_buttons["a"][0]
        self.assertIn("Loaded in background", button.toolTip())
        self.manager.unload_url("a")
        self.assertIn("Previously opened.", button.toolTip())

    def test_external_button_tooltip(self):
        button = self.side_menu.url_buttons["ext"][0]
        self.assertIn("Opens in your browser", button.toolTip())

    def test_progress_bar_follows_long_press(self):
        self.manager.mark_loaded("a")
        self.manager.on_pointer_down("a")
        self.scheduler.advance(400)
        button = self.side_menu.url_buttons["a"][0]
        button.refresh_progress()
        self.assertEqual(button.progress_bar.value(), 500)
        self.manager.on_pointer_up("a")
        self.assertTrue(button.progress_bar.isHidden())

    def test_top_menu_shows_active_group(self):
        self.assertEqual(set(self.top_menu.url_buttons), {"a", "b"})
        self.manager.select_url("c")
        self.assertEqual(self.top_menu.shown_group_id, "g2")
        self.assertEqual(set(self.top_menu.url_buttons), {"c", "ext"})
        self.assertEqual(self.top_menu.group_selector.text(), "G2")

    def test_top_menu_group_selector(self):
        actions = self.top_menu.group_menu.actions()
        self.assertEqual([action.text() for action in actions], ["G1", "G2"])
        actions[1].trigger()
        self.assertEqual(self.manager.active_group_id, "g2")
        self.assertEqual(self.top_menu.shown_group_id, "g2")

    def test_groups_changed_rebuilds_menus(self):
        self.manager.set_groups(sample_groups()[:1])
        self.assertEqual(set(self.side_menu.group_headers), {"g1"})
        self.assertNotIn("c", self.side_menu.url_buttons)


if __name__ == "__main__":
    unittest.main()
