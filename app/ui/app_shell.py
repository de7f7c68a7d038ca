from PyQt6.QtCore import QSettings, QTimer
from PyQt6.QtGui import QIcon, QKeySequence, QShortcut
from PyQt6.QtWidgets import QApplication, QHBoxLayout, QLabel, QStyle, QVBoxLayout, QWidget

from app.controllers.frame_controller import FrameController
from app.controllers.preferences_controller import PreferencesController
from app.services.frame_lifecycle import LifecycleEventKind
from app.services.lifecycle_config import LifecycleConfig
from app.services.qt_scheduler import QtScheduler
from app.ui.frame_host import FrameHost
from app.ui.side_menu import SideMenu
from app.ui.theme import Colors, Styles
from app.ui.top_menu import TopMenu
from app.ui.widget_utils import disable_widget_interaction
from core.paths import APP_ASSETS_DIR


class AppShell(QWidget):
    def __init__(self, config=None, frame_controller=None):
        super().__init__()

        self.settings = QSettings()
        self.config = config or LifecycleConfig.from_env()
        self.preferences = PreferencesController()
        self.frames = frame_controller or FrameController(QtScheduler(self), self.config)

        self.setWindowTitle("Frame Dashboard")
        geometry = self.settings.value("ui/geometry")
        if geometry is not None:
            self.restoreGeometry(geometry)
        else:
            self.setGeometry(200, 200, 1280, 800)
        self.load_app_icon()

        self.side_menu = None
        self.top_menu = None
        self.frame_host = None
        self.menu_position = None

        # ---- long-press progress repaint ----
        self.progress_timer = QTimer(self)
        self.progress_timer.setInterval(self.config.progress_refresh_ms)
        self.progress_timer.timeout.connect(self.refresh_progress)

        # ---- layouts ----
        self.root_layout = QVBoxLayout()
        self.root_layout.setContentsMargins(0, 0, 0, 0)
        self.root_layout.setSpacing(0)
        self.body_layout = QHBoxLayout()
        self.body_layout.setContentsMargins(0, 0, 0, 0)
        self.body_layout.setSpacing(0)
        self.setLayout(self.root_layout)

        success, message = self.frames.open_dashboard(narrow=self.is_narrow())
        if not success:
            self.status_label = QLabel(message)
            disable_widget_interaction(self.status_label)
            self.status_label.setStyleSheet(Styles.info_label(Colors.FG_MUTED))
            self.root_layout.addWidget(self.status_label)
            return
        self.status_label = None
        self.build_dashboard()

        self.menu_shortcut = QShortcut(QKeySequence("Ctrl+Shift+M"), self)
        self.menu_shortcut.activated.connect(self.toggle_menu_position)
        self.refresh_shortcut = QShortcut(QKeySequence("F5"), self)
        self.refresh_shortcut.activated.connect(self.frames.refresh)

    def load_app_icon(self):
        app = QApplication.instance()
        icon_path = self.settings.value("ui/app_icon_path", "", str)
        icon = QIcon(icon_path) if icon_path else QIcon()
        if icon.isNull():
            icon = QIcon(str(APP_ASSETS_DIR / "app_icon.png"))
        if icon.isNull():
            icon = self.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon)
        self.setWindowIcon(icon)
        if app:
            app.setWindowIcon(icon)

    @property
    def manager(self):
        return self.frames.manager

    def is_narrow(self):
        return self.config.is_narrow(self.width())

    def build_dashboard(self):
        manager = self.manager
        self.top_menu = TopMenu(manager)
        self.side_menu = SideMenu(manager)
        self.frame_host = FrameHost(manager)

        self.root_layout.addWidget(self.top_menu)
        self.root_layout.addLayout(self.body_layout)
        self.body_layout.addWidget(self.side_menu)
        self.body_layout.addWidget(self.frame_host, 1)

        manager.subscribe(self.on_lifecycle_event)
        self.apply_menu_position()

    def apply_menu_position(self):
        """Both menus read the same manager; switching only changes which one is visible."""
        position = self.preferences.menu_position(self.is_narrow())
        self.menu_position = position
        self.top_menu.setVisible(position == "top")
        self.side_menu.setVisible(position == "side")

    def toggle_menu_position(self):
        self.preferences.toggle_menu_position(self.is_narrow())
        self.apply_menu_position()

    def refresh_progress(self):
        self.side_menu.refresh_progress()
        self.top_menu.refresh_progress()

    def on_lifecycle_event(self, event):
        if event.kind == LifecycleEventKind.LONG_PRESS_STARTED:
            self.progress_timer.start()
        elif event.kind == LifecycleEventKind.LONG_PRESS_ENDED:
            if not any(self.manager.is_long_pressing(url_id) for url_id in self.manager.loaded_url_ids):
                self.progress_timer.stop()
                self.refresh_progress()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self.top_menu is None or self.manager is None:
            return
        self.manager.set_narrow(self.is_narrow())
        self.apply_menu_position()

    def closeEvent(self, event):
        self.settings.setValue("ui/geometry", self.saveGeometry())
        self.progress_timer.stop()
        for widget in (self.frame_host, self.side_menu, self.top_menu):
            if widget is not None:
                widget.detach()
        self.frames.close()
        super().closeEvent(event)
