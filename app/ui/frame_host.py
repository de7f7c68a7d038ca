import logging

from PyQt6.QtCore import QUrl, Qt
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtWidgets import QLabel, QPushButton, QStackedWidget, QVBoxLayout, QWidget

from app.services.frame_lifecycle import LifecycleEventKind
from app.services.frame_status import FrameStatus
from app.ui.theme import Colors, Styles
from app.ui.widget_utils import disable_button_focus_rect, disable_widget_interaction
from core.catalog import effective_url


class FrameHost(QStackedWidget):
    """Reconciles embedded web views with the lifecycle manager's loaded set."""

    def __init__(self, manager):
        super().__init__()
        self.manager = manager
        self.views = {}

        self.empty_page = self._message_page("Select a URL from the menu")
        self.unloaded_page = self._message_page("This page is unloaded.")
        self.reload_btn = QPushButton("⟳ Load again")
        self.reload_btn.setStyleSheet(Styles.group_header())
        disable_button_focus_rect(self.reload_btn)
        self.reload_btn.clicked.connect(self._reload_active)
        self.unloaded_page.layout().addWidget(self.reload_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.addWidget(self.empty_page)
        self.addWidget(self.unloaded_page)

        self._unsubscribe = manager.subscribe(self.on_lifecycle_event)
        self.sync()

    def _message_page(self, text):
        page = QWidget()
        label = QLabel(text)
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        disable_widget_interaction(label)
        label.setStyleSheet(Styles.info_label(Colors.FG_MUTED))
        layout = QVBoxLayout()
        layout.addStretch()
        layout.addWidget(label)
        layout.addStretch()
        page.setLayout(layout)
        return page

    def sync(self):
        """Load the active URL if the renderer has not instantiated it yet, then show it."""
        active = self.manager.active_url_id
        if active is not None and self.manager.status(active) == FrameStatus.ACTIVE_UNLOADED:
            self.load(active)
        self.show_active()

    def load(self, url_id):
        url = self.manager.url(url_id)
        if url is None or url.open_in_new_tab:
            return
        target = effective_url(url, self.manager.narrow)
        view = self.views.get(url_id)
        if view is None:
            view = QWebEngineView()
            self.views[url_id] = view
            self.addWidget(view)
            view.setUrl(QUrl(target))
        else:
            view.reload()
        logging.info("[FRAME] load url=%s target=%s", url_id, target)
        self.manager.mark_loaded(url_id)

    def destroy_view(self, url_id):
        view = self.views.pop(url_id, None)
        if view is None:
            return
        view.setUrl(QUrl("about:blank"))
        self.removeWidget(view)
        view.deleteLater()

    def show_active(self):
        active = self.manager.active_url_id
        if active is None:
            self.setCurrentWidget(self.empty_page)
        elif active in self.views:
            self.setCurrentWidget(self.views[active])
        else:
            self.setCurrentWidget(self.unloaded_page)

    def _reload_active(self):
        active = self.manager.active_url_id
        if active is not None:
            self.manager.reload_url(active)

    def on_lifecycle_event(self, event):
        kind = event.kind
        if kind == LifecycleEventKind.SELECTED:
            self.sync()
        elif kind == LifecycleEventKind.RELOAD_REQUESTED:
            self.load(event.url_id)
            self.show_active()
        elif kind == LifecycleEventKind.UNLOADED:
            self.destroy_view(event.url_id)
            self.show_active()
        elif kind == LifecycleEventKind.GROUPS_CHANGED:
            self.show_active()

    def detach(self):
        self._unsubscribe()
        for url_id in list(self.views):
            self.destroy_view(url_id)
