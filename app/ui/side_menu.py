from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QPushButton, QScrollArea, QVBoxLayout, QWidget

from app.services.frame_lifecycle import LifecycleEventKind
from app.ui.theme import Styles
from app.ui.url_button import UrlButton
from app.ui.widget_utils import clear_layout, disable_button_focus_rect


class SideMenu(QScrollArea):
    """Collapsible list of URL groups."""

    def __init__(self, manager):
        super().__init__()
        self.manager = manager
        self.group_headers = {}
        self.group_bodies = {}
        self.url_buttons = {}

        self.container = QWidget()
        self.container.setObjectName("side_menu")
        self.container.setStyleSheet(Styles.panel())
        self.body_layout = QVBoxLayout()
        self.body_layout.setContentsMargins(0, 0, 0, 0)
        self.body_layout.setSpacing(0)
        self.container.setLayout(self.body_layout)

        self.setWidget(self.container)
        self.setWidgetResizable(True)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.setFixedWidth(240)

        self.rebuild()
        self._unsubscribe = manager.subscribe(self.on_lifecycle_event)

    def rebuild(self):
        clear_layout(self.body_layout)
        self.group_headers.clear()
        self.group_bodies.clear()
        self.url_buttons.clear()

        for group in self.manager.groups:
            header = QPushButton()
            header.setStyleSheet(Styles.group_header())
            disable_button_focus_rect(header)
            header.clicked.connect(lambda _, g=group.id: self.manager.toggle_group(g))
            self.body_layout.addWidget(header)
            self.group_headers[group.id] = header

            body = QWidget()
            body_layout = QVBoxLayout()
            body_layout.setContentsMargins(12, 0, 0, 0)
            body_layout.setSpacing(0)
            for url in group.urls:
                button = UrlButton(self.manager, url)
                body_layout.addWidget(button)
                self.url_buttons.setdefault(url.id, []).append(button)
            body.setLayout(body_layout)
            self.body_layout.addWidget(body)
            self.group_bodies[group.id] = body

        self.body_layout.addStretch()
        self.refresh()

    def refresh(self):
        for group in self.manager.groups:
            is_open = self.manager.is_group_open(group.id)
            self.group_headers[group.id].setText(f"{'▾' if is_open else '▸'}  {group.name}")
            self.group_bodies[group.id].setVisible(is_open)
        for buttons in self.url_buttons.values():
            for button in buttons:
                button.refresh()

    def refresh_progress(self):
        for buttons in self.url_buttons.values():
            for button in buttons:
                button.refresh_progress()

    def on_lifecycle_event(self, event):
        if event.kind == LifecycleEventKind.GROUPS_CHANGED:
            self.rebuild()
        elif event.kind in (LifecycleEventKind.LONG_PRESS_STARTED, LifecycleEventKind.LONG_PRESS_ENDED):
            for button in self.url_buttons.get(event.url_id, []):
                button.refresh_progress()
        else:
            self.refresh()

    def detach(self):
        self._unsubscribe()
