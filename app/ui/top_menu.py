from PyQt6.QtWidgets import QHBoxLayout, QMenu, QToolButton, QWidget

from app.services.frame_lifecycle import LifecycleEventKind
from app.ui.theme import Styles
from app.ui.url_button import UrlButton
from app.ui.widget_utils import clear_layout


class TopMenu(QWidget):
    """Horizontal bar: group selector plus the URLs of the active group."""

    def __init__(self, manager):
        super().__init__()
        self.manager = manager
        self.url_buttons = {}
        self.shown_group_id = None

        self.setStyleSheet(Styles.panel())
        self.setFixedHeight(48)

        self.group_selector = QToolButton()
        self.group_selector.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self.group_menu = QMenu(self.group_selector)
        self.group_selector.setMenu(self.group_menu)

        self.row_layout = QHBoxLayout()
        self.row_layout.setContentsMargins(0, 0, 0, 0)
        self.row_layout.setSpacing(2)

        layout = QHBoxLayout()
        layout.setContentsMargins(8, 0, 8, 0)
        layout.addWidget(self.group_selector)
        layout.addLayout(self.row_layout)
        layout.addStretch()
        self.setLayout(layout)

        self.rebuild()
        self._unsubscribe = manager.subscribe(self.on_lifecycle_event)

    def _group(self, group_id):
        for group in self.manager.groups:
            if group.id == group_id:
                return group
        return None

    def rebuild(self):
        self.group_menu.clear()
        for group in self.manager.groups:
            action = self.group_menu.addAction(group.name)
            action.triggered.connect(lambda _, g=group.id: self.manager.select_group(g))
        self.group_selector.setVisible(len(self.manager.groups) > 1)
        self.shown_group_id = None
        self.refresh()

    def _show_group(self, group):
        clear_layout(self.row_layout)
        self.url_buttons.clear()
        self.shown_group_id = group.id if group else None
        self.group_selector.setText(group.name if group else "Select Group")
        if group is None:
            return
        for url in group.urls:
            button = UrlButton(self.manager, url, top=True)
            self.row_layout.addWidget(button)
            self.url_buttons[url.id] = button

    def refresh(self):
        group_id = self.manager.active_group_id
        if group_id != self.shown_group_id:
            self._show_group(self._group(group_id))
        for button in self.url_buttons.values():
            button.refresh()

    def refresh_progress(self):
        for button in self.url_buttons.values():
            button.refresh_progress()

    def on_lifecycle_event(self, event):
        if event.kind == LifecycleEventKind.GROUPS_CHANGED:
            self.rebuild()
        elif event.kind in (LifecycleEventKind.LONG_PRESS_STARTED, LifecycleEventKind.LONG_PRESS_ENDED):
            button = self.url_buttons.get(event.url_id)
            if button is not None:
                button.refresh_progress()
        else:
            self.refresh()

    def detach(self):
        self._unsubscribe()
