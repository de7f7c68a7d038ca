from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtWidgets import QProgressBar, QPushButton

from app.ui.theme import Styles
from app.ui.widget_utils import disable_button_focus_rect

PROGRESS_STEPS = 1000


class UrlButton(QPushButton):
    """Menu entry for one URL. Forwards pointer and touch input to the lifecycle manager."""

    def __init__(self, manager, url, top=False):
        super().__init__(url.title)
        self.manager = manager
        self.url = url
        self.top = top

        disable_button_focus_rect(self)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setProperty("url_id", url.id)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, PROGRESS_STEPS)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setStyleSheet(Styles.long_press_bar())
        self.progress_bar.hide()

        self.clicked.connect(lambda: self.manager.on_click(self.url.id))
        self.refresh()

    def refresh(self):
        frame_status = self.manager.status(self.url.id)
        self.setStyleSheet(Styles.url_button(frame_status, top=self.top))
        tooltip = frame_status.tooltip
        if self.url.open_in_new_tab:
            tooltip = "Opens in your browser"
        elif not frame_status.is_loaded and self.manager.was_previously_loaded(self.url.id):
            tooltip += " Previously opened."
        self.setToolTip(f"{self.url.url}\n{tooltip}")
        self.refresh_progress()

    def refresh_progress(self):
        progress = self.manager.long_press_progress(self.url.id)
        if progress <= 0.0:
            self.progress_bar.hide()
            self.progress_bar.setValue(0)
            return
        self.progress_bar.setValue(int(progress * PROGRESS_STEPS))
        self.progress_bar.show()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.progress_bar.setGeometry(0, self.height() - 3, self.width(), 3)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.manager.on_pointer_down(self.url.id)
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event):
        # Release first so a completed long press can swallow the click emitted below
        if event.button() == Qt.MouseButton.LeftButton:
            self.manager.on_pointer_up(self.url.id)
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.manager.on_pointer_leave(self.url.id)
        super().leaveEvent(event)

    def event(self, event):
        kind = event.type()
        if kind == QEvent.Type.TouchBegin:
            self.manager.on_touch_start(self.url.id)
            event.accept()
            return True
        if kind == QEvent.Type.TouchEnd:
            self.manager.on_touch_end(self.url.id)
            # Touch input does not synthesize a click once accepted; emit one for the manager to judge
            self.click()
            event.accept()
            return True
        if kind == QEvent.Type.TouchCancel:
            self.manager.on_touch_cancel(self.url.id)
            event.accept()
            return True
        return super().event(event)
