from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QPushButton, QWidget


def disable_widget_interaction(widget: QWidget):
    """Disable interactive/focus states for display-only widgets."""
    widget.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    if isinstance(widget, QLabel):
        widget.setTextInteractionFlags(Qt.TextInteractionFlag.NoTextInteraction)


def disable_button_focus_rect(button: QPushButton):
    """Disable focus rectangle on button while keeping it clickable."""
    button.setFocusPolicy(Qt.FocusPolicy.NoFocus)


def clear_layout(layout):
    """Remove and schedule deletion of every widget in a layout."""
    while layout.count():
        item = layout.takeAt(0)
        if item.widget():
            item.widget().deleteLater()
        elif item.layout():
            clear_layout(item.layout())
