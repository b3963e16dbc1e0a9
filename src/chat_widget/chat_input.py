"""Draft input for the chat panel."""

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import QPlainTextEdit, QWidget


class ChatInput(QPlainTextEdit):
    """Plain text input where Enter submits and Shift+Enter starts a new line."""

    submit_requested = Signal()
    close_requested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("ChatInput")
        self.setPlaceholderText("Type a message...")
        self.setTabChangesFocus(True)

    def keyPressEvent(self, e: QKeyEvent) -> None:
        """Handle submit and close keys, leaving everything else to the editor."""
        if e.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            if not e.modifiers() & Qt.KeyboardModifier.ShiftModifier:
                e.accept()
                self.submit_requested.emit()
                return

        if e.key() == Qt.Key.Key_Escape:
            e.accept()
            self.close_requested.emit()
            return

        super().keyPressEvent(e)
