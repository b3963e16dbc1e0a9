"""Label showing a single transient chat notice."""

from PySide6.QtCore import Qt, QPropertyAnimation, QEasingCurve
from PySide6.QtWidgets import QGraphicsOpacityEffect, QLabel, QWidget


class ChatNoticeLabel(QLabel):
    """Error notice that fades out before deleting itself."""

    FADE_DURATION_MS = 300

    def __init__(self, text: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("ChatNotice")

        # Notice text is shown verbatim, never as rich text
        self.setTextFormat(Qt.TextFormat.PlainText)
        self.setText(text)
        self.setWordWrap(True)
        self.setStyleSheet("""
            QLabel#ChatNotice {
                background-color: #f44336;
                color: white;
                padding: 12px 20px;
                border-radius: 4px;
            }
        """)

        self._opacity_effect = QGraphicsOpacityEffect(self)
        self._opacity_effect.setOpacity(1.0)
        self.setGraphicsEffect(self._opacity_effect)
        self._fade_animation: QPropertyAnimation | None = None

    def fade_out(self) -> None:
        """Fade the notice out and delete it once the fade completes."""
        if self._fade_animation is not None:
            return

        self._fade_animation = QPropertyAnimation(self._opacity_effect, b"opacity", self)
        self._fade_animation.setDuration(self.FADE_DURATION_MS)
        self._fade_animation.setStartValue(1.0)
        self._fade_animation.setEndValue(0.0)
        self._fade_animation.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._fade_animation.finished.connect(self.deleteLater)
        self._fade_animation.start()
