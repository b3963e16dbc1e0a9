"""Chat panel widget implementation."""

import asyncio
import logging
from typing import Coroutine, Dict, Set

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QPushButton, QTextBrowser, QToolButton, QVBoxLayout, QWidget
)

from chat import ChatConversation, ChatNotice, ChatRenderResult

from chat_widget.chat_input import ChatInput
from chat_widget.chat_notice_label import ChatNoticeLabel


MESSAGE_STYLE_SHEET = """
    .chat-message { margin: 6px 0px; }
    .chat-message-sent { text-align: right; }
    .chat-message-received { text-align: left; }
    .chat-message-header { font-size: small; color: #888888; }
    .chat-message-sender { font-weight: bold; }
    .chat-empty { color: #888888; text-align: center; }
"""


class ChatWidget(QFrame):
    """
    Panel with a title, a scrolling message list, a draft input and send/close buttons.

    The widget implements the ChatView interface and forwards user actions to the
    conversation it is bound to.
    """

    # Emits when the user asks to send the current draft
    send_requested = Signal()

    # Emits when the user asks to close the conversation
    close_requested = Signal()

    def __init__(self, container: QWidget | None = None, parent: QWidget | None = None) -> None:
        """
        Initialize the chat widget.

        Args:
            container: Host widget shown and hidden with the conversation; defaults to this widget
            parent: Optional parent widget
        """
        super().__init__(parent)
        self.setObjectName("ChatWidget")
        self._logger = logging.getLogger("ChatWidget")

        self._container = container
        self._conversation: ChatConversation | None = None
        self._tasks: Set[asyncio.Task] = set()
        self._notice_labels: Dict[int, ChatNoticeLabel] = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        # Header with title and close button
        header_layout = QHBoxLayout()
        self._title_label = QLabel("Chat", self)
        self._title_label.setObjectName("ChatTitle")
        self._title_label.setTextFormat(Qt.TextFormat.PlainText)
        header_layout.addWidget(self._title_label, 1)

        self._close_button = QToolButton(self)
        self._close_button.setObjectName("ChatCloseButton")
        self._close_button.setText("✕")
        self._close_button.setToolTip("Close chat")
        self._close_button.clicked.connect(self.close_requested)
        header_layout.addWidget(self._close_button)
        layout.addLayout(header_layout)

        # Transient notices sit above the messages
        self._notice_layout = QVBoxLayout()
        self._notice_layout.setSpacing(4)
        layout.addLayout(self._notice_layout)

        self._messages_view = QTextBrowser(self)
        self._messages_view.setObjectName("ChatMessages")
        self._messages_view.setOpenLinks(False)
        self._messages_view.document().setDefaultStyleSheet(MESSAGE_STYLE_SHEET)
        layout.addWidget(self._messages_view, 1)

        input_layout = QHBoxLayout()
        self._input = ChatInput(self)
        self._input.setMaximumHeight(80)
        self._input.submit_requested.connect(self.send_requested)
        self._input.close_requested.connect(self.close_requested)
        input_layout.addWidget(self._input, 1)

        self._send_button = QPushButton("Send", self)
        self._send_button.setObjectName("ChatSendButton")
        self._send_button.clicked.connect(self.send_requested)
        input_layout.addWidget(self._send_button)
        layout.addLayout(input_layout)

        self.send_requested.connect(self._on_send_requested)
        self.close_requested.connect(self._on_close_requested)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Keep clicks inside the panel from reaching the host container."""
        event.accept()

    def bind(self, conversation: ChatConversation) -> None:
        """Connect user actions to a conversation."""
        self._conversation = conversation

    def _spawn(self, coro: Coroutine) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Future) -> None:
        self._tasks.discard(task)  # type: ignore[arg-type]
        if task.cancelled():
            return

        exception = task.exception()
        if exception is not None:
            self._logger.error("Chat task failed", exc_info=exception)

    def _on_send_requested(self) -> None:
        if self._conversation is None:
            return

        self._spawn(self._conversation.send())

    def _on_close_requested(self) -> None:
        if self._conversation is None:
            return

        self._conversation.close()

    def set_title(self, title: str) -> None:
        self._title_label.setText(title)

    def set_chat_visible(self, visible: bool) -> None:
        target = self._container if self._container is not None else self
        target.setVisible(visible)

    def render_messages(self, result: ChatRenderResult) -> None:
        """Show a rendered collection; the markup has already been escaped."""
        self._messages_view.setHtml(result.html)

    def scroll_to_bottom(self) -> None:
        # Wait for the document layout to settle before reading the scroll range
        QTimer.singleShot(0, self._scroll_to_bottom)

    def _scroll_to_bottom(self) -> None:
        scroll_bar = self._messages_view.verticalScrollBar()
        scroll_bar.setValue(scroll_bar.maximum())

    def draft_text(self) -> str:
        return self._input.toPlainText()

    def set_draft_text(self, text: str) -> None:
        self._input.setPlainText(text)

    def set_input_enabled(self, enabled: bool) -> None:
        self._input.setEnabled(enabled)
        self._send_button.setEnabled(enabled)

    def focus_input(self) -> None:
        self._input.setFocus()

    def show_notice(self, notice: ChatNotice) -> None:
        label = ChatNoticeLabel(notice.text, self)
        self._notice_labels[notice.id] = label
        self._notice_layout.addWidget(label)

    def dismiss_notice(self, notice: ChatNotice) -> None:
        label = self._notice_labels.pop(notice.id, None)
        if label is None:
            return

        label.fade_out()
