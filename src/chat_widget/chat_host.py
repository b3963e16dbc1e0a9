"""
Attachment of chat panels to host windows.

A host window provides a container widget, found by object name, that the chat panel is
placed into.  Clicking the container outside the panel closes the conversation.
"""

import logging

from PySide6.QtCore import QEvent, QObject, Signal
from PySide6.QtWidgets import QVBoxLayout, QWidget

from chat import ChatClient, ChatConfig, ChatConversation

from chat_widget.chat_widget import ChatWidget


class ChatContainerEventFilter(QObject):
    """Event filter to detect clicks on the container itself rather than its children."""

    backdrop_clicked = Signal()

    def __init__(self, container: QWidget) -> None:
        """Initialize the event filter."""
        super().__init__(container)
        self._container = container

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        """
        Filter events to detect backdrop clicks.

        Args:
            watched: The object that received the event
            event: The event that was received

        Returns:
            True if event was handled, False to pass to the target object
        """
        if watched is self._container and event.type() == QEvent.Type.MouseButtonPress:
            self.backdrop_clicked.emit()
            return False  # Don't consume the event

        return super().eventFilter(watched, event)


def attach_chat(
    root: QWidget,
    container_name: str,
    config: ChatConfig | None = None,
    client: ChatClient | None = None
) -> ChatConversation:
    """
    Attach a chat panel to the named container inside a root widget.

    If the container cannot be found the error is logged and an inactive conversation is
    returned; no exception reaches the caller.

    Args:
        root: Widget to search
        container_name: Object name of the container
        config: Chat configuration
        client: Optional service client

    Returns:
        The conversation driving the panel
    """
    logger = logging.getLogger("ChatHost")

    container = root if root.objectName() == container_name else root.findChild(QWidget, container_name)
    if container is None:
        logger.error("Chat container with name \"%s\" not found", container_name)
        return ChatConversation(None, config, client)

    widget = ChatWidget(container=container, parent=container)
    layout = container.layout()
    if layout is None:
        layout = QVBoxLayout(container)

    layout.addWidget(widget)

    conversation = ChatConversation(widget, config, client)
    widget.bind(conversation)

    event_filter = ChatContainerEventFilter(container)
    event_filter.backdrop_clicked.connect(conversation.close)
    container.installEventFilter(event_filter)

    # Start hidden until a conversation is opened
    container.setVisible(False)
    return conversation
