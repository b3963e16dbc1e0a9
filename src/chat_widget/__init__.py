"""Qt chat panel for offer conversations."""

from chat_widget.chat_host import attach_chat, ChatContainerEventFilter
from chat_widget.chat_input import ChatInput
from chat_widget.chat_notice_label import ChatNoticeLabel
from chat_widget.chat_widget import ChatWidget

__all__ = [
    "attach_chat",
    "ChatContainerEventFilter",
    "ChatInput",
    "ChatNoticeLabel",
    "ChatWidget"
]
