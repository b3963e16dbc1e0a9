"""Polling offer chat framework."""

from chat.chat_client import ChatClient
from chat.chat_config import ChatConfig
from chat.chat_conversation import (
    ChatConversation, ChatConversationEvent, ChatConversationState, ChatSession
)
from chat.chat_error import (
    ChatAPIError, ChatError, ChatNetworkError, ChatResponseError, ChatValidationError
)
from chat.chat_message import ChatMessage, ChatViewer
from chat.chat_message_store import ChatMessageStore
from chat.chat_notice_board import ChatNotice, ChatNoticeBoard
from chat.chat_poll_scheduler import ChatPollScheduler
from chat.chat_renderer import (
    ChatRenderedMessage, ChatRenderer, ChatRenderResult, format_relative_time
)
from chat.chat_view import ChatView

__all__ = [
    "ChatAPIError",
    "ChatClient",
    "ChatConfig",
    "ChatConversation",
    "ChatConversationEvent",
    "ChatConversationState",
    "ChatError",
    "ChatMessage",
    "ChatMessageStore",
    "ChatNetworkError",
    "ChatNotice",
    "ChatNoticeBoard",
    "ChatPollScheduler",
    "ChatRenderedMessage",
    "ChatRenderer",
    "ChatRenderResult",
    "ChatResponseError",
    "ChatSession",
    "ChatValidationError",
    "ChatView",
    "ChatViewer",
    "format_relative_time"
]
