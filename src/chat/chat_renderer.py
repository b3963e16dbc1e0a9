"""Projection of chat messages into escaped markup."""

from dataclasses import dataclass
from datetime import datetime, timezone
import html
from typing import Iterable, Tuple

from chat.chat_message import ChatMessage, ChatViewer


EMPTY_STATE_TEXT = "No messages yet. Start the conversation!"


def format_relative_time(sent_at: datetime, now: datetime | None = None) -> str:
    """
    Format a timestamp relative to now.

    Args:
        sent_at: When the message was sent
        now: Reference time; defaults to the current time

    Returns:
        "Just now", "<n>m ago", "<n>h ago" or the localized calendar date
    """
    if sent_at.tzinfo is None:
        sent_at = sent_at.replace(tzinfo=timezone.utc)

    if now is None:
        now = datetime.now(timezone.utc)

    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    diff_mins = int((now - sent_at).total_seconds() // 60)
    if diff_mins < 1:
        return "Just now"

    if diff_mins < 60:
        return f"{diff_mins}m ago"

    diff_hours = diff_mins // 60
    if diff_hours < 24:
        return f"{diff_hours}h ago"

    return sent_at.astimezone().strftime("%x")


def escape_text(text: str) -> str:
    """Escape untrusted text so it can only ever display as text."""
    return html.escape(text, quote=True).replace("\r\n", "\n").replace("\n", "<br>")


@dataclass(frozen=True)
class ChatRenderedMessage:
    """Presentation of a single message; all string fields are safe markup."""
    message_id: object
    is_sent: bool
    sender_html: str
    time_label: str
    text_html: str

    def css_class(self) -> str:
        return "chat-message-sent" if self.is_sent else "chat-message-received"

    def to_html(self) -> str:
        return (
            f'<div class="chat-message {self.css_class()}">'
            f'<div class="chat-message-header">'
            f'<span class="chat-message-sender">{self.sender_html}</span> '
            f'<span class="chat-message-time">{html.escape(self.time_label)}</span>'
            f'</div>'
            f'<div class="chat-message-content">{self.text_html}</div>'
            f'</div>'
        )


@dataclass(frozen=True)
class ChatRenderResult:
    """Result of rendering a message collection."""
    messages: Tuple[ChatRenderedMessage, ...]
    html: str

    @property
    def is_empty(self) -> bool:
        return not self.messages


class ChatRenderer:
    """Renders a message collection for a viewer."""

    def render(
        self,
        messages: Iterable[ChatMessage],
        viewer: ChatViewer,
        now: datetime | None = None
    ) -> ChatRenderResult:
        """
        Render messages into escaped markup.

        Both the sender name and the message text are escaped here, whatever sanitizing
        the service may already have done.

        Args:
            messages: Messages in chronological order
            viewer: The participant viewing the conversation
            now: Reference time for relative labels

        Returns:
            The rendered messages and the combined markup
        """
        if now is None:
            now = datetime.now(timezone.utc)

        rendered = tuple(
            ChatRenderedMessage(
                message_id=message.id,
                is_sent=message.is_from(viewer),
                sender_html=html.escape(message.sender_name, quote=True),
                time_label=format_relative_time(message.sent_at, now),
                text_html=escape_text(message.text)
            )
            for message in messages
        )

        if not rendered:
            return ChatRenderResult(
                messages=(),
                html=f'<div class="chat-empty"><p>{html.escape(EMPTY_STATE_TEXT)}</p></div>'
            )

        return ChatRenderResult(messages=rendered, html="".join(m.to_html() for m in rendered))
