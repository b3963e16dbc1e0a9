"""Interface between a chat conversation and the widget that displays it."""

from typing import Protocol

from chat.chat_notice_board import ChatNotice
from chat.chat_renderer import ChatRenderResult


class ChatView(Protocol):
    """
    Host-side surface a conversation renders into.

    The view owns the message list, the draft input, the send and close affordances, and
    the area where transient notices appear.  It holds no conversation state of its own.
    """

    def set_title(self, title: str) -> None:
        """Set the conversation title."""
        ...

    def set_chat_visible(self, visible: bool) -> None:
        """Show or hide the chat panel."""
        ...

    def render_messages(self, result: ChatRenderResult) -> None:
        """Replace the displayed message list with a rendered collection."""
        ...

    def scroll_to_bottom(self) -> None:
        """Scroll so the most recent message is visible."""
        ...

    def draft_text(self) -> str:
        """Get the text currently in the input."""
        ...

    def set_draft_text(self, text: str) -> None:
        """Replace the text in the input."""
        ...

    def set_input_enabled(self, enabled: bool) -> None:
        """Enable or disable the input and the send affordance together."""
        ...

    def focus_input(self) -> None:
        """Give the input keyboard focus."""
        ...

    def show_notice(self, notice: ChatNotice) -> None:
        """Display a transient notice."""
        ...

    def dismiss_notice(self, notice: ChatNotice) -> None:
        """Remove a transient notice."""
        ...
