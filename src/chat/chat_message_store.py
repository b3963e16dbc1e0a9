"""Message collection for the active conversation."""

from typing import Iterable, Tuple

from chat.chat_message import ChatMessage


class ChatMessageStore:
    """
    Holds the most recently fetched messages for one conversation.

    The collection is only ever replaced wholesale, so readers never see a partial update.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._messages: Tuple[ChatMessage, ...] = ()

    def replace(self, messages: Iterable[ChatMessage]) -> None:
        """Replace the whole collection."""
        self._messages = tuple(messages)

    def clear(self) -> None:
        """Remove all messages."""
        self._messages = ()

    def messages(self) -> Tuple[ChatMessage, ...]:
        """Get the current collection."""
        return self._messages

    def is_empty(self) -> bool:
        return not self._messages

    def __len__(self) -> int:
        return len(self._messages)
