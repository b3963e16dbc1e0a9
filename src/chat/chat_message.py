"""Chat message and viewer types."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class ChatViewer:
    """The locally authenticated participant viewing a conversation."""
    id: Any
    name: str = ""


@dataclass(frozen=True)
class ChatMessage:
    """
    A single message in an offer conversation.

    Messages are immutable once fetched.  The text is untrusted user input and must
    never be treated as markup.
    """
    id: Any
    sender_id: Any
    sender_name: str
    text: str
    sent_at: datetime

    @classmethod
    def from_api_dict(cls, data: Dict) -> 'ChatMessage':
        """
        Create a ChatMessage from the chat service's JSON representation.

        Args:
            data: Dictionary containing message data

        Returns:
            New ChatMessage instance

        Raises:
            ValueError: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid message format: {data!r}")

        required_fields = ["sender_id", "message_text", "sent_at"]
        missing_fields = [f for f in required_fields if f not in data]
        if missing_fields:
            raise ValueError(f"Missing required fields: {', '.join(missing_fields)}")

        return cls(
            id=data.get("id"),
            sender_id=data["sender_id"],
            sender_name=str(data.get("sender_name") or ""),
            text=str(data["message_text"] or ""),
            sent_at=parse_timestamp(data["sent_at"])
        )

    def is_from(self, viewer: ChatViewer) -> bool:
        """Check if this message was sent by the given viewer."""
        return self.sender_id == viewer.id


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a service timestamp into a timezone-aware datetime.

    ISO 8601 strings (with or without a trailing 'Z') and epoch milliseconds are
    accepted.  Naive values are taken to be UTC.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp format: {value!r}")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)

        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"Invalid timestamp format: {value!r}") from e

    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp format: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        timestamp = datetime.fromisoformat(text)

    except ValueError as e:
        raise ValueError(f"Invalid timestamp format: {value}") from e

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)

    return timestamp
