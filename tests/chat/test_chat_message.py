"""
Tests for chat message parsing
"""
from datetime import datetime, timezone

import pytest

from chat.chat_message import ChatMessage, ChatViewer, parse_timestamp


class TestChatMessageFromApiDict:
    """Test building messages from service payloads."""

    def test_parses_all_fields(self):
        """Test a complete payload."""
        message = ChatMessage.from_api_dict({
            "id": 7,
            "sender_id": 3,
            "sender_name": "Robin",
            "message_text": "Can I pick it up tomorrow?",
            "sent_at": "2024-03-10T11:55:00Z"
        })

        assert message.id == 7
        assert message.sender_id == 3
        assert message.sender_name == "Robin"
        assert message.text == "Can I pick it up tomorrow?"
        assert message.sent_at == datetime(2024, 3, 10, 11, 55, tzinfo=timezone.utc)

    def test_missing_required_fields(self):
        """Test that missing fields are reported."""
        with pytest.raises(ValueError, match="Missing required fields: message_text, sent_at"):
            ChatMessage.from_api_dict({"sender_id": 1})

    def test_missing_sender_name_is_empty(self):
        """Test that the sender name is optional."""
        message = ChatMessage.from_api_dict({
            "sender_id": 1,
            "message_text": "hi",
            "sent_at": "2024-03-10T11:55:00+00:00"
        })

        assert message.sender_name == ""
        assert message.id is None

    def test_rejects_non_dict(self):
        """Test that list entries must be objects."""
        with pytest.raises(ValueError, match="Invalid message format"):
            ChatMessage.from_api_dict(["not", "a", "message"])

    def test_messages_are_immutable(self):
        """Test that fetched messages cannot be modified."""
        message = ChatMessage.from_api_dict({
            "sender_id": 1,
            "message_text": "hi",
            "sent_at": "2024-03-10T11:55:00Z"
        })

        with pytest.raises(AttributeError):
            message.text = "changed"

    def test_is_from_viewer(self):
        """Test sender classification."""
        message = ChatMessage.from_api_dict({
            "sender_id": 5,
            "message_text": "hi",
            "sent_at": "2024-03-10T11:55:00Z"
        })

        assert message.is_from(ChatViewer(id=5))
        assert not message.is_from(ChatViewer(id=6))


class TestParseTimestamp:
    """Test timestamp parsing."""

    def test_naive_timestamp_is_utc(self):
        """Test that timestamps without an offset are UTC."""
        assert parse_timestamp("2024-03-10 11:55:00") == datetime(2024, 3, 10, 11, 55, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        """Test that explicit offsets are honoured."""
        timestamp = parse_timestamp("2024-03-10T13:55:00+02:00")
        assert timestamp == datetime(2024, 3, 10, 11, 55, tzinfo=timezone.utc)

    def test_epoch_milliseconds(self):
        """Test numeric timestamps."""
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["yesterday", None, True, "", 1e300, float("nan")])
    def test_invalid_values(self, value):
        """Test that unparseable values raise ValueError."""
        with pytest.raises(ValueError, match="Invalid timestamp format"):
            parse_timestamp(value)
