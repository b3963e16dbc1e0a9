"""
Shared fixtures for chat tests.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from chat.chat_client import ChatClient
from chat.chat_config import ChatConfig
from chat.chat_message import ChatViewer

from chat_fakes import FakeChatView


@pytest.fixture
def view():
    """Fixture providing a recording chat view."""
    return FakeChatView()


@pytest.fixture
def viewer():
    """Fixture providing the local participant."""
    return ChatViewer(id=1, name="Alex")


@pytest.fixture
def config():
    """Fixture providing a configuration with short timings for tests."""
    return ChatConfig(
        api_url="http://chat.test/api",
        poll_interval_ms=20,
        max_message_length=20,
        notice_duration_ms=50
    )


@pytest.fixture
def mock_client():
    """Fixture providing a mocked chat client with no messages."""
    client = MagicMock(spec=ChatClient)
    client.fetch_messages = AsyncMock(return_value=[])
    client.send_message = AsyncMock(return_value=None)
    client.close = AsyncMock()
    return client
