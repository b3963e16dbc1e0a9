"""
Pytest configuration for chat widget tests
"""
import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from PySide6.QtWidgets import QApplication

from chat.chat_client import ChatClient


@pytest.fixture(scope="session")
def qapp():
    """Fixture providing a Qt application that needs no display."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def mock_client():
    """Fixture providing a chat client with no network access."""
    client = MagicMock(spec=ChatClient)
    client.fetch_messages = AsyncMock(return_value=[])
    client.send_message = AsyncMock(return_value=None)
    client.close = AsyncMock()
    return client
