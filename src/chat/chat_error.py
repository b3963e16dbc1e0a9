"""Exceptions for chat operations."""


class ChatError(Exception):
    """Base class for all chat errors."""


class ChatNetworkError(ChatError):
    """Network-related errors during chat operations.

    Raised when a request cannot complete, including:
    - Connection failures (aiohttp.ClientConnectionError)
    - Timeouts (asyncio.TimeoutError)
    - DNS failures (aiohttp.ClientConnectorError)
    """


class ChatAPIError(ChatError):
    """The chat service answered with a non-success status."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        super().__init__(f"API error {status}: {message}")


class ChatResponseError(ChatError):
    """Errors decoding a chat service response.

    Raised when the body is not JSON or does not have the expected shape.
    """


class ChatValidationError(ChatError):
    """Outgoing message rejected before reaching the network."""
