"""HTTP client for the offer chat service."""

import asyncio
import json
import logging
import os
import ssl
import sys
from typing import Any, Dict, List

import aiohttp
from aiohttp import ClientError
import certifi

from chat.chat_config import ChatConfig
from chat.chat_error import ChatAPIError, ChatNetworkError, ChatResponseError
from chat.chat_message import ChatMessage


class ChatClient:
    """
    Talks to the two chat service endpoints.

    A single aiohttp session (and its cookie jar) is kept for the life of the client so
    that session credentials are sent with every request.
    """

    def __init__(self, config: ChatConfig, session: aiohttp.ClientSession | None = None) -> None:
        """
        Initialize the client.

        Args:
            config: Chat configuration
            session: Optional externally owned session; if not given one is created on first use
        """
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._logger = logging.getLogger("ChatClient")

        if getattr(sys, "frozen", False) and hasattr(sys, '_MEIPASS'):
            cert_path = os.path.join(sys._MEIPASS, "certifi", "cacert.pem")

        else:
            cert_path = certifi.where()

        self._ssl_context = ssl.create_default_context(cafile=cert_path)

    def _url(self, path: str) -> str:
        return f"{self._config.api_url.rstrip('/')}{path}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(ssl=self._ssl_context),
                cookie_jar=aiohttp.CookieJar(unsafe=True),
                headers=self._config.headers
            )
            self._owns_session = True

        return self._session

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self._config.request_timeout())

    async def _request(self, method: str, path: str, decode: bool = True, **kwargs: Any) -> Any:
        """
        Issue a request and decode any JSON body.

        With `decode` False only the status is checked and the body is ignored.

        Raises:
            ChatNetworkError: If the request could not complete
            ChatAPIError: If the service returned a non-2xx status
            ChatResponseError: If a body was present but was not valid JSON
        """
        url = self._url(path)
        try:
            async with self._get_session().request(method, url, timeout=self._timeout(), **kwargs) as response:
                raw = await response.text()
                if not 200 <= response.status < 300:
                    self._logger.debug("API error: %d: %s", response.status, raw)
                    raise ChatAPIError(response.status, response.reason or "request failed")

        except (ClientError, asyncio.TimeoutError) as e:
            raise ChatNetworkError(f"{method} {url} failed: {type(e).__name__}: {e}") from e

        if not decode:
            return None

        if not raw:
            return {}

        try:
            return json.loads(raw)

        except json.JSONDecodeError as e:
            raise ChatResponseError(f"Unable to parse response from {url}: {e}") from e

    async def fetch_messages(self, conversation_id: Any) -> List[ChatMessage]:
        """
        Fetch the full chronological message list for a conversation.

        Args:
            conversation_id: The offer identifier

        Returns:
            Messages in the order the service supplied them

        Raises:
            ChatError: If the request fails or the response is malformed
        """
        data = await self._request("GET", "/messages", params={"offer_id": str(conversation_id)})
        if not isinstance(data, dict):
            raise ChatResponseError(f"Expected a JSON object, got {type(data).__name__}")

        raw_messages = data.get("messages") or []
        if not isinstance(raw_messages, list):
            raise ChatResponseError("'messages' must be a list")

        try:
            return [ChatMessage.from_api_dict(item) for item in raw_messages]

        except ValueError as e:
            raise ChatResponseError(f"Invalid message in response: {e}") from e

    async def send_message(self, conversation_id: Any, text: str) -> None:
        """
        Post a message to a conversation.

        Any success status is an acknowledgement; the response body is not read as JSON.

        Args:
            conversation_id: The offer identifier
            text: Message text, already validated

        Raises:
            ChatError: If the request fails
        """
        payload: Dict[str, Any] = {"offer_id": conversation_id, "message_text": text}
        await self._request("POST", "/messages", decode=False, json=payload)

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()

        self._session = None
