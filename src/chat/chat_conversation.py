"""Polling chat conversation bound to an offer."""

from dataclasses import dataclass
from enum import Enum, auto
import itertools
import logging
from typing import Any, Callable, Dict, Set, Tuple

from chat.chat_client import ChatClient
from chat.chat_config import ChatConfig
from chat.chat_error import ChatError, ChatValidationError
from chat.chat_message import ChatMessage, ChatViewer
from chat.chat_message_store import ChatMessageStore
from chat.chat_notice_board import ChatNotice, ChatNoticeBoard
from chat.chat_poll_scheduler import ChatPollScheduler
from chat.chat_renderer import ChatRenderer
from chat.chat_view import ChatView


LOAD_FAILED_TEXT = "Failed to load messages. Please try again."
SEND_FAILED_TEXT = "Failed to send message. Please try again."


class ChatConversationState(Enum):
    """Lifecycle state of a chat conversation."""
    CLOSED = auto()
    OPEN = auto()


class ChatConversationEvent(Enum):
    """Events that can be emitted by the ChatConversation class."""
    OPENED = auto()             # When a conversation becomes active
    CLOSED = auto()             # When the active conversation is closed
    MESSAGES_UPDATED = auto()   # When a fetched collection has been rendered
    ERROR = auto()              # When a fetch, send or validation fails


@dataclass(frozen=True)
class ChatSession:
    """
    One activation of a conversation.

    Requests are tagged with the session they were issued for so that results arriving
    after a close or switch can be recognised and dropped.
    """
    conversation_id: Any
    viewer: ChatViewer
    title: str
    generation: int


class ChatConversation:
    """
    Handles chat conversation logic separate from the GUI.

    Owns the open/closed state, the message collection, the poll timer and the notice
    board for one widget.  Instances share nothing, so several can run side by side.
    """

    def __init__(
        self,
        view: ChatView | None,
        config: ChatConfig | None = None,
        client: ChatClient | None = None
    ) -> None:
        """
        Initialize the conversation.

        Args:
            view: Surface to render into; None makes the conversation inert
            config: Chat configuration; defaults are used if not given
            client: Service client; one is created from the config if not given
        """
        self._logger = logging.getLogger("ChatConversation")
        self._config = config or ChatConfig()
        self._config.validate()

        self._view = view
        if view is None:
            self._logger.error("No chat view available, conversation will stay inactive")

        self._client = client or ChatClient(self._config)
        self._owns_client = client is None
        self._store = ChatMessageStore()
        self._renderer = ChatRenderer()
        self._scheduler = ChatPollScheduler(
            self._config.poll_interval_ms,
            self.refresh,
            self._config.max_outstanding_polls
        )
        self._notices = ChatNoticeBoard(
            self._config.notice_duration_ms,
            on_shown=self._on_notice_shown,
            on_dismissed=self._on_notice_dismissed,
            max_notices=self._config.max_notices
        )

        self._state = ChatConversationState.CLOSED
        self._session: ChatSession | None = None
        self._generations = itertools.count(1)
        self._is_sending = False
        self._destroyed = False

        self._callbacks: Dict[ChatConversationEvent, Set[Callable]] = {
            event: set() for event in ChatConversationEvent
        }

    def register_callback(self, event: ChatConversationEvent, callback: Callable) -> None:
        """
        Register a callback for a specific event.

        Args:
            event: The event to register for
            callback: The callback function to call when the event occurs
        """
        self._callbacks[event].add(callback)

    def unregister_callback(self, event: ChatConversationEvent, callback: Callable) -> None:
        """
        Unregister a callback for a specific event.

        Args:
            event: The event to unregister from
            callback: The callback function to remove
        """
        self._callbacks[event].discard(callback)

    def _trigger_event(self, event: ChatConversationEvent, *args: Any) -> None:
        for callback in list(self._callbacks[event]):
            try:
                callback(*args)

            except Exception:
                self._logger.exception("Error in callback for %s", event)

    def config(self) -> ChatConfig:
        return self._config

    def state(self) -> ChatConversationState:
        return self._state

    def is_open(self) -> bool:
        return self._state == ChatConversationState.OPEN

    def is_inert(self) -> bool:
        """Check if the conversation has no view to work with."""
        return self._view is None

    def is_polling(self) -> bool:
        return self._scheduler.is_running()

    def is_sending(self) -> bool:
        return self._is_sending

    def conversation_id(self) -> Any:
        """Get the active conversation identifier, or None when closed."""
        return self._session.conversation_id if self._session else None

    def viewer(self) -> ChatViewer | None:
        return self._session.viewer if self._session else None

    def messages(self) -> Tuple[ChatMessage, ...]:
        """Get the current message collection."""
        return self._store.messages()

    async def open(self, conversation_id: Any, viewer: ChatViewer, title: str = "Chat") -> None:
        """
        Open a conversation, switching away from any that is already open.

        The messages are loaded once before the poll timer starts.

        Args:
            conversation_id: The offer identifier
            viewer: The participant viewing the conversation
            title: Title to show above the messages
        """
        if self._view is None or self._destroyed:
            self._logger.warning("Ignoring open of conversation %s on inactive chat", conversation_id)
            return

        if self._session is not None:
            self._logger.debug("Switching from conversation %s to %s", self._session.conversation_id, conversation_id)
            self._deactivate()

        session = ChatSession(
            conversation_id=conversation_id,
            viewer=viewer,
            title=title,
            generation=next(self._generations)
        )
        self._session = session
        self._state = ChatConversationState.OPEN

        self._view.set_title(title)
        self._view.set_chat_visible(True)
        self._view.set_draft_text("")
        self._trigger_event(ChatConversationEvent.OPENED, conversation_id)

        await self.refresh()

        # The conversation may have been closed or switched while the first load ran
        if self._session is not session:
            return

        self._scheduler.start()
        self._view.focus_input()

    def _deactivate(self) -> None:
        self._scheduler.stop()
        self._session = None
        self._state = ChatConversationState.CLOSED
        self._store.clear()
        if self._view is not None:
            self._view.set_draft_text("")

    def close(self) -> None:
        """Close the active conversation.  Safe to call in any state."""
        if self._view is None:
            return

        was_open = self._session is not None
        conversation_id = self.conversation_id()
        self._deactivate()
        self._view.set_chat_visible(False)

        if was_open:
            self._logger.debug("Closed conversation %s", conversation_id)
            self._trigger_event(ChatConversationEvent.CLOSED, conversation_id)

    async def destroy(self) -> None:
        """Close the conversation and release every resource it holds."""
        if self._destroyed:
            return

        self.close()
        self._scheduler.stop()
        self._notices.clear()
        self._destroyed = True

        for callbacks in self._callbacks.values():
            callbacks.clear()

        if self._owns_client:
            await self._client.close()

    async def refresh(self) -> bool:
        """
        Fetch the active conversation's messages and render them.

        Failures leave the current messages in place and raise a notice.  Results for a
        conversation that is no longer active are dropped.

        Returns:
            True if a new collection was rendered
        """
        session = self._session
        if session is None or self._view is None:
            return False

        try:
            messages = await self._client.fetch_messages(session.conversation_id)

        except ChatError as e:
            if self._session is not session:
                self._logger.debug("Ignoring failed fetch for inactive conversation %s", session.conversation_id)
                return False

            self._logger.warning("Error loading messages for conversation %s: %s", session.conversation_id, e)
            self._notices.show(LOAD_FAILED_TEXT)
            self._trigger_event(ChatConversationEvent.ERROR, e)
            return False

        if self._session is not session:
            self._logger.debug(
                "Discarding stale messages for conversation %s (generation %d)",
                session.conversation_id,
                session.generation
            )
            return False

        self._store.replace(messages)
        self._render(session)
        return True

    def _render(self, session: ChatSession) -> None:
        view = self._view
        if view is None:
            return

        result = self._renderer.render(self._store.messages(), session.viewer)
        view.render_messages(result)
        view.scroll_to_bottom()
        self._trigger_event(ChatConversationEvent.MESSAGES_UPDATED, result)

    async def send(self, text: str | None = None) -> bool:
        """
        Send a message to the active conversation.

        On success the draft is cleared and the conversation is refreshed, so the view shows
        what the service stored rather than a local copy.  On failure the draft is kept.

        Args:
            text: Text to send; the view's draft is used if not given

        Returns:
            True if the service accepted the message
        """
        session = self._session
        view = self._view
        if session is None or view is None:
            return False

        if self._is_sending:
            self._logger.debug("Ignoring send while another send is in progress")
            return False

        if text is None:
            text = view.draft_text()

        message_text = text.strip()
        if not message_text:
            return False

        max_length = self._config.max_message_length
        if len(message_text) > max_length:
            error = ChatValidationError(f"Message is too long. Maximum {max_length} characters.")
            self._logger.debug("Rejected message of %d characters (maximum %d)", len(message_text), max_length)
            self._notices.show(str(error))
            self._trigger_event(ChatConversationEvent.ERROR, error)
            return False

        self._is_sending = True
        view.set_input_enabled(False)

        try:
            try:
                await self._client.send_message(session.conversation_id, message_text)

            except ChatError as e:
                self._logger.warning("Error sending message to conversation %s: %s", session.conversation_id, e)
                if self._session is session:
                    self._notices.show(SEND_FAILED_TEXT)
                    self._trigger_event(ChatConversationEvent.ERROR, e)

                return False

            if self._session is session:
                view.set_draft_text("")
                await self.refresh()

            return True

        finally:
            self._is_sending = False
            view.set_input_enabled(True)
            view.focus_input()

    def show_notice(self, text: str) -> None:
        """Show a transient notice on this conversation's view."""
        if self._view is None:
            return

        self._notices.show(text)

    def _on_notice_shown(self, notice: ChatNotice) -> None:
        if self._view is not None:
            self._view.show_notice(notice)

    def _on_notice_dismissed(self, notice: ChatNotice) -> None:
        if self._view is not None:
            self._view.dismiss_notice(notice)
