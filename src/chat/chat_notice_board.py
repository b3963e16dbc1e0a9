"""Transient, auto-dismissing user notices."""

import asyncio
from collections import OrderedDict
from dataclasses import dataclass
import itertools
import logging
from typing import Callable, List


@dataclass(frozen=True)
class ChatNotice:
    """A short human-readable notice shown to the user."""
    id: int
    text: str


class ChatNoticeBoard:
    """
    Tracks the notices currently on screen.

    Each notice removes itself after a fixed duration.  The board never holds more than
    `max_notices`; the oldest is dismissed to make room for a new one.
    """

    def __init__(
        self,
        duration_ms: int,
        on_shown: Callable[[ChatNotice], None],
        on_dismissed: Callable[[ChatNotice], None],
        max_notices: int = 5
    ) -> None:
        self._duration = duration_ms / 1000
        self._on_shown = on_shown
        self._on_dismissed = on_dismissed
        self._max_notices = max_notices
        self._ids = itertools.count(1)
        self._active: OrderedDict[int, tuple[ChatNotice, asyncio.TimerHandle]] = OrderedDict()
        self._logger = logging.getLogger("ChatNoticeBoard")

    def active(self) -> List[ChatNotice]:
        """Get the notices currently shown, oldest first."""
        return [notice for notice, _handle in self._active.values()]

    def show(self, text: str) -> ChatNotice:
        """
        Show a notice and schedule its dismissal.

        Must be called with an event loop running.

        Args:
            text: Notice text

        Returns:
            The notice that was shown
        """
        while len(self._active) >= self._max_notices:
            oldest_id = next(iter(self._active))
            self.dismiss(oldest_id)

        notice = ChatNotice(id=next(self._ids), text=text)
        handle = asyncio.get_running_loop().call_later(self._duration, self.dismiss, notice.id)
        self._active[notice.id] = (notice, handle)

        try:
            self._on_shown(notice)

        except Exception:
            self._logger.exception("Error showing notice %d", notice.id)

        return notice

    def dismiss(self, notice_id: int) -> None:
        """Remove a notice.  Unknown or already dismissed ids are ignored."""
        entry = self._active.pop(notice_id, None)
        if entry is None:
            return

        notice, handle = entry
        handle.cancel()

        try:
            self._on_dismissed(notice)

        except Exception:
            self._logger.exception("Error dismissing notice %d", notice.id)

    def clear(self) -> None:
        """Dismiss every notice and cancel every pending timer."""
        for notice_id in list(self._active):
            self.dismiss(notice_id)
