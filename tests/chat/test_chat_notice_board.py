"""
Tests for transient chat notices
"""
import asyncio

import pytest

from chat.chat_notice_board import ChatNoticeBoard


@pytest.fixture
def recorder():
    """Fixture collecting shown and dismissed notices."""
    return {"shown": [], "dismissed": []}


def make_board(recorder, duration_ms=30, max_notices=5):
    return ChatNoticeBoard(
        duration_ms,
        on_shown=recorder["shown"].append,
        on_dismissed=recorder["dismissed"].append,
        max_notices=max_notices
    )


class TestChatNoticeBoard:
    """Test showing and dismissing notices."""

    def test_notice_dismisses_itself(self, recorder):
        """Test that a notice disappears after its duration."""
        async def run():
            board = make_board(recorder)
            notice = board.show("Failed to load messages. Please try again.")
            shown_active = board.active()
            await asyncio.sleep(0.06)
            return notice, shown_active, board.active()

        notice, shown_active, after = asyncio.run(run())

        assert shown_active == [notice]
        assert recorder["shown"] == [notice]
        assert recorder["dismissed"] == [notice]
        assert after == []

    def test_notices_get_unique_ids(self, recorder):
        """Test that each notice is distinct."""
        async def run():
            board = make_board(recorder)
            first = board.show("one")
            second = board.show("one")
            board.clear()
            return first, second

        first, second = asyncio.run(run())

        assert first.id != second.id

    def test_oldest_dismissed_when_full(self, recorder):
        """Test that the board never holds more than max_notices."""
        async def run():
            board = make_board(recorder, duration_ms=1000, max_notices=2)
            notices = [board.show(f"notice {i}") for i in range(4)]
            active = board.active()
            board.clear()
            return notices, active

        notices, active = asyncio.run(run())

        assert active == notices[2:]
        assert recorder["dismissed"][:2] == notices[:2]

    def test_many_notices_leave_no_timers(self, recorder):
        """Test that a burst of notices is fully cleaned up."""
        async def run():
            board = make_board(recorder, duration_ms=10)
            for i in range(20):
                board.show(f"notice {i}")

            await asyncio.sleep(0.05)
            return board.active()

        assert asyncio.run(run()) == []
        assert len(recorder["dismissed"]) == 20

    def test_clear_cancels_pending_dismissals(self, recorder):
        """Test that clear dismisses each notice exactly once."""
        async def run():
            board = make_board(recorder, duration_ms=20)
            board.show("one")
            board.show("two")
            board.clear()
            await asyncio.sleep(0.04)

        asyncio.run(run())

        assert [n.text for n in recorder["dismissed"]] == ["one", "two"]

    def test_dismiss_unknown_is_ignored(self, recorder):
        """Test that dismissing twice is harmless."""
        async def run():
            board = make_board(recorder)
            notice = board.show("one")
            board.dismiss(notice.id)
            board.dismiss(notice.id)
            board.dismiss(999)

        asyncio.run(run())

        assert len(recorder["dismissed"]) == 1

    def test_view_errors_are_contained(self):
        """Test that a failing view callback does not break the board."""
        def broken(_notice):
            raise RuntimeError("view gone")

        async def run():
            board = ChatNoticeBoard(10, on_shown=broken, on_dismissed=broken)
            board.show("one")
            await asyncio.sleep(0.03)
            return board.active()

        assert asyncio.run(run()) == []
