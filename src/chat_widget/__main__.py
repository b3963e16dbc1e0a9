"""Standalone launcher for an offer chat window."""

import argparse
import asyncio
from datetime import datetime, timezone
import glob
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from types import TracebackType
from typing import List

from PySide6.QtWidgets import QPushButton, QVBoxLayout, QWidget
from qasync import QEventLoop, QApplication  # type: ignore[import-untyped]

from chat import ChatConfig, ChatViewer

from chat_widget.chat_host import attach_chat


DEFAULT_LOG_DIR = os.path.join("~", ".offerchat", "logs")
MAX_LOG_FILES = 50
MAX_LOG_BYTES = 1024 * 1024


def setup_logging(log_dir: str = DEFAULT_LOG_DIR, max_logs: int = MAX_LOG_FILES, level: int = logging.DEBUG) -> str:
    """
    Send log records to a new timestamped, size-rotated file in `log_dir`.

    Older files beyond `max_logs` are removed.

    Returns:
        Path of the log file for this run
    """
    log_dir = os.path.expanduser(log_dir)
    os.makedirs(log_dir, exist_ok=True)

    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
    log_file = os.path.join(log_dir, f"offerchat-{stamp}.log")

    # Rotated backups share the run's budget of files
    handler = RotatingFileHandler(log_file, maxBytes=MAX_LOG_BYTES, backupCount=max_logs - 1, encoding="utf-8")
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler]
    )

    removed = cleanup_old_logs(log_dir, max_logs, keep=log_file)
    if removed:
        logging.getLogger("ChatLauncher").debug("Removed %d old log files from %s", removed, log_dir)

    return log_file


def cleanup_old_logs(log_dir: str, max_logs: int, keep: str | None = None) -> int:
    """
    Keep only the `max_logs` most recently created log files in `log_dir`.

    The file named by `keep` is never removed and counts towards `max_logs`.

    Returns:
        Number of files removed
    """
    log_files = sorted(glob.glob(os.path.join(log_dir, "*.log*")), key=os.path.getctime, reverse=True)
    if keep is not None and keep in log_files:
        log_files.remove(keep)
        max_logs -= 1

    removed = 0
    for path in log_files[max_logs:]:
        try:
            os.remove(path)
            removed += 1

        except OSError:
            continue

    return removed


def install_global_exception_handler() -> None:
    """Log uncaught exceptions instead of letting them vanish with the console."""
    logger = logging.getLogger("ChatLauncher")

    def log_uncaught(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = log_uncaught


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="chat_widget", description="Open an offer chat window")
    parser.add_argument("--config", help="Path to a JSON chat settings file")
    parser.add_argument("--api-url", help="Base URL of the chat service API")
    parser.add_argument("--offer-id", required=True, type=int, help="Offer identifier of the conversation")
    parser.add_argument("--user-id", required=True, type=int, help="Identifier of the signed in user")
    parser.add_argument("--user-name", default="", help="Display name of the signed in user")
    parser.add_argument("--title", default="Chat", help="Chat window title")
    parser.add_argument("--log-dir", default=DEFAULT_LOG_DIR, help="Directory for log files")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> ChatConfig:
    """Build the chat configuration from a settings file and command line overrides."""
    config = ChatConfig.load(args.config) if args.config else ChatConfig()
    if args.api_url:
        config.api_url = args.api_url

    config.validate()
    return config


def main() -> int:
    """Main function to run the application."""
    args = parse_args(sys.argv[1:])
    setup_logging(args.log_dir)
    install_global_exception_handler()

    try:
        config = load_config(args)

    except (OSError, ValueError) as e:
        print(f"Unable to load chat settings: {e}", file=sys.stderr)
        return 1

    app = QApplication(sys.argv)
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    window = QWidget()
    window.setWindowTitle(args.title)
    window.resize(480, 640)
    window_layout = QVBoxLayout(window)

    open_button = QPushButton("Open chat", window)
    window_layout.addWidget(open_button)

    container = QWidget(window)
    container.setObjectName("chatModal")
    window_layout.addWidget(container, 1)

    conversation = attach_chat(window, "chatModal", config)
    viewer = ChatViewer(id=args.user_id, name=args.user_name)

    def open_chat() -> None:
        loop.create_task(conversation.open(args.offer_id, viewer, args.title))

    open_button.clicked.connect(open_chat)
    window.show()
    open_chat()

    try:
        with loop:
            loop.run_until_complete(app_closed(app))
            loop.run_until_complete(conversation.destroy())

    except KeyboardInterrupt:
        return 0

    return 0


async def app_closed(app: QApplication) -> None:
    """Wait until the last window has been closed."""
    closed = asyncio.Event()
    app.lastWindowClosed.connect(closed.set)
    await closed.wait()


if __name__ == "__main__":
    sys.exit(main())
