"""
Tests for the chat launcher's logging and argument handling
"""
import glob
import json
import logging
import os

import pytest

from chat_widget.__main__ import DEFAULT_LOG_DIR, cleanup_old_logs, load_config, parse_args, setup_logging


@pytest.fixture
def restore_root_logger():
    """Fixture removing any handlers a test adds to the root logger."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()

    root.setLevel(level)


def make_logs(log_dir, count):
    for i in range(count):
        with open(os.path.join(log_dir, f"old-{i}.log"), "w", encoding="utf-8") as f:
            f.write("old\n")


class TestLogFiles:
    """Test log file creation and cleanup."""

    def test_cleanup_keeps_max_logs(self, tmp_path):
        """Test that only the allowed number of log files remain."""
        make_logs(str(tmp_path), 5)

        removed = cleanup_old_logs(str(tmp_path), max_logs=3)

        assert removed == 2
        assert len(glob.glob(os.path.join(str(tmp_path), "*.log"))) == 3

    def test_cleanup_under_limit_removes_nothing(self, tmp_path):
        """Test that a small log directory is left alone."""
        make_logs(str(tmp_path), 2)

        assert cleanup_old_logs(str(tmp_path), max_logs=3) == 0

    def test_cleanup_never_removes_kept_file(self, tmp_path):
        """Test that the current run's log file survives cleanup."""
        make_logs(str(tmp_path), 5)
        keep = os.path.join(str(tmp_path), "old-0.log")

        removed = cleanup_old_logs(str(tmp_path), max_logs=2, keep=keep)

        assert removed == 3
        assert os.path.exists(keep)
        assert len(glob.glob(os.path.join(str(tmp_path), "*.log"))) == 2

    def test_setup_logging_uses_given_directory(self, tmp_path, restore_root_logger):
        """Test that a log file is created in the requested directory and old ones are pruned."""
        log_dir = tmp_path / "logs"
        log_dir.mkdir()
        make_logs(str(log_dir), 4)

        log_file = setup_logging(str(log_dir), max_logs=3)

        assert os.path.dirname(log_file) == str(log_dir)
        assert os.path.exists(log_file)
        assert len(glob.glob(os.path.join(str(log_dir), "*.log*"))) == 3


class TestArguments:
    """Test command line handling."""

    def test_defaults(self):
        """Test the optional argument defaults."""
        args = parse_args(["--offer-id", "42", "--user-id", "7"])

        assert args.offer_id == 42
        assert args.user_id == 7
        assert args.title == "Chat"
        assert args.log_dir == DEFAULT_LOG_DIR

    def test_ids_must_be_numeric(self):
        """Test that non-numeric identifiers are rejected."""
        with pytest.raises(SystemExit):
            parse_args(["--offer-id", "abc", "--user-id", "7"])

    def test_api_url_overrides_settings_file(self, tmp_path):
        """Test that the command line wins over the settings file."""
        path = tmp_path / "chat.json"
        path.write_text(json.dumps({"api_url": "https://file.example/api", "poll_interval_ms": 5000}))
        args = parse_args([
            "--offer-id", "1", "--user-id", "2", "--config", str(path), "--api-url", "https://cli.example/api"
        ])

        config = load_config(args)

        assert config.api_url == "https://cli.example/api"
        assert config.poll_interval_ms == 5000
