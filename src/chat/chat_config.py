"""Configuration for chat conversations."""

from dataclasses import dataclass, field, fields
import json
from typing import Dict


@dataclass
class ChatConfig:
    """
    Settings supplied when a chat conversation is constructed.

    Attributes:
        api_url: Base URL of the chat service API
        poll_interval_ms: Time between background refreshes
        max_message_length: Longest message (in characters) that may be sent
        request_timeout_ms: Timeout for a single request; None uses the poll interval
        notice_duration_ms: How long a transient notice stays visible
        max_notices: Most notices shown at once; older ones are dismissed first
        max_outstanding_polls: Most poll refreshes allowed in flight at once
        headers: Extra headers sent with every request
    """
    api_url: str = "http://localhost:3000/api"
    poll_interval_ms: int = 3000
    max_message_length: int = 1000
    request_timeout_ms: int | None = None
    notice_duration_ms: int = 3000
    max_notices: int = 5
    max_outstanding_polls: int = 2
    headers: Dict[str, str] = field(default_factory=dict)

    def request_timeout(self) -> float:
        """Get the per-request timeout in seconds."""
        timeout_ms = self.request_timeout_ms if self.request_timeout_ms is not None else self.poll_interval_ms
        return timeout_ms / 1000

    def validate(self) -> None:
        """
        Check that all settings are usable.

        Raises:
            ValueError: If any setting is out of range
        """
        if not self.api_url:
            raise ValueError("api_url must not be empty")

        for name in ("poll_interval_ms", "max_message_length", "notice_duration_ms", "max_notices",
                     "max_outstanding_polls"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        if self.request_timeout_ms is not None and self.request_timeout_ms <= 0:
            raise ValueError(f"request_timeout_ms must be positive, got {self.request_timeout_ms!r}")

    @classmethod
    def load(cls, path: str) -> "ChatConfig":
        """
        Load chat settings from a JSON file.

        Keys present in the file override the defaults; unknown keys are rejected.

        Args:
            path: Path to the settings file

        Returns:
            ChatConfig object with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
            ValueError: If the file contains unknown or invalid settings
        """
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Chat settings must be a JSON object: {path}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown chat settings: {', '.join(unknown)}")

        config = cls(**data)
        config.validate()
        return config
