"""Notification exceptions.

Raised inside a channel and handled by its delivery task: a failure is
logged and never reaches the order flow or the other channels.
"""

from __future__ import annotations


class NotificationChannelFailure(Exception):
    """A channel could not deliver its message."""

    def __init__(self, channel: str, message: str) -> None:
        super().__init__(f"{channel}: {message}")
        self.channel = channel
