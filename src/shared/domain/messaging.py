"""Messaging contracts for the outbound notification channel."""

from __future__ import annotations

from typing import Protocol


class INotificationChannel(Protocol):
    """Best-effort sink for plain-text outcome notifications.

    ``publish`` either returns (the message was handed to the broker) or
    raises.  No delivery confirmation is tracked.
    """

    def publish(self, text: str) -> None: ...
