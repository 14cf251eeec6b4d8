"""Outbound notification channel backed by the Celery broker.

Each outcome of an inbound product event is published as one plain-text
message: a task named ``task_name`` with the text as its only argument,
sent to ``queue``.  The consumer of that queue lives outside this service.
"""

from __future__ import annotations

import structlog
from celery import Celery

from modules.products.exceptions import NotificationError

logger = structlog.get_logger(__name__)


class CeleryNotificationChannel:
    """``INotificationChannel`` implementation using ``Celery.send_task``."""

    def __init__(self, app: Celery, task_name: str, queue: str) -> None:
        self._app = app
        self._task_name = task_name
        self._queue = queue

    def publish(self, text: str) -> None:
        """Hand ``text`` to the broker.

        Raises:
            NotificationError: if the broker rejects or cannot be reached.
        """
        try:
            self._app.send_task(self._task_name, args=[text], queue=self._queue)
        except Exception as exc:
            logger.error("notification.publish_failed", queue=self._queue, error=str(exc))
            raise NotificationError("Error publishing product notification", cause=exc) from exc
        logger.info("notification.published", queue=self._queue, text=text)
