from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from . import tasks

logger = logging.getLogger(__name__)


class CeleryNotificationScheduler:
    """
    Queues dispatch tasks once the surrounding transaction commits.
    Enqueue failures (broker down, etc.) are logged and dropped; the webhook
    caller never sees them.
    """

    def tracking_activated(self, order_id) -> None:
        self._enqueue(tasks.send_tracking_activated, str(order_id))

    def status_update(self, order_id, new_status: str, note: Optional[str] = None) -> None:
        self._enqueue(tasks.send_status_update, str(order_id), new_status, note)

    def _enqueue(self, task, *args) -> None:
        def _send():
            try:
                task.delay(*args)
            except Exception:
                logger.exception("could not enqueue %s%r", task.name, args)

        transaction.on_commit(_send)
