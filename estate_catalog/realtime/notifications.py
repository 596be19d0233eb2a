"""Per-recipient notification inbox."""

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable

from estate_catalog.models.activity import ActionResult
from estate_catalog.models.enums import NotificationSeverity
from estate_catalog.models.notification import Notification
from estate_catalog.models.user import Viewer

logger = logging.getLogger(__name__)


class NotificationInbox:
    """Thread-safe store of notifications, newest first per recipient.

    Recipients only see and acknowledge their own notifications.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._items: list[Notification] = []
        self._lock = threading.Lock()
        self._now = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def notify(
        self,
        recipient_id: str,
        type: str,
        title: str,
        message: str,
        severity: NotificationSeverity = NotificationSeverity.INFO,
        related_entity_type: str | None = None,
        related_entity_id: str | None = None,
    ) -> Notification:
        notification = Notification(
            id=str(uuid.uuid4()),
            recipient_id=recipient_id,
            type=type,
            title=title,
            message=message,
            severity=NotificationSeverity(severity),
            created_at=self._now(),
            related_entity_type=related_entity_type,
            related_entity_id=related_entity_id,
        )
        with self._lock:
            self._items.append(notification)
        logger.debug("Notification %s for %s", type, recipient_id)
        return notification

    def for_recipient(self, recipient_id: str, unread_only: bool = False) -> list[Notification]:
        with self._lock:
            return [
                n
                for n in reversed(self._items)
                if n.recipient_id == recipient_id and not (unread_only and n.is_read)
            ]

    def unread_count(self, recipient_id: str) -> int:
        return len(self.for_recipient(recipient_id, unread_only=True))

    def mark_as_read(self, notification_id: str, viewer: Viewer | None) -> ActionResult:
        if viewer is None:
            return ActionResult.fail("Not authenticated")
        with self._lock:
            for index, notification in enumerate(self._items):
                if notification.id != notification_id:
                    continue
                if notification.recipient_id != viewer.id:
                    return ActionResult.fail("Unauthorized")
                if not notification.is_read:
                    notification = replace(notification, is_read=True, read_at=self._now())
                    self._items[index] = notification
                return ActionResult.ok("Notification marked as read", data=notification)
        return ActionResult.fail("Notification not found")

    def mark_all_as_read(self, viewer: Viewer | None) -> ActionResult:
        """Acknowledge every unread notification of the viewer."""
        if viewer is None:
            return ActionResult.fail("Not authenticated")
        now = self._now()
        marked = 0
        with self._lock:
            for index, notification in enumerate(self._items):
                if notification.recipient_id == viewer.id and not notification.is_read:
                    self._items[index] = replace(notification, is_read=True, read_at=now)
                    marked += 1
        return ActionResult.ok(f"{marked} notifications marked as read", data=marked)
