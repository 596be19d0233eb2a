"""Shared plumbing for stores that report admin activity."""

import logging
from typing import Any, Iterable

from estate_catalog.exceptions import PublisherError, RepositoryError
from estate_catalog.models.activity import ActionResult, ActivityItem
from estate_catalog.models.enums import NotificationSeverity
from estate_catalog.realtime.activity_log import ActivityLog
from estate_catalog.realtime.notifications import NotificationInbox
from estate_catalog.realtime.publisher import ActivityPublisher

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "An unexpected error occurred"


class ActivityEmitter:
    """Record activity items and forward them to the activity stream.

    Publishing is best effort: the item is always kept in the local log, and
    a broker failure is logged instead of failing the command that caused it.
    """

    def __init__(
        self,
        activity_log: ActivityLog | None = None,
        publisher: ActivityPublisher | None = None,
        notifications: NotificationInbox | None = None,
    ) -> None:
        self.activity_log = activity_log if activity_log is not None else ActivityLog()
        self.publisher = publisher
        self.notifications = notifications

    def _emit(
        self,
        actor_id: str,
        action_type: str,
        target_type: str,
        target_id: str,
        details: dict[str, Any] | None = None,
    ) -> ActivityItem:
        item = self.activity_log.record(actor_id, action_type, target_type, target_id, details)
        if self.publisher is not None:
            try:
                self.publisher.publish(item)
            except PublisherError as e:
                logger.warning("Activity %s not published: %s", action_type, e)
        return item

    def _notify(
        self,
        recipient_id: str | None,
        type: str,
        title: str,
        message: str,
        severity: NotificationSeverity,
        entity_type: str,
        entity_id: str,
    ) -> None:
        if self.notifications is None or recipient_id is None:
            return
        self.notifications.notify(
            recipient_id, type, title, message, severity,
            related_entity_type=entity_type, related_entity_id=entity_id,
        )


class EntityRegistry(ActivityEmitter):
    """Id-keyed accounts, optionally persisted through a repository.

    Changes are saved first and only then become visible; a failed save
    leaves the registry as it was.
    """

    kind = "entity"

    def __init__(
        self,
        items: Iterable[Any] = (),
        repository: Any = None,
        activity_log: ActivityLog | None = None,
        publisher: ActivityPublisher | None = None,
        notifications: NotificationInbox | None = None,
    ) -> None:
        super().__init__(activity_log, publisher, notifications)
        self.repository = repository
        self._items: dict[str, Any] = {item.id: item for item in items}

    def __len__(self) -> int:
        return len(self._items)

    def refresh(self) -> ActionResult:
        """Reload from the repository. Without one the registry is kept as is."""
        if self.repository is None:
            return ActionResult.ok(f"Loaded {len(self._items)} {self.kind}s", data=len(self._items))
        try:
            loaded = list(self.repository.load())
        except RepositoryError as e:
            logger.exception("Error loading %ss", self.kind)
            return ActionResult.fail(GENERIC_FAILURE, error=str(e))

        self._items = {item.id: item for item in loaded}
        logger.info("Loaded %d %ss", len(loaded), self.kind)
        return ActionResult.ok(f"Loaded {len(loaded)} {self.kind}s", data=len(loaded))

    def _store(self, item: Any) -> ActionResult | None:
        """Persist ``item`` into the collection; a failure result when the save fails."""
        items = dict(self._items)
        items[item.id] = item
        if self.repository is not None:
            try:
                self.repository.save(list(items.values()))
            except RepositoryError as e:
                logger.exception("Error saving %s %s", self.kind, item.id)
                return ActionResult.fail(GENERIC_FAILURE, error=str(e))
        self._items = items
        return None
