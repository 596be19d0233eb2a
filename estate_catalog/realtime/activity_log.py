"""In-memory admin activity log."""

import threading
import uuid
from datetime import datetime
from typing import Any

from estate_catalog.models.activity import ActivityItem


class ActivityLog:
    """Bounded, thread-safe list of activity items, oldest first."""

    def __init__(self, max_items: int = 500) -> None:
        self.max_items = max_items
        self._items: list[ActivityItem] = []
        self._lock = threading.Lock()

    def record(
        self,
        actor_id: str,
        action_type: str,
        target_type: str,
        target_id: str,
        details: dict[str, Any] | None = None,
    ) -> ActivityItem:
        """Create, append and return a new activity item."""
        item = ActivityItem(
            id=str(uuid.uuid4()),
            actor_id=actor_id,
            action_type=action_type,
            target_type=target_type,
            target_id=target_id,
            created_at=datetime.now(),
            details=details or {},
        )
        self.append(item)
        return item

    def _push(self, item: ActivityItem) -> None:
        self._items.append(item)
        overflow = len(self._items) - self.max_items
        if overflow > 0:
            del self._items[:overflow]

    def append(self, item: ActivityItem) -> None:
        with self._lock:
            self._push(item)

    def merge(self, item: ActivityItem) -> bool:
        """Append an item recorded elsewhere unless its id is already here."""
        with self._lock:
            if any(existing.id == item.id for existing in self._items):
                return False
            self._push(item)
        return True

    def recent(self, limit: int = 20) -> list[ActivityItem]:
        """Newest items first."""
        with self._lock:
            return list(reversed(self._items[-limit:])) if limit > 0 else []

    def for_target(self, target_id: str) -> list[ActivityItem]:
        with self._lock:
            return [item for item in self._items if item.target_id == target_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
