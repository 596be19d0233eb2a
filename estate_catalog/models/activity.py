"""Activity feed items and command results."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ActivityItem:
    """Entry in the admin activity feed."""

    id: str
    actor_id: str
    action_type: str  # target.action (e.g., property.approved)
    target_type: str
    target_id: str
    created_at: datetime
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a store command.

    Authorization, validation and remote failures come back as
    ``success=False`` results instead of exceptions.
    """

    success: bool
    message: str
    error: str | None = None
    data: Any = None

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, error: str | None = None) -> "ActionResult":
        return cls(success=False, message=message, error=error)

    def __bool__(self) -> bool:
        return self.success
