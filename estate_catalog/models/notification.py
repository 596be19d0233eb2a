"""Per-recipient notifications."""

from dataclasses import dataclass, field
from datetime import datetime

from estate_catalog.models.enums import NotificationSeverity


@dataclass(frozen=True)
class Notification:
    """Message for one recipient, e.g. a provider whose listing was reviewed."""

    id: str
    recipient_id: str
    type: str  # target.action, same vocabulary as activity items
    title: str
    message: str
    severity: NotificationSeverity = NotificationSeverity.INFO
    created_at: datetime = field(default_factory=datetime.now)
    related_entity_type: str | None = None
    related_entity_id: str | None = None
    is_read: bool = False
    read_at: datetime | None = None
