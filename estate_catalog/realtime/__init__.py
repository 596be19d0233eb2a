"""Activity log, stream publisher and admin subscriptions.

``AdminDashboard`` lives in ``estate_catalog.realtime.dashboard``.
"""

from estate_catalog.realtime.activity_log import ActivityLog
from estate_catalog.realtime.notifications import NotificationInbox
from estate_catalog.realtime.publisher import ActivityPublisher, PublisherStats, decode_activity
from estate_catalog.realtime.subscription import ActivitySubscription, Poller

__all__ = [
    "ActivityLog",
    "ActivityPublisher",
    "ActivitySubscription",
    "NotificationInbox",
    "Poller",
    "PublisherStats",
    "decode_activity",
]
