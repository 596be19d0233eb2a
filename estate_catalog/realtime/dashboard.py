"""Admin dashboard session: live activity feed plus periodic analytics."""

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from confluent_kafka import Consumer

from estate_catalog.config import KafkaConfig, RealtimeConfig
from estate_catalog.models.activity import ActivityItem
from estate_catalog.models.enums import PropertyStatus
from estate_catalog.models.user import Viewer
from estate_catalog.realtime.activity_log import ActivityLog
from estate_catalog.realtime.subscription import ActivitySubscription, Poller
from estate_catalog.store.catalog import CatalogStore
from estate_catalog.store.providers import ProviderRegistry
from estate_catalog.store.users import UserRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardStats:
    total_properties: int = 0
    published_properties: int = 0
    pending_properties: int = 0
    rejected_properties: int = 0
    total_providers: int = 0
    pending_providers: int = 0
    total_views: int = 0
    total_inquiries: int = 0
    total_users: int = 0
    suspended_users: int = 0


def compute_stats(
    catalog: CatalogStore, providers: ProviderRegistry, users: UserRegistry | None = None
) -> DashboardStats:
    records = catalog.records
    user_stats = users.stats() if users is not None else None
    return DashboardStats(
        total_properties=len(records),
        published_properties=sum(1 for r in records if r.status == PropertyStatus.PUBLISHED),
        pending_properties=sum(1 for r in records if r.status == PropertyStatus.PENDING),
        rejected_properties=sum(1 for r in records if r.status == PropertyStatus.REJECTED),
        total_providers=len(providers),
        pending_providers=len(providers.pending_providers()),
        total_views=sum(r.views for r in records),
        total_inquiries=sum(r.inquiries for r in records),
        total_users=user_stats.total_users if user_stats else 0,
        suspended_users=user_stats.suspended_users if user_stats else 0,
    )


class AdminDashboard:
    """Keeps an administrator's feed and statistics current while open.

    Only administrators can open a dashboard. ``revalidate`` closes it when
    the session's role changes.
    """

    def __init__(
        self,
        viewer: Viewer | None,
        catalog: CatalogStore,
        providers: ProviderRegistry,
        activity_log: ActivityLog,
        config: RealtimeConfig | None = None,
        kafka_config: KafkaConfig | None = None,
        consumer_factory: Callable[[], Consumer] | None = None,
        users: UserRegistry | None = None,
    ) -> None:
        self.viewer = viewer
        self.catalog = catalog
        self.providers = providers
        self.users = users
        self.activity_log = activity_log
        self.config = config or RealtimeConfig()
        self.kafka_config = kafka_config
        self.consumer_factory = consumer_factory

        self._lock = threading.Lock()
        self._feed: list[ActivityItem] = []
        self._stats = DashboardStats()
        self._subscription: ActivitySubscription | None = None
        self._analytics: Poller | None = None

    @property
    def feed(self) -> list[ActivityItem]:
        with self._lock:
            return list(self._feed)

    @property
    def is_open(self) -> bool:
        return self._subscription is not None

    @property
    def connected(self) -> bool:
        return self._subscription is not None and self._subscription.connected

    def stats(self) -> DashboardStats:
        with self._lock:
            return self._stats

    def _fetch_recent(self) -> list[ActivityItem]:
        return self.activity_log.recent(self.config.feed_limit)

    def _on_activity(self, items: list[ActivityItem]) -> None:
        with self._lock:
            self._feed = list(items)

    def refresh_stats(self) -> DashboardStats:
        stats = compute_stats(self.catalog, self.providers, self.users)
        with self._lock:
            self._stats = stats
        logger.debug("Dashboard stats refreshed: %s", stats)
        return stats

    def open(self) -> bool:
        """Start the activity subscription and analytics polling."""
        if self.viewer is None or not self.viewer.is_admin:
            logger.info("Dashboard refused: viewer is not an administrator")
            return False
        if self.is_open:
            return True

        self._on_activity(self._fetch_recent())
        self.refresh_stats()

        self._subscription = ActivitySubscription(
            viewer=self.viewer,
            topic=self.config.activity_topic,
            fetch_recent=self._fetch_recent,
            on_activity=self._on_activity,
            kafka_config=self.kafka_config,
            consumer_factory=self.consumer_factory,
            poll_interval=self.config.activity_poll_seconds,
            activity_log=self.activity_log,
        )
        self._subscription.start()
        self._analytics = Poller(
            self.config.analytics_poll_seconds, self.refresh_stats, name="analytics-poller"
        )
        self._analytics.start()
        return True

    def revalidate(self, viewer: Viewer | None) -> bool:
        """Re-check the session. Closes the dashboard for non-admins."""
        self.viewer = viewer
        if viewer is None or not viewer.is_admin:
            self.close()
            return False
        if self._subscription is not None:
            self._subscription.revalidate(viewer)
        return self.is_open

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.stop()
            self._subscription = None
        if self._analytics is not None:
            self._analytics.stop()
            self._analytics = None
