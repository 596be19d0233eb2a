"""Push subscription to the activity stream with a polling fallback."""

import logging
import threading
import uuid
from typing import Callable

from confluent_kafka import Consumer, KafkaError, KafkaException

from estate_catalog.config import KafkaConfig
from estate_catalog.models.activity import ActivityItem
from estate_catalog.models.user import Viewer
from estate_catalog.realtime.activity_log import ActivityLog
from estate_catalog.realtime.publisher import decode_activity
from estate_catalog.repository.serialization import activity_from_dict

logger = logging.getLogger(__name__)

FetchRecent = Callable[[], list[ActivityItem]]
OnActivity = Callable[[list[ActivityItem]], None]


class Poller:
    """Run ``callback`` every ``interval`` seconds on a daemon thread.

    A failing callback is logged and polling continues. ``stop`` wakes the
    thread immediately.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        name: str = "poller",
        run_immediately: bool = False,
    ) -> None:
        self.interval = interval
        self.callback = callback
        self.name = name
        self.run_immediately = run_immediately
        self.tick_count = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info("Started %s (every %.1fs)", self.name, self.interval)

    def _tick(self) -> None:
        self.tick_count += 1
        try:
            self.callback()
        except Exception:
            logger.exception("%s callback failed", self.name)

    def _run(self) -> None:
        if self.run_immediately:
            self._tick()
        while not self._stop.wait(self.interval):
            self._tick()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None


class ActivitySubscription:
    """Deliver activity feed updates to an administrator.

    A Kafka consumer thread listens on the activity topic. Each message is
    merged into ``activity_log`` (when given) so activity recorded by other
    processes reaches the feed, then triggers ``on_activity(fetch_recent())``.
    Every subscription consumes in a group of its own. When the consumer
    cannot be created or reports an error, the subscription marks itself
    disconnected and switches to fixed-interval polling of ``fetch_recent``.
    Failures are logged, never raised to the caller.
    """

    def __init__(
        self,
        viewer: Viewer | None,
        topic: str,
        fetch_recent: FetchRecent,
        on_activity: OnActivity,
        kafka_config: KafkaConfig | None = None,
        consumer_factory: Callable[[], Consumer] | None = None,
        poll_interval: float = 30.0,
        on_connection_change: Callable[[bool], None] | None = None,
        consume_timeout: float = 1.0,
        activity_log: ActivityLog | None = None,
    ) -> None:
        self.viewer = viewer
        self.topic = topic
        self.fetch_recent = fetch_recent
        self.on_activity = on_activity
        self.poll_interval = poll_interval
        self.on_connection_change = on_connection_change
        self.consume_timeout = consume_timeout
        self.activity_log = activity_log

        kafka_config = kafka_config or KafkaConfig()
        self.consumer_config = kafka_config.consumer_dict(member_id=uuid.uuid4().hex[:12])
        self._consumer_factory = consumer_factory or (lambda: Consumer(self.consumer_config))
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._poller: Poller | None = None
        self.connected = False

    @property
    def is_polling(self) -> bool:
        return self._poller is not None and self._poller.is_running

    @property
    def is_active(self) -> bool:
        running = self._thread is not None and self._thread.is_alive()
        return running or self.is_polling

    def _set_connected(self, connected: bool) -> None:
        self.connected = connected
        if self.on_connection_change is not None:
            self.on_connection_change(connected)

    def _deliver(self) -> None:
        self.on_activity(self.fetch_recent())

    def start(self) -> bool:
        """Start delivering updates. Returns False for non-admin viewers."""
        if self.viewer is None or not self.viewer.is_admin:
            logger.info("Activity subscription refused: viewer is not an administrator")
            return False
        if self.is_active:
            return True

        self._stop.clear()
        consumer = None
        try:
            consumer = self._consumer_factory()
            consumer.subscribe([self.topic])
        except KafkaException as e:
            if consumer is not None:
                self._close_quietly(consumer)
            logger.warning("Activity subscription failed (%s), falling back to polling", e)
            self._fall_back_to_polling()
            return True

        self._set_connected(True)
        self._thread = threading.Thread(
            target=self._consume, args=(consumer,), name="activity-consumer", daemon=True
        )
        self._thread.start()
        logger.info("Subscribed to %s for admin %s", self.topic, self.viewer.id)
        return True

    def _consume(self, consumer: Consumer) -> None:
        failed = False
        try:
            while not self._stop.is_set():
                msg = consumer.poll(self.consume_timeout)
                if msg is None:
                    continue
                error = msg.error()
                if error is not None:
                    if error.code() == KafkaError._PARTITION_EOF:
                        continue
                    logger.warning("Activity channel error: %s", error)
                    failed = True
                    break
                self._merge(msg.value())
                try:
                    self._deliver()
                except Exception:
                    logger.exception("Activity update handler failed")
        except KafkaException as e:
            logger.warning("Activity consumer failed: %s", e)
            failed = True
        finally:
            consumer.close()

        if failed and not self._stop.is_set():
            self._fall_back_to_polling()

    def _merge(self, value: bytes | None) -> None:
        try:
            item = activity_from_dict(decode_activity(value))
        except (ValueError, AttributeError):
            logger.debug("Undecodable activity message on %s", self.topic)
            return
        logger.debug("Activity change: %s", item.action_type)
        if self.activity_log is not None and self.activity_log.merge(item):
            logger.debug("Merged remote activity %s", item.id)

    @staticmethod
    def _close_quietly(consumer: Consumer) -> None:
        try:
            consumer.close()
        except KafkaException as e:
            logger.debug("Consumer close failed: %s", e)

    def _fall_back_to_polling(self) -> None:
        self._set_connected(False)
        with self._lock:
            if self._stop.is_set() or self.is_polling:
                return
            logger.info("Polling activity feed every %.1fs", self.poll_interval)
            self._poller = Poller(self.poll_interval, self._deliver, name="activity-poller")
            self._poller.start()

    def revalidate(self, viewer: Viewer | None) -> bool:
        """Stop when the viewer no longer qualifies. Returns whether still active."""
        self.viewer = viewer
        if viewer is None or not viewer.is_admin:
            self.stop()
            return False
        return self.is_active

    def stop(self) -> None:
        """Tear down the consumer thread and any fallback poller."""
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(self.consume_timeout + 5.0)
        self._thread = None
        with self._lock:
            poller, self._poller = self._poller, None
        if poller is not None:
            poller.stop()
        if self.connected:
            self._set_connected(False)
        logger.info("Activity subscription stopped")
