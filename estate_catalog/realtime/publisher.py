"""Kafka publisher for the admin activity stream."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from estate_catalog.config import KafkaConfig
from estate_catalog.exceptions import PublisherError
from estate_catalog.models.activity import ActivityItem
from estate_catalog.repository.serialization import to_dict_fast

logger = logging.getLogger(__name__)


@dataclass
class PublisherStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class ActivityPublisher:
    """Publish activity items as JSON messages keyed by target id."""

    def __init__(self, config: KafkaConfig | str, topic: str) -> None:
        """Initialize activity publisher.

        Parameters
        ----------
        config : KafkaConfig | str
            Kafka configuration or bootstrap servers string.
        topic : str
            Activity topic name.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.topic = topic
        self.producer = Producer(config.producer_dict())
        self.stats = PublisherStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Activity delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def publish(self, item: ActivityItem) -> None:
        """Send a single activity item.

        Raises
        ------
        PublisherError
            If the producer rejects the message (queue full, broker error).
        """
        value = json.dumps(to_dict_fast(item), ensure_ascii=False, default=str).encode("utf-8")
        try:
            self.producer.produce(
                topic=self.topic,
                key=item.target_id.encode("utf-8"),
                value=value,
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as e:
            raise PublisherError(f"Cannot publish {item.action_type}: {e}") from e
        self.stats.sent += 1
        self.producer.poll(0)

    def flush(self, timeout: float = 10.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Activity publisher closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )


def decode_activity(payload: bytes) -> dict[str, Any]:
    """Decode a message value produced by ``ActivityPublisher``."""
    return json.loads(payload.decode("utf-8"))
