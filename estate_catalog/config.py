"""Configuration management for estate-catalog."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from estate_catalog.exceptions import ConfigurationError


def _number(name: str, default: str, kind=int):
    raw = os.getenv(name, default)
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid numeric setting {name}={raw!r}") from e


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class KafkaConfig:
    """Kafka client configuration for the activity stream."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    group_id: str = "estate-catalog-admin"
    linger_ms: int = 5
    retries: int = 3

    def producer_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka producer config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "retries": self.retries,
        }

    def consumer_dict(self, member_id: str | None = None) -> dict[str, Any]:
        """Convert to confluent-kafka consumer config dict.

        A ``member_id`` gives the consumer a group of its own, so every
        subscriber receives every message instead of a share of the partitions.
        """
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "group.id": f"{self.group_id}-{member_id}" if member_id else self.group_id,
            "auto.offset.reset": "latest",
            "enable.auto.commit": True,
        }


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "catalog"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StorageConfig:
    """Local catalog file configuration."""

    catalog_path: Path = field(default_factory=lambda: Path("catalog.json"))
    providers_path: Path = field(default_factory=lambda: Path("providers.json"))
    pretty_json: bool = False


@dataclass
class RealtimeConfig:
    """Activity feed and dashboard refresh configuration."""

    activity_poll_seconds: float = 30.0
    analytics_poll_seconds: float = 60.0
    topic_prefix: str = "dev.catalog"
    feed_limit: int = 20

    @property
    def activity_topic(self) -> str:
        return f"{self.topic_prefix}.activity"


@dataclass
class CatalogConfig:
    """Main configuration for estate-catalog."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    realtime: RealtimeConfig = field(default_factory=RealtimeConfig)
    seed: int | None = None
    log_level: str = "INFO"
    currency: str = "KES"

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        """Build the configuration from environment variables.

        Raises
        ------
        ConfigurationError
            If a numeric variable does not parse or a poll interval is not positive.
        """
        realtime = RealtimeConfig(
            activity_poll_seconds=_number("ACTIVITY_POLL_SECONDS", "30", float),
            analytics_poll_seconds=_number("ANALYTICS_POLL_SECONDS", "60", float),
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.catalog"),
            feed_limit=_number("FEED_LIMIT", "20"),
        )
        if min(realtime.activity_poll_seconds, realtime.analytics_poll_seconds) <= 0:
            raise ConfigurationError("Poll intervals must be positive")

        seed = os.getenv("SEED")
        return cls(
            kafka=KafkaConfig(
                bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
                acks=os.getenv("KAFKA_ACKS", "all"),
                group_id=os.getenv("KAFKA_GROUP_ID", "estate-catalog-admin"),
            ),
            postgres=PostgresConfig(
                host=os.getenv("POSTGRES_HOST", "localhost"),
                port=_number("POSTGRES_PORT", "5432"),
                database=os.getenv("POSTGRES_DB", "catalog"),
                user=os.getenv("POSTGRES_USER", "postgres"),
                password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            ),
            storage=StorageConfig(
                catalog_path=Path(os.getenv("CATALOG_PATH", "catalog.json")),
                providers_path=Path(os.getenv("PROVIDERS_PATH", "providers.json")),
                pretty_json=_flag("PRETTY_JSON"),
            ),
            realtime=realtime,
            seed=_number("SEED", seed) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            currency=os.getenv("CURRENCY", "KES"),
        )
