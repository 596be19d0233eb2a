"""PostgreSQL repositories storing collections as JSONB documents."""

import logging
from typing import Any, Iterable

import psycopg
from psycopg.types.json import Jsonb

from estate_catalog.config import PostgresConfig
from estate_catalog.exceptions import RepositoryError
from estate_catalog.repository.serialization import (
    property_from_dict,
    property_to_dict,
    provider_from_dict,
    provider_to_dict,
    user_from_dict,
    user_to_dict,
)

logger = logging.getLogger(__name__)

CREATE_TABLE_TEMPLATE = """
CREATE TABLE IF NOT EXISTS {table} (
    id TEXT PRIMARY KEY,
    position INTEGER NOT NULL,
    document JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""
SELECT_TEMPLATE = "SELECT document FROM {table} ORDER BY position"
DELETE_TEMPLATE = "DELETE FROM {table}"
INSERT_TEMPLATE = "INSERT INTO {table} (id, position, document) VALUES (%s, %s, %s)"

TABLE = "catalog_properties"
CREATE_TABLE_SQL = CREATE_TABLE_TEMPLATE.format(table=TABLE)
SELECT_SQL = SELECT_TEMPLATE.format(table=TABLE)
DELETE_SQL = DELETE_TEMPLATE.format(table=TABLE)
INSERT_SQL = INSERT_TEMPLATE.format(table=TABLE)


class PostgresRepository:
    """Catalog stored in one PostgreSQL table.

    Rows keep catalog order through ``position`` so an unsorted search
    returns listings in the order they were saved. Subclasses point
    ``table`` and the codec at other collections.
    """

    table = TABLE
    kind = "catalog"
    encode = staticmethod(property_to_dict)
    decode = staticmethod(property_from_dict)

    def __init__(self, config: PostgresConfig | str) -> None:
        """Initialize PostgreSQL repository.

        Parameters
        ----------
        config : PostgresConfig | str
            Connection configuration or a libpq connection string.
        """
        if isinstance(config, PostgresConfig):
            config = config.connection_string
        self.conninfo = config

    def _connect(self) -> psycopg.Connection:
        return psycopg.connect(self.conninfo)

    def ensure_schema(self) -> None:
        """Create the table if it does not exist."""
        try:
            with self._connect() as conn:
                with conn.cursor() as cur:
                    cur.execute(CREATE_TABLE_TEMPLATE.format(table=self.table))
        except psycopg.Error as e:
            raise RepositoryError(f"Cannot create {self.table}: {e}") from e
        logger.info("Ensured table %s", self.table)

    def load(self) -> list[Any]:
        try:
            with self._connect() as conn:
                with conn.cursor() as cur:
                    cur.execute(SELECT_TEMPLATE.format(table=self.table))
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise RepositoryError(f"Cannot load {self.kind}: {e}") from e

        records = [self.decode(row[0]) for row in rows]
        logger.debug("Loaded %d records from %s", len(records), self.table)
        return records

    def save(self, records: Iterable[Any]) -> None:
        """Replace the table contents in a single transaction."""
        rows = [
            (record.id, position, Jsonb(self.encode(record)))
            for position, record in enumerate(records)
        ]
        try:
            with self._connect() as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        cur.execute(DELETE_TEMPLATE.format(table=self.table))
                        if rows:
                            cur.executemany(INSERT_TEMPLATE.format(table=self.table), rows)
        except psycopg.Error as e:
            raise RepositoryError(f"Cannot save {self.kind}: {e}") from e

        logger.debug("Saved %d records to %s", len(rows), self.table)


class PostgresProviderRepository(PostgresRepository):
    table = "catalog_providers"
    kind = "providers"
    encode = staticmethod(provider_to_dict)
    decode = staticmethod(provider_from_dict)


class PostgresUserRepository(PostgresRepository):
    table = "catalog_users"
    kind = "users"
    encode = staticmethod(user_to_dict)
    decode = staticmethod(user_from_dict)
