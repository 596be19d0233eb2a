"""JSON file repositories for locally persisted collections."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable

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


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass


class JsonFileRepository:
    """Store the catalog as a JSON array in a single file.

    Subclasses swap ``encode``/``decode`` to persist other collections.
    """

    kind = "catalog"
    encode = staticmethod(property_to_dict)
    decode = staticmethod(property_from_dict)

    def __init__(self, path: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file repository.

        Parameters
        ----------
        path : str | Path
            Target file. Parent directories are created on first save.
        pretty : bool
            Pretty-print JSON output.
        """
        self.path = Path(path)
        self.pretty = pretty

    def load(self) -> list[Any]:
        """Read the collection. A missing file is an empty collection."""
        if not self.path.exists():
            logger.info("%s file %s not found, starting empty", self.kind.capitalize(), self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Cannot read {self.kind} file {self.path}: {e}") from e

        if not isinstance(data, list):
            raise RepositoryError(f"{self.kind.capitalize()} file {self.path} does not hold a JSON array")

        records = [self.decode(item) for item in data]
        logger.debug("Loaded %d records from %s", len(records), self.path)
        return records

    def save(self, records: Iterable[Any]) -> None:
        """Write the collection atomically (temp file + rename).

        The temp file is removed when the write or the rename fails.
        """
        data = [self.encode(record) for record in records]

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        except OSError as e:
            raise RepositoryError(f"Cannot write {self.kind} file {self.path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            _discard(tmp_name)
            raise RepositoryError(f"Cannot write {self.kind} file {self.path}: {e}") from e
        except BaseException:
            _discard(tmp_name)
            raise

        logger.debug("Saved %d records to %s", len(data), self.path)


class JsonFileProviderRepository(JsonFileRepository):
    """Provider accounts as a JSON array."""

    kind = "provider"
    encode = staticmethod(provider_to_dict)
    decode = staticmethod(provider_from_dict)


class JsonFileUserRepository(JsonFileRepository):
    """User accounts as a JSON array."""

    kind = "user"
    encode = staticmethod(user_to_dict)
    decode = staticmethod(user_from_dict)
