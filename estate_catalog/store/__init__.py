"""Stateful catalog, provider and user stores."""

from estate_catalog.store.catalog import CatalogStore, validate_submission
from estate_catalog.store.providers import TRANSITIONS, ProviderRegistry, transition
from estate_catalog.store.users import UserRegistry

__all__ = [
    "CatalogStore",
    "ProviderRegistry",
    "TRANSITIONS",
    "UserRegistry",
    "transition",
    "validate_submission",
]
