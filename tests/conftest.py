"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Callable

import pytest

from estate_catalog.models import (
    Location,
    Property,
    PropertyCategory,
    PropertyFeatures,
    PropertyStatus,
    PropertyType,
    UserRole,
    Viewer,
)

BASE_TIME = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def admin() -> Viewer:
    return Viewer(id="admin-1", role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def provider_viewer() -> Viewer:
    return Viewer(id="prov-1", role=UserRole.PROVIDER, name="Provider")


@pytest.fixture
def visitor() -> Viewer:
    return Viewer(id="user-1", role=UserRole.USER)


@pytest.fixture
def make_property() -> Callable[..., Property]:
    """Factory for listings with sensible defaults.

    ``city``, ``address``, ``area``, ``bedrooms``, ``bathrooms`` and
    ``amenities`` are routed into the nested value objects.
    """
    counter = {"n": 0}

    def _make(**overrides: Any) -> Property:
        counter["n"] += 1
        n = counter["n"]
        location = Location(
            address=overrides.pop("address", f"{n} Test Road"),
            city=overrides.pop("city", "Nairobi"),
        )
        features = PropertyFeatures(
            area=overrides.pop("area", 100.0),
            bedrooms=overrides.pop("bedrooms", 3),
            bathrooms=overrides.pop("bathrooms", 2),
            amenities=overrides.pop("amenities", ()),
        )
        defaults: dict[str, Any] = {
            "id": f"prop-{n:03d}",
            "title": f"Listing {n}",
            "type": PropertyType.HOUSE,
            "category": PropertyCategory.SALE,
            "price": Decimal("1000000"),
            "location": location,
            "features": features,
            "description": "A test listing",
            "status": PropertyStatus.PUBLISHED,
            "created_at": BASE_TIME + timedelta(days=n),
        }
        defaults.update(overrides)
        return Property(**defaults)

    return _make
