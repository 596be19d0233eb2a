"""Tests for sample data generators."""

from datetime import datetime

from estate_catalog.generators import CITIES, PropertyGenerator, ProviderGenerator
from estate_catalog.models import (
    AreaUnit,
    PropertyCategory,
    PropertyStatus,
    PropertyType,
    ProviderStatus,
)

NOW = datetime(2024, 7, 1)


class TestPropertyGenerator:
    """Tests for PropertyGenerator."""

    def test_generate_batch(self, seed: int) -> None:
        records = list(PropertyGenerator(seed=seed, now=NOW).generate_batch(50))

        assert len(records) == 50
        assert len({r.id for r in records}) == 50
        for r in records:
            assert r.location.city in CITIES
            assert r.price > 0
            assert r.created_at <= NOW
            if r.status == PropertyStatus.PUBLISHED:
                assert r.published_at == r.created_at
            else:
                assert r.views == 0

    def test_reproducible(self, seed: int) -> None:
        first = list(PropertyGenerator(seed=seed, now=NOW).generate_batch(10))
        second = list(PropertyGenerator(seed=seed, now=NOW).generate_batch(10))

        assert first == second

    def test_type_specific_features(self, seed: int) -> None:
        for r in PropertyGenerator(seed=seed, now=NOW).generate_batch(100):
            if r.type == PropertyType.LAND:
                assert r.features.area_unit == AreaUnit.ACRES
                assert r.features.bedrooms is None
                assert r.category in (
                    PropertyCategory.SALE, PropertyCategory.LEASE, PropertyCategory.DEVELOPMENT_RIGHTS
                )
            if r.type == PropertyType.AIRBNB:
                assert r.category == PropertyCategory.SHORT_TERM_RENTAL

    def test_provider_assignment(self, seed: int) -> None:
        records = list(PropertyGenerator(seed=seed, provider_ids=["a", "b"]).generate_batch(20))

        assert {r.provider_id for r in records} <= {"a", "b"}

    def test_no_providers(self, seed: int) -> None:
        assert PropertyGenerator(seed=seed).generate().provider_id is None


class TestProviderGenerator:
    """Tests for ProviderGenerator."""

    def test_generate_batch(self, seed: int) -> None:
        providers = list(ProviderGenerator(seed=seed).generate_batch(30))

        assert len({p.id for p in providers}) == 30
        assert len({p.email for p in providers}) == 30
        for p in providers:
            assert p.city in CITIES
            assert p.is_verified == (p.status == ProviderStatus.APPROVED)
