"""Sample listing generator."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterator, Sequence

from estate_catalog.generators.base import BaseGenerator
from estate_catalog.models.base import Location, PropertyFeatures, PropertyImage
from estate_catalog.models.enums import (
    AreaUnit,
    PropertyCategory,
    PropertyStatus,
    PropertyType,
)
from estate_catalog.models.property import Property
from estate_catalog.search.features import FEATURE_TAGS


class PropertyGenerator(BaseGenerator):
    """Generate synthetic listings across Kenyan cities."""

    TYPES = list(PropertyType)
    TYPE_WEIGHTS = [0.35, 0.30, 0.15, 0.10, 0.10]

    STATUSES = [PropertyStatus.PUBLISHED, PropertyStatus.PENDING, PropertyStatus.REJECTED, PropertyStatus.SOLD]
    STATUS_WEIGHTS = [0.75, 0.15, 0.05, 0.05]

    # Price ranges by category (KES)
    PRICE_RANGES = {
        PropertyCategory.SALE: (3_000_000, 120_000_000),
        PropertyCategory.RENT: (15_000, 600_000),
        PropertyCategory.SHORT_TERM_RENTAL: (3_000, 60_000),
        PropertyCategory.LEASE: (50_000, 2_000_000),
        PropertyCategory.DEVELOPMENT_RIGHTS: (10_000_000, 500_000_000),
    }

    EXTRA_AMENITIES = ("Gym", "Borehole", "Backup Generator", "Swimming Pool", "CCTV", "Garden")

    def __init__(
        self,
        seed: int | None = None,
        provider_ids: Sequence[str] = (),
        now: datetime | None = None,
    ) -> None:
        super().__init__(seed)
        self.provider_ids = list(provider_ids)
        self.now = now or datetime.now()
        self._counter = 0

    def generate(self) -> Property:
        """Generate a single listing."""
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[Property]:
        """Yield ``count`` listings."""
        for _ in range(count):
            yield self._generate_one()

    def _category_for(self, prop_type: PropertyType) -> PropertyCategory:
        if prop_type == PropertyType.AIRBNB:
            return PropertyCategory.SHORT_TERM_RENTAL
        if prop_type == PropertyType.LAND:
            return self.random.choice([PropertyCategory.SALE, PropertyCategory.LEASE, PropertyCategory.DEVELOPMENT_RIGHTS])
        return self.random.choice([PropertyCategory.SALE, PropertyCategory.RENT])

    def _features(self, prop_type: PropertyType) -> PropertyFeatures:
        amenities = self.random.sample(FEATURE_TAGS, k=self.random.randint(0, 4))
        amenities += self.random.sample(self.EXTRA_AMENITIES, k=self.random.randint(0, 2))

        if prop_type == PropertyType.LAND:
            return PropertyFeatures(
                area=round(self.random.uniform(0.1, 20.0), 2),
                area_unit=AreaUnit.ACRES,
                amenities=amenities,
                utilities=self.random.sample(["Electricity", "Water", "Sewer"], k=self.random.randint(0, 3)),
            )

        bedrooms = None if prop_type == PropertyType.COMMERCIAL else self.random.randint(1, 6)
        return PropertyFeatures(
            area=float(self.random.randint(40, 900)),
            area_unit=AreaUnit.SQM,
            bedrooms=bedrooms,
            bathrooms=self.random.randint(1, bedrooms + 1) if bedrooms else self.random.randint(1, 4),
            parking=self.random.randint(0, 4),
            furnished=self.random.random() < 0.3,
            pet_friendly=self.random.random() < 0.4,
            amenities=amenities,
        )

    def _generate_one(self) -> Property:
        self._counter += 1
        prop_type = self.random.choices(self.TYPES, weights=self.TYPE_WEIGHTS, k=1)[0]
        category = self._category_for(prop_type)
        low, high = self.PRICE_RANGES[category]
        # Round to the nearest thousand shillings
        price = Decimal(round(self.random.uniform(low, high), -3)).quantize(Decimal("1"))

        city, area = self.pick_city()
        status = self.random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]
        created_at = self.now - timedelta(days=self.random.randint(0, 365), minutes=self.random.randint(0, 1440))
        provider_id = self.random.choice(self.provider_ids) if self.provider_ids else None

        return Property(
            id=f"prop-{self._counter:05d}",
            title=f"{prop_type.value.title()} in {area}, {city}",
            description=self.fake.paragraph(nb_sentences=3),
            type=prop_type,
            category=category,
            price=price,
            location=Location(address=f"{self.fake.street_address()}, {area}", city=city),
            features=self._features(prop_type),
            status=status,
            images=(PropertyImage(url=self.fake.image_url(), alt=f"{area} frontage", is_primary=True),),
            provider_id=provider_id,
            views=self.random.randint(0, 2500) if status == PropertyStatus.PUBLISHED else 0,
            inquiries=self.random.randint(0, 40) if status == PropertyStatus.PUBLISHED else 0,
            is_featured=self.random.random() < 0.1,
            created_at=created_at,
            published_at=created_at if status == PropertyStatus.PUBLISHED else None,
        )
