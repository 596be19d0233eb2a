"""Sample provider generator."""

from __future__ import annotations

from typing import Iterator

from estate_catalog.generators.base import BaseGenerator
from estate_catalog.models.enums import ProviderStatus, SubscriptionPlan
from estate_catalog.models.provider import Provider


class ProviderGenerator(BaseGenerator):
    """Generate listing agencies in various approval states."""

    STATUSES = list(ProviderStatus)
    STATUS_WEIGHTS = [0.20, 0.65, 0.10, 0.05]
    PLANS = list(SubscriptionPlan)
    PLAN_WEIGHTS = [0.60, 0.30, 0.10]
    SUFFIXES = ("Realty", "Properties", "Homes", "Estates", "Agencies")

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)
        self._counter = 0

    def generate(self) -> Provider:
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[Provider]:
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> Provider:
        self._counter += 1
        name = self.fake.name()
        business = f"{self.fake.last_name()} {self.random.choice(self.SUFFIXES)}"
        slug = business.lower().replace(" ", "")
        status = self.random.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]
        city, _ = self.pick_city()

        return Provider(
            id=f"prov-{self._counter:04d}",
            name=name,
            email=f"{slug}{self._counter}@example.com",
            business_name=business,
            business_email=f"info@{slug}.example.com",
            phone=self.fake.phone_number(),
            city=city,
            status=status,
            subscription_plan=self.random.choices(self.PLANS, weights=self.PLAN_WEIGHTS, k=1)[0],
            is_verified=status == ProviderStatus.APPROVED,
            joined_at=self.fake.date_between(start_date="-2y", end_date="today"),
        )
