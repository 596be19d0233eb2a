"""Search filter specification."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from estate_catalog.models.enums import PropertyCategory, PropertyType, SortBy, SortOrder


@dataclass(frozen=True)
class FilterSpec:
    """Query evaluated by the search engine.

    Every field is optional and ``None`` means "no constraint". Zero is a real
    constraint: ``min_price=0`` and ``bedrooms=0`` are applied. An empty
    ``query`` or an empty ``amenities`` tuple counts as absent.
    """

    query: str | None = None
    type: PropertyType | None = None
    category: PropertyCategory | None = None
    city: str | None = None
    provider_id: str | None = None
    min_price: Decimal | int | float | None = None
    max_price: Decimal | int | float | None = None
    bedrooms: int | None = None  # exact match, not "at least"
    bathrooms: int | None = None  # exact match, not "at least"
    min_area: float | None = None
    max_area: float | None = None
    amenities: tuple[str, ...] = field(default_factory=tuple)
    sort_by: SortBy | None = None
    sort_order: SortOrder = SortOrder.ASC

    def __post_init__(self) -> None:
        object.__setattr__(self, "amenities", tuple(self.amenities or ()))

    def with_changes(self, **changes: Any) -> "FilterSpec":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def has_query(self) -> bool:
        return bool(self.query)
