"""Listing submission and edit payloads."""

from dataclasses import dataclass, field
from decimal import Decimal

from estate_catalog.models.base import Location, PropertyFeatures, PropertyImage
from estate_catalog.models.enums import AreaUnit, PropertyCategory, PropertyStatus, PropertyType


def split_csv(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated form value, dropping blanks."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class PropertySubmission:
    """New listing as entered in the submission form.

    Amenities and utilities arrive as comma-separated text.
    """

    title: str
    description: str
    type: PropertyType
    category: PropertyCategory
    price: Decimal | int | float
    location: Location
    area: float
    area_unit: AreaUnit = AreaUnit.SQM
    bedrooms: int | None = None
    bathrooms: int | None = None
    parking: int | None = None
    furnished: bool = False
    pet_friendly: bool = False
    amenities: str = ""
    utilities: str = ""
    currency: str = "KES"
    images: tuple[PropertyImage, ...] = field(default_factory=tuple)

    def to_features(self) -> PropertyFeatures:
        return PropertyFeatures(
            area=self.area,
            area_unit=self.area_unit,
            bedrooms=self.bedrooms,
            bathrooms=self.bathrooms,
            parking=self.parking,
            furnished=self.furnished,
            pet_friendly=self.pet_friendly,
            amenities=split_csv(self.amenities),
            utilities=split_csv(self.utilities),
        )


@dataclass(frozen=True)
class PropertyUpdate:
    """Partial edit of a listing. ``None`` leaves the field unchanged."""

    title: str | None = None
    description: str | None = None
    type: PropertyType | None = None
    category: PropertyCategory | None = None
    price: Decimal | int | float | None = None
    currency: str | None = None
    status: PropertyStatus | None = None
    location: Location | None = None
    features: PropertyFeatures | None = None
    images: tuple[PropertyImage, ...] | None = None
    is_featured: bool | None = None
