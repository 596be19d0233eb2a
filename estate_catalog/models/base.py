"""Value objects shared by catalog records."""

from dataclasses import dataclass, field

from estate_catalog.models.enums import AreaUnit


@dataclass(frozen=True)
class Location:
    """Flat listing address. No geocoding is attached."""

    address: str
    city: str
    state: str = ""
    country: str = "KE"
    postal_code: str = ""


@dataclass(frozen=True)
class PropertyImage:
    """Image reference attached to a listing."""

    url: str
    alt: str = ""
    is_primary: bool = False
    order: int = 0


@dataclass(frozen=True)
class PropertyFeatures:
    """Physical features of a listing.

    ``bedrooms``, ``bathrooms`` and ``parking`` are ``None`` when unknown
    (land and most commercial listings).
    """

    area: float
    area_unit: AreaUnit = AreaUnit.SQM
    bedrooms: int | None = None
    bathrooms: int | None = None
    parking: int | None = None
    furnished: bool = False
    pet_friendly: bool = False
    amenities: tuple[str, ...] = field(default_factory=tuple)
    utilities: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "area_unit", AreaUnit(self.area_unit))
        # Accept lists from callers; store tuples so records stay immutable
        object.__setattr__(self, "amenities", tuple(self.amenities))
        object.__setattr__(self, "utilities", tuple(self.utilities))
