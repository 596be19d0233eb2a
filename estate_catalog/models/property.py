"""Property listing model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation

from estate_catalog.exceptions import ValidationError
from estate_catalog.models.base import Location, PropertyFeatures, PropertyImage
from estate_catalog.models.enums import PropertyCategory, PropertyStatus, PropertyType


@dataclass(frozen=True)
class Property:
    """Real estate listing.

    Records are values: the search engine only reads them and the store
    replaces them (``dataclasses.replace``) instead of mutating in place.
    """

    id: str
    title: str
    type: PropertyType
    category: PropertyCategory
    price: Decimal
    location: Location
    features: PropertyFeatures
    description: str = ""
    status: PropertyStatus = PropertyStatus.DRAFT
    currency: str = "KES"
    images: tuple[PropertyImage, ...] = field(default_factory=tuple)
    provider_id: str | None = None  # Admin-created listings have no provider
    views: int = 0
    inquiries: int = 0
    is_featured: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime | None = None
    published_at: datetime | None = None
    rejection_reason: str | None = None
    rejected_at: datetime | None = None
    rejected_by: str | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "type", PropertyType(self.type))
            object.__setattr__(self, "category", PropertyCategory(self.category))
            object.__setattr__(self, "status", PropertyStatus(self.status))
        except ValueError as e:
            raise ValidationError(f"Property {self.id}: {e}") from e

        if not isinstance(self.price, Decimal):
            try:
                object.__setattr__(self, "price", Decimal(str(self.price)))
            except InvalidOperation as e:
                raise ValidationError(f"Property {self.id}: invalid price {self.price!r}") from e

        if not self.price.is_finite() or self.price < 0:
            raise ValidationError(f"Property {self.id}: price must be non-negative")
        if self.features.area < 0:
            raise ValidationError(f"Property {self.id}: area must be non-negative")

        object.__setattr__(self, "images", tuple(self.images))

    @property
    def is_published(self) -> bool:
        return self.status == PropertyStatus.PUBLISHED

    @property
    def primary_image(self) -> PropertyImage | None:
        """First image flagged primary, else the lowest ``order``.

        More than one primary flag is tolerated; the first wins.
        """
        for image in self.images:
            if image.is_primary:
                return image
        if not self.images:
            return None
        return min(self.images, key=lambda image: image.order)
