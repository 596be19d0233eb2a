"""Feature-tag counting and browsing.

Tags are loose human labels ("Private Pool", "Water Views") matched against
free-text amenity strings by bidirectional, case-insensitive containment.
"Pool" matches "Private Pool" and the other way round. Counting rescans the
whole catalog (records x tags).
"""

from typing import Iterable, Sequence

from estate_catalog.models.enums import PropertyCategory, PropertyStatus
from estate_catalog.models.property import Property

FEATURE_TAGS: tuple[str, ...] = (
    "Private Pool",
    "Upgraded",
    "Large Plot",
    "Close to Park",
    "Brand New",
    "Furnished",
    "Vacant on Transfer",
    "Water Views",
    "Road Access",
    "Title Deed Ready",
    "Electricity Connection",
    "Water Access",
)


def tag_matches_amenity(tag: str, amenity: str) -> bool:
    """Return True if either string contains the other, ignoring case.

    Blank strings never match; an empty string is a substring of everything.
    """
    tag_norm = (tag or "").strip().lower()
    amenity_norm = (amenity or "").strip().lower()
    if not tag_norm or not amenity_norm:
        return False
    return tag_norm in amenity_norm or amenity_norm in tag_norm


def has_feature(record: Property, tag: str) -> bool:
    return any(tag_matches_amenity(tag, amenity) for amenity in record.features.amenities)


def _in_scope(
    record: Property,
    category: PropertyCategory | str | None,
    provider_id: str | None,
) -> bool:
    if record.status != PropertyStatus.PUBLISHED:
        return False
    if category is not None and record.category != category:
        return False
    if provider_id is not None and record.provider_id != provider_id:
        return False
    return True


def count_feature_tags(
    records: Iterable[Property],
    tags: Sequence[str] = FEATURE_TAGS,
    category: PropertyCategory | str | None = None,
    provider_id: str | None = None,
) -> dict[str, int]:
    """Count published listings carrying each tag.

    Parameters
    ----------
    records : Iterable[Property]
        Full catalog snapshot.
    tags : Sequence[str]
        Tag vocabulary (default: ``FEATURE_TAGS``).
    category : PropertyCategory | str | None
        Restrict to one category.
    provider_id : str | None
        Restrict to one provider's listings.

    Returns
    -------
    dict[str, int]
        Tag -> number of matching listings, in vocabulary order.
    """
    scoped = [r for r in records if _in_scope(r, category, provider_id)]
    return {tag: sum(1 for r in scoped if has_feature(r, tag)) for tag in tags}


def filter_by_features(
    records: Iterable[Property],
    tags: Sequence[str],
    category: PropertyCategory | str | None = None,
) -> list[Property]:
    """Published listings matching ANY of the selected tags.

    An empty selection returns nothing rather than everything.
    """
    if not tags:
        return []
    return [
        r for r in records
        if _in_scope(r, category, None) and any(has_feature(r, tag) for tag in tags)
    ]
