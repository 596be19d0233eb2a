"""Catalog filter and sort engine.

``search`` is a pure function over an in-memory sequence of listings: it
never mutates its input, never performs I/O and never raises for odd data.
A record field that is missing or ``None`` simply fails the predicate that
reads it.
"""

import logging
from typing import Any, Callable, Iterable

from estate_catalog.models.enums import PropertyStatus, SortBy, SortOrder
from estate_catalog.models.filters import FilterSpec
from estate_catalog.models.property import Property
from estate_catalog.models.user import Viewer

logger = logging.getLogger(__name__)

_SORT_KEYS: dict[SortBy, Callable[[Property], Any]] = {
    SortBy.PRICE: lambda p: p.price,
    SortBy.DATE: lambda p: p.created_at.timestamp(),
    SortBy.VIEWS: lambda p: p.views,
    SortBy.AREA: lambda p: p.features.area,
}


def _active(value: Any) -> bool:
    """Whether a filter field constrains the result. Zero counts, blank does not."""
    return value is not None and value != ""


def _read(getter: Callable[[Property], Any], record: Property) -> Any:
    try:
        return getter(record)
    except (AttributeError, TypeError):
        return None


def _within(value: Any, low: Any, high: Any) -> bool:
    """Inclusive range check; a missing value is a miss when any bound is set."""
    if not _active(low) and not _active(high):
        return True
    if value is None:
        return False
    try:
        if _active(low) and value < low:
            return False
        if _active(high) and value > high:
            return False
    except TypeError:
        return False
    return True


def _matches_query(record: Property, query: str) -> bool:
    needle = query.lower()
    haystacks = (
        _read(lambda p: p.title, record),
        _read(lambda p: p.description, record),
        _read(lambda p: p.location.city, record),
        _read(lambda p: p.location.address, record),
    )
    return any(isinstance(text, str) and needle in text.lower() for text in haystacks)


def is_visible(record: Property, viewer: Viewer | None = None) -> bool:
    """Published listings are public; administrators see every status."""
    if viewer is not None and viewer.is_admin:
        return True
    return record.status == PropertyStatus.PUBLISHED


def matches(record: Property, spec: FilterSpec) -> bool:
    """Return True when the record satisfies every active predicate of ``spec``."""
    if _active(spec.provider_id) and record.provider_id != spec.provider_id:
        return False

    if spec.has_query and not _matches_query(record, spec.query):
        return False

    if _active(spec.type) and record.type != spec.type:
        return False
    if _active(spec.category) and record.category != spec.category:
        return False
    if _active(spec.city) and _read(lambda p: p.location.city, record) != spec.city:
        return False

    if not _within(record.price, spec.min_price, spec.max_price):
        return False

    if _active(spec.bedrooms) and _read(lambda p: p.features.bedrooms, record) != spec.bedrooms:
        return False
    if _active(spec.bathrooms) and _read(lambda p: p.features.bathrooms, record) != spec.bathrooms:
        return False

    if not _within(_read(lambda p: p.features.area, record), spec.min_area, spec.max_area):
        return False

    if spec.amenities:
        available = set(_read(lambda p: p.features.amenities, record) or ())
        if not available.issuperset(spec.amenities):
            return False

    return True


def sort_records(
    records: Iterable[Property],
    sort_by: SortBy | str | None,
    sort_order: SortOrder | str = SortOrder.ASC,
) -> list[Property]:
    """Stable single-key sort.

    Without ``sort_by`` (or with an unknown key) input order is kept.
    ``desc`` flips direction while ties keep their input order. Records
    missing the key go last, in input order.
    """
    records = list(records)
    if not _active(sort_by):
        return records
    try:
        getter = _SORT_KEYS[SortBy(sort_by)]
    except ValueError:
        return records

    keyed: list[tuple[Any, Property]] = []
    missing: list[Property] = []
    for record in records:
        value = _read(getter, record)
        if value is None:
            missing.append(record)
        else:
            keyed.append((value, record))

    keyed.sort(key=lambda pair: pair[0], reverse=sort_order == SortOrder.DESC)
    return [record for _, record in keyed] + missing


def search(
    records: Iterable[Property],
    spec: FilterSpec | None = None,
    viewer: Viewer | None = None,
) -> list[Property]:
    """Filter and order listings.

    Parameters
    ----------
    records : Iterable[Property]
        Catalog snapshot. Not modified.
    spec : FilterSpec | None
        Query; ``None`` behaves like an empty ``FilterSpec``.
    viewer : Viewer | None
        Caller identity. Only administrators see non-published listings.

    Returns
    -------
    list[Property]
        Matching listings, sorted when ``spec.sort_by`` is set.
    """
    spec = spec or FilterSpec()
    selected = [r for r in records if is_visible(r, viewer) and matches(r, spec)]
    logger.debug("Search matched %d records (sort_by=%s)", len(selected), spec.sort_by)
    return sort_records(selected, spec.sort_by, spec.sort_order)
