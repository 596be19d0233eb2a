"""Query-string encoding of filter specifications.

Listing pages keep their filter state in URL query parameters. Parsing
accepts the aliases older links use (``location``, ``keywords``,
``propertyType``, ``priceMin``/``priceMax``, ``lotSize``) and drops values
that do not parse instead of failing.
"""

import math
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Sequence
from urllib.parse import parse_qs, urlencode

from estate_catalog.models.enums import PropertyCategory, PropertyType, SortBy, SortOrder
from estate_catalog.models.filters import FilterSpec

ALL = "all"

ParamSource = str | Mapping[str, str | Sequence[str]]


def _normalize(params: ParamSource) -> dict[str, str]:
    if isinstance(params, str):
        parsed = parse_qs(params.lstrip("?"))
        return {key: values[0] for key, values in parsed.items() if values}

    flat: dict[str, str] = {}
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            if value:
                flat[key] = str(value[0])
        elif value is not None:
            flat[key] = str(value)
    return flat


def _first(params: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = params.get(name)
        if value is not None and value.strip() != "":
            return value.strip()
    return None


def parse_csv_param(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated value, dropping blanks."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def parse_number_param(raw: str | None) -> float | None:
    """Parse a finite number; anything else is treated as absent."""
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_decimal_param(raw: str | None) -> Decimal | None:
    if raw is None or raw == "":
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_int_param(raw: str | None) -> int | None:
    value = parse_number_param(raw)
    if value is None or not value.is_integer():
        return None
    return int(value)


def _enum_param(enum_cls: type, raw: str | None) -> Any:
    if raw is None or raw.lower() == ALL:
        return None
    try:
        return enum_cls(raw.lower())
    except ValueError:
        return None


def params_to_filters(params: ParamSource) -> FilterSpec:
    """Build a ``FilterSpec`` from URL query parameters.

    ``sortBy`` defaults to ``date`` and ``sortOrder`` to ``desc``, the order
    listing pages open with.
    """
    p = _normalize(params)

    return FilterSpec(
        query=_first(p, "query", "keywords"),
        type=_enum_param(PropertyType, _first(p, "type", "propertyType")),
        category=_enum_param(PropertyCategory, _first(p, "category")),
        city=_first(p, "city", "location"),
        provider_id=_first(p, "provider", "providerId"),
        min_price=parse_decimal_param(_first(p, "minPrice", "priceMin")),
        max_price=parse_decimal_param(_first(p, "maxPrice", "priceMax")),
        bedrooms=parse_int_param(_first(p, "bedrooms")),
        bathrooms=parse_int_param(_first(p, "bathrooms")),
        min_area=parse_number_param(_first(p, "minArea", "lotSize")),
        max_area=parse_number_param(_first(p, "maxArea")),
        amenities=parse_csv_param(_first(p, "amenities")),
        sort_by=_enum_param(SortBy, _first(p, "sortBy")) or SortBy.DATE,
        sort_order=_enum_param(SortOrder, _first(p, "sortOrder")) or SortOrder.DESC,
    )


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    return str(value)


def filters_to_params(spec: FilterSpec) -> str:
    """Encode the set fields of ``spec`` as a query string (no leading ``?``)."""
    pairs = [
        ("query", spec.query),
        ("type", spec.type),
        ("category", spec.category),
        ("city", spec.city),
        ("provider", spec.provider_id),
        ("minPrice", spec.min_price),
        ("maxPrice", spec.max_price),
        ("bedrooms", spec.bedrooms),
        ("bathrooms", spec.bathrooms),
        ("minArea", spec.min_area),
        ("maxArea", spec.max_area),
        ("amenities", ",".join(spec.amenities) if spec.amenities else None),
        ("sortBy", spec.sort_by),
        ("sortOrder", spec.sort_order if spec.sort_by else None),
    ]
    encoded = []
    for key, value in pairs:
        if value is None or value == "":
            continue
        text = _format_value(value)
        if text.lower() == ALL:
            continue
        encoded.append((key, text))
    return urlencode(encoded)
