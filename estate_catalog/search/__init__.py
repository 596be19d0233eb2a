"""Search, filtering and feature-tag counting over the catalog."""

from estate_catalog.search.engine import is_visible, matches, search, sort_records
from estate_catalog.search.features import (
    FEATURE_TAGS,
    count_feature_tags,
    filter_by_features,
    tag_matches_amenity,
)
from estate_catalog.search.params import filters_to_params, params_to_filters

__all__ = [
    "FEATURE_TAGS",
    "count_feature_tags",
    "filter_by_features",
    "filters_to_params",
    "is_visible",
    "matches",
    "params_to_filters",
    "search",
    "sort_records",
    "tag_matches_amenity",
]
