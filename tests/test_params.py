"""Tests for query-string encoding of filters."""

from decimal import Decimal
from urllib.parse import parse_qs

import pytest

from estate_catalog.models import FilterSpec, PropertyCategory, PropertyType, SortBy, SortOrder
from estate_catalog.search import filters_to_params, params_to_filters
from estate_catalog.search.params import parse_int_param, parse_number_param


class TestParamsToFilters:
    """Tests for params_to_filters."""

    def test_defaults(self) -> None:
        """Test that an empty query opens sorted by newest first."""
        spec = params_to_filters("")

        assert spec.sort_by == SortBy.DATE
        assert spec.sort_order == SortOrder.DESC
        assert spec.query is None
        assert spec.amenities == ()

    def test_full_query_string(self) -> None:
        """Test parsing every supported key."""
        spec = params_to_filters(
            "?query=pool&type=house&category=sale&city=Nairobi&provider=p1"
            "&minPrice=1000&maxPrice=5000&bedrooms=3&bathrooms=2"
            "&minArea=50&maxArea=200.5&amenities=Pool,%20Gym&sortBy=price&sortOrder=asc"
        )

        assert spec == FilterSpec(
            query="pool",
            type=PropertyType.HOUSE,
            category=PropertyCategory.SALE,
            city="Nairobi",
            provider_id="p1",
            min_price=Decimal("1000"),
            max_price=Decimal("5000"),
            bedrooms=3,
            bathrooms=2,
            min_area=50.0,
            max_area=200.5,
            amenities=("Pool", "Gym"),
            sort_by=SortBy.PRICE,
            sort_order=SortOrder.ASC,
        )

    def test_aliases(self) -> None:
        """Test legacy parameter names."""
        spec = params_to_filters(
            {
                "keywords": "garden",
                "propertyType": "Land",
                "location": "Kisumu",
                "priceMin": "10",
                "priceMax": "20",
                "lotSize": "5",
            }
        )

        assert spec.query == "garden"
        assert spec.type == PropertyType.LAND
        assert spec.city == "Kisumu"
        assert spec.min_price == Decimal("10")
        assert spec.max_price == Decimal("20")
        assert spec.min_area == 5.0

    def test_all_means_no_constraint(self) -> None:
        """Test the 'all' sentinel used by dropdowns."""
        spec = params_to_filters({"type": "all", "category": "ALL"})

        assert spec.type is None
        assert spec.category is None

    def test_invalid_values_dropped(self) -> None:
        """Test unparseable values are treated as absent."""
        spec = params_to_filters(
            {"minPrice": "cheap", "bedrooms": "2.5", "minArea": "inf", "type": "castle", "sortBy": "rating"}
        )

        assert spec.min_price is None
        assert spec.bedrooms is None
        assert spec.min_area is None
        assert spec.type is None
        assert spec.sort_by == SortBy.DATE

    def test_zero_survives(self) -> None:
        """Test zero parses as a real value."""
        spec = params_to_filters({"bedrooms": "0", "minPrice": "0"})

        assert spec.bedrooms == 0
        assert spec.min_price == Decimal("0")

    def test_mapping_with_lists(self) -> None:
        """Test parse_qs-style input."""
        spec = params_to_filters({"city": ["Mombasa", "Nairobi"], "bedrooms": []})

        assert spec.city == "Mombasa"
        assert spec.bedrooms is None


class TestFiltersToParams:
    """Tests for filters_to_params."""

    def test_empty_spec(self) -> None:
        assert filters_to_params(FilterSpec()) == ""

    def test_encodes_set_fields_only(self) -> None:
        """Test blank and unset fields are skipped."""
        spec = FilterSpec(
            query="",
            city="Nairobi",
            min_price=Decimal("1500000.00"),
            min_area=120.0,
            bedrooms=0,
            amenities=("Pool", "Gym"),
        )

        parsed = parse_qs(filters_to_params(spec))

        assert parsed == {
            "city": ["Nairobi"],
            "minPrice": ["1500000"],
            "minArea": ["120"],
            "bedrooms": ["0"],
            "amenities": ["Pool,Gym"],
        }

    def test_sort_order_only_with_sort_by(self) -> None:
        """Test sortOrder is emitted together with sortBy."""
        assert "sortOrder" not in filters_to_params(FilterSpec(sort_order=SortOrder.DESC))

        parsed = parse_qs(filters_to_params(FilterSpec(sort_by=SortBy.VIEWS, sort_order=SortOrder.DESC)))
        assert parsed == {"sortBy": ["views"], "sortOrder": ["desc"]}

    def test_parse_back(self) -> None:
        """Test a link built from a spec reproduces it."""
        spec = FilterSpec(
            category=PropertyCategory.SHORT_TERM_RENTAL,
            city="Mombasa",
            max_price=Decimal("25000"),
            sort_by=SortBy.PRICE,
            sort_order=SortOrder.ASC,
        )

        assert params_to_filters(filters_to_params(spec)) == spec


class TestNumberParsing:
    """Tests for number helpers."""

    @pytest.mark.parametrize("raw,expected", [("3", 3.0), ("-1.5", -1.5), ("", None), (None, None), ("nan", None), ("x", None)])
    def test_parse_number(self, raw, expected) -> None:
        assert parse_number_param(raw) == expected

    @pytest.mark.parametrize("raw,expected", [("3", 3), ("3.0", 3), ("3.5", None), ("abc", None)])
    def test_parse_int(self, raw, expected) -> None:
        assert parse_int_param(raw) == expected
