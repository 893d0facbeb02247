"""Tests for colleges.query: normalization and the status gate."""

import pytest

from colleges.query import (
    DEFAULT_LIMIT,
    MAX_PAGING_VALUE,
    CollegeQuery,
    admin_view,
    normalize_query,
    public_view,
)


class TestDefaults:
    def test_empty_params(self) -> None:
        query = normalize_query({})
        assert query == CollegeQuery()
        assert query.sort == "ranking"
        assert query.page == 1
        assert query.limit == 6
        assert query.published_only is True

    def test_blank_search_is_no_filter(self) -> None:
        assert normalize_query({"search": "   "}).search is None

    def test_search_is_stripped(self) -> None:
        assert normalize_query({"search": "  IIT "}).search == "IIT"

    def test_unknown_sort_falls_back_to_ranking(self) -> None:
        assert normalize_query({"sort": "alphabetical"}).sort == "ranking"

    @pytest.mark.parametrize("key", ["ranking", "rating", "fees-low", "fees-high", "placement"])
    def test_known_sorts_kept(self, key: str) -> None:
        assert normalize_query({"sort": key}).sort == key


class TestListFilters:
    def test_comma_separated_string(self) -> None:
        query = normalize_query({"city": "Mumbai, Pune"})
        assert query.cities == ("Mumbai", "Pune")

    def test_list_of_strings(self) -> None:
        query = normalize_query({"type": ["Public", "Deemed"]})
        assert query.types == ("Public", "Deemed")

    def test_repeated_params_with_commas(self) -> None:
        query = normalize_query({"city": ["Mumbai,Pune", "Chennai"]})
        assert query.cities == ("Mumbai", "Pune", "Chennai")

    def test_empty_list_is_no_filter(self) -> None:
        query = normalize_query({"city": [], "type": ""})
        assert query.cities == ()
        assert query.types == ()

    def test_blank_items_dropped(self) -> None:
        assert normalize_query({"city": "Mumbai,, ,"}).cities == ("Mumbai",)


class TestFeeBounds:
    def test_numeric_strings(self) -> None:
        query = normalize_query({"minFee": "50000", "maxFee": "150000.5"})
        assert query.min_fee == 50000
        assert query.max_fee == 150000.5

    def test_single_bound(self) -> None:
        query = normalize_query({"maxFee": 90000})
        assert query.min_fee is None
        assert query.max_fee == 90000

    def test_zero_is_a_real_bound(self) -> None:
        assert normalize_query({"minFee": 0}).min_fee == 0

    @pytest.mark.parametrize("value", ["abc", "", "nan", "inf", None, True])
    def test_garbage_is_absent(self, value) -> None:
        assert normalize_query({"minFee": value}).min_fee is None


class TestPagination:
    @pytest.mark.parametrize("value", [0, -3, "zero", "2.5", None, False])
    def test_bad_limit_clamps_to_default(self, value) -> None:
        assert normalize_query({"limit": value}).limit == DEFAULT_LIMIT

    @pytest.mark.parametrize("value", [0, -1, "x", None])
    def test_bad_page_clamps_to_first(self, value) -> None:
        assert normalize_query({"page": value}).page == 1

    def test_numeric_strings_parsed(self) -> None:
        query = normalize_query({"page": "3", "limit": "20"})
        assert query.page == 3
        assert query.limit == 20
        assert query.skip == 40

    def test_no_upper_bound_on_limit(self) -> None:
        assert normalize_query({"limit": 5000}).limit == 5000

    def test_huge_values_capped_to_int64_safe_skip(self) -> None:
        query = normalize_query({"page": "20000000000000000000", "limit": str(10 ** 30)})
        assert query.page == MAX_PAGING_VALUE
        assert query.limit == MAX_PAGING_VALUE
        assert query.skip < 2 ** 63


class TestStatusGate:
    def test_public_view_forces_published(self) -> None:
        assert public_view(CollegeQuery(published_only=False)).published_only is True

    def test_admin_view_sees_everything(self) -> None:
        query = admin_view(normalize_query({"search": "iit"}))
        assert query.published_only is False
        assert query.search == "iit"

    def test_descriptor_is_immutable(self) -> None:
        query = normalize_query({})
        with pytest.raises(AttributeError):
            query.page = 2  # type: ignore[misc]
