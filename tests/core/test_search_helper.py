"""Unit tests for SearchHelper."""

import pytest

from rokka_client.core.models.errors import InvalidArgumentError
from rokka_client.core.utils.search import SearchHelper


class TestValidateFieldName:
    @pytest.mark.parametrize(
        "field_name",
        [
            "name",
            "created",
            "size_1",
            "user:myfield",
            "user:str:title",
            "user:array:tags",
            "user:date:mydate",
            "user:latlon:location",
            "user:double:ratio",
            "a" * 53,
        ],
    )
    def test_valid_field_names(self, field_name: str) -> None:
        assert SearchHelper.validate_field_name(field_name) is True

    @pytest.mark.parametrize(
        "field_name",
        [
            "",
            "UPPER",
            "with-dash",
            "with space",
            "user:",
            "user:int:count",
            "user:str:",
            "other:field",
            "a" * 54,
            "user:str:" + "a" * 50,
        ],
    )
    def test_invalid_field_names(self, field_name: str) -> None:
        assert SearchHelper.validate_field_name(field_name) is False


class TestBuildSearchSortParameter:
    def test_empty_sorts(self) -> None:
        assert SearchHelper.build_search_sort_parameter({}) == ""
        assert SearchHelper.build_search_sort_parameter(None) == ""

    def test_ascending_and_descending(self) -> None:
        result = SearchHelper.build_search_sort_parameter({"a": "asc", "b": "desc"})

        assert result == "a,b desc"

    def test_true_is_ascending(self) -> None:
        result = SearchHelper.build_search_sort_parameter({"created": True})

        assert result == "created"

    def test_keeps_input_order(self) -> None:
        result = SearchHelper.build_search_sort_parameter(
            {"user:date:shot": "desc", "name": True, "size": "asc"}
        )

        assert result == "user:date:shot desc,name,size"

    @pytest.mark.parametrize("direction", ["ASC", "descending", False, 1, None])
    def test_invalid_direction_raises(self, direction: object) -> None:
        with pytest.raises(InvalidArgumentError, match='for field "name"'):
            SearchHelper.build_search_sort_parameter({"name": direction})  # type: ignore[dict-item]

    def test_invalid_field_raises(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            SearchHelper.build_search_sort_parameter({"Bad-Field": "asc"})

        assert "Bad-Field" in exc_info.value.message
        assert exc_info.value.details == {"field": "Bad-Field"}
        assert exc_info.value.error_code == "INVALID_ARGUMENT"
