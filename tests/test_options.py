"""
Tests for identifier and pine option helpers.
"""

import pytest

from devfleet.exceptions import InvalidParameterError
from devfleet.utils import is_id, merge_pine_options


class TestIsId:
    """Tests for is_id."""

    @pytest.mark.parametrize("value", [0, 5, 123456])
    def test_ints_are_ids(self, value):
        assert is_id(value) is True

    @pytest.mark.parametrize("value", ["5", "7cf02a6", "", None, True, False, 5.0])
    def test_other_values_are_not_ids(self, value):
        assert is_id(value) is False


class TestMergePineOptions:
    """Tests for merge_pine_options."""

    def test_no_extras_copies_defaults(self):
        defaults = {"$filter": {"uuid": "abc"}}
        result = merge_pine_options(defaults, None)
        assert result == defaults
        assert result is not defaults

    def test_inputs_not_modified(self):
        defaults = {"$select": ["id"], "$filter": {"a": 1}}
        extras = {"$select": "uuid", "$filter": {"b": 2}}
        merge_pine_options(defaults, extras)
        assert defaults == {"$select": ["id"], "$filter": {"a": 1}}
        assert extras == {"$select": "uuid", "$filter": {"b": 2}}

    def test_select_union(self):
        result = merge_pine_options({"$select": ["id", "uuid"]}, {"$select": ["uuid", "device_name"]})
        assert result["$select"] == ["id", "uuid", "device_name"]

    def test_select_scalar_wrapped(self):
        result = merge_pine_options({}, {"$select": "id"})
        assert result["$select"] == ["id"]

    def test_select_star_wins(self):
        result = merge_pine_options({"$select": ["id"]}, {"$select": "*"})
        assert result["$select"] == "*"

    @pytest.mark.parametrize("option", ["$orderby", "$top", "$skip", "$count"])
    def test_replaced_options(self, option):
        result = merge_pine_options({option: "default"}, {option: "extra"})
        assert result[option] == "extra"

    def test_filter_combined_with_and(self):
        result = merge_pine_options(
            {"$filter": {"belongs_to__application": 5}},
            {"$filter": {"is_online": True}},
        )
        assert result["$filter"] == {
            "$and": [{"belongs_to__application": 5}, {"is_online": True}]
        }

    def test_filter_without_default(self):
        result = merge_pine_options({"$orderby": "device_name asc"}, {"$filter": {"is_online": True}})
        assert result["$filter"] == {"is_online": True}
        assert result["$orderby"] == "device_name asc"

    def test_expand_string_and_dict(self):
        result = merge_pine_options(
            {"$expand": "belongs_to__application"},
            {"$expand": {"belongs_to__application": {"$select": "app_name"}}},
        )
        assert result["$expand"] == {"belongs_to__application": {"$select": ["app_name"]}}

    def test_expand_nested_options_merged(self):
        result = merge_pine_options(
            {"$expand": {"image_install": {"$select": ["id"], "$filter": {"status": {"$ne": "deleted"}}}}},
            {"$expand": [{"image_install": {"$select": "install_date"}}, "gateway_download"]},
        )
        assert result["$expand"] == {
            "image_install": {
                "$select": ["id", "install_date"],
                "$filter": {"status": {"$ne": "deleted"}},
            },
            "gateway_download": {},
        }

    def test_unknown_option_rejected(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            merge_pine_options({}, {"$foo": 1})
        assert exc_info.value.name == "options"
        assert exc_info.value.value == "$foo"
