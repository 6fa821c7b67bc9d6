"""Tests for query string serialization."""

from services.cursor_pagination.query_string import (
    group_query_params,
    merge_page_params,
    to_query,
)


class TestToQuery:
    def test_flat_params_are_sorted(self):
        assert to_query({"b": "2", "a": "1"}) == "a=1&b=2"

    def test_nested_params(self):
        assert to_query({"page": {"size": 3, "after": 5}}) == (
            "page%5Bafter%5D=5&page%5Bsize%5D=3"
        )

    def test_values_are_percent_encoded(self):
        assert to_query({"q": "a b&c=d/é"}) == "q=a+b%26c%3Dd%2F%C3%A9"

    def test_sequences(self):
        assert to_query({"ids": [2, 1]}) == "ids%5B%5D=1&ids%5B%5D=2"
        assert to_query({"ids": []}) == "ids%5B%5D="

    def test_bracketed_key_is_not_doubled(self):
        assert to_query({"tag[]": ["b", "a"]}) == "tag%5B%5D=a&tag%5B%5D=b"

    def test_tuple_repeats_bare_key(self):
        assert to_query({"q": ("y", "x")}) == "q=x&q=y"

    def test_none_and_booleans(self):
        assert to_query({"flag": True, "other": False, "empty": None}) == (
            "empty=&flag=true&other=false"
        )

    def test_namespace(self):
        assert to_query({"size": 3}, namespace="page") == "page%5Bsize%5D=3"

    def test_empty(self):
        assert to_query({}) == ""


class TestMergePageParams:
    def test_replaces_nested_and_flattened_page(self):
        merged = merge_page_params(
            {"page": {"size": "9"}, "page[after]": "1", "q": "x"},
            {"before": 4, "size": 2},
        )

        assert merged == {"q": "x", "page": {"before": 4, "size": 2}}

    def test_does_not_modify_input(self):
        params = {"page": {"size": "9"}}

        merge_page_params(params, {"size": 1})

        assert params == {"page": {"size": "9"}}


class TestGroupQueryParams:
    def test_single_values_stay_scalar(self):
        assert group_query_params([("q", "x"), ("page[size]", "3")]) == {
            "q": "x",
            "page[size]": "3",
        }

    def test_bracketed_keys_collect_lists(self):
        assert group_query_params([("tag[]", "a")]) == {"tag[]": ["a"]}
        assert group_query_params([("tag[]", "a"), ("tag[]", "b")]) == {
            "tag[]": ["a", "b"]
        }

    def test_repeated_bare_keys_collect_tuples(self):
        grouped = group_query_params([("q", "x"), ("q", "y"), ("q", "z")])

        assert grouped == {"q": ("x", "y", "z")}
        assert to_query(grouped) == "q=x&q=y&q=z"
