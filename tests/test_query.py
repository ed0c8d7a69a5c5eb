"""Tests for warble.routing.query: query string building."""

from warble.routing.query import build_query, filter_parameters, stringify


class TestStringify:
    def test_str_passthrough(self) -> None:
        assert stringify("abc") == "abc"

    def test_numbers(self) -> None:
        assert stringify(42) == "42"
        assert stringify(1.5) == "1.5"

    def test_integral_floats(self) -> None:
        assert stringify(2.0) == "2"
        assert stringify(-3.0) == "-3"

    def test_non_finite_floats(self) -> None:
        assert stringify(float("inf")) == "inf"

    def test_bools(self) -> None:
        assert stringify(True) == "1"
        assert stringify(False) == ""


class TestFilterParameters:
    def test_drops_none(self) -> None:
        assert filter_parameters({"a": None, "b": "x"}) == {"b": "x"}

    def test_keeps_empty_string_and_zero(self) -> None:
        assert filter_parameters({"a": "", "b": 0}) == {"a": "", "b": 0}

    def test_drops_empty_containers(self) -> None:
        assert filter_parameters({"a": [], "b": {}, "c": [None]}) == {}

    def test_sequences_keep_positions(self) -> None:
        assert filter_parameters({"a": ["x", None, "y"]}) == {"a": {0: "x", 2: "y"}}

    def test_nested(self) -> None:
        params = {"a": {"b": {"c": None}, "d": ["e"]}}
        assert filter_parameters(params) == {"a": {"d": {0: "e"}}}


class TestBuildQuery:
    def test_flat(self) -> None:
        assert build_query({"c": "v3"}) == "c=v3"

    def test_keeps_order(self) -> None:
        assert build_query({"q1": "value1", "q2": "value1"}) == "q1=value1&q2=value1"

    def test_encodes_values(self) -> None:
        assert build_query({"q": "a b&c"}) == "q=a+b%26c"

    def test_nested_brackets(self) -> None:
        params = {
            "baz": ["bar", "baz", "", None, 0],
            "qux": "",
            "quxx": None,
        }
        assert build_query(params) == (
            "baz%5B0%5D=bar&baz%5B1%5D=baz&baz%5B2%5D=&baz%5B4%5D=0&qux="
        )

    def test_mapping_values(self) -> None:
        assert build_query({"filter": {"kind": "post"}}) == "filter%5Bkind%5D=post"

    def test_scalar_values(self) -> None:
        assert build_query({"on": True, "off": False, "ratio": 2.0}) == "on=1&off=&ratio=2"

    def test_empty(self) -> None:
        assert build_query({}) == ""
        assert build_query({"a": None}) == ""
