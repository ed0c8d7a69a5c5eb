"""Tests for warble.routing.attribute: Attribute and the type registry."""

import re
import warnings

import pytest

from warble.errors import RouteDefinitionError
from warble.routing.attribute import DEPRECATED_TYPES, TYPES, Attribute, resolve_type
from warble.routing.route import Route


class TestAttribute:
    def test_creation(self) -> None:
        attribute = Attribute("id", "1", r"\d+")
        assert attribute.name == "id"
        assert attribute.default == "1"
        assert attribute.regex == r"\d+"
        assert attribute.route is None

    def test_defaults_to_unset(self) -> None:
        attribute = Attribute("id")
        assert attribute.default is None
        assert attribute.regex is None
        assert attribute.has_default() is False
        assert attribute.has_regex() is False

    def test_empty_string_default_counts(self) -> None:
        attribute = Attribute("id", "")
        assert attribute.has_default() is True
        assert attribute.default == ""

    def test_false_default_counts(self) -> None:
        attribute = Attribute("flag", False)
        assert attribute.has_default() is True
        assert attribute.default is False

    def test_setters(self) -> None:
        attribute = Attribute("id")
        attribute.set_default(True)
        attribute.set_regex(".*")
        assert attribute.default is True
        assert attribute.regex == ".*"

    def test_equality_ignores_route(self) -> None:
        route = Route("/{id}")
        assert Attribute("id", "1", ".*", route=route) == Attribute("id", "1", ".*")
        assert Attribute("id", "1") != Attribute("id", "2")


class TestInheritance:
    def test_default_and_regex_from_parent(self) -> None:
        parent = Route("/path/{foo}", defaults={"bar": "7"}, requirements={"bar": r"\d+"})
        child = Route("/sub/{bar}")
        parent.add_route(child)

        attribute = child.get_attribute("bar")
        assert attribute is not None
        assert attribute.route is child
        assert attribute.default == "7"
        assert attribute.regex == r"\d+"

    def test_local_value_shadows_parent(self) -> None:
        parent = Route("/path", defaults={"bar": "7"})
        child = Route("/{bar}", defaults={"bar": "8"})
        parent.add_route(child)

        assert child.get_attribute("bar").default == "8"

    def test_resolves_through_several_levels(self) -> None:
        root = Route("/a", requirements={"id": "[a-f]+"})
        middle = Route("/b")
        leaf = Route("/{id}")
        root.add_route(middle)
        middle.add_route(leaf)

        assert leaf.get_attribute("id").regex == "[a-f]+"

    def test_unset_everywhere(self) -> None:
        parent = Route("/a")
        child = Route("/{id}")
        parent.add_route(child)

        assert child.get_attribute("id").has_default() is False
        assert child.get_attribute("id").has_regex() is False

    def test_local_setter_does_not_touch_parent(self) -> None:
        parent = Route("/a", defaults={"id": "1"})
        child = Route("/{id}")
        parent.add_route(child)

        child.get_attribute("id").set_default("2")
        assert parent.get_attribute("id").default == "1"


class TestTypes:
    def test_registered_aliases(self) -> None:
        assert set(TYPES) == {"int", "float", "uuid4", "slug", "md5", "sha1", "domain"}

    @pytest.mark.parametrize(
        ("alias", "value"),
        [
            ("int", "42"),
            ("float", "3.14"),
            ("uuid4", "8bd71855-5e84-4a0e-9595-98a5f180840d"),
            ("slug", "hello-world-2"),
            ("md5", "d41d8cd98f00b204e9800998ecf8427e"),
            ("sha1", "da39a3ee5e6b4b0d3255bfef95601890afd80709"),
            ("domain", "www.example.com"),
        ],
    )
    def test_alias_matches(self, alias: str, value: str) -> None:
        assert re.fullmatch(TYPES[alias], value)

    @pytest.mark.parametrize(
        ("alias", "value"),
        [
            ("int", "4a"),
            ("float", "3"),
            ("slug", "Hello_World"),
            ("md5", "d41d8cd98f"),
            ("uuid4", "8bd71855-5e84-4a0e-9595"),
        ],
    )
    def test_alias_rejects(self, alias: str, value: str) -> None:
        assert re.fullmatch(TYPES[alias], value) is None

    def test_resolve_type(self) -> None:
        assert resolve_type("int") == r"\d+"

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(RouteDefinitionError, match='Unknown type "nope"'):
            resolve_type("nope")

    def test_uuid_is_deprecated_alias(self) -> None:
        assert DEPRECATED_TYPES["uuid"] == "uuid4"
        with pytest.warns(DeprecationWarning, match="uuid4"):
            regex = resolve_type("uuid")
        assert regex == TYPES["uuid4"]

    def test_uuid4_does_not_warn(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            resolve_type("uuid4")
