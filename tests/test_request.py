"""Tests for warble.http.request: immutable routing request."""

import dataclasses

import pytest

from warble.http.request import Request


class TestRequest:
    def test_defaults(self) -> None:
        request = Request()
        assert request.method == "GET"
        assert request.path == "/"
        assert request.host == ""
        assert request.attributes == {}

    def test_frozen(self) -> None:
        request = Request()
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.path = "/other"  # type: ignore[misc]

    def test_attributes_are_read_only(self) -> None:
        request = Request(attributes={"a": 1})
        with pytest.raises(TypeError):
            request.attributes["a"] = 2  # type: ignore[index]

    def test_attributes_are_copied(self) -> None:
        source = {"a": 1}
        request = Request(attributes=source)
        source["a"] = 2
        assert request.get_attribute("a") == 1

    def test_get_attribute_default(self) -> None:
        assert Request().get_attribute("missing", "fallback") == "fallback"


class TestWithAttributes:
    def test_returns_new_request(self) -> None:
        request = Request(path="/users/1")
        updated = request.with_attribute("id", "1")

        assert updated is not request
        assert updated.get_attribute("id") == "1"
        assert updated.path == "/users/1"
        assert request.attributes == {}

    def test_merges_over_existing(self) -> None:
        request = Request(attributes={"a": 1, "b": 2})
        updated = request.with_attributes({"b": 3, "c": 4})
        assert updated.attributes == {"a": 1, "b": 3, "c": 4}


class TestFromURL:
    def test_absolute_url(self) -> None:
        request = Request.from_url("https://www.example.com:8443/path/to?x=1#frag")
        assert request.host == "www.example.com"
        assert request.path == "/path/to"
        assert request.method == "GET"

    def test_bare_path(self) -> None:
        request = Request.from_url("/path?x=1", method="POST")
        assert request.host == ""
        assert request.path == "/path"
        assert request.method == "POST"

    def test_empty_path(self) -> None:
        assert Request.from_url("https://example.com").path == "/"

    def test_decodes_path(self) -> None:
        assert Request.from_url("/caf%C3%A9/a%20b").path == "/café/a b"

    def test_host_is_lowercased(self) -> None:
        assert Request.from_url("https://WWW.Example.COM/").host == "www.example.com"


class TestFromASGI:
    def test_host_header(self) -> None:
        scope = {
            "type": "http",
            "method": "PUT",
            "path": "/items/3",
            "headers": [(b"content-type", b"text/plain"), (b"host", b"api.example.com:8000")],
            "server": ("127.0.0.1", 8000),
        }
        request = Request.from_asgi(scope)
        assert request.method == "PUT"
        assert request.path == "/items/3"
        assert request.host == "api.example.com"

    def test_server_fallback(self) -> None:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": [],
            "server": ("localhost", 80),
        }
        assert Request.from_asgi(scope).host == "localhost"

    def test_no_host(self) -> None:
        scope = {"type": "http", "method": "GET", "path": "/"}
        assert Request.from_asgi(scope).host == ""
