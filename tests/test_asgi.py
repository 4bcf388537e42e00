"""Tests for perch._internal.asgi — scope construction."""

from perch._internal.asgi import http_scope


class TestHTTPScope:
    def test_basic(self) -> None:
        scope = http_scope("get", "/item/42")
        assert scope["type"] == "http"
        assert scope["method"] == "GET"
        assert scope["path"] == "/item/42"
        assert scope["raw_path"] == b"/item/42"
        assert scope["query_string"] == b""
        assert scope["asgi"] == {"version": "3.0"}

    def test_query_split_off(self) -> None:
        scope = http_scope("GET", "/search?q=perch&page=2")
        assert scope["path"] == "/search"
        assert scope["query_string"] == b"q=perch&page=2"

    def test_headers_lowercased_bytes(self) -> None:
        scope = http_scope("GET", "/", headers={"X-Token": "abc"})
        assert scope["headers"] == [(b"x-token", b"abc")]

    def test_client_and_server(self) -> None:
        scope = http_scope("GET", "/", client=("10.0.0.1", 5000), server=("example", 443))
        assert scope["client"] == ("10.0.0.1", 5000)
        assert scope["server"] == ("example", 443)

    def test_non_ascii_path(self) -> None:
        scope = http_scope("GET", "/profile/日本/view")
        assert scope["path"] == "/profile/日本/view"
        assert scope["raw_path"] == b"/profile/%E6%97%A5%E6%9C%AC/view"

    def test_non_ascii_query_percent_encoded(self) -> None:
        scope = http_scope("GET", "/search?q=日本&page=2")
        assert scope["query_string"] == b"q=%E6%97%A5%E6%9C%AC&page=2"
