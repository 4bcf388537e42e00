"""Tests for perch.server.negotiation — handler return values to responses."""

import json

import pytest

from perch.http.response import Response
from perch.server.negotiation import negotiate


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        original = Response(body="hello", status=201)
        assert negotiate(original) is original

    def test_none_is_no_content(self) -> None:
        result = negotiate(None)
        assert result.status == 204
        assert result.body == b""

    def test_str(self) -> None:
        result = negotiate("hello")
        assert result.status == 200
        assert result.text == "hello"
        assert result.content_type == "text/plain; charset=utf-8"

    def test_bytes(self) -> None:
        result = negotiate(b"\x00\x01")
        assert result.body == b"\x00\x01"
        assert result.content_type == "application/octet-stream"

    def test_dict(self) -> None:
        result = negotiate({"id": 42})
        assert result.content_type == "application/json"
        assert json.loads(result.text) == {"id": 42}

    def test_list(self) -> None:
        result = negotiate([42, "darwin"])
        assert json.loads(result.text) == [42, "darwin"]

    def test_tuple_with_status(self) -> None:
        result = negotiate(("created", 201))
        assert result.status == 201
        assert result.text == "created"

    def test_tuple_overrides_response_status(self) -> None:
        result = negotiate((Response(body="x"), 202))
        assert result.status == 202

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="Cannot convert int"):
            negotiate(42)
