"""Tests for perch.server.handler — the mux served over ASGI."""

import asyncio
import threading

import pytest

from perch.config import MuxConfig
from perch.context import get_request
from perch.errors import HTTPError, NotFound
from perch.http.request import Request
from perch.http.response import Response
from perch.mux import Mux
from perch.testing import TestClient


@pytest.fixture
def mux() -> Mux:
    return Mux()


class TestDispatchOverASGI:
    async def test_sync_handler(self, mux: Mux) -> None:
        mux.register_route("/hello", lambda request: "hi")
        async with TestClient(mux) as client:
            response = await client.get("/hello")
        assert response.status == 200
        assert response.text == "hi"
        assert response.content_type == "text/plain; charset=utf-8"

    async def test_async_handler(self, mux: Mux) -> None:
        @mux.route("/slow")
        async def slow(request: Request) -> str:
            await asyncio.sleep(0)
            return "done"

        async with TestClient(mux) as client:
            response = await client.get("/slow")
        assert response.text == "done"

    async def test_typed_variables_as_json(self, mux: Mux) -> None:
        @mux.route("/item/{id:int}/{slug}")
        def item(request: Request) -> dict[str, object]:
            return {
                "id": mux.variable_by_name("id", request),
                "slug": mux.variable_by_name("slug", request),
            }

        async with TestClient(mux) as client:
            response = await client.get("/item/42/tea?ignored=1")
        assert response.content_type == "application/json"
        assert response.text == '{"id": 42, "slug": "tea"}'

    async def test_status_tuple(self, mux: Mux) -> None:
        mux.register_route("/make", lambda request: ("made", 201))
        async with TestClient(mux) as client:
            response = await client.get("/make")
        assert response.status == 201

    async def test_none_is_204(self, mux: Mux) -> None:
        mux.register_route("/quiet", lambda request: None)
        async with TestClient(mux) as client:
            response = await client.get("/quiet")
        assert response.status == 204
        assert response.body == b""

    async def test_headers_sent(self, mux: Mux) -> None:
        mux.register_route("/h", lambda request: Response(body="x").with_header("X-Route", "h"))
        async with TestClient(mux) as client:
            response = await client.get("/h")
        assert response.header("x-route") == "h"

    async def test_post_body(self, mux: Mux) -> None:
        @mux.route("/echo")
        async def echo(request: Request) -> dict[str, object]:
            return await request.json()

        async with TestClient(mux) as client:
            response = await client.post("/echo", json={"name": "darwin"})
        assert response.text == '{"name": "darwin"}'

    async def test_non_ascii_segment(self, mux: Mux) -> None:
        mux.register_route(
            "/profile/{name}/view",
            lambda request: mux.variable_by_name("name", request),
        )
        async with TestClient(mux) as client:
            response = await client.get("/profile/日本/view")
        assert response.status == 200
        assert response.text == "日本"

    async def test_non_ascii_query(self, mux: Mux) -> None:
        mux.register_route("/search", lambda request: request.query["q"][0])
        async with TestClient(mux) as client:
            response = await client.get("/search?q=日本")
        assert response.text == "日本"


class TestNotFound:
    async def test_default(self, mux: Mux) -> None:
        async with TestClient(mux) as client:
            response = await client.get("/missing")
        assert response.status == 404
        assert response.text == "Not Found"

    async def test_custom_fallback_keeps_404(self, mux: Mux) -> None:
        mux.register_fallback(404, lambda request: f"no {request.path}")
        async with TestClient(mux) as client:
            response = await client.get("/missing")
        assert response.status == 404
        assert response.text == "no /missing"

    async def test_custom_fallback_status_respected(self, mux: Mux) -> None:
        mux.register_fallback(404, lambda request: ("gone", 410))
        async with TestClient(mux) as client:
            response = await client.get("/missing")
        assert response.status == 410


class TestErrors:
    async def test_exception_becomes_500(self, mux: Mux, caplog: pytest.LogCaptureFixture) -> None:
        def boom(request: Request) -> str:
            raise RuntimeError("boom")

        mux.register_route("/boom", boom)
        with caplog.at_level("ERROR", logger="perch.server"):
            async with TestClient(mux) as client:
                response = await client.get("/boom")

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert any("500 GET /boom" in r.message for r in caplog.records)
        assert any(r.exc_info for r in caplog.records)

    async def test_custom_500_fallback(self, mux: Mux) -> None:
        def boom(request: Request) -> str:
            raise RuntimeError("boom")

        mux.register_route("/boom", boom)
        mux.register_fallback(500, lambda request: "sorry")
        async with TestClient(mux) as client:
            response = await client.get("/boom")
        assert response.status == 500
        assert response.text == "sorry"

    async def test_http_error_routes_to_fallback(self, mux: Mux) -> None:
        def hidden(request: Request) -> str:
            raise NotFound()

        mux.register_route("/hidden", hidden)
        mux.register_fallback(404, lambda request: "not here")
        async with TestClient(mux) as client:
            response = await client.get("/hidden")
        assert response.status == 404
        assert response.text == "not here"

    async def test_unregistered_status_default_body(self, mux: Mux) -> None:
        async def busy(request: Request) -> str:
            raise HTTPError(status=503, detail="busy")

        mux.register_route("/busy", busy)
        async with TestClient(mux) as client:
            response = await client.get("/busy")
        assert response.status == 503
        assert response.text == "Service Unavailable"

    async def test_failing_fallback_is_bare_500(self, mux: Mux) -> None:
        def broken_fallback(request: Request) -> str:
            raise RuntimeError("fallback broke")

        mux.register_fallback(404, broken_fallback)
        async with TestClient(mux) as client:
            response = await client.get("/missing")
        assert response.status == 500
        assert response.text == "Internal Server Error"

    async def test_unconvertible_return_is_500(self, mux: Mux) -> None:
        mux.register_route("/odd", lambda request: object())
        async with TestClient(mux) as client:
            response = await client.get("/odd")
        assert response.status == 500


class TestThreading:
    async def test_sync_handler_runs_off_loop(self, mux: Mux) -> None:
        loop_thread = threading.get_ident()
        mux.register_route("/where", lambda request: str(threading.get_ident()))
        async with TestClient(mux) as client:
            response = await client.get("/where")
        assert response.text != str(loop_thread)

    async def test_inline_dispatch(self) -> None:
        mux = Mux(MuxConfig(threaded_dispatch=False))
        loop_thread = threading.get_ident()
        mux.register_route("/where", lambda request: str(threading.get_ident()))
        async with TestClient(mux) as client:
            response = await client.get("/where")
        assert response.text == str(loop_thread)

    async def test_request_context_visible_in_worker(self, mux: Mux) -> None:
        mux.register_route("/ctx/{id:uint8}", lambda request: str(mux.variable_by_name("id", get_request())))
        async with TestClient(mux) as client:
            response = await client.get("/ctx/7")
        assert response.text == "7"


class TestLifespan:
    async def test_startup_logged(self, mux: Mux, caplog: pytest.LogCaptureFixture) -> None:
        mux.register_route("/a", lambda request: "a")
        with caplog.at_level("INFO", logger="perch.mux"):
            async with TestClient(mux):
                pass
        assert "Serving 1 routes" in caplog.text
