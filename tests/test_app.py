"""End-to-end tests: App + Mux middleware + centra.error over ASGI."""

import logging

import pytest

import centra
from centra.http.request import Request
from centra.http.response import Response
from centra.http.writer import ResponseWriter
from centra.mux import Mux
from centra.server.app import App
from centra.testing import TestClient

ErrNotFound = LookupError("not found")
ErrForbidden = PermissionError("forbidden")


def load(path: str) -> str:
    if path == "/missing":
        raise ErrNotFound
    if path == "/admin":
        try:
            raise ErrForbidden
        except PermissionError as exc:
            raise RuntimeError("loading admin page failed") from exc
    if path == "/crash":
        raise ZeroDivisionError("boom")
    return f"<h1>{path}</h1>"


async def endpoint(request: Request) -> Response:
    writer = ResponseWriter()
    try:
        return Response(load(request.path))
    except Exception as exc:
        centra.error(writer, request, exc)
        return writer.to_response()


def not_found(writer: ResponseWriter, request: Request, err: BaseException | None) -> None:
    writer.headers.set("Content-Type", "text/plain")
    writer.write_header(404)
    writer.write(f"no page at {request.path}")


def forbidden(writer: ResponseWriter, request: Request, err: BaseException | None) -> None:
    writer.write_header(403)
    writer.write(f"{type(err).__name__}: {err}")


def _make_app() -> App:
    mux = Mux()
    mux.handle(ErrNotFound, not_found)
    mux.handle(ErrForbidden, forbidden)
    return App(endpoint, middleware=[mux])


class TestRoundTrip:
    async def test_success_passes_through(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/home")
        assert response.status == 200
        assert response.text == "<h1>/home</h1>"

    async def test_registered_sentinel(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/missing")
        assert response.status == 404
        assert response.content_type == "text/plain"
        assert response.text == "no page at /missing"

    async def test_wrapped_sentinel_gets_original_error(self) -> None:
        async with TestClient(_make_app()) as client:
            response = await client.get("/admin")
        assert response.status == 403
        assert response.text == "RuntimeError: loading admin page failed"

    async def test_default_handler_wire_contract(self) -> None:
        """Unmatched errors produce the byte-exact default 500 page."""
        async with TestClient(_make_app()) as client:
            response = await client.get("/crash")
        assert response.status == 500
        assert response.content_type == "text/html"
        assert response.headers == (("content-length", "30"),)
        assert response.body == b"<h1>Internal Server Error</h1>"


class TestBinderMissing:
    async def test_unbound_error_becomes_logged_500(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App(endpoint)
        with caplog.at_level(logging.ERROR, logger="centra.server"):
            async with TestClient(app) as client:
                response = await client.get("/missing")
        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "500 GET /missing" in caplog.text
        assert "UnboundMuxError" in caplog.text


class TestHandlerBinder:
    async def test_wrapped_endpoint(self) -> None:
        mux = Mux()
        mux.handle(ErrNotFound, not_found)
        app = App(mux.handler(endpoint))
        async with TestClient(app) as client:
            response = await client.get("/missing")
        assert response.status == 404

    async def test_nested_muxes_innermost_wins(self) -> None:
        outer = Mux()
        outer.handle(ErrNotFound, not_found)
        inner = Mux()
        app = App(endpoint, middleware=[outer, inner])
        async with TestClient(app) as client:
            response = await client.get("/missing")
        assert response.status == 500
        assert response.body == b"<h1>Internal Server Error</h1>"


class TestApp:
    async def test_sync_endpoint(self) -> None:
        def hello(request: Request) -> Response:
            return Response("hi")

        async with TestClient(App(hello)) as client:
            response = await client.get("/")
        assert response.text == "hi"

    async def test_add_middleware_runs_inner(self) -> None:
        order: list[str] = []

        def tracer(name: str):
            async def mw(request, next):
                order.append(name)
                return await next(request)

            return mw

        app = App(lambda request: Response("ok"), middleware=[tracer("a")])
        app.add_middleware(tracer("b"))
        async with TestClient(app) as client:
            await client.get("/")
        assert order == ["a", "b"]

    async def test_non_response_is_500(self) -> None:
        async with TestClient(App(lambda request: "text")) as client:
            response = await client.get("/")
        assert response.status == 500

    async def test_request_body_available(self) -> None:
        async def echo(request: Request) -> Response:
            return Response(await request.text())

        async with TestClient(App(echo)) as client:
            response = await client.post("/", body=b"payload")
        assert response.text == "payload"

    async def test_lifespan(self) -> None:
        sent: list[dict] = []
        incoming = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])

        async def receive() -> dict:
            return next(incoming)

        async def send(message: dict) -> None:
            sent.append(message)

        await App(endpoint)({"type": "lifespan"}, receive, send)
        assert sent == [
            {"type": "lifespan.startup.complete"},
            {"type": "lifespan.shutdown.complete"},
        ]
