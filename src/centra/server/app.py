"""ASGI application — runs an endpoint behind a middleware chain.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through middleware to the endpoint,
and sends the Response back through ASGI send().

Usage::

    mux = Mux()
    mux.handle(ErrNotFound, not_found)

    async def endpoint(request: Request) -> Response:
        writer = ResponseWriter()
        try:
            return Response(render(load(request)))
        except Exception as exc:
            centra.error(writer, request, exc)
            return writer.to_response()

    app = App(endpoint, middleware=[mux])
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from centra._internal.asgi import Receive, Scope, Send
from centra._internal.invoke import invoke
from centra.http.request import Request
from centra.http.response import Response
from centra.middleware.protocol import Next
from centra.server.sender import send_response

logger = logging.getLogger("centra.server")


class App:
    """ASGI 3.0 callable wrapping a single endpoint.

    The endpoint may be ``def`` or ``async def`` and must return a
    ``Response``. Middleware run outermost first, in the order given.
    """

    __slots__ = ("_endpoint", "_middleware")

    def __init__(
        self,
        endpoint: Callable[[Request], Any],
        *,
        middleware: Iterable[Callable[..., Any]] = (),
    ) -> None:
        self._endpoint = endpoint
        self._middleware: tuple[Callable[..., Any], ...] = tuple(middleware)

    def add_middleware(self, middleware: Callable[..., Any]) -> None:
        """Append a middleware, innermost so far."""
        self._middleware = (*self._middleware, middleware)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        response = await self.handle(request)
        await send_response(response, send)

    async def handle(self, request: Request) -> Response:
        """Process a single request through the full pipeline."""
        try:
            # Innermost handler: the endpoint itself
            async def dispatch(req: Request) -> Response:
                return await invoke(self._endpoint, req)

            handler: Next = dispatch
            for mw in reversed(self._middleware):
                outer = handler

                async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
                    return await _mw(req, _next)

                handler = make_next

            response = await handler(request)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            return Response(body="Internal Server Error", status=500, content_type="text/plain")

        if not isinstance(response, Response):
            logger.error(
                "%s %s: endpoint returned %s, not Response",
                request.method,
                request.path,
                type(response).__name__,
            )
            return Response(body="Internal Server Error", status=500, content_type="text/plain")
        return response

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge the ASGI lifespan protocol. There is nothing to start."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                logger.debug("lifespan startup")
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                logger.debug("lifespan shutdown")
                await send({"type": "lifespan.shutdown.complete"})
                return
