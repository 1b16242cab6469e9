"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

A ``Mux`` is itself a middleware: it binds itself to the request
context before calling ``next``.
"""

from centra.middleware.protocol import Middleware, Next

__all__ = [
    "Middleware",
    "Next",
]
