"""Centra — request-scoped error dispatch for ASGI handlers.

Register handlers per sentinel error, bind the mux to each request,
and route any error to the most specific handler from anywhere
downstream.

Basic usage::

    import centra

    ErrNotFound = LookupError("not found")

    mux = centra.Mux()

    @mux.handle(ErrNotFound)
    def not_found(writer, request, err):
        writer.write_header(404)
        writer.write("<h1>Not Found</h1>")

    async def endpoint(request):
        writer = centra.ResponseWriter()
        try:
            ...
        except Exception as exc:
            centra.error(writer, request, exc)
        return writer.to_response()

    app = centra.App(endpoint, middleware=[mux])

Sentinel instances are shared across requests, and each ``raise``
records ``__context__`` and extends ``__traceback__`` on the same
object. Matching never follows past a registered sentinel instance.
``raise ErrNotFound from None`` suppresses the context; raising a fresh
wrapper ``from ErrNotFound`` also leaves the shared traceback alone.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "CentraError",
    "ConfigurationError",
    "HandlerEntry",
    "Middleware",
    "Mux",
    "MuxConfig",
    "Next",
    "Request",
    "Response",
    "ResponseWriter",
    "UnboundMuxError",
    "default_unknown_handler",
    "error",
    "get_mux",
    "is_error",
    "template_handler",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import centra`` fast and leaves kida unimported until a
    template handler is actually built.
    """
    if name in ("Mux", "HandlerEntry", "error"):
        from centra import mux as _mux

        return getattr(_mux, name)

    if name == "MuxConfig":
        from centra.config import MuxConfig

        return MuxConfig

    if name == "App":
        from centra.server.app import App

        return App

    if name in ("Request", "Response", "ResponseWriter"):
        from centra import http as _http

        return getattr(_http, name)

    if name in ("Middleware", "Next"):
        from centra.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "get_mux":
        from centra.context import get_mux

        return get_mux

    if name == "is_error":
        from centra.chain import is_error

        return is_error

    if name == "default_unknown_handler":
        from centra.handlers import default_unknown_handler

        return default_unknown_handler

    if name == "template_handler":
        from centra.templating import template_handler

        return template_handler

    if name in ("CentraError", "ConfigurationError", "UnboundMuxError"):
        from centra import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
