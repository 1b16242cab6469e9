"""Error multiplexer — routes errors to handlers registered per sentinel.

A ``Mux`` holds an ordered table of ``(sentinel, handler)`` entries and
one unknown-error handler. ``dispatch()`` walks the table newest-first
and runs the first handler whose sentinel appears in the error's
wrap-chain; when nothing matches, the unknown handler runs.

Usage::

    ErrNotFound = LookupError("not found")

    mux = Mux()

    @mux.handle(ErrNotFound)
    def not_found(writer, request, err):
        writer.write_header(404)
        writer.write("<h1>Not Found</h1>")

    app = App(endpoint, middleware=[mux])

    # Anywhere downstream of the middleware:
    centra.error(writer, request, exc)

Free-threading safety:
    - HandlerEntry is a frozen dataclass (immutable)
    - The entry table is a tuple, replaced (never mutated) under a Lock
    - Dispatch copies the table reference under the Lock, then matches
      and runs the handler with the Lock released, so handlers may call
      back into ``handle()``
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, overload

from centra._internal.types import ErrorHandler
from centra.chain import matches, stop_ids, walk
from centra.config import MuxConfig
from centra.context import bind, require_mux
from centra.errors import ConfigurationError
from centra.handlers import default_unknown_handler
from centra.http.request import Request
from centra.http.response import Response
from centra.http.writer import ResponseWriter
from centra.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class HandlerEntry:
    """A registered ``(sentinel, handler)`` pair.

    ``sentinel`` is ``None`` only for the unknown handler in slot 0.
    """

    sentinel: Any
    handler: ErrorHandler


_MISSING: Any = object()


def _check_handler(handler: Any) -> None:
    if handler is None:
        msg = "centra: handler must not be None"
        raise ConfigurationError(msg)
    if not callable(handler):
        msg = f"centra: handler must be callable, got {type(handler).__name__}"
        raise ConfigurationError(msg)


class Mux:
    """Multiplexes ``centra.error()`` calls to registered error handlers.

    Slot 0 of the table is the unknown handler, initially
    ``default_unknown_handler``. Slots 1.. are specific handlers in
    registration order. A sentinel may be registered more than once;
    the newest registration wins.
    """

    __slots__ = ("_config", "_entries", "_lock", "_logger", "_stops")

    def __init__(self, config: MuxConfig | None = None) -> None:
        self._lock = threading.Lock()
        self._entries: tuple[HandlerEntry, ...] = (HandlerEntry(None, default_unknown_handler),)
        self._stops: frozenset[int] = frozenset()
        self._config = config or MuxConfig()
        self._logger = logging.getLogger(self._config.logger)

    # -- Registration --

    @overload
    def handle(self, sentinel: Any) -> Callable[[ErrorHandler], ErrorHandler]: ...

    @overload
    def handle(self, sentinel: Any, handler: ErrorHandler) -> ErrorHandler: ...

    def handle(self, sentinel: Any, handler: Any = _MISSING) -> Any:
        """Register *handler* for errors whose wrap-chain contains *sentinel*.

        *sentinel* is an exception instance (matched by identity or
        equality) or an exception class (matched by ``isinstance``).
        Without *handler*, returns a decorator::

            @mux.handle(PermissionError)
            def forbidden(writer, request, err):
                writer.write_header(403)

        Raises ``ConfigurationError`` for a ``None`` sentinel or handler.
        """
        if sentinel is None:
            msg = "centra: err must not be None"
            raise ConfigurationError(msg)

        if handler is _MISSING:

            def decorator(func: ErrorHandler) -> ErrorHandler:
                self._append(sentinel, func)
                return func

            return decorator

        self._append(sentinel, handler)
        return handler

    def _append(self, sentinel: Any, handler: Any) -> None:
        _check_handler(handler)
        entry = HandlerEntry(sentinel, handler)
        with self._lock:
            self._entries = (*self._entries, entry)
            self._stops = self._stops | stop_ids((sentinel,))

    def set_unknown_handler(self, handler: ErrorHandler) -> None:
        """Replace the handler for errors no registered sentinel matches.

        Raises ``ConfigurationError`` if *handler* is ``None``.
        """
        _check_handler(handler)
        with self._lock:
            self._entries = (HandlerEntry(None, handler), *self._entries[1:])

    def unknown(self, handler: ErrorHandler) -> ErrorHandler:
        """Decorator form of ``set_unknown_handler()``."""
        self.set_unknown_handler(handler)
        return handler

    def get_unknown_handler(self) -> ErrorHandler:
        """Return the current unknown handler."""
        with self._lock:
            return self._entries[0].handler

    @property
    def unknown_handler(self) -> ErrorHandler:
        """The current unknown handler."""
        return self.get_unknown_handler()

    def configure(self, config: MuxConfig | None) -> None:
        """Replace the configuration. ``None`` restores the defaults."""
        config = config or MuxConfig()
        with self._lock:
            self._config = config
            self._logger = logging.getLogger(config.logger)

    @property
    def config(self) -> MuxConfig:
        """The active configuration."""
        return self._config

    @property
    def entries(self) -> tuple[HandlerEntry, ...]:
        """Registered entries in registration order, unknown handler excluded."""
        with self._lock:
            return self._entries[1:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries) - 1

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"<Mux handlers={len(self)}>"

    # -- Dispatch --

    def lookup(self, err: BaseException | None) -> ErrorHandler:
        """Return the handler ``dispatch()`` would run for *err*."""
        handler, _ = self._select(err)
        return handler

    def _select(self, err: BaseException | None) -> tuple[ErrorHandler, bool]:
        with self._lock:
            entries = self._entries
            stops = self._stops
        if err is None:
            return entries[0].handler, False
        # Registered instance sentinels end the chain; their own causes
        # belong to whichever request raised them last.
        links = list(walk(err, stops))
        for entry in reversed(entries[1:]):
            if any(matches(link, entry.sentinel) for link in links):
                return entry.handler, True
        return entries[0].handler, False

    def dispatch(
        self,
        writer: ResponseWriter,
        request: Request,
        err: BaseException | None,
    ) -> None:
        """Run exactly one handler for *err*.

        ``None`` goes straight to the unknown handler. Otherwise the
        newest entry whose sentinel is in *err*'s wrap-chain wins, and
        the unknown handler runs when none is. The handler always
        receives the original *err*.
        """
        handler, found = self._select(err)
        self._log(err, found)
        handler(writer, request, err)

    def _log(self, err: BaseException | None, found: bool) -> None:
        if not self._config.debug:
            return

        if err is None:
            self._logger.debug("Unknown handler has been called, err is None")
            return

        if not found:
            self._logger.debug("Unknown handler has been called for the following error %r", err)
            return

        self._logger.debug("Handler for error %r has been called", err)

    # -- Request binding --

    def handler(self, next: Next) -> Next:
        """Wrap *next* so this mux is bound while it handles a request.

        The request object passes through untouched; the binding lives in
        a ContextVar and is reset when *next* returns.
        """

        async def bound(request: Request) -> Response:
            with bind(self):
                return await next(request)

        return bound

    async def __call__(self, request: Request, next: Next) -> Response:
        """Middleware form of ``handler()``."""
        with bind(self):
            return await next(request)


def error(writer: ResponseWriter, request: Request, err: BaseException | None) -> None:
    """Dispatch *err* through the ``Mux`` bound to the current request.

    Raises ``UnboundMuxError`` if no ``Mux`` was bound upstream, so a
    pipeline missing its binder fails loudly instead of rendering the
    default 500 page.
    """
    require_mux().dispatch(writer, request, err)
