"""Request-scoped Mux binding via ContextVar.

Provides:
- ``get_mux()``: the ``Mux`` bound to the current request, or ``None``.
- ``require_mux()``: the bound ``Mux``, raising ``UnboundMuxError``.
- ``bind()``: context manager that binds a ``Mux`` for a block.

The binding is set by ``Mux.handler()`` (or the ``Mux`` middleware)
and reset when the downstream handler returns, so it lives exactly as
long as the request does.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading (3.14t). No locks needed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from centra.errors import UnboundMuxError

if TYPE_CHECKING:
    from centra.mux import Mux

_mux_var: ContextVar[Mux] = ContextVar("centra_mux")


def get_mux() -> Mux | None:
    """Return the ``Mux`` bound to the current request, or ``None``."""
    return _mux_var.get(None)


def require_mux() -> Mux:
    """Return the bound ``Mux``.

    Raises ``UnboundMuxError`` if called outside a bound request.
    """
    mux = _mux_var.get(None)
    if mux is None:
        raise UnboundMuxError
    return mux


@contextmanager
def bind(mux: Mux) -> Iterator[Mux]:
    """Bind *mux* for the duration of the ``with`` block.

    Nested bindings shadow outer ones; the outer binding is restored on
    exit::

        with bind(api_mux):
            with bind(admin_mux):
                assert get_mux() is admin_mux
            assert get_mux() is api_mux
    """
    token = _mux_var.set(mux)
    try:
        yield mux
    finally:
        _mux_var.reset(token)
