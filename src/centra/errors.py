"""Centra exception hierarchy.

Only configuration and usage mistakes are raised here. The errors that
flow *through* a ``Mux`` belong to the application and are never raised
by centra itself.
"""


class CentraError(Exception):
    """Base for all centra-specific errors."""


class ConfigurationError(CentraError):
    """Raised when a ``Mux`` is configured with invalid arguments.

    A ``None`` sentinel or a missing handler is a programming error, so
    it surfaces at registration time instead of at request time.
    """


class UnboundMuxError(CentraError, LookupError):
    """Raised when ``centra.error()`` runs with no ``Mux`` bound.

    The binder (``Mux.handler()`` or the ``Mux`` middleware) was never
    applied upstream of the calling code.
    """

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            detail
            or "No Mux is bound to the current request. "
            "Wrap the handler with mux.handler(...) or add the mux as middleware."
        )
