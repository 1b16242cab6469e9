"""Mutable response sink handed to error handlers.

Error handlers have the shape ``handler(writer, request, err) -> None``
and produce the whole response through the writer: set headers, write
the status once, write body bytes. The endpoint turns the result into
an immutable ``Response`` with ``to_response()``::

    async def show_user(request: Request) -> Response:
        writer = ResponseWriter()
        try:
            user = load_user(request)
        except Exception as exc:
            centra.error(writer, request, exc)
            return writer.to_response()
        return Response(f"<h1>{user.name}</h1>")
"""

import logging

from centra.http.headers import MutableHeaders
from centra.http.response import Response

logger = logging.getLogger("centra.http")

DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"


class ResponseWriter:
    """Collects status, headers and body written by an error handler.

    The status is write-once: the first ``write_header()`` wins, as does
    the implicit 200 from a ``write()`` before any status was set.
    """

    __slots__ = ("_body", "_status", "headers")

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self._status: int | None = None
        self._body = bytearray()

    def write_header(self, status: int) -> None:
        """Set the response status. Only the first call has any effect."""
        if self._status is not None:
            logger.debug("superfluous write_header(%d), status already %d", status, self._status)
            return
        self._status = status

    def write(self, data: str | bytes) -> int:
        """Append to the body and return the number of bytes written."""
        if self._status is None:
            self._status = 200
        chunk = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._body.extend(chunk)
        return len(chunk)

    @property
    def status(self) -> int | None:
        """The written status, or ``None`` if nothing was written yet."""
        return self._status

    @property
    def body(self) -> bytes:
        """Body bytes written so far."""
        return bytes(self._body)

    @property
    def written(self) -> bool:
        """True once a status or any body bytes were written."""
        return self._status is not None

    def to_response(self) -> Response:
        """Freeze what was written into a ``Response``.

        ``Content-Type`` becomes the response content type; ``Content-Length``
        is dropped because the sender computes it from the body.
        """
        content_type = self.headers.get("content-type", DEFAULT_CONTENT_TYPE)
        extra = tuple(
            (name, value)
            for name, value in self.headers.items()
            if name.lower() not in ("content-type", "content-length")
        )
        return Response(
            body=self.body,
            status=self._status if self._status is not None else 200,
            content_type=content_type,
            headers=extra,
        )

    def __repr__(self) -> str:
        return f"<ResponseWriter status={self._status!r} bytes={len(self._body)}>"
