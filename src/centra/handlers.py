"""Built-in error handlers."""

from centra.http.request import Request
from centra.http.writer import ResponseWriter

INTERNAL_SERVER_ERROR_BODY = "<h1>Internal Server Error</h1>"


def default_unknown_handler(
    writer: ResponseWriter,
    request: Request,  # noqa: ARG001
    err: BaseException | None,  # noqa: ARG001
) -> None:
    """Default handler for unknown errors: a bare 500 HTML page.

    Writes exactly::

        500
        Content-Type: text/html
        Content-Length: 30

        <h1>Internal Server Error</h1>
    """
    body = INTERNAL_SERVER_ERROR_BODY.encode("utf-8")

    writer.headers.set("Content-Type", "text/html")
    writer.headers.set("Content-Length", str(len(body)))

    writer.write_header(500)

    writer.write(body)
