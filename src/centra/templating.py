"""Error pages rendered from kida templates.

``template_handler()`` compiles a template once and returns an error
handler that renders it for every dispatch::

    mux.handle(
        ErrNotFound,
        template_handler("<h1>{{ status }}</h1><p>{{ error }}</p>", status=404),
    )

The template sees ``status``, ``error`` (the original error passed to
``centra.error()``) and ``request``.
"""

from kida import Environment

from centra._internal.types import ErrorHandler
from centra.http.request import Request
from centra.http.writer import ResponseWriter


def _minimal_kida_env() -> Environment:
    """Bare kida Environment for inline error templates."""
    return Environment(autoescape=True)


def template_handler(
    source: str,
    *,
    status: int = 500,
    content_type: str = "text/html; charset=utf-8",
    env: Environment | None = None,
) -> ErrorHandler:
    """Build an error handler that renders *source* with kida.

    Template syntax errors surface here, at registration time.
    """
    template = (env or _minimal_kida_env()).from_string(source)

    def render(writer: ResponseWriter, request: Request, err: BaseException | None) -> None:
        html = template.render({"status": status, "error": err, "request": request})
        body = html.encode("utf-8")

        writer.headers.set("Content-Type", content_type)
        writer.headers.set("Content-Length", str(len(body)))
        writer.write_header(status)
        writer.write(body)

    return render
