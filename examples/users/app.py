"""Users — routing business errors to error pages with centra.

Demonstrates sentinel errors, wrapped causes (``raise ... from``),
exception-class sentinels, a kida-rendered error page, and the default
500 page for anything unregistered.

Run:
    uvicorn app:app
"""

import centra
from centra import App, Mux, MuxConfig, Request, Response, ResponseWriter, template_handler

ErrUserNotFound = LookupError("user not found")

USERS = {"1": "ada", "2": "grace"}

mux = Mux(MuxConfig(debug=True))

mux.handle(
    ErrUserNotFound,
    template_handler("<h1>No such user</h1><p>{{ request.path }}</p>", status=404),
)


@mux.handle(PermissionError)
def forbidden(writer: ResponseWriter, request: Request, err: BaseException | None) -> None:
    writer.headers.set("Content-Type", "text/plain")
    writer.write_header(403)
    writer.write("Forbidden")


def find_user(user_id: str) -> str:
    try:
        return USERS[user_id]
    except KeyError:
        raise ErrUserNotFound from None


def load_profile(path: str) -> str:
    user_id = path.rstrip("/").rsplit("/", 1)[-1]
    if user_id == "0":
        raise PermissionError("root profile is private")
    try:
        return find_user(user_id)
    except LookupError as exc:
        raise RuntimeError(f"loading profile {user_id!r} failed") from exc


async def endpoint(request: Request) -> Response:
    if request.path == "/boom":
        writer = ResponseWriter()
        centra.error(writer, request, ZeroDivisionError("unregistered"))
        return writer.to_response()

    writer = ResponseWriter()
    try:
        name = load_profile(request.path)
    except Exception as exc:
        centra.error(writer, request, exc)
        return writer.to_response()
    return Response(f"<h1>{name}</h1>")


app = App(endpoint, middleware=[mux])
