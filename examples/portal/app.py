"""Portal: a bare ASGI app serving wren pages.

Demonstrates loading a template tree once at startup and serving each
request with send_page, HEAD included. Unknown paths get a 404 and
render failures a 500; a failed render never leaks partial HTML.

Run with any ASGI server pointed at ``app``. ``python app.py`` lists the
loaded pages.
"""

from dataclasses import dataclass
from pathlib import Path

from wren import ExecutionError, Response, load
from wren.diagnostics import log_error
from wren.transport import send_page, send_response

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True, slots=True)
class User:
    name: str
    homepage: str


class _Unreachable:
    """A user source that fails partway through the page."""

    def __iter__(self):
        raise ConnectionError("user store unreachable")


USERS = (
    User("Ada", "https://example.com/ada"),
    User("Grace", "/people/grace"),
    User("Mallory", "javascript:alert(1)"),
)

ROUTES: dict[str, tuple[str, dict]] = {
    "/": ("index", {"title": "Home", "visitor": "guest"}),
    "/about": ("about", {"title": "About"}),
    "/users": ("users/list", {"title": "Users", "users": USERS}),
    "/broken": ("users/list", {"title": "Broken", "users": _Unreachable()}),
}

registry = load(TEMPLATES_DIR)


def _plain(text: str, status: int) -> Response:
    return Response(text, status=status, content_type="text/plain; charset=utf-8")


async def app(scope, receive, send) -> None:
    if scope["type"] != "http":
        return

    head = scope.get("method") == "HEAD"
    route = ROUTES.get(scope["path"])
    if route is None:
        await send_response(_plain("Not Found", 404), send, head=head)
        return

    name, data = route
    try:
        await send_page(registry, send, name, data, head=head)
    except ExecutionError as exc:
        log_error(exc, name)
        await send_response(_plain("Internal Server Error", 500), send, head=head)


if __name__ == "__main__":
    for page in registry.names:
        print(page)
