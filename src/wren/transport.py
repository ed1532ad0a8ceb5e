"""ASGI delivery of rendered pages.

wren ships no server.  These helpers hand a rendered page to whatever
ASGI server an application runs under::

    async def app(scope, receive, send):
        await send_page(registry, send, "home", {"title": "Home"})
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any

from wren.registry import Registry
from wren.response import Response
from wren.sinks import ResponseSink

type Send = Callable[[MutableMapping[str, Any]], Awaitable[None]]


def _status_allows_body(status: int) -> bool:
    # 1xx, 204 and 304 never carry a body
    return status >= 200 and status not in (204, 304)


def _encode_headers(response: Response, length: int) -> list[tuple[bytes, bytes]]:
    raw = [(b"content-type", response.content_type.encode("latin-1"))]
    raw.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    raw.append((b"content-length", str(length).encode("latin-1")))
    return raw


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Emit ``http.response.start`` and ``http.response.body`` for *response*.

    With ``head=True`` the headers (including ``content-length``) describe
    the full page but no body bytes are sent.
    """
    body = response.body if _status_allows_body(response.status) else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": b"" if head else body})


async def send_page(
    registry: Registry,
    send: Send,
    name: str,
    data: Any = None,
    status: int = 200,
    *,
    head: bool = False,
) -> None:
    """Render page *name* and send it over ASGI.

    Rendering finishes before the first message goes out, so a
    ``NotFoundError`` or ``ExecutionError`` leaves the connection unused
    and the caller free to send an error page instead.
    """
    sink = ResponseSink()
    registry.render(sink, name, data, status)
    await send_response(sink.to_response(), send, head=head)
