"""Output sinks: where rendered pages are written.

A sink is any object matching the :class:`Sink` protocol.  No base class
required: transports adapt their own response objects by providing the
four methods.

The renderer only touches a sink after a page rendered successfully, and
then always in the same order: headers, status, body.
"""

from typing import BinaryIO, Protocol

from wren.response import Response


class Sink(Protocol):
    """Protocol for render output targets."""

    def set_header(self, name: str, value: str) -> None: ...

    def has_header(self, name: str) -> bool: ...

    def write_status(self, status: int) -> None: ...

    def write(self, data: bytes) -> object: ...


class _HeaderMixin:
    """Case-insensitive header storage shared by the bundled sinks."""

    __slots__ = ()

    _headers: list[tuple[str, str]]

    def set_header(self, name: str, value: str) -> None:
        lowered = name.lower()
        self._headers = [(n, v) for n, v in self._headers if n.lower() != lowered]
        self._headers.append((name, value))

    def has_header(self, name: str) -> bool:
        lowered = name.lower()
        return any(n.lower() == lowered for n, _ in self._headers)

    def get_header(self, name: str) -> str | None:
        lowered = name.lower()
        for n, v in self._headers:
            if n.lower() == lowered:
                return v
        return None

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._headers)


class ResponseSink(_HeaderMixin):
    """Collects status, headers, and body in memory.

    Convert the result with :meth:`to_response`::

        sink = ResponseSink()
        registry.render(sink, "home", {"title": "Home"})
        response = sink.to_response()
    """

    __slots__ = ("_body", "_headers", "_status")

    def __init__(self) -> None:
        self._headers = []
        self._status: int | None = None
        self._body = bytearray()

    @property
    def status(self) -> int | None:
        """Status code written, or ``None`` if nothing was written yet."""
        return self._status

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    @property
    def touched(self) -> bool:
        """True once a status, header, or body byte has been written."""
        return self._status is not None or bool(self._headers) or bool(self._body)

    def write_status(self, status: int) -> None:
        if self._status is not None:
            raise RuntimeError(f"Status already written ({self._status})")
        self._status = status

    def write(self, data: bytes) -> int:
        if self._status is None:
            # Body before status implies 200, as HTTP servers do
            self._status = 200
        self._body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        """Build an immutable :class:`Response` from what was written."""
        content_type = self.get_header("Content-Type") or "text/html; charset=utf-8"
        headers = tuple((n, v) for n, v in self._headers if n.lower() != "content-type")
        return Response(
            body=bytes(self._body),
            status=self._status if self._status is not None else 200,
            content_type=content_type,
            headers=headers,
        )


class StreamSink(_HeaderMixin):
    """Writes the body to a binary stream, recording status and headers.

    Useful for CLI output and static export::

        with open("out/index.html", "wb") as fh:
            registry.render(StreamSink(fh), "index")
    """

    __slots__ = ("_headers", "_status", "stream")

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self._headers = []
        self._status: int | None = None

    @property
    def status(self) -> int | None:
        return self._status

    def write_status(self, status: int) -> None:
        self._status = status

    def write(self, data: bytes) -> int:
        if self._status is None:
            self._status = 200
        return self.stream.write(data)
