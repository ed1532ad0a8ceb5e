"""A finished page render, detached from the sink that collected it."""

from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """Status, headers and body of a rendered page.

    ``str`` bodies are encoded to UTF-8 on construction, so ``body`` is
    always bytes.  Header names compare case-insensitively; ``with_header``
    replaces an existing header of the same name, as sinks do.
    """

    body: bytes = b""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    def with_status(self, status: int) -> "Response":
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> "Response":
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> "Response":
        lowered = name.lower()
        kept = tuple((n, v) for n, v in self.headers if n.lower() != lowered)
        return replace(self, headers=(*kept, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        response = self
        for name, value in headers.items():
            response = response.with_header(name, value)
        return response

    def header(self, name: str) -> str | None:
        """Value of header *name*, or ``None``."""
        lowered = name.lower()
        return next((v for n, v in self.headers if n.lower() == lowered), None)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    @property
    def content_length(self) -> int:
        return len(self.body)
