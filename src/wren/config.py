"""Loader configuration.

LoaderConfig is a frozen dataclass: immutable after creation and
IDE-autocompletable, with no string-key dict lookups.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from wren.directives import DirectiveSyntax
from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Template loading configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LoaderConfig(extension=".kida", strict=True)
    """

    # Discovery
    extension: str = ".html"
    encoding: str = "utf-8"
    strict: bool = False  # Files outside pages/, includes/, layouts/ raise LoadError

    # Directive marker
    directive: DirectiveSyntax = field(default_factory=DirectiveSyntax)

    # Engine
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True
    filters: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    globals: Mapping[str, Any] = field(default_factory=dict)

    # Rendering
    content_type: str = "text/html; charset=utf-8"
    data_name: str = "data"  # Context name for non-mapping render data

    @property
    def charset(self) -> str:
        """Charset declared by ``content_type``; UTF-8 when it names none.

        Rendered bodies are encoded with it, so the bytes always match the
        declared ``Content-Type``.
        """
        for param in self.content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return "utf-8"

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any field is unusable."""
        if not self.extension:
            raise ConfigurationError("extension must be a non-empty filename suffix")
        if "/" in self.extension or "\\" in self.extension:
            raise ConfigurationError(
                f"extension must not contain path separators: {self.extension!r}"
            )
        if not self.data_name.isidentifier():
            raise ConfigurationError(
                f"data_name must be a valid identifier: {self.data_name!r}"
            )
        try:
            "".encode(self.encoding)
        except LookupError as exc:
            raise ConfigurationError(f"Unknown encoding: {self.encoding!r}") from exc
        try:
            "".encode(self.charset)
        except LookupError as exc:
            raise ConfigurationError(
                f"Unknown charset in content_type: {self.content_type!r}"
            ) from exc
        for name, func in self.filters.items():
            if not callable(func):
                raise ConfigurationError(f"Filter {name!r} is not callable")
