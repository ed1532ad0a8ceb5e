"""Wren exception hierarchy.

Shared by discovery, the builder, the registry, and the renderer so
every module raises and catches the same types.
"""

from pathlib import Path


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a ``LoaderConfig`` value is invalid.

    Checked once at the start of ``load()``, before any file is read.
    """


class LoadError(WrenError):
    """The template tree could not be loaded.

    Always fatal to ``load()``: a registry is either fully built or not
    produced at all.  ``path`` and ``page`` identify the offending file or
    page when known.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | Path | None = None,
        page: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.page = page


class NotFoundError(WrenError, LookupError):
    """``render()`` or ``lookup()`` was called with an unregistered page name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Page not found: {name!r}")
        self.name = name


class ExecutionError(WrenError):
    """The template engine failed while rendering a page.

    Raised from the engine exception (available as ``__cause__``).  Nothing
    was written to the sink.
    """

    def __init__(self, name: str, detail: str = "") -> None:
        message = f"Failed to render page {name!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.name = name
        self.detail = detail
