"""Page registry: the result of loading a template tree.

``load()`` runs discovery, directive extraction, and compilation for every
page in one blocking pass.  The returned ``Registry`` is read-only: no
entry is added, removed, or replaced afterwards, which is what makes
concurrent ``render()`` calls safe without locks.

Usage::

    registry = wren.load("templates")
    registry.render(sink, "home", {"user": user})
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from wren.builder import CompiledUnit, build_unit
from wren.config import LoaderConfig
from wren.discovery import classify_templates, group_templates
from wren.errors import NotFoundError

if TYPE_CHECKING:
    from wren.sinks import Sink

logger = logging.getLogger("wren.loader")


class Registry(Mapping[str, CompiledUnit]):
    """Immutable mapping of page logical name to its ``CompiledUnit``.

    Construct through :func:`load`.
    """

    __slots__ = ("_config", "_root", "_units")

    def __init__(
        self,
        units: Mapping[str, CompiledUnit],
        *,
        root: Path,
        config: LoaderConfig,
    ) -> None:
        self._units = MappingProxyType(dict(units))
        self._root = root
        self._config = config

    @property
    def root(self) -> Path:
        """The template root this registry was loaded from."""
        return self._root

    @property
    def config(self) -> LoaderConfig:
        return self._config

    @property
    def names(self) -> tuple[str, ...]:
        """Registered page names, sorted."""
        return tuple(sorted(self._units))

    def lookup(self, name: str) -> CompiledUnit:
        """Return the compiled unit for page *name*.

        Raises:
            NotFoundError: No page with that logical name was loaded.
        """
        unit = self._units.get(name)
        if unit is None:
            raise NotFoundError(name)
        return unit

    def render(
        self,
        sink: Sink,
        name: str,
        data: Any = None,
        status: int = 200,
    ) -> None:
        """Render page *name* into *sink*. See :func:`wren.renderer.render`."""
        from wren.renderer import render

        render(self, sink, name, data, status)

    # -- Mapping protocol --

    def __getitem__(self, name: str) -> CompiledUnit:
        return self._units[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return f"Registry(root={str(self._root)!r}, pages={len(self._units)})"


def load(
    directory: str | Path,
    extension: str | None = None,
    *,
    config: LoaderConfig | None = None,
) -> Registry:
    """Load and compile every page under *directory*.

    Args:
        directory: Template root containing ``pages/``, ``includes/`` and
            ``layouts/``.
        extension: Filename suffix to load; overrides ``config.extension``.
        config: Loader configuration. Defaults to ``LoaderConfig()``.

    Returns:
        A fully built, read-only :class:`Registry`.

    Raises:
        ConfigurationError: *config* is invalid.
        LoadError: Any file or page fails to load.  No registry is returned.
    """
    if config is None:
        config = LoaderConfig()
    if extension is not None and extension != config.extension:
        config = replace(config, extension=extension)
    config.validate()

    root = Path(directory)
    files = classify_templates(root, config.extension, strict=config.strict)
    groups = group_templates(files)

    units: dict[str, CompiledUnit] = {}
    for name, page in groups.pages.items():
        units[name] = build_unit(page, groups, config)

    logger.info(
        "Loaded %d pages (%d includes, %d layouts) from %s",
        len(units),
        len(groups.includes),
        len(groups.layouts),
        root,
    )
    return Registry(units, root=root.resolve(), config=config)
