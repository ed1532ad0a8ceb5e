"""Per-page template set compilation.

Each page gets its own kida ``Environment`` over an in-memory
``DictLoader`` holding exactly the fragments the page may use:

1. its layout, when the page declares ``{# use name #}``
2. every include, under its bare logical name
3. the page itself

kida composes templates through ``{% extends %}``: the child names its
parent and the parent's execution drives rendering, filling its
``{% block %}`` slots from the child.  The builder therefore keeps the page
as the entry template and, when a layout is declared, prefixes the page
source with ``{% extends "layouts/<name>" %}``.  The directive itself is
stripped from every fragment before compilation.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from kida import DictLoader, Environment

from wren.config import LoaderConfig
from wren.diagnostics import is_engine_error
from wren.directives import extract_directive, strip_directives
from wren.discovery import TemplateFile, TemplateGroups
from wren.errors import LoadError
from wren.filters import BUILTIN_FILTERS

if TYPE_CHECKING:
    from kida.template import Template

logger = logging.getLogger("wren.loader")


@dataclass(frozen=True, slots=True)
class CompiledUnit:
    """The render-ready fragment set for one page.

    Attributes:
        name: The page's logical name.
        page: The page file.
        layout: The layout selected by the page's directive, if any.
        includes: Every include, sorted by logical name.
        sources: Fragment key to compiled source, in fragment order
            (layout, includes, page).
        environment: The kida environment owning this unit's templates.
        template: The compiled entry template.
    """

    name: str
    page: TemplateFile
    layout: TemplateFile | None
    includes: tuple[TemplateFile, ...]
    sources: Mapping[str, str]
    environment: Environment = field(repr=False, compare=False)
    template: Template = field(repr=False, compare=False)

    @property
    def fragments(self) -> tuple[str, ...]:
        """Fragment keys in compilation order."""
        return tuple(self.sources)

    def render(self, context: dict[str, Any]) -> str:
        """Execute the entry template against *context*."""
        return self.template.render(context)


def create_environment(sources: Mapping[str, str], config: LoaderConfig) -> Environment:
    """Create a kida Environment over an in-memory fragment set.

    Built-in filters are registered first so user filters may override
    them.  ``auto_reload`` is always off: units never change after load.
    """
    env = Environment(
        loader=DictLoader(dict(sources)),
        autoescape=config.autoescape,
        auto_reload=False,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    env.update_filters(BUILTIN_FILTERS)

    if config.filters:
        env.update_filters(dict(config.filters))

    for name, value in config.globals.items():
        env.add_global(name, value)

    return env


def collect_sources(
    page: TemplateFile,
    groups: TemplateGroups,
    config: LoaderConfig,
) -> tuple[TemplateFile | None, dict[str, str]]:
    """Resolve a page's layout and assemble its ordered fragment sources.

    Returns:
        The resolved layout (or ``None``) and a dict of fragment key to
        source text, ordered layout, includes, page.

    Raises:
        LoadError: The directive names an unknown layout, a fragment key
            collides, or a file cannot be read.
    """
    syntax = config.directive
    page_source = page.read(config.encoding)
    directive = extract_directive(page_source, syntax)

    layout: TemplateFile | None = None
    if directive is not None:
        layout = groups.layouts.get(directive.layout)
        if layout is None:
            raise LoadError(
                f"Page {page.logical_name!r} uses unknown layout {directive.layout!r}",
                path=page.path,
                page=page.logical_name,
            )

    sources: dict[str, str] = {}
    if layout is not None:
        sources[layout.template_key] = strip_directives(layout.read(config.encoding), syntax)

    for key in sorted(groups.includes):
        include = groups.includes[key]
        if include.template_key in sources or include.template_key == page.template_key:
            raise LoadError(
                f"Include {include.logical_name!r} collides with a page or layout "
                f"name in page {page.logical_name!r}",
                path=include.path,
                page=page.logical_name,
            )
        sources[include.template_key] = strip_directives(include.read(config.encoding), syntax)

    entry = strip_directives(page_source, syntax)
    if layout is not None:
        # No newline after the tag: line numbers must match the page file
        entry = f"{{% extends {json.dumps(layout.template_key)} %}}{entry}"
    sources[page.template_key] = entry

    return layout, sources


def build_unit(page: TemplateFile, groups: TemplateGroups, config: LoaderConfig) -> CompiledUnit:
    """Compile one page with its includes and layout into a ``CompiledUnit``.

    Every fragment is compiled eagerly so syntax errors fail the load
    instead of the first request.
    """
    layout, sources = collect_sources(page, groups, config)
    env = create_environment(sources, config)

    for key in sources:
        try:
            env.get_template(key)
        except Exception as exc:
            if not is_engine_error(exc):
                raise
            raise LoadError(
                f"Cannot compile {key!r} for page {page.logical_name!r}: {exc}",
                path=_path_for_key(key, page, layout, groups),
                page=page.logical_name,
            ) from exc

    unit = CompiledUnit(
        name=page.logical_name,
        page=page,
        layout=layout,
        includes=tuple(groups.includes[key] for key in sorted(groups.includes)),
        sources=MappingProxyType(sources),
        environment=env,
        template=env.get_template(page.template_key),
    )
    logger.debug(
        "Compiled page %s (layout=%s, fragments=%d)",
        unit.name,
        layout.logical_name if layout is not None else "-",
        len(sources),
    )
    return unit


def _path_for_key(
    key: str,
    page: TemplateFile,
    layout: TemplateFile | None,
    groups: TemplateGroups,
) -> str | None:
    if key == page.template_key:
        return str(page.path)
    if layout is not None and key == layout.template_key:
        return str(layout.path)
    include = groups.includes.get(key)
    return str(include.path) if include is not None else None
