"""Buffered page rendering.

A page is always executed into a private buffer first.  kida can fail
partway through a template (an undefined variable, a filter raising on
bad data), and partial HTML must never reach the sink: on failure the
buffer is discarded and the sink is left untouched.

Each call owns its buffer and the registry is read-only, so ``render()``
is safe to call from any number of threads at once.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from wren.diagnostics import error_detail
from wren.errors import ExecutionError

if TYPE_CHECKING:
    from wren.builder import CompiledUnit
    from wren.registry import Registry
    from wren.sinks import Sink

logger = logging.getLogger("wren.render")


def build_context(data: Any, data_name: str = "data") -> dict[str, Any]:
    """Turn caller data into a template context.

    - ``None``: empty context
    - a mapping: its items become top-level variables
    - anything else: bound under *data_name*
    """
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return dict(data)
    return {data_name: data}


def _render_text(unit: CompiledUnit, data: Any, data_name: str) -> str:
    try:
        return unit.render(build_context(data, data_name))
    except Exception as exc:
        logger.debug("Render of page %s failed: %s", unit.name, error_detail(exc))
        raise ExecutionError(unit.name, str(exc)) from exc


def execute(
    unit: CompiledUnit,
    data: Any,
    *,
    data_name: str = "data",
    charset: str = "utf-8",
) -> io.BytesIO:
    """Render *unit* into a fresh buffer encoded with *charset*.

    Raises:
        ExecutionError: The engine failed, or the output holds characters
            *charset* cannot encode.  The buffer was discarded.
    """
    html = _render_text(unit, data, data_name)
    try:
        encoded = html.encode(charset)
    except UnicodeEncodeError as exc:
        raise ExecutionError(unit.name, f"output cannot be encoded as {charset}: {exc}") from exc
    buffer = io.BytesIO()
    buffer.write(encoded)
    return buffer


def render(
    registry: Registry,
    sink: Sink,
    name: str,
    data: Any = None,
    status: int = 200,
) -> None:
    """Render page *name* with *data* and copy the result to *sink*.

    On success the sink receives, in order: a ``Content-Type`` header
    (unless it already has one), *status*, then the full body.

    Raises:
        NotFoundError: *name* is not a registered page.  Sink untouched.
        ExecutionError: The engine failed mid-render.  Sink untouched.
    """
    config = registry.config
    unit = registry.lookup(name)
    buffer = execute(unit, data, data_name=config.data_name, charset=config.charset)

    if not sink.has_header("Content-Type"):
        sink.set_header("Content-Type", config.content_type)
    sink.write_status(status)
    sink.write(buffer.getvalue())


def render_to_string(registry: Registry, name: str, data: Any = None) -> str:
    """Render page *name* and return the HTML.

    Same lookup and failure semantics as :func:`render`, without a sink.
    """
    unit = registry.lookup(name)
    return _render_text(unit, data, registry.config.data_name)
