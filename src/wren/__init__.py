"""Wren: page, include and layout loading for kida templates.

Scans a template root, compiles one ready-to-render template set per page,
and renders pages through a buffer so failed renders never leak partial
HTML.

Basic usage::

    import wren

    registry = wren.load("templates")

    sink = wren.ResponseSink()
    registry.render(sink, "home", {"title": "Home"})
    response = sink.to_response()

Directory layout::

    templates/
      pages/home.html              # {# use base #} + {% block content %}
      includes/sidebar/users.html  # {% include "sidebar/users" %}
      layouts/base.html            # {% block content %}{% end %}
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "Category",
    "CompiledUnit",
    "ConfigurationError",
    "DirectiveSyntax",
    "ExecutionError",
    "LoadError",
    "LoaderConfig",
    "NotFoundError",
    "Registry",
    "Response",
    "ResponseSink",
    "Sink",
    "StreamSink",
    "TemplateFile",
    "WrenError",
    "load",
    "render",
    "render_to_string",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("Registry", "load"):
        from wren import registry as _registry

        return getattr(_registry, name)

    if name in ("render", "render_to_string"):
        from wren import renderer as _renderer

        return getattr(_renderer, name)

    if name == "LoaderConfig":
        from wren.config import LoaderConfig

        return LoaderConfig

    if name == "DirectiveSyntax":
        from wren.directives import DirectiveSyntax

        return DirectiveSyntax

    if name in ("Category", "TemplateFile"):
        from wren import discovery as _discovery

        return getattr(_discovery, name)

    if name == "CompiledUnit":
        from wren.builder import CompiledUnit

        return CompiledUnit

    if name == "Response":
        from wren.response import Response

        return Response

    if name in ("ResponseSink", "Sink", "StreamSink"):
        from wren import sinks as _sinks

        return getattr(_sinks, name)

    if name in ("ConfigurationError", "ExecutionError", "LoadError", "NotFoundError", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
