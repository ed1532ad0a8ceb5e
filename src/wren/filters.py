"""Built-in filters available to every page.

Registered on each unit's environment ahead of ``LoaderConfig.filters``,
so an application filter with the same name wins.
"""

import html
from collections.abc import Sized
from typing import Any
from urllib.parse import quote, urlencode

from kida.template import Markup
from kida.utils.html import safe_url


def attr(value: Any, name: str) -> str | Markup:
    """Render `` name="value"`` when *value* is truthy, else nothing.

    ``True`` renders a bare boolean attribute::

        <input{{ locked | attr("disabled") }}>   ->  <input disabled>
        <a{{ css | attr("class") }}>             ->  <a class="active">
    """
    if not value:
        return ""
    if value is True:
        return Markup(f" {name}")
    return Markup(f' {name}="{html.escape(str(value))}"')


def qs(base: str, **params: Any) -> str:
    """Append non-empty query parameters to *base*.

    ``{{ "/users" | qs(page=2, q=search) }}`` gives ``/users?page=2&q=ann``.
    """
    kept = {key: str(value) for key, value in params.items() if value}
    if not kept:
        return base
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{urlencode(kept, quote_via=quote)}"


def pluralize(count: int | Sized, singular: str, plural: str | None = None) -> str:
    """``3 pages``, ``1 page``.  Collections are counted with ``len()``."""
    if isinstance(count, Sized):
        count = len(count)
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def url(value: Any, fallback: str = "#") -> str:
    """Replace unsafe link targets (``javascript:`` and friends) with *fallback*."""
    return safe_url(str(value), fallback=fallback)


BUILTIN_FILTERS: dict[str, Any] = {
    "attr": attr,
    "pluralize": pluralize,
    "qs": qs,
    "url": url,
}
