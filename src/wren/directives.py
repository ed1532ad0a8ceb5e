"""Layout directive extraction.

A page selects its layout with a marker embedded in its own source::

    {# use mobilelayout #}
    {% block content %}...{% end %}

The default marker reuses kida's comment delimiters, so the directive is
inert even if it ever reached the engine.  The builder strips every
directive before compiling regardless, which keeps custom marker syntaxes
inert as well.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DirectiveSyntax:
    """Delimiters and keyword of the layout directive.

    Attributes:
        open: Opening marker (kida comment opener by default).
        close: Closing marker.
        keyword: Word that introduces the layout name.
    """

    open: str = "{#"
    close: str = "#}"
    keyword: str = "use"
    pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        opener, closer = re.escape(self.open), re.escape(self.close)
        # The bareword never contains either marker, so a directive cannot
        # run into the next comment
        regex = (
            rf"{opener}\s*{re.escape(self.keyword)}\s+"
            rf"((?:(?!{closer}|{opener})\S)+)\s*{closer}"
        )
        object.__setattr__(self, "pattern", re.compile(regex))


DEFAULT_SYNTAX = DirectiveSyntax()


@dataclass(frozen=True, slots=True)
class Directive:
    """The first layout directive found in a page.

    Attributes:
        layout: Logical name of the requested layout.
        start: Offset of the directive in the page source.
        end: Offset just past the directive.
    """

    layout: str
    start: int
    end: int


def extract_directive(source: str, syntax: DirectiveSyntax = DEFAULT_SYNTAX) -> Directive | None:
    """Return the first layout directive in *source*, or ``None``.

    Later directives are ignored.  The layout name is not checked against
    the discovered layouts here; the builder does that.
    """
    match = syntax.pattern.search(source)
    if match is None:
        return None
    return Directive(layout=match.group(1), start=match.start(), end=match.end())


def strip_directives(source: str, syntax: DirectiveSyntax = DEFAULT_SYNTAX) -> str:
    """Remove every directive from *source*.

    Each directive is replaced by the newlines it spanned so engine error
    line numbers still point at the right line of the original file.
    """
    return syntax.pattern.sub(lambda m: "\n" * m.group(0).count("\n"), source)
