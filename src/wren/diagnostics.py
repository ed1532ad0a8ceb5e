"""Terminal output for load and render failures.

Used by the ``wren`` CLI and by applications that want a readable error
at startup instead of a raw traceback.

kida errors carry their own source excerpt (``format_compact()``); they
are shown inside a banner together with the page involved::

    -- Template Error ------------------------------------------------
    K-RUN-001: Undefined variable 'usernme' in pages/home:4

       |
    >4 | <h1>{{ usernme }}</h1>
       |

      Page: home
    -----------------------------------------------------------------

``LoadError`` without an engine cause gets a banner naming the file and
page.  Anything else is shown as a traceback whose verbosity follows the
``WREN_TRACEBACK`` environment variable: ``compact`` (default, user code
frames only), ``full``, or ``minimal`` (one line).
"""

from __future__ import annotations

import logging
import os
import sysconfig
import traceback as _traceback

from wren.errors import ExecutionError, LoadError

logger = logging.getLogger("wren.diagnostics")

_BANNER_WIDTH = 65
_STYLES = ("compact", "full", "minimal")

# Frames from these directories are library code, not the user's
_LIBRARY_DIRS = tuple(
    {
        sysconfig.get_paths()["stdlib"],
        sysconfig.get_paths()["purelib"],
        sysconfig.get_paths()["platlib"],
        os.path.dirname(os.path.abspath(__file__)),
    }
)


def is_engine_error(exc: BaseException) -> bool:
    """True for exceptions defined in the kida package."""
    return type(exc).__module__.split(".", 1)[0] == "kida"


def _engine_cause(exc: BaseException) -> BaseException | None:
    if is_engine_error(exc):
        return exc
    if isinstance(exc, (LoadError, ExecutionError)):
        cause = exc.__cause__
        if cause is not None and is_engine_error(cause):
            return cause
    return None


def error_detail(exc: BaseException) -> str:
    """Short description of *exc*; kida errors include their source excerpt."""
    if is_engine_error(exc) and hasattr(exc, "format_compact"):
        return exc.format_compact()
    return str(exc)


def traceback_style() -> str:
    """The ``WREN_TRACEBACK`` style, falling back to ``compact``."""
    style = os.environ.get("WREN_TRACEBACK", "compact").strip().lower()
    return style if style in _STYLES else "compact"


def _banner(title: str, lines: list[str]) -> str:
    return "\n".join([f"-- {title} ".ljust(_BANNER_WIDTH, "-"), *lines, "-" * _BANNER_WIDTH])


def format_template_error(exc: BaseException, page: str | None = None) -> str:
    """Banner around a kida error's compact rendering, naming *page* if given."""
    lines = [error_detail(exc)]
    if page is not None:
        lines += ["", f"  Page: {page}"]
    return _banner("Template Error", lines)


def format_load_error(exc: LoadError) -> str:
    """Banner for a ``LoadError`` with the file and page it refers to."""
    context = []
    if exc.path is not None:
        context.append(f"  File: {exc.path}")
    if exc.page is not None:
        context.append(f"  Page: {exc.page}")
    lines = [str(exc)]
    if context:
        lines += ["", *context]
    return _banner("Load Error", lines)


def _is_user_frame(filename: str) -> bool:
    if filename.startswith("<"):
        return False
    return not filename.startswith(_LIBRARY_DIRS)


def format_compact_traceback(exc: BaseException, *, limit: int = 5) -> str:
    """Exception line plus the last *limit* frames of user code.

    Falls back to the innermost frames when every frame is library code.
    """
    frames = _traceback.extract_tb(exc.__traceback__)
    shown = [f for f in frames if _is_user_frame(f.filename)] or frames[-3:]

    lines = [f"{type(exc).__name__}: {exc}"]
    if shown:
        lines.append("  Raised from:")
    for frame in shown[-limit:]:
        lines.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
        if frame.line:
            lines.append(f"      {frame.line.strip()}")
    return "\n".join(lines)


def format_minimal_error(exc: BaseException) -> str:
    """``Type at file:line: message`` on one line."""
    frames = _traceback.extract_tb(exc.__traceback__)
    where = f" at {frames[-1].filename}:{frames[-1].lineno}" if frames else ""
    return f"{type(exc).__name__}{where}: {exc}"


def format_error(exc: BaseException, page: str | None = None) -> str:
    """Format any load or render failure for the terminal."""
    cause = _engine_cause(exc)
    if cause is not None:
        if page is None:
            page = getattr(exc, "page", None) or getattr(exc, "name", None)
        return format_template_error(cause, page)
    if isinstance(exc, LoadError):
        return format_load_error(exc)

    style = traceback_style()
    if style == "full":
        return "".join(_traceback.format_exception(exc)).rstrip()
    if style == "minimal":
        return format_minimal_error(exc)
    return format_compact_traceback(exc)


def log_error(exc: BaseException, page: str | None = None) -> None:
    """Log *exc* at ERROR on ``wren.diagnostics`` in terminal format."""
    subject = f"Page {page}" if page is not None else "Template error"
    logger.error("%s\n%s", subject, format_error(exc, page))
