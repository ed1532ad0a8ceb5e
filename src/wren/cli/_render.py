"""``wren render``: render one page to stdout.

Handy for checking a layout or include change without starting the
application.  Exits with code 1 if the page is unknown or fails to render;
stdout stays empty in that case.
"""

import argparse
import json
import sys

from wren.cli._check import load_or_exit
from wren.diagnostics import format_error
from wren.errors import ExecutionError, NotFoundError
from wren.sinks import StreamSink


def run_render(args: argparse.Namespace) -> None:
    """Render ``args.page`` from ``args.directory`` with ``args.data``."""
    data = None
    if args.data is not None:
        try:
            data = json.loads(args.data)
        except json.JSONDecodeError as exc:
            print(f"Error: --data is not valid JSON: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc

    registry = load_or_exit(args)

    sys.stdout.flush()
    sink = StreamSink(sys.stdout.buffer)
    try:
        registry.render(sink, args.page, data, args.status)
    except NotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except ExecutionError as exc:
        print(format_error(exc, args.page), file=sys.stderr)
        raise SystemExit(1) from exc
    sys.stdout.buffer.flush()
