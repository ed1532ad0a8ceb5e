"""``wren check``: template tree validation command.

Loads a template root exactly as an application would and prints every
page with its layout.  Exits with code 1 if the load fails.
"""

import argparse
import sys

from wren.config import LoaderConfig
from wren.diagnostics import format_error
from wren.errors import ConfigurationError, LoadError
from wren.registry import Registry, load


def load_or_exit(args: argparse.Namespace) -> Registry:
    """Load ``args.directory``, printing a formatted error and exiting 1 on failure."""
    config = LoaderConfig(extension=args.ext, strict=args.strict)
    try:
        return load(args.directory, config=config)
    except (ConfigurationError, LoadError) as exc:
        print(format_error(exc), file=sys.stderr)
        raise SystemExit(1) from exc


def run_check(args: argparse.Namespace) -> None:
    """Validate a template tree and list its pages."""
    registry = load_or_exit(args)

    for name in registry.names:
        unit = registry.lookup(name)
        layout = unit.layout.logical_name if unit.layout is not None else "-"
        print(f"{name}  layout={layout}  fragments={len(unit.fragments)}")

    print(f"{len(registry)} pages OK")
