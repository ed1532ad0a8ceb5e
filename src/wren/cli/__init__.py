"""Wren CLI: template tree validation and one-off rendering.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys


def _add_loader_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("directory", help="Template root (contains pages/, includes/, layouts/)")
    parser.add_argument("--ext", default=".html", help="Template filename suffix (default: .html)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject templates outside pages/, includes/ and layouts/",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren: page, include and layout loading for kida templates.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # -- wren check -------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Load a template tree and list its pages")
    _add_loader_arguments(check_parser)

    # -- wren render ------------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render one page to stdout")
    _add_loader_arguments(render_parser)
    render_parser.add_argument("page", help="Page logical name (e.g. blog/index)")
    render_parser.add_argument(
        "--data",
        default=None,
        help="Render data as a JSON document",
    )
    render_parser.add_argument("--status", type=int, default=200, help="Status code to report")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "check":
        from wren.cli._check import run_check

        run_check(args)
    elif args.command == "render":
        from wren.cli._render import run_render

        run_render(args)
