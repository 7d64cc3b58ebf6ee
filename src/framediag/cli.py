"""framediag command-line interface."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from loguru import logger

from .catalog import build_catalog


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Frame diagram generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    # Sub-commands accept -v too; SUPPRESS keeps a top-level -v from being reset.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS,
                        help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", parents=[common], help="List supported airframes")

    render = sub.add_parser("render", parents=[common], help="Render airframe diagrams to SVG")
    render.add_argument("names", nargs="*", help="Airframes to render (default: all)")
    render.add_argument("--dir", dest="output_dir", default="exports")
    render.add_argument("--veed-tail", action="store_true",
                        help="Veed front arms on tri / V-tail / A-tail frames")
    render.add_argument("--flat-y", action="store_true",
                        help="Flat front arms on Y4 / Y6 frames")

    return parser


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "list":
        for name, spec in build_catalog().items():
            print(f"{name:<14} {spec.filename}")

    elif args.command == "render":
        _cmd_render(args)


def _cmd_render(args) -> None:
    from .build import render_catalog

    catalog = build_catalog(flat_tail=not args.veed_tail, flat_y=args.flat_y)
    unknown = [name for name in args.names if name not in catalog]
    if unknown:
        print(f"unknown airframe(s): {', '.join(unknown)}", file=sys.stderr)
        print(f"known airframes: {', '.join(catalog)}", file=sys.stderr)
        raise SystemExit(2)

    result = render_catalog(args.output_dir, args.names or None, catalog=catalog)
    for path in result.written:
        print(f"Saved {path}")
    if not result.ok:
        for name, exc in result.failed.items():
            print(f"FAILED {name}: {exc}", file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
