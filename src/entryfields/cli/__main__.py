#!/usr/bin/env python3

import argparse
import sys
from pathlib import Path

from entryfields.core.app import get_context
from entryfields.core.logging_setup import configure_logging
from entryfields.cli import config, fieldtypes, validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="entryfields", description="entryfields CLI Toolkit")
    parser.add_argument("--settings", default=None, help="Settings file to use instead of the one in settings_paths.")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they accept ctx)
    fieldtypes.register(subparsers)
    validate.register(subparsers)
    config.register(subparsers)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        settings = Path(args.settings) if args.settings else None
        ctx = get_context(settings_path_override=settings)  # built once
        configure_logging(ctx.config)
        sys.exit(args.func(args, ctx))
    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
