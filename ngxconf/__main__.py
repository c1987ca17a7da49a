"""
Entry point for ngxconf.

Usage:
    python -m ngxconf /path/to/nginx.conf
    python -m ngxconf --check /path/to/nginx.conf
    python -m ngxconf --help
"""

import argparse
import sys

from . import __version__
from .config.loader import ConfigLoader
from .config.parser import check_max_depth
from .config.tree import Config
from .const import APP_DESCRIPTION, APP_NAME, DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from .logging import get_logger, setup_logging_from_args


logger = get_logger("main")


def count_statements(config: Config) -> int:
    """Count statements in a tree, nested blocks included."""
    total = 0
    for statement in config:
        total += 1
        if statement.child_block is not None:
            total += count_statements(statement.child_block)
    return total


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESCRIPTION,
    )

    parser.add_argument(
        "config",
        help="Path to configuration file",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check that the file parses; print a summary instead of the formatted config",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        metavar="N",
        help=f"Maximum block nesting depth, 1 to {MAX_DEPTH_LIMIT} (default: {DEFAULT_MAX_DEPTH})",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging_from_args(
        verbose=args.verbose,
        debug=args.debug,
        quiet=args.quiet,
        log_file=args.log_file,
        colors=not args.no_color,
    )

    try:
        check_max_depth(args.max_depth)
    except ValueError as e:
        print(f"Invalid --max-depth: {e}", file=sys.stderr)
        return 1

    loader = ConfigLoader(max_depth=args.max_depth)
    result = loader.parse(args.config)

    if not result:
        print(f"Configuration error: {result.error}", file=sys.stderr)
        return 1

    config = result.config
    if args.check:
        print(
            f"{args.config}: OK ({len(config)} top-level statements, "
            f"{count_statements(config)} total)"
        )
    else:
        sys.stdout.write(config.to_string(0))

    logger.info(f"Parsed {args.config}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
