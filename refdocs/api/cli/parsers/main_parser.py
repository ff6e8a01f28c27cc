"""Main argument parser for refdocs CLI."""

import argparse

from refdocs import __version__


def create_main_parser() -> argparse.ArgumentParser:
    """Create the top-level parser."""
    parser = argparse.ArgumentParser(
        prog="refdocs",
        description="Generate cross-linked HTML API reference documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"refdocs {__version__}",
    )
    return parser


def setup_subparsers(parser: argparse.ArgumentParser) -> argparse._SubParsersAction:
    """Register every command subparser."""
    from .generate_parser import add_generate_subparser

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )
    add_generate_subparser(subparsers)
    return subparsers
