"""Argument parser utilities for refdocs CLI commands."""

from .generate_parser import add_generate_subparser
from .main_parser import create_main_parser, setup_subparsers

__all__ = [
    "add_generate_subparser",
    "create_main_parser",
    "setup_subparsers",
]
