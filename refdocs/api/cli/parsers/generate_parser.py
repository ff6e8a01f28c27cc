"""Reference generation command argument parser."""

import argparse
from pathlib import Path
from typing import Any

from .common_arguments import add_common_arguments, add_config_arguments


def add_generate_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add the reference generation subparser to the main parser."""
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate the HTML API reference from a spec model",
        description=(
            "Render one HTML fragment per overview, category, resource, "
            "operation and definition, then assemble them into a single "
            "index.html with a navigation tree."
        ),
    )

    generate_parser.add_argument(
        "spec_model",
        metavar="spec-model",
        type=Path,
        help="JSON dump of the parsed API spec model.",
    )

    add_common_arguments(generate_parser)
    add_config_arguments(generate_parser, ["docs"])

    return generate_parser
