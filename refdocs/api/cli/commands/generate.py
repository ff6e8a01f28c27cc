"""Reference generation command module."""

import argparse
import sys

from loguru import logger

from refdocs.core.config.config import Config
from refdocs.core.exceptions import DocGenError
from refdocs.docgen.generator import generate_reference_docs
from refdocs.docgen.rendering import RenderContext
from refdocs.docgen.spec_loader import load_api_spec

from ..utils.rich_output import RichOutputFormatter


def generate_command(args: argparse.Namespace, config: Config) -> None:
    """Execute the generate command.

    Any render or filesystem failure halts generation; nothing is retried.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance
    """
    formatter = RichOutputFormatter(verbose=args.verbose)
    formatter.section_header(config.docs.title)

    docs = config.docs
    formatter.verbose_info(f"Spec model: {args.spec_model}")
    formatter.verbose_info(f"Fragments: {docs.includes_dir}")
    formatter.verbose_info(f"Output: {docs.build_dir}")

    try:
        render_context = RenderContext.create()
        spec = load_api_spec(args.spec_model)
        result = generate_reference_docs(
            spec,
            docs,
            render_context=render_context,
            log_info=formatter.verbose_info,
            log_warning=formatter.warning,
        )
    except DocGenError as e:
        logger.error(f"Reference generation failed: {e}")
        formatter.error(str(e))
        sys.exit(1)
    except OSError as e:
        logger.error(f"Reference generation failed: {e}")
        formatter.error(f"Filesystem error: {e}")
        sys.exit(1)

    formatter.box_section(
        "Reference generated",
        [
            ("Document", str(result.output_path)),
            ("Fragments", str(result.fragment_count)),
            ("Missing", str(len(result.missing_fragments))),
            ("Spec", docs.spec_link),
        ],
    )
    formatter.success(f"Wrote {result.output_path}")
