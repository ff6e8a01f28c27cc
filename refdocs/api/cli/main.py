"""refdocs command line entry point."""

import sys

from loguru import logger
from pydantic import ValidationError

from refdocs.core.config.config import Config
from refdocs.core.config.logging_config import LoggingConfig

from .parsers import create_main_parser, setup_subparsers
from .utils.rich_output import RichOutputFormatter


def setup_logging(verbose: bool = False, config: LoggingConfig | None = None) -> None:
    """Configure loguru sinks.

    Args:
        verbose: Lower the console level to DEBUG
        config: Optional logging configuration for console and file sinks
    """
    logger.remove()

    if config is None:
        config = LoggingConfig()
    logger.add(
        sys.stderr,
        level=config.console_sink_level(verbose),
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<level>{message}</level>"
        ),
    )

    if config.file.enabled:
        logger.add(str(config.file.path), **config.file.sink_options())


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, load configuration and dispatch the command."""
    parser = create_main_parser()
    setup_subparsers(parser)
    args = parser.parse_args(argv)

    try:
        config = Config.load(config_file=getattr(args, "config", None), args=args)
    except (ValidationError, OSError, ValueError) as e:
        RichOutputFormatter().error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(getattr(args, "verbose", False), config.logging)

    if args.command == "generate":
        from .commands.generate import generate_command

        generate_command(args, config)
    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
