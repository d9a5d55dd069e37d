#!/usr/bin/env python3
"""docformatters - run the template formatters from the command line.

Usage:
    python -m docformatters sum 1000 2000 3000
    python -m docformatters fit https://example.com/sample.png --width 100 --height 80
    python -m docformatters fit "data:image/png;base64,..." --output thumb.txt
"""

import sys
import logging
import argparse
import asyncio
from pathlib import Path

from ._version import __version__
from .config import ConfigManager
from .exceptions import ConfigError, FormatterError
from .image import image_fit
from .numeric import custom_sum


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    config: ConfigManager = None
) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, enable DEBUG level logging
        quiet: If True, only log errors to the console
        config: Loaded configuration (for file logging)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    elif config:
        level = getattr(logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO)
    else:
        level = logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else level)
    root_logger.addHandler(console_handler)

    log_file = config.get("logging.file") if config else None
    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
        except OSError as e:
            root_logger.warning(f"Could not open log file {log_path}: {e}")
            return

        file_handler.setLevel(logging.DEBUG)  # Always DEBUG in file
        file_handler.setFormatter(
            logging.Formatter(
                config.get(
                    "logging.format",
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
                )
            )
        )
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="docformatters",
        description="docformatters - custom formatters for document templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sum values (non-numeric values count as zero)
  python -m docformatters sum 1000 2000 "3000" abc

  # Resize a remote image to the configured default size
  python -m docformatters fit https://example.com/sample.png

  # Resize to 100x80 and write the data URI to a file
  python -m docformatters fit https://example.com/sample.png -W 100 -H 80 -o thumb.txt
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"docformatters {__version__}"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to config file (default: ~/.docformatters/config.yaml)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose debug logging"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all output except errors and the result"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sum_parser = subparsers.add_parser("sum", help="Sum numeric values (customSum)")
    sum_parser.add_argument("values", nargs="*", help="Values to sum")

    fit_parser = subparsers.add_parser(
        "fit",
        help="Resize an image to a PNG data URI (imageFit)"
    )
    fit_parser.add_argument("source", help="Image URL or Base64 data URI")
    fit_parser.add_argument("--width", "-W", help="Target width in pixels")
    fit_parser.add_argument("--height", "-H", help="Target height in pixels")
    fit_parser.add_argument(
        "--timeout",
        type=float,
        help="Download timeout in seconds (default: fetch.timeout from config)"
    )
    fit_parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        help="Write the data URI to FILE instead of stdout"
    )

    return parser


def run_sum(args: argparse.Namespace) -> int:
    """Print the customSum of the given values."""
    total = custom_sum(args.values)
    print(f"{total:g}")
    return 0


def run_fit(args: argparse.Namespace, config: ConfigManager) -> int:
    """Resize the source image and print or save the data URI."""
    width = args.width if args.width is not None else config.get("image.default_width")
    height = args.height if args.height is not None else config.get("image.default_height")
    timeout = args.timeout if args.timeout is not None else config.get("fetch.timeout")

    result = asyncio.run(
        image_fit(
            args.source,
            width,
            height,
            timeout=timeout,
            resample=config.get("image.resample", "lanczos")
        )
    )

    if args.output:
        Path(args.output).write_text(result)
        if not args.quiet:
            print(f"✓ Wrote {len(result)} characters to {args.output}", file=sys.stderr)
    else:
        print(result)

    return 0


def main(argv=None) -> int:
    """Main entry point for the docformatters CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(__name__)

    try:
        config = ConfigManager.load(config_path=args.config)
    except ConfigError as e:
        setup_logging(args.verbose, args.quiet)
        logger.error(f"Configuration error: {e}")
        if not args.quiet:
            print(f"✗ Configuration Error: {e}", file=sys.stderr)
        return 2

    setup_logging(args.verbose, args.quiet, config)

    try:
        if args.command == "sum":
            return run_sum(args)
        return run_fit(args, config)

    except FormatterError as e:
        logger.error(f"Formatter error: {e}", exc_info=args.verbose)
        if not args.quiet:
            print(f"✗ Error: {e}", file=sys.stderr)
        return 3

    except KeyboardInterrupt:
        if not args.quiet:
            print("\nInterrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        if not args.quiet:
            print(f"✗ Unexpected Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
