"""Command-line interface for jpeg2pdf."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler

from . import ConversionStage, __version__, convert_jpeg, prepare_request
from .assembler import PdfMetadata
from .errors import Jpeg2PdfError, UserCancelledError
from .prompts import Prompter, RichPrompter

logger = logging.getLogger(__name__)


def _format_size(num_bytes: int) -> str:
    """Format a byte count as a human-readable string."""
    value = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(value) < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jpeg2pdf",
        description="Convert a JPEG image into a single-page PDF sized to the image.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    convert = subparsers.add_parser(
        "convert",
        aliases=["c"],
        help="Convert a JPEG file to PDF",
        description="Convert a JPEG file to a single-page PDF.",
    )
    convert.add_argument("path", help="The path to the JPEG file to convert")
    convert.add_argument(
        "--output", "-o",
        default=None,
        help=(
            "Output PDF path (default: next to the input, named after"
            " --title or the input file)"
        ),
    )
    convert.add_argument(
        "--force", "-f",
        action="store_true",
        default=False,
        help="Force overwrite existing file",
    )
    convert.add_argument("--title", "-t", default=None, help="PDF title")
    convert.add_argument("--author", "-a", default=None, help="PDF author")
    convert.add_argument("--subject", "-s", default=None, help="PDF subject")
    convert.add_argument(
        "--language", "-l",
        default=None,
        help="PDF language (e.g., en-US, es-ES)",
    )
    convert.add_argument(
        "--keywords", "-k",
        default=None,
        help="PDF keywords (comma-separated)",
    )
    convert.add_argument(
        "--normalize", "-n",
        action="store_true",
        default=False,
        help=(
            "Normalize the filename by removing diacritical marks, replacing"
            " special characters with underscores, and collapsing multiple"
            " underscores"
        ),
    )
    convert.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Show debug logging",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _run_convert(args: argparse.Namespace, prompter: Prompter) -> None:
    prompter.intro("🖼️  JPEG to PDF Converter")

    request = prepare_request(
        args.path,
        output=args.output,
        metadata=PdfMetadata(
            title=args.title,
            author=args.author,
            subject=args.subject,
            language=args.language,
            keywords=args.keywords,
        ),
        force=args.force,
        normalize=args.normalize,
        confirm=prompter.confirm,
    )

    prompter.start("Reading JPEG file...")
    try:
        result = convert_jpeg(request, on_status=prompter.message)
    except BaseException:
        prompter.stop("Failed to create PDF")
        raise
    prompter.stop(
        f"PDF created successfully ({result.width:g}x{result.height:g} pt,"
        f" {_format_size(result.total_bytes)})"
    )

    prompter.success(f"Successfully converted to {result.output_path}")
    prompter.outro("Conversion complete! ✨")


def main(
    argv: Sequence[str] | None = None,
    prompter: Prompter | None = None,
) -> None:
    """Entry point for the ``jpeg2pdf`` CLI command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose)

    if prompter is None:
        prompter = RichPrompter()

    try:
        _run_convert(args=args, prompter=prompter)
    except UserCancelledError as exc:
        logger.debug("Stage: %s (cancelled)", ConversionStage.ABORTED.value)
        prompter.cancel(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.debug("Stage: %s (interrupted)", ConversionStage.ABORTED.value)
        prompter.cancel("Operation cancelled")
        sys.exit(1)
    except (Jpeg2PdfError, OSError) as exc:
        logger.debug("Stage: %s", ConversionStage.ABORTED.value, exc_info=True)
        prompter.cancel(str(exc))
        sys.exit(1)
