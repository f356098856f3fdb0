"""jpeg2pdf: Convert a JPEG image into a single-page PDF sized to the image."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .assembler import (
    ImageHandle,
    PdfDocumentDraft,
    PdfMetadata,
    add_fitted_page,
    create_document,
    embed_jpeg,
    finalize,
    write_pdf,
)
from .errors import (
    InputIsDirectoryError,
    InputNotFoundError,
    InvalidImageFormatError,
    Jpeg2PdfError,
    OutputWriteError,
    SerializationError,
    UserCancelledError,
)
from .paths import ConfirmCallback, resolve_output, validate_input
from .sanitizer import sanitize_filename

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConversionRequest",
    "ConversionResult",
    "ConversionStage",
    "ImageHandle",
    "InputIsDirectoryError",
    "InputNotFoundError",
    "InvalidImageFormatError",
    "Jpeg2PdfError",
    "OutputWriteError",
    "PdfDocumentDraft",
    "PdfMetadata",
    "SerializationError",
    "UserCancelledError",
    "add_fitted_page",
    "convert_jpeg",
    "create_document",
    "embed_jpeg",
    "finalize",
    "prepare_request",
    "resolve_output",
    "sanitize_filename",
    "validate_input",
    "write_pdf",
]

logger = logging.getLogger(__name__)


class ConversionStage(enum.Enum):
    """Steps of a conversion, in the order they run."""

    IDLE = "idle"
    INPUT_VALIDATED = "input validated"
    OUTPUT_RESOLVED = "output resolved"
    DOCUMENT_CREATED = "document created"
    IMAGE_EMBEDDED = "image embedded"
    PAGE_COMPOSED = "page composed"
    SERIALIZED = "serialized"
    WRITTEN = "written"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class ConversionRequest:
    """Everything needed to run one conversion."""

    input_path: Path
    output_path: Path
    metadata: PdfMetadata = field(default_factory=PdfMetadata)
    force: bool = False
    normalize_filename: bool = False


@dataclass
class ConversionResult:
    """Outcome of a successful conversion."""

    input_path: Path
    output_path: Path
    width: float
    height: float
    total_bytes: int


def prepare_request(
    input_path: Path | str,
    *,
    output: Path | str | None = None,
    metadata: PdfMetadata | None = None,
    force: bool = False,
    normalize: bool = False,
    confirm: ConfirmCallback | None = None,
) -> ConversionRequest:
    """Validate the input and resolve the output path.

    Args:
        input_path: Path to the source JPEG file.
        output: Explicit output path.  Without it the PDF is named after
            ``metadata.title`` or the input file and placed next to the input.
        metadata: Document information fields.
        force: Overwrite an existing output file without asking.
        normalize: Strip diacritics and special characters from the
            output file name.
        confirm: Called with a question when the output already exists and
            *force* is not set.

    Raises:
        InputNotFoundError: If the input does not exist.
        InputIsDirectoryError: If the input is a directory.
        UserCancelledError: If overwriting an existing file was declined.
    """
    metadata = metadata or PdfMetadata()

    absolute_input = validate_input(input_path)
    logger.debug("Stage: %s", ConversionStage.INPUT_VALIDATED.value)

    output_path = resolve_output(
        absolute_input,
        title=metadata.title,
        output=output,
        normalize=normalize,
        force=force,
        confirm=confirm,
    )
    logger.debug("Stage: %s", ConversionStage.OUTPUT_RESOLVED.value)

    return ConversionRequest(
        input_path=absolute_input,
        output_path=output_path,
        metadata=metadata,
        force=force,
        normalize_filename=normalize,
    )


def convert_jpeg(
    request: ConversionRequest,
    *,
    on_status: Callable[[str], None] | None = None,
) -> ConversionResult:
    """Convert the JPEG named by *request* into a single-page PDF.

    The page is exactly the size of the image and the image covers it
    completely.  The output file is only written once the whole document
    has been serialized.

    Args:
        request: A request built by :func:`prepare_request`.
        on_status: Receives a short progress message before each step.

    Returns:
        A :class:`ConversionResult` describing the written PDF.

    Raises:
        InvalidImageFormatError: If the input is not a valid JPEG.
        SerializationError: If the PDF cannot be produced.
        OutputWriteError: If the PDF cannot be written.

    Example::

        from jpeg2pdf import PdfMetadata, convert_jpeg, prepare_request

        request = prepare_request("photo.jpg", metadata=PdfMetadata(author="Me"))
        result = convert_jpeg(request)
        print(f"Saved PDF to {result.output_path}")
    """
    def _report(stage: ConversionStage, message: str) -> None:
        logger.debug("Stage: %s", stage.value)
        if on_status is not None:
            on_status(message)

    _report(ConversionStage.DOCUMENT_CREATED, "Reading JPEG file...")
    jpeg_bytes = request.input_path.read_bytes()
    draft = create_document(
        default_title=request.input_path.stem,
        metadata=request.metadata,
    )

    _report(ConversionStage.IMAGE_EMBEDDED, "Processing image...")
    image = embed_jpeg(draft, jpeg_bytes)

    width, height = image.scale(1)
    _report(
        ConversionStage.PAGE_COMPOSED,
        f"Creating PDF page with dimensions {width:g}x{height:g}...",
    )
    page = add_fitted_page(draft, image)

    _report(ConversionStage.SERIALIZED, "Saving PDF...")
    pdf_bytes = finalize(draft)

    _report(ConversionStage.WRITTEN, "Writing PDF file...")
    total_bytes = write_pdf(request.output_path, pdf_bytes)

    logger.debug("Stage: %s", ConversionStage.DONE.value)
    return ConversionResult(
        input_path=request.input_path,
        output_path=request.output_path,
        width=page.width,
        height=page.height,
        total_bytes=total_bytes,
    )
