"""Assemble a JPEG image into a single-page PDF file."""

from __future__ import annotations

import io
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import img2pdf
import pikepdf
from PIL import Image, UnidentifiedImageError

from .errors import InvalidImageFormatError, OutputWriteError, SerializationError

logger = logging.getLogger(__name__)

CREATOR = "jpeg2pdf"
PRODUCER = "img2pdf"

# At 72 dpi one image pixel maps to one PDF point.
_POINTS_PER_INCH = 72

# Pillow reports multi-picture camera JPEGs as MPO; only the primary
# image is embedded.
_JPEG_FORMATS = ("JPEG", "MPO")


@dataclass(frozen=True)
class PdfMetadata:
    """Optional document information fields."""

    title: str | None = None
    author: str | None = None
    subject: str | None = None
    language: str | None = None
    keywords: str | None = None

    def keyword_list(self) -> list[str]:
        """Split the comma-separated keywords into trimmed, non-empty tokens."""
        if not self.keywords:
            return []
        return [k.strip() for k in self.keywords.split(",") if k.strip()]


@dataclass(eq=False)
class ImageHandle:
    """A validated JPEG registered in a :class:`PdfDocumentDraft`."""

    data: bytes
    width: int
    height: int
    mode: str

    def scale(self, factor: float) -> tuple[float, float]:
        """Return the image size in points at *factor* scale."""
        return self.width * factor, self.height * factor


@dataclass
class PageSpec:
    """One page of the draft and the image drawn on it."""

    width: float
    height: float
    image: ImageHandle
    x: float = 0.0
    y: float = 0.0


@dataclass
class PdfDocumentDraft:
    """In-memory PDF document that has not been serialized yet."""

    creator: str
    producer: str
    creation_date: datetime
    modification_date: datetime
    title: str | None = None
    display_doc_title: bool = False
    author: str | None = None
    subject: str | None = None
    language: str | None = None
    keywords: list[str] | None = None
    images: list[ImageHandle] = field(default_factory=list)
    pages: list[PageSpec] = field(default_factory=list)


def create_document(default_title: str, metadata: PdfMetadata) -> PdfDocumentDraft:
    """Create an empty draft carrying the document information fields.

    Fields that are missing or empty in *metadata* are left unset.  The
    title falls back to *default_title*, normally the input file's name
    without extension.
    """
    now = datetime.now(timezone.utc)
    draft = PdfDocumentDraft(
        creator=CREATOR,
        producer=PRODUCER,
        creation_date=now,
        modification_date=now,
    )

    draft.title = metadata.title or default_title
    draft.display_doc_title = True
    if metadata.author:
        draft.author = metadata.author
    if metadata.subject:
        draft.subject = metadata.subject
    if metadata.language:
        draft.language = metadata.language
    keywords = metadata.keyword_list()
    if keywords:
        draft.keywords = keywords

    logger.debug("Created document draft titled %r", draft.title)
    return draft


def embed_jpeg(draft: PdfDocumentDraft, data: bytes) -> ImageHandle:
    """Validate *data* as a JPEG and register it in *draft*.

    The pixel data is fully decoded so that truncated files are rejected
    here rather than producing a broken PDF.  The JPEG stream itself is
    embedded unchanged.

    Raises:
        InvalidImageFormatError: If *data* is not a decodable JPEG.  The
            draft is left unchanged.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.format not in _JPEG_FORMATS:
                raise InvalidImageFormatError(
                    f"expected JPEG data, got {img.format or 'unknown'}"
                )
            img.load()
            width, height = img.size
            mode = img.mode
    except Image.DecompressionBombError as exc:
        raise InvalidImageFormatError(f"image exceeds the size limit: {exc}") from exc
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise InvalidImageFormatError(str(exc)) from exc

    handle = ImageHandle(data=data, width=width, height=height, mode=mode)
    draft.images.append(handle)
    logger.debug("Embedded %dx%d %s JPEG", width, height, mode)
    return handle


def add_fitted_page(draft: PdfDocumentDraft, image: ImageHandle) -> PageSpec:
    """Add a page exactly the size of *image* with the image drawn full-bleed."""
    if not any(image is owned for owned in draft.images):
        raise ValueError("image is not embedded in this document")

    width, height = image.scale(1)
    page = PageSpec(width=width, height=height, image=image)
    draft.pages.append(page)
    logger.debug("Added %sx%s page", width, height)
    return page


def finalize(draft: PdfDocumentDraft) -> bytes:
    """Serialize *draft* to PDF bytes.

    Raises:
        SerializationError: If the draft has no pages or the PDF libraries
            fail to produce a document.
    """
    if not draft.pages:
        raise SerializationError("Cannot serialize a document without pages")

    try:
        pdf_bytes = img2pdf.convert(
            [page.image.data for page in draft.pages],
            layout_fun=img2pdf.get_fixed_dpi_layout_fun(
                (_POINTS_PER_INCH, _POINTS_PER_INCH)
            ),
            rotation=img2pdf.Rotation.none,
            first_frame_only=True,
            title=draft.title,
            author=draft.author,
            subject=draft.subject,
            keywords=draft.keywords,
            creator=draft.creator,
            producer=draft.producer,
            creationdate=draft.creation_date,
            moddate=draft.modification_date,
        )

        with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
            if draft.language:
                pdf.Root.Lang = pikepdf.String(draft.language)
            if draft.display_doc_title:
                pdf.Root.ViewerPreferences = pikepdf.Dictionary(
                    DisplayDocTitle=True
                )
            out = io.BytesIO()
            pdf.save(out)
    except Exception as exc:  # library exception types vary
        raise SerializationError(f"Failed to serialize PDF: {exc}") from exc

    return out.getvalue()


def write_pdf(path: Path, data: bytes) -> int:
    """Write *data* to *path*, replacing any existing file atomically.

    Missing parent directories are created.  The bytes go to a temporary
    file next to *path* first, so a failed write never leaves a partial PDF.

    Returns:
        Number of bytes written.

    Raises:
        OutputWriteError: If the directory or file cannot be written.
    """
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.stem}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_name, 0o666 & ~umask)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Failed to write {path}: {exc}") from exc

    logger.debug("Wrote %d bytes to %s", len(data), path)
    return len(data)
