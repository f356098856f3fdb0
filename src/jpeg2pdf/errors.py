"""Exception hierarchy for jpeg2pdf."""

from __future__ import annotations


class Jpeg2PdfError(Exception):
    """Base exception for jpeg2pdf errors."""


class InputNotFoundError(Jpeg2PdfError):
    """Raised when the input path does not exist."""


class InputIsDirectoryError(Jpeg2PdfError):
    """Raised when the input path is a directory instead of a file."""


class InvalidImageFormatError(Jpeg2PdfError):
    """Raised when the input bytes cannot be decoded as a JPEG image."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            "Failed to read JPEG image. The file may not be a valid JPEG"
            f" format: {detail}"
        )
        self.detail = detail


class UserCancelledError(Jpeg2PdfError):
    """Raised when the user declines to overwrite an existing output file."""


class SerializationError(Jpeg2PdfError):
    """Raised when the PDF document cannot be serialized."""


class OutputWriteError(Jpeg2PdfError):
    """Raised when the output PDF cannot be written to disk."""
