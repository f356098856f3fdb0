"""Input validation and output path resolution."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .errors import InputIsDirectoryError, InputNotFoundError, UserCancelledError
from .sanitizer import make_os_safe, sanitize_filename

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool | None]


def _absolute(path: Path | str) -> Path:
    """Make *path* absolute without following symlinks."""
    return Path(os.path.abspath(Path(path).expanduser()))


def validate_input(path: Path | str) -> Path:
    """Make *path* absolute and make sure it names an existing regular file.

    Symlinks are not followed, so the output lands next to the path as given.

    Raises:
        InputNotFoundError: If nothing exists at the path.
        InputIsDirectoryError: If the path is a directory.
    """
    resolved = _absolute(path)

    if not resolved.exists():
        raise InputNotFoundError(f"File not found: {resolved}")
    if resolved.is_dir():
        raise InputIsDirectoryError(
            f"Path is a directory, not a file: {resolved}"
        )

    logger.debug("Validated input %s", resolved)
    return resolved


def _default_pdf_path(
    *,
    input_path: Path,
    title: str | None,
    output: Path | str | None,
) -> Path:
    """Pick the unsanitized output path.

    Rules:
        - ``output`` given → used literally; an existing directory gets
          ``{input_stem}.pdf`` inside it
        - ``title`` given → ``{input_dir}/{title}.pdf``
        - otherwise → ``{input_dir}/{input_stem}.pdf``
    """
    if output:
        output = _absolute(output)
        if output.is_dir():
            return output / f"{input_path.stem}.pdf"
        return output

    if title:
        return input_path.parent / f"{make_os_safe(title)}.pdf"

    return input_path.with_suffix(".pdf")


def resolve_output(
    input_path: Path,
    *,
    title: str | None = None,
    output: Path | str | None = None,
    normalize: bool = False,
    force: bool = False,
    confirm: ConfirmCallback | None = None,
) -> Path:
    """Work out where the PDF for *input_path* will be written.

    Args:
        input_path: Absolute path of the validated input file.
        title: Document title, used as the file name when *output* is absent.
        output: Explicit output path.  Takes precedence over *title*.
        normalize: Strip diacritics and special characters from the name.
        force: Overwrite an existing file without asking.
        confirm: Asked ``confirm(prompt)`` when the output already exists.
            Must return ``True`` to proceed; ``False`` or ``None``
            (prompt aborted) cancels.

    Returns:
        The absolute, sanitized output path.

    Raises:
        UserCancelledError: If the output exists and overwriting was not
            confirmed.
    """
    candidate = _default_pdf_path(input_path=input_path, title=title, output=output)
    output_path = sanitize_filename(candidate, normalize=normalize)

    if output_path.exists() and not force:
        if confirm is None:
            raise UserCancelledError(
                f"Output file already exists: {output_path}"
                " (use --force to overwrite)"
            )
        answer = confirm(f"Output file already exists. Overwrite? {output_path}")
        if not answer:
            raise UserCancelledError("Operation cancelled")
        logger.debug("Overwrite of %s confirmed", output_path)

    return output_path
