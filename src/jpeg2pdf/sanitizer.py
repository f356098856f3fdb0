"""Make output file names safe to create on any common filesystem."""

from __future__ import annotations

import re
import unicodedata
from pathlib import Path

_MAX_NAME_BYTES = 255

_UNSAFE_CHARS = re.compile(r'[/\\?<>:*|"\x00-\x1f\x80-\x9f]')
_DOTS_ONLY = re.compile(r"^\.+$")
_TRAILING_DOTS_SPACES = re.compile(r"[. ]+$")
_RESERVED_NAMES = re.compile(
    r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE
)

_NOT_PORTABLE = re.compile(r"[^A-Za-z0-9._-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


def normalize_name(name: str) -> str:
    """Reduce *name* to ASCII letters, digits, ``.``, ``_`` and ``-``.

    Accented letters lose their diacritical marks (``é`` -> ``e``), every
    other character becomes ``_``, runs of ``_`` collapse into one and
    leading/trailing ``_`` are removed.
    """
    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    result = _NOT_PORTABLE.sub("_", stripped)
    result = _UNDERSCORE_RUNS.sub("_", result)
    return result.strip("_")


def make_os_safe(name: str, *, replacement: str = "_") -> str:
    """Replace characters and names that are not valid on Windows or POSIX."""
    result = _UNSAFE_CHARS.sub(replacement, name)
    if not _DOTS_ONLY.match(result):
        result = _TRAILING_DOTS_SPACES.sub("", result)
    if _DOTS_ONLY.match(result) or _RESERVED_NAMES.match(result):
        result = replacement + result
    return result or replacement


def _truncate(stem: str, suffix: str) -> str:
    budget = _MAX_NAME_BYTES - len(suffix.encode("utf-8"))
    encoded = stem.encode("utf-8")
    if len(encoded) <= budget:
        return stem
    truncated = encoded[:budget].decode("utf-8", errors="ignore")
    # The cut may expose trailing dots or spaces again.
    return _TRAILING_DOTS_SPACES.sub("", truncated) or "_"


def sanitize_filename(path: Path | str, normalize: bool = False) -> Path:
    """Return *path* with a filesystem-safe base name.

    Only the base name is touched; the directory part and the extension are
    kept as given.

    Args:
        path: File path whose name should be sanitized.
        normalize: Also strip diacritics and replace every character
            outside ``[A-Za-z0-9._-]`` with ``_``.

    Returns:
        The sanitized path.
    """
    path = Path(path)
    suffix = path.suffix
    stem = path.name[: -len(suffix)] if suffix else path.name

    if normalize:
        stem = normalize_name(stem)

    stem = make_os_safe(stem)
    return path.with_name(_truncate(stem, suffix) + suffix)
