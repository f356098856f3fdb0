"""Shared fixtures — image files and a scripted prompter."""

from __future__ import annotations

import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image


def create_jpeg(path: Path, *, width: int = 120, height: int = 80) -> Path:
    """Write a small solid-colour JPEG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (width, height), color=(200, 40, 40)).save(path, format="JPEG")
    return path


def create_mpo(path: Path, *, width: int = 90, height: int = 60) -> Path:
    """Write a two-frame multi-picture JPEG, as stereo or camera previews use."""
    path.parent.mkdir(parents=True, exist_ok=True)
    first = Image.new("RGB", (width, height), color=(10, 120, 200))
    second = Image.new("RGB", (width, height), color=(200, 120, 10))
    first.save(path, format="MPO", save_all=True, append_images=[second])
    return path


def create_minimal_png(path: Path, *, width: int = 100, height: int = 100) -> Path:
    """Create a minimal valid PNG file for testing."""

    def _chunk(chunk_type: bytes, data: bytes) -> bytes:
        c = chunk_type + data
        crc = struct.pack(">I", zlib.crc32(c) & 0xFFFFFFFF)
        return struct.pack(">I", len(data)) + c + crc

    signature = b"\x89PNG\r\n\x1a\n"
    ihdr_data = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    ihdr = _chunk(b"IHDR", ihdr_data)

    raw_data = b""
    for _ in range(height):
        raw_data += b"\x00" + b"\xff\x00\x00" * width
    idat = _chunk(b"IDAT", zlib.compress(raw_data))
    iend = _chunk(b"IEND", b"")

    path.write_bytes(signature + ihdr + idat + iend)
    return path


class FakePrompter:
    """Records every call; ``confirm`` returns a scripted answer."""

    def __init__(self, answer: bool | None = False) -> None:
        self.answer = answer
        self.calls: list[tuple[str, str]] = []

    def _record(self, name: str, text: str) -> None:
        self.calls.append((name, text))

    def intro(self, text: str) -> None:
        self._record("intro", text)

    def outro(self, text: str) -> None:
        self._record("outro", text)

    def start(self, text: str) -> None:
        self._record("start", text)

    def message(self, text: str) -> None:
        self._record("message", text)

    def stop(self, text: str) -> None:
        self._record("stop", text)

    def confirm(self, prompt: str) -> bool | None:
        self._record("confirm", prompt)
        return self.answer

    def cancel(self, text: str) -> None:
        self._record("cancel", text)

    def success(self, text: str) -> None:
        self._record("success", text)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture()
def jpeg_file(tmp_path: Path) -> Path:
    return create_jpeg(tmp_path / "photo.jpg")


@pytest.fixture()
def png_file(tmp_path: Path) -> Path:
    return create_minimal_png(tmp_path / "image.jpg")
