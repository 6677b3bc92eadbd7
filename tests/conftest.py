"""Shared fixtures for the layout engine tests."""

import io
import struct
import zlib

import pytest
from PIL import Image

from modules.safe_zones import Canvas


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def canvas():
    return Canvas(1920, 1080)


@pytest.fixture
def solid_png():
    """Factory for a single-color PNG."""
    def _make(color, size=(1920, 1080)):
        return encode_png(Image.new("RGB", size, color))
    return _make


@pytest.fixture
def split_png():
    """Factory for a PNG whose left and right halves differ."""
    def _make(left, right, size=(400, 200)):
        image = Image.new("RGB", size, left)
        width, height = size
        image.paste(Image.new("RGB", (width // 2, height), right), (width // 2, 0))
        return encode_png(image)
    return _make


def png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data) & 0xffffffff)


@pytest.fixture
def header_only_png():
    """Factory for a PNG that declares a size in its header but carries no pixel data."""
    def _make(width, height):
        header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
        return b"\x89PNG\r\n\x1a\n" + png_chunk(b"IHDR", header) + png_chunk(b"IEND", b"")
    return _make
