"""Shared fixtures: PNG files generated on the fly."""

import random
import struct
import zlib
from pathlib import Path

import pytest
from PIL import Image

from pixel_term.core.color import Color

# The 5x2 reference image used throughout the tests
REFERENCE_ROWS = [
    [(237, 28, 36), (63, 72, 204), (255, 255, 255), (255, 255, 255), (255, 127, 39)],
    [(255, 255, 255), (255, 255, 255), (255, 255, 255), (255, 255, 255), (255, 242, 0)],
]
REFERENCE_WIDTH = 5
REFERENCE_HEIGHT = 2


def reference_color(x: int, y: int) -> Color:
    return Color(*REFERENCE_ROWS[y][x])


def write_rgb_png(path: Path, rows: list[list[tuple[int, int, int]]]) -> Path:
    """Write an 8-bit RGB PNG with Pillow."""
    image = Image.new("RGB", (len(rows[0]), len(rows)))
    image.putdata([px for row in rows for px in row])
    image.save(path, format="PNG")
    return path


def _chunk(cid: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + cid + data + struct.pack(">I", zlib.crc32(cid + data))


def png_bytes(
    width: int, height: int, bit_depth: int, color_type: int, raw: bytes, interlace: int = 0
) -> bytes:
    """Assemble a PNG by hand from an already filtered pixel stream."""
    ihdr = struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, interlace)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _chunk(b"IHDR", ihdr)
        + _chunk(b"IDAT", zlib.compress(raw))
        + _chunk(b"IEND", b"")
    )


def raw_png_bytes(width: int, height: int, bit_depth: int, color_type: int, scanline: bytes) -> bytes:
    """Hand-made PNG whose rows all repeat `scanline` (for profiles Pillow cannot write)."""
    raw = b"".join(b"\x00" + scanline for _ in range(height))
    return png_bytes(width, height, bit_depth, color_type, raw)


# Adam7 passes as (x0, y0, dx, dy)
ADAM7 = [(0, 0, 8, 8), (4, 0, 8, 8), (0, 4, 4, 8), (2, 0, 4, 4), (0, 2, 2, 4), (1, 0, 2, 2), (0, 1, 1, 2)]


def interlaced_png_bytes(rows: list[list[tuple[int, int, int]]]) -> bytes:
    """8-bit RGB PNG with Adam7 interlacing, which Pillow can read but not write."""
    width, height = len(rows[0]), len(rows)
    raw = bytearray()
    for x0, y0, dx, dy in ADAM7:
        for y in range(y0, height, dy):
            line = [rows[y][x] for x in range(x0, width, dx)]
            if line:
                raw.append(0)
                raw.extend(channel for px in line for channel in px)
    return png_bytes(width, height, 8, 2, bytes(raw), interlace=1)


def random_rows(width: int, height: int, seed: int) -> list[list[tuple[int, int, int]]]:
    rng = random.Random(seed)
    return [
        [(rng.randrange(256), rng.randrange(256), rng.randrange(256)) for _ in range(width)]
        for _ in range(height)
    ]


@pytest.fixture
def reference_png(tmp_path: Path) -> Path:
    """The 5x2 reference image as an 8-bit RGB PNG."""
    return write_rgb_png(tmp_path / "reference.png", REFERENCE_ROWS)


@pytest.fixture
def rgba_png(tmp_path: Path) -> Path:
    path = tmp_path / "transparent.png"
    Image.new("RGBA", (3, 3), (255, 0, 0, 128)).save(path, format="PNG")
    return path


@pytest.fixture
def grayscale_png(tmp_path: Path) -> Path:
    path = tmp_path / "gray.png"
    Image.new("L", (3, 3), 100).save(path, format="PNG")
    return path


@pytest.fixture
def indexed_png(tmp_path: Path) -> Path:
    path = tmp_path / "indexed.png"
    Image.new("RGB", (3, 3), (10, 20, 30)).convert("P").save(path, format="PNG")
    return path


@pytest.fixture
def rgb16_png(tmp_path: Path) -> Path:
    path = tmp_path / "deep.png"
    path.write_bytes(raw_png_bytes(2, 2, 16, 2, b"\x12\x34" * 6))
    return path


@pytest.fixture
def not_png(tmp_path: Path) -> Path:
    path = tmp_path / "not-png.txt"
    path.write_text("this is not an image\n")
    return path


@pytest.fixture
def interlaced_png(tmp_path: Path) -> Path:
    """A 9x7 image stored with Adam7 interlacing; its pixels are random_rows(9, 7, 3)."""
    path = tmp_path / "interlaced.png"
    path.write_bytes(interlaced_png_bytes(random_rows(9, 7, 3)))
    return path


@pytest.fixture
def single_pixel_png(tmp_path: Path) -> Path:
    return write_rgb_png(tmp_path / "dot.png", [[(1, 2, 3)]])


@pytest.fixture
def random_png(tmp_path: Path) -> Path:
    return write_rgb_png(tmp_path / "noise.png", random_rows(37, 23, 11))


@pytest.fixture
def bad_crc_png(tmp_path: Path) -> Path:
    """A valid 2x2 RGB8 file with one bit flipped in the IDAT checksum."""
    data = bytearray(raw_png_bytes(2, 2, 8, 2, b"\x10\x20\x30" * 2))
    idat = data.index(b"IDAT")
    (length,) = struct.unpack(">I", data[idat - 4:idat])
    data[idat + 4 + length] ^= 0x01
    path = tmp_path / "bad-crc.png"
    path.write_bytes(bytes(data))
    return path


@pytest.fixture
def short_idat_png(tmp_path: Path) -> Path:
    """A 4x4 RGB8 header whose compressed pixel data holds only one scanline."""
    path = tmp_path / "short.png"
    path.write_bytes(png_bytes(4, 4, 8, 2, b"\x00" + b"\x01" * 12))
    return path
