"""PixelBuffer - an 8-bit RGB raster loaded from and saved to PNG.

The buffer stores a row-major grid of Color values and knows the path it was
loaded from (or last saved to). Display concerns are limited to producing a
RenderableGrid: a read-only projection in which every cell carries a
foreground and a background color. Normally both are the stored color; the
cell under the cursor gets the inverse as its foreground.
"""

from __future__ import annotations

import io
import logging
import struct
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from PIL import Image, UnidentifiedImageError

from pixel_term.core.color import Color, WHITE
from pixel_term.core.errors import (
    DecodeError,
    EncodeError,
    ImageIoError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

_PNG_SIGNATURE_SIZE = 8
_COLOR_TYPE_RGB = 2

# Adam7 passes as (x0, y0, dx, dy)
_ADAM7 = (
    (0, 0, 8, 8),
    (4, 0, 8, 8),
    (0, 4, 4, 8),
    (2, 0, 4, 4),
    (0, 2, 2, 4),
    (1, 0, 2, 2),
    (0, 1, 1, 2),
)

_DECODE_ERRORS = (SyntaxError, ValueError, EOFError, OSError, struct.error)


@dataclass(frozen=True)
class _PngHeader:
    """The IHDR fields that decide whether a PNG can be edited."""
    width: int
    height: int
    bit_depth: int
    color_type: int
    interlaced: bool

    @property
    def is_rgb8(self) -> bool:
        return self.bit_depth == 8 and self.color_type == _COLOR_TYPE_RGB

    def rgb8_stream_size(self) -> int:
        """Length of the inflated IDAT stream for an 8-bit RGB image.

        Every scanline carries one filter byte before its pixels; interlaced
        images store one run of scanlines per non-empty Adam7 pass.
        """
        if not self.interlaced:
            return self.height * (1 + self.width * 3)
        total = 0
        for x0, y0, dx, dy in _ADAM7:
            cols = (self.width - x0 + dx - 1) // dx
            rows = (self.height - y0 + dy - 1) // dy
            if cols > 0 and rows > 0:
                total += rows * (1 + cols * 3)
        return total


@dataclass(frozen=True, slots=True)
class DisplayCell:
    """How a single pixel is drawn on screen."""
    fg: Color
    bg: Color


@dataclass(frozen=True)
class RenderableGrid:
    """
    Display projection of a PixelBuffer.

    Rows are stored top to bottom; each row holds `width` cells.
    """
    width: int
    height: int
    rows: tuple[tuple[DisplayCell, ...], ...]

    def cell(self, x: int, y: int) -> DisplayCell:
        """Get the display cell at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Position ({x}, {y}) out of bounds ({self.width}x{self.height})")
        return self.rows[y][x]


class PixelBuffer:
    """
    A width x height grid of 24-bit colors.

    Dimensions are fixed once the buffer exists. Every coordinate access is
    bounds-checked and raises IndexError when (x, y) lies outside the grid;
    callers are expected to clamp before calling.
    """

    def __init__(
        self,
        width: int,
        height: int,
        pixels: list[list[Color]],
        path: Path | None = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Image must be at least 1x1, got {width}x{height}")
        if len(pixels) != height or any(len(row) != width for row in pixels):
            raise ValueError(f"Pixel grid does not match {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = pixels
        self._path = path
        self._modified = False

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, width: int, height: int, fill: Color = WHITE) -> PixelBuffer:
        """Create an in-memory buffer filled with a single color."""
        if width < 1 or height < 1:
            raise ValueError(f"Image must be at least 1x1, got {width}x{height}")
        pixels = [[fill for _ in range(width)] for _ in range(height)]
        return cls(width, height, pixels)

    @classmethod
    def from_rgb_bytes(
        cls,
        width: int,
        height: int,
        data: bytes,
        path: Path | None = None,
    ) -> PixelBuffer:
        """
        Build a buffer from a row-major RGB byte stream.

        Args:
            width: Width in pixels
            height: Height in pixels
            data: Exactly width * height * 3 bytes
            path: Path to remember for a later save()
        """
        if len(data) != width * height * 3:
            raise ValueError(
                f"Expected {width * height * 3} bytes for {width}x{height}, got {len(data)}"
            )
        stride = width * 3
        pixels = []
        for y in range(height):
            line = data[y * stride:(y + 1) * stride]
            pixels.append([
                Color(line[i], line[i + 1], line[i + 2])
                for i in range(0, stride, 3)
            ])
        return cls(width, height, pixels, path)

    @classmethod
    def open(cls, path: str | Path) -> PixelBuffer:
        """
        Read an image from a PNG file.

        Only PNGs whose color type is RGB with a bit depth of 8 are accepted.
        Every chunk CRC is checked and the pixel stream must inflate to
        exactly the size the header promises, so damaged files are rejected
        instead of being loaded with zero-filled rows.

        Raises:
            ImageIoError: The file could not be read
            DecodeError: The data is not a PNG or is corrupt
            UnsupportedFormatError: The PNG is not 8-bit RGB, or is too large
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise ImageIoError(f"Cannot read {path}: {err}") from err

        image = _open_png(path, data)
        with image:
            header = _read_header(data)
            if header is None:
                raise DecodeError(f"{path}: PNG does not start with an IHDR chunk")
            logger.debug("Decoded header of %s: %s", path, header)
            if image.mode != "RGB" or not header.is_rgb8:
                raise UnsupportedFormatError(
                    f"{path}: only 8-bit RGB PNG is supported "
                    f"(got bit depth {header.bit_depth}, color type {header.color_type})"
                )
            # verify() reads every chunk through IEND and checks its CRC;
            # it leaves the image unusable, so pixels come from a second open
            try:
                image.verify()
            except _DECODE_ERRORS as err:
                raise DecodeError(f"{path}: corrupt PNG: {err}") from err

        _check_pixel_stream(path, data, header)

        with _open_png(path, data) as image:
            try:
                image.load()
            except _DECODE_ERRORS as err:
                raise DecodeError(f"Failed to decode {path}: {err}") from err

            width, height = image.size
            pixel_bytes = image.tobytes()

        # Sanity check on the decoder's own output
        assert len(pixel_bytes) == width * height * 3

        logger.info("Opened %s (%dx%d)", path, width, height)
        return cls.from_rgb_bytes(width, height, pixel_bytes, path)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        """Width in pixels."""
        return self._width

    @property
    def height(self) -> int:
        """Height in pixels."""
        return self._height

    @property
    def path(self) -> Path | None:
        """Path used by save(); updated by save_as()."""
        return self._path

    @property
    def modified(self) -> bool:
        """Whether the buffer has been painted since it was last saved."""
        return self._modified

    # -------------------------------------------------------------------------
    # Pixel access
    # -------------------------------------------------------------------------

    def _check_coord(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Position ({x}, {y}) out of bounds ({self._width}x{self._height})")

    def color_at(self, x: int, y: int) -> Color:
        """Get the stored color at (x, y)."""
        self._check_coord(x, y)
        return self._pixels[y][x]

    def paint(self, x: int, y: int, color: Color) -> None:
        """Change the color of the pixel at (x, y)."""
        self._check_coord(x, y)
        self._pixels[y][x] = color
        self._modified = True

    def pixels(self) -> Iterator[tuple[int, int, Color]]:
        """Iterate over all pixels as (x, y, color) tuples."""
        for y, row in enumerate(self._pixels):
            for x, color in enumerate(row):
                yield x, y, color

    def rgb_bytes(self) -> bytes:
        """Row-major RGB byte stream, 3 bytes per pixel."""
        out = bytearray()
        for _, _, color in self.pixels():
            out.extend((color.r, color.g, color.b))
        return bytes(out)

    def with_cursor_overlay(self, x: int, y: int) -> RenderableGrid:
        """
        Project the buffer for display with the cursor at (x, y).

        The stored pixels are left untouched. In the result every cell has
        fg == bg == stored color, except the cursor cell whose foreground is
        the inverse of its stored color.
        """
        self._check_coord(x, y)
        rows = []
        for row_y, row in enumerate(self._pixels):
            cells = [DisplayCell(fg=color, bg=color) for color in row]
            if row_y == y:
                stored = row[x]
                cells[x] = DisplayCell(fg=stored.opposite(), bg=stored)
            rows.append(tuple(cells))
        return RenderableGrid(self._width, self._height, tuple(rows))

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def save(self) -> None:
        """Save the image to its remembered path."""
        if self._path is None:
            raise ValueError("Buffer has no path; use save_as()")
        self._write(self._path)

    def save_as(self, path: str | Path) -> None:
        """Save the image to `path` and remember it for later save() calls."""
        path = Path(path)
        self._write(path)
        self._path = path

    def _write(self, path: Path) -> None:
        data = self._encode()
        try:
            path.write_bytes(data)
        except OSError as err:
            raise ImageIoError(f"Cannot write {path}: {err}") from err
        self._modified = False
        logger.info("Saved %s (%d bytes)", path, len(data))

    def _encode(self) -> bytes:
        """Encode the grid as an 8-bit RGB PNG without alpha."""
        out = io.BytesIO()
        try:
            image = Image.frombytes("RGB", (self._width, self._height), self.rgb_bytes())
            image.save(out, format="PNG")
        except (OSError, ValueError) as err:
            raise EncodeError(f"Failed to encode PNG: {err}") from err
        return out.getvalue()

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._pixels == other._pixels
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PixelBuffer({self._width}x{self._height}, path={self._path!r})"


def _open_png(path: Path, data: bytes) -> Image.Image:
    """Open PNG data lazily; only the header chunks are parsed."""
    try:
        return Image.open(io.BytesIO(data), formats=["PNG"])
    except Image.DecompressionBombError as err:
        raise UnsupportedFormatError(f"{path}: image is too large to edit: {err}") from err
    except (UnidentifiedImageError, *_DECODE_ERRORS) as err:
        raise DecodeError(f"{path} is not a valid PNG: {err}") from err


def _read_header(data: bytes) -> _PngHeader | None:
    """Read the IHDR chunk that must follow the PNG signature."""
    start = _PNG_SIGNATURE_SIZE + 8
    if data[start - 4:start] != b"IHDR" or len(data) < start + 13:
        return None
    width, height, bit_depth, color_type, _, _, interlace = struct.unpack(
        ">IIBBBBB", data[start:start + 13]
    )
    return _PngHeader(width, height, bit_depth, color_type, interlace == 1)


def _check_pixel_stream(path: Path, data: bytes, header: _PngHeader) -> None:
    """
    Inflate the IDAT chunks and compare the result with the header.

    The decoder pads a short stream with zero bytes, so a file whose pixel
    data ends early would otherwise open as a partly black image.
    """
    pos = _PNG_SIGNATURE_SIZE
    idat = bytearray()
    while pos + 8 <= len(data):
        length, chunk_type = struct.unpack_from(">I4s", data, pos)
        if chunk_type == b"IEND":
            break
        if chunk_type == b"IDAT":
            idat += data[pos + 8:pos + 8 + length]
        pos += 12 + length

    expected = header.rgb8_stream_size()
    inflater = zlib.decompressobj()
    try:
        raw = inflater.decompress(bytes(idat), expected + 1)
    except zlib.error as err:
        raise DecodeError(f"{path}: corrupt pixel data: {err}") from err
    if len(raw) < expected:
        raise DecodeError(
            f"{path}: pixel data ends after {len(raw)} of {expected} bytes"
        )
    if len(raw) > expected or not inflater.eof:
        raise DecodeError(f"{path}: pixel data does not match the {expected} bytes in the header")
