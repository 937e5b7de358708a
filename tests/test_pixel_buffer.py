"""Tests for PixelBuffer: PNG codec, error taxonomy, cursor overlay."""

import shutil
from pathlib import Path

import pytest
from PIL import Image

from conftest import (
    REFERENCE_HEIGHT,
    REFERENCE_WIDTH,
    png_bytes,
    random_rows,
    reference_color,
)
from pixel_term.core.color import Color
from pixel_term.core.errors import (
    DecodeError,
    EncodeError,
    ImageError,
    ImageIoError,
    UnsupportedFormatError,
)
from pixel_term.core.pixel_buffer import PixelBuffer


class TestOpen:
    """Loading PNG files."""

    def test_open_reference(self, reference_png: Path) -> None:
        buf = PixelBuffer.open(reference_png)
        assert (buf.width, buf.height) == (REFERENCE_WIDTH, REFERENCE_HEIGHT)
        for y in range(REFERENCE_HEIGHT):
            for x in range(REFERENCE_WIDTH):
                assert buf.color_at(x, y) == reference_color(x, y)

    def test_open_remembers_path(self, reference_png: Path) -> None:
        buf = PixelBuffer.open(str(reference_png))
        assert buf.path == reference_png
        assert buf.modified is False

    def test_missing_file_is_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(ImageIoError):
            PixelBuffer.open(tmp_path / "non-exist.png")

    def test_directory_is_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(ImageIoError):
            PixelBuffer.open(tmp_path)

    def test_not_png_is_decode_error(self, not_png: Path) -> None:
        with pytest.raises(DecodeError):
            PixelBuffer.open(not_png)

    def test_broken_chunks_are_decode_error(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)
        with pytest.raises(DecodeError):
            PixelBuffer.open(path)

    def test_truncated_data_is_decode_error(self, reference_png: Path, tmp_path: Path) -> None:
        # Signature, IHDR and the first bytes of IDAT
        data = reference_png.read_bytes()
        path = tmp_path / "truncated.png"
        path.write_bytes(data[:45])
        with pytest.raises(DecodeError):
            PixelBuffer.open(path)

    @pytest.mark.parametrize(
        "fixture_name", ["rgba_png", "grayscale_png", "indexed_png", "rgb16_png"]
    )
    def test_other_profiles_unsupported(self, fixture_name: str, request: pytest.FixtureRequest) -> None:
        path = request.getfixturevalue(fixture_name)
        with pytest.raises(UnsupportedFormatError):
            PixelBuffer.open(path)

    def test_bad_checksum_is_decode_error(self, bad_crc_png: Path) -> None:
        with pytest.raises(DecodeError):
            PixelBuffer.open(bad_crc_png)

    def test_short_pixel_data_is_decode_error(self, short_idat_png: Path) -> None:
        with pytest.raises(DecodeError):
            PixelBuffer.open(short_idat_png)

    def test_trailing_pixel_data_is_decode_error(self, tmp_path: Path) -> None:
        path = tmp_path / "long.png"
        path.write_bytes(png_bytes(1, 1, 8, 2, b"\x00\x01\x02\x03" * 2))
        with pytest.raises(DecodeError):
            PixelBuffer.open(path)

    def test_interlaced(self, interlaced_png: Path) -> None:
        buf = PixelBuffer.open(interlaced_png)
        expected = random_rows(9, 7, 3)
        assert (buf.width, buf.height) == (9, 7)
        assert all(color.rgb == expected[y][x] for x, y, color in buf.pixels())

    def test_oversized_image_is_unsupported(
        self, reference_png: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Pillow refuses images over twice this many pixels
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 4)
        with pytest.raises(UnsupportedFormatError, match="too large"):
            PixelBuffer.open(reference_png)

    def test_errors_share_base_class(self, not_png: Path) -> None:
        with pytest.raises(ImageError):
            PixelBuffer.open(not_png)


class TestPixelAccess:
    """Bounds-checked reads and writes."""

    def test_paint(self, reference_png: Path) -> None:
        buf = PixelBuffer.open(reference_png)
        coord = (buf.width - 1, buf.height - 1)
        buf.paint(*coord, Color(12, 23, 34))
        assert buf.color_at(*coord) == Color(12, 23, 34)
        assert buf.modified is True

    def test_paint_boundary(self) -> None:
        buf = PixelBuffer.new(3, 2)
        buf.paint(2, 1, Color(0, 0, 0))
        assert buf.color_at(2, 1) == Color(0, 0, 0)

    @pytest.mark.parametrize("coord", [(3, 0), (0, 2), (-1, 0), (0, -1)])
    def test_out_of_bounds(self, coord: tuple[int, int]) -> None:
        buf = PixelBuffer.new(3, 2)
        with pytest.raises(IndexError):
            buf.color_at(*coord)
        with pytest.raises(IndexError):
            buf.paint(*coord, Color(0, 0, 0))

    def test_new_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            PixelBuffer.new(0, 4)

    def test_rgb_bytes_row_major(self) -> None:
        buf = PixelBuffer.new(2, 2, Color(0, 0, 0))
        buf.paint(1, 0, Color(1, 2, 3))
        buf.paint(0, 1, Color(4, 5, 6))
        assert buf.rgb_bytes() == bytes([0, 0, 0, 1, 2, 3, 4, 5, 6, 0, 0, 0])

    def test_pixels_iterates_row_major(self, reference_png: Path) -> None:
        buf = PixelBuffer.open(reference_png)
        coords = [(x, y) for x, y, _ in buf.pixels()]
        assert coords[:6] == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (0, 1)]
        assert all(color == reference_color(x, y) for x, y, color in buf.pixels())

    def test_from_rgb_bytes_size_mismatch(self) -> None:
        with pytest.raises(ValueError):
            PixelBuffer.from_rgb_bytes(2, 2, b"\x00" * 11)


class TestCursorOverlay:
    """The overlay projection inverts only the cursor cell's foreground."""

    def test_overlay_invariant(self, reference_png: Path) -> None:
        buf = PixelBuffer.open(reference_png)
        cursor = (3, 1)
        grid = buf.with_cursor_overlay(*cursor)

        for y, row in enumerate(grid.rows):
            for x, cell in enumerate(row):
                stored = buf.color_at(x, y)
                assert cell.bg == stored
                if (x, y) == cursor:
                    assert cell.fg == stored.opposite()
                else:
                    assert cell.fg == stored

    def test_overlay_does_not_mutate(self, reference_png: Path) -> None:
        buf = PixelBuffer.open(reference_png)
        before = buf.rgb_bytes()
        buf.with_cursor_overlay(0, 0)
        buf.with_cursor_overlay(4, 1)
        assert buf.rgb_bytes() == before
        assert buf.modified is False

    def test_overlay_dimensions(self) -> None:
        grid = PixelBuffer.new(4, 3).with_cursor_overlay(0, 0)
        assert (grid.width, grid.height) == (4, 3)
        assert len(grid.rows) == 3
        assert all(len(row) == 4 for row in grid.rows)

    def test_overlay_out_of_bounds(self) -> None:
        with pytest.raises(IndexError):
            PixelBuffer.new(2, 2).with_cursor_overlay(2, 0)


class TestSave:
    """Writing PNG files."""

    @pytest.mark.parametrize(
        "fixture_name", ["reference_png", "interlaced_png", "single_pixel_png", "random_png"]
    )
    def test_round_trip(
        self, fixture_name: str, request: pytest.FixtureRequest, tmp_path: Path
    ) -> None:
        source = request.getfixturevalue(fixture_name)
        original = PixelBuffer.open(source)
        out = tmp_path / "copy.png"
        original.save_as(out)
        assert PixelBuffer.open(out) == PixelBuffer.open(source)

    def test_save_as_updates_path(self, reference_png: Path, tmp_path: Path) -> None:
        buf = PixelBuffer.open(reference_png)
        coord = (buf.width - 1, buf.height - 1)
        buf.paint(*coord, Color(128, 128, 128))
        out = tmp_path / "image_test_save_as.png"
        buf.save_as(out)
        assert buf.path == out
        assert buf.modified is False

        edited = PixelBuffer.open(out)
        for y in range(buf.height):
            for x in range(buf.width):
                expected = Color(128, 128, 128) if (x, y) == coord else reference_color(x, y)
                assert edited.color_at(x, y) == expected

    def test_save_without_edit_keeps_pixels(self, reference_png: Path, tmp_path: Path) -> None:
        copy_path = tmp_path / "cp_image_test_save.png"
        shutil.copy(reference_png, copy_path)
        PixelBuffer.open(copy_path).save()
        assert PixelBuffer.open(copy_path) == PixelBuffer.open(reference_png)

    def test_save_after_save_as_writes_new_path(self, reference_png: Path, tmp_path: Path) -> None:
        buf = PixelBuffer.open(reference_png)
        out = tmp_path / "renamed.png"
        buf.save_as(out)
        buf.paint(0, 0, Color(9, 9, 9))
        buf.save()
        assert PixelBuffer.open(out).color_at(0, 0) == Color(9, 9, 9)
        assert PixelBuffer.open(reference_png).color_at(0, 0) == reference_color(0, 0)

    def test_saved_file_is_rgb8(self, tmp_path: Path) -> None:
        out = tmp_path / "new.png"
        PixelBuffer.new(3, 3, Color(1, 2, 3)).save_as(out)
        with Image.open(out) as image:
            assert image.format == "PNG"
            assert image.mode == "RGB"

    def test_save_without_path(self) -> None:
        with pytest.raises(ValueError):
            PixelBuffer.new(2, 2).save()

    def test_save_into_missing_directory_is_io_error(self, tmp_path: Path) -> None:
        buf = PixelBuffer.new(2, 2)
        with pytest.raises(ImageIoError):
            buf.save_as(tmp_path / "no-such-dir" / "out.png")
        assert buf.path is None

    def test_encoder_failure_is_encode_error(
        self, reference_png: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def failing_save(*args, **kwargs):
            raise OSError("encoder broke")

        buf = PixelBuffer.open(reference_png)
        buf.paint(0, 0, Color(9, 9, 9))
        monkeypatch.setattr(Image.Image, "save", failing_save)
        out = tmp_path / "never.png"
        with pytest.raises(EncodeError):
            buf.save_as(out)
        with pytest.raises(EncodeError):
            buf.save()
        assert not out.exists()
        assert buf.path == reference_png
        assert buf.modified is True
        assert PixelBuffer.open(reference_png).color_at(0, 0) == reference_color(0, 0)
