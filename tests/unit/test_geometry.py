import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "display_protocol"))
sys.path.insert(0, str(ROOT / "tests"))

from bootmessage_display.errors import FormatError
from bootmessage_display.geometry import bitmap_height, bitmap_width, progress_geometry, spinner_offset
from bootmessage_display.models import Rect
from fakes import write_png


class BitmapWidthTests(unittest.TestCase):
    def test_reads_png_dimensions(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_png(Path(tmp) / "a.png", 321, 17)
            self.assertEqual(bitmap_width(path), 321)
            self.assertEqual(bitmap_height(path), 17)

    def test_width_at_offset_16(self):
        header = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\x0dIHDR" + (960).to_bytes(4, "big") + (540).to_bytes(4, "big")
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "raw.png"
            path.write_bytes(header)
            self.assertEqual(bitmap_width(path), 960)

    def test_truncated_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "short.png"
            path.write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
            with self.assertRaises(FormatError):
                bitmap_width(path)

    def test_not_a_png(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "text.png"
            path.write_bytes(b"x" * 64)
            with self.assertRaises(FormatError):
                bitmap_width(path)

    def test_missing_file(self):
        with self.assertRaises(FormatError):
            bitmap_width(Path("/nonexistent/boot/background.png"))

    def test_zero_width_header(self):
        header = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\x0dIHDR" + bytes(8)
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "zero.png"
            path.write_bytes(header)
            self.assertEqual(bitmap_width(path), 0)


class SpinnerOffsetTests(unittest.TestCase):
    def test_reference_vector(self):
        self.assertEqual(spinner_offset(120, 48), -108)

    def test_odd_width_truncates(self):
        self.assertEqual(spinner_offset(121, 48), -108)
        self.assertEqual(spinner_offset(1, 0), 0)

    def test_zero_widths(self):
        self.assertEqual(spinner_offset(0, 0), 0)
        self.assertEqual(spinner_offset(0, 32), -32)


class ProgressGeometryTests(unittest.TestCase):
    def test_reference_vector(self):
        geo = progress_geometry(960, 2, 50)
        self.assertEqual(geo.y_offset, 120)
        self.assertEqual(geo.frame, Rect(x=0, y=120, width=480, height=24))
        self.assertEqual(geo.punch, Rect(x=0, y=120, width=472, height=16))
        self.assertEqual(geo.fill, Rect(x=-118, y=120, width=236, height=16))

    def test_full_and_empty(self):
        full = progress_geometry(960, 2, 100)
        self.assertEqual(full.fill.width, 472)
        self.assertEqual(full.fill.x, 0)
        empty = progress_geometry(960, 2, 0)
        self.assertEqual(empty.fill.width, 0)
        self.assertEqual(empty.fill.x, -236)

    def test_out_of_range_percent_is_clamped(self):
        self.assertEqual(progress_geometry(960, 2, -5), progress_geometry(960, 2, 0))
        self.assertEqual(progress_geometry(960, 2, 150), progress_geometry(960, 2, 100))

    def test_fill_width_truncates(self):
        geo = progress_geometry(1366, 2, 33)
        # bar 683 wide, inner 675, 675 * 33 / 100 = 222.75
        self.assertEqual(geo.frame.width, 683)
        self.assertEqual(geo.frame.height, 34)
        self.assertEqual(geo.fill.width, 222)
        self.assertEqual(geo.fill.x, -226)

    def test_zero_reference_width(self):
        geo = progress_geometry(0, 2, 50)
        self.assertEqual(geo.frame, Rect(x=0, y=0, width=0, height=0))
        self.assertEqual(geo.punch.width, 0)
        self.assertEqual(geo.fill.width, 0)

    def test_divisor_must_be_positive(self):
        with self.assertRaises(ValueError):
            progress_geometry(960, 0, 50)


if __name__ == "__main__":
    unittest.main()
