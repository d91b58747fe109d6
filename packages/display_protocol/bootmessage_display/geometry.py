"""Pure geometry helpers: PNG width lookup, spinner placement, progress bar boxes."""

from __future__ import annotations

import struct
from pathlib import Path

from .errors import FormatError
from .models import ProgressBarGeometry, Rect


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_HEADER_SIZE = 24
_BAR_BORDER = 4


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _read_header(path: str | Path) -> bytes:
    try:
        with open(path, "rb") as fh:
            header = fh.read(_HEADER_SIZE)
    except OSError as exc:
        raise FormatError(f"cannot read {path}: {exc}") from exc
    if len(header) < _HEADER_SIZE:
        raise FormatError(f"{path} is too short for a PNG header ({len(header)} bytes)")
    if header[:8] != PNG_SIGNATURE or header[12:16] != b"IHDR":
        raise FormatError(f"{path} is not a PNG file")
    return header


def bitmap_width(path: str | Path) -> int:
    return struct.unpack(">I", _read_header(path)[16:20])[0]


def bitmap_height(path: str | Path) -> int:
    return struct.unpack(">I", _read_header(path)[20:24])[0]


def clamp_percent(percent: int) -> int:
    return max(0, min(100, int(percent)))


def spinner_offset(message_width: int, spinner_width: int) -> int:
    """Horizontal loop offset that puts the spinner just left of a centered message."""
    return -(_tdiv(message_width, 2) + spinner_width)


def progress_geometry(reference_width: int, bar_width_divisor: int, percent: int) -> ProgressBarGeometry:
    if bar_width_divisor <= 0:
        raise ValueError("bar_width_divisor must be positive")
    percent = clamp_percent(percent)

    bar_width = _tdiv(reference_width, bar_width_divisor)
    bar_height = _tdiv(reference_width, 40)
    y_offset = bar_height * 5

    inner_width = max(0, bar_width - 2 * _BAR_BORDER)
    inner_height = max(0, bar_height - 2 * _BAR_BORDER)
    fill_width = _tdiv(inner_width * percent, 100)
    fill_x = -_tdiv(inner_width - fill_width, 2)

    return ProgressBarGeometry(
        frame=Rect(x=0, y=y_offset, width=bar_width, height=bar_height),
        punch=Rect(x=0, y=y_offset, width=inner_width, height=inner_height),
        fill=Rect(x=fill_x, y=y_offset, width=fill_width, height=inner_height),
        y_offset=y_offset,
    )
