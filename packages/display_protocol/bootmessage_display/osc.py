"""Escape-sequence directives understood by the frame-buffer compositor."""

from __future__ import annotations

from pathlib import Path

from .models import ProgressBarGeometry, Rect
from .transport import ControlDevice


OSC_START = "\033]"
OSC_END = "\033\\"


def encode_image(path: str | Path, background_rgb: str) -> bytes:
    return f"{OSC_START}image:file={path};color=0x{background_rgb};scale=0{OSC_END}".encode("utf-8")


def encode_box(width: int, height: int, color_rgb: str, x: int, y: int) -> bytes:
    return (
        f"{OSC_START}box:color=0x{color_rgb};size={width},{height};offset={x},{y};scale=0{OSC_END}"
    ).encode("utf-8")


class CompositorClient:
    """Writes directives to one control device, one atomic write each."""

    def __init__(self, device: ControlDevice) -> None:
        self.device = device

    def is_live(self) -> bool:
        return self.device.is_live()

    def show_image(self, path: str | Path, background_rgb: str) -> int:
        return self.device.write(encode_image(path, background_rgb))

    def draw_box(self, width: int, height: int, color_rgb: str, x: int, y: int) -> int:
        return self.device.write(encode_box(width, height, color_rgb, x, y))

    def draw_rect(self, rect: Rect, color_rgb: str) -> int:
        return self.draw_box(rect.width, rect.height, color_rgb, rect.x, rect.y)

    def draw_progress(self, geometry: ProgressBarGeometry, bar_rgb: str, background_rgb: str) -> int:
        # Largest first; later boxes paint over earlier ones.
        sent = self.draw_rect(geometry.frame, bar_rgb)
        sent += self.draw_rect(geometry.punch, background_rgb)
        if geometry.fill.width > 0:
            sent += self.draw_rect(geometry.fill, bar_rgb)
        return sent
