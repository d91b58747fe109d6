"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bootmessage_display.geometry import bitmap_height, bitmap_width


@dataclass(frozen=True)
class RenderConfig:
    background_rgb: str
    font_name: str
    font_size: int
    margin_px: int
    text_color: str
    locale: str = ""
    extra_options: tuple[str, ...] = field(default_factory=tuple)
    markup: bool = False
    dpi: int = 72
    alignment: str = "center"
    hinting: str = "full"


@dataclass(frozen=True)
class Bitmap:
    """A PNG on disk. Dimensions are read from the header on every access."""

    path: Path

    @property
    def width_px(self) -> int:
        return bitmap_width(self.path)

    @property
    def height_px(self) -> int:
        return bitmap_height(self.path)
