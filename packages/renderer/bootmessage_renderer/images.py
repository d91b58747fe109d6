"""Validation for pre-rendered PNG files handed to the compositor as-is."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from bootmessage_display.errors import FormatError

from .models import Bitmap


IMAGE_SUFFIXES = (".png",)


def is_image_path(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_SUFFIXES


def load_image_bitmap(path: Path) -> Bitmap:
    """Check that ``path`` is a readable PNG and wrap it as a Bitmap."""
    try:
        with Image.open(path) as img:
            fmt = img.format
            img.verify()
    except (OSError, UnidentifiedImageError, SyntaxError) as exc:
        raise FormatError(f"{path} is not a readable image: {exc}") from exc
    if fmt != "PNG":
        raise FormatError(f"{path} is {fmt}, only PNG is supported by the compositor")
    return Bitmap(path=Path(path))
