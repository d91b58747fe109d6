"""Renderer adapter: text to fitted PNG bitmaps."""

from .errors import RenderError
from .images import is_image_path, load_image_bitmap
from .models import Bitmap, RenderConfig
from .pango import TextRenderer, build_render_command

__all__ = [
    "Bitmap",
    "RenderConfig",
    "RenderError",
    "TextRenderer",
    "build_render_command",
    "is_image_path",
    "load_image_bitmap",
]
