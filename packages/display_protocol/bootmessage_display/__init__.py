"""Frame-buffer compositor protocol: geometry, control device, directives."""

from .errors import BootMessageError, CompositorError, DeviceUnavailable, FormatError
from .geometry import bitmap_height, bitmap_width, clamp_percent, progress_geometry, spinner_offset
from .models import CompositorState, LifecycleState, ProgressBarGeometry, Rect
from .osc import CompositorClient, encode_box, encode_image
from .transport import ControlDevice

__all__ = [
    "BootMessageError",
    "CompositorClient",
    "CompositorError",
    "CompositorState",
    "ControlDevice",
    "DeviceUnavailable",
    "FormatError",
    "LifecycleState",
    "ProgressBarGeometry",
    "Rect",
    "bitmap_height",
    "bitmap_width",
    "clamp_percent",
    "encode_box",
    "encode_image",
    "progress_geometry",
    "spinner_offset",
]
