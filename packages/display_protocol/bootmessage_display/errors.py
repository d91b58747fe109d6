"""Error kinds raised by the display layer and shared by the other packages."""

from __future__ import annotations


class BootMessageError(Exception):
    """Base class for every failure the boot message tool reports."""


class FormatError(BootMessageError):
    """A raster file is missing, truncated, or not a PNG."""


class DeviceUnavailable(BootMessageError):
    """The compositor control device is not a live terminal."""


class CompositorError(BootMessageError):
    """The compositor process could not be launched."""
