"""Error raised when the external text renderer fails."""

from __future__ import annotations

from bootmessage_display.errors import BootMessageError


class RenderError(BootMessageError):
    """The external text renderer failed, timed out, or is missing."""
