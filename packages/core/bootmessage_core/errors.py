"""Errors for message lookup and command-line usage."""

from __future__ import annotations

from bootmessage_display.errors import BootMessageError


class MessageNotFound(BootMessageError):
    """No locale candidate has a text resource for the message."""


class UsageError(BootMessageError):
    """Malformed invocation."""
