"""Control device transport for the compositor's virtual terminal node."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import DeviceUnavailable


@dataclass(frozen=True)
class ControlDevice:
    """Character device node of one compositor virtual terminal.

    The node is opened per operation; no descriptor is held between directives.
    """

    path: Path

    def is_live(self) -> bool:
        try:
            fd = os.open(self.path, os.O_RDONLY | os.O_NONBLOCK | os.O_NOCTTY)
        except OSError:
            return False
        try:
            return os.isatty(fd)
        finally:
            os.close(fd)

    def write(self, payload: bytes) -> int:
        if not self.is_live():
            raise DeviceUnavailable(f"{self.path} is not a live terminal")
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_NOCTTY | os.O_NONBLOCK)
        except OSError as exc:
            raise DeviceUnavailable(f"cannot open {self.path}: {exc}") from exc
        try:
            written = os.write(fd, payload)
        except OSError as exc:
            raise DeviceUnavailable(f"write to {self.path} failed: {exc}") from exc
        finally:
            os.close(fd)
        if written != len(payload):
            raise DeviceUnavailable(f"short write to {self.path}: {written}/{len(payload)} bytes")
        return written
