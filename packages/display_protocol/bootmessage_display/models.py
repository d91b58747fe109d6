"""Typed models for compositor geometry and process state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LifecycleState(str, Enum):
    NOT_RUNNING = "NotRunning"
    RUNNING_STATIC = "RunningStatic"
    RUNNING_ANIMATED = "RunningAnimated"


@dataclass(frozen=True)
class Rect:
    """Box in compositor units; x/y are offsets from the screen center."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class ProgressBarGeometry:
    frame: Rect
    punch: Rect
    fill: Rect
    y_offset: int


@dataclass(frozen=True)
class CompositorState:
    process_running: bool
    control_device_live: bool
    indicator_flag_present: bool
    animated: bool = False

    @property
    def lifecycle(self) -> LifecycleState:
        if not self.process_running:
            return LifecycleState.NOT_RUNNING
        if self.animated:
            return LifecycleState.RUNNING_ANIMATED
        return LifecycleState.RUNNING_STATIC
