"""Compositor restart-versus-update decisions and process lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from bootmessage_display import CompositorClient, CompositorState, ControlDevice, LifecycleState, spinner_offset
from bootmessage_renderer import Bitmap

from .config import AppConfig
from .logging_setup import get_logger
from .messages import MessageCategory
from .session import DisplaySession


# Image list order: background, message, then spinner frames.
SPINNER_LOOP_START = 2


@dataclass(frozen=True)
class CompositorHandle:
    pid: int | None
    control: ControlDevice
    category: MessageCategory


def needs_restart(category: MessageCategory, state: CompositorState) -> bool:
    # Loop mode cannot be switched on for an instance that is already running.
    if category is MessageCategory.SPINNER_REQUIRED:
        return True
    if state.lifecycle is not LifecycleState.RUNNING_STATIC:
        # Not running, or still cycling a spinner placed for the previous message.
        return True
    return not state.control_device_live


def base_compositor_flags(background_rgb: str) -> list[str]:
    return [
        "--daemon",
        "--enable-vts",
        f"--clear=0x{background_rgb}",
        "--frame-interval=0",
        "--scale=0",
        "--enable-vt1",
        "--no-login",
        "--enable-osc",
        "--pre-create-vts",
    ]


def restore_compositor_flags() -> list[str]:
    return ["--daemon", "--enable-vt1", "--no-login", "--enable-vts", "--pre-create-vts", "--enable-osc"]


def build_compositor_args(
    cfg: AppConfig,
    category: MessageCategory,
    bitmap: Bitmap,
    spinner_frames: Sequence[Path] = (),
) -> list[str]:
    """Compositor arguments; flags always precede the image paths."""
    args = base_compositor_flags(cfg.render.background_rgb)
    images = [str(cfg.assets.background_path), str(bitmap.path)]

    if category is MessageCategory.SPINNER_REQUIRED and spinner_frames:
        offset = spinner_offset(bitmap.width_px, Bitmap(path=Path(spinner_frames[0])).width_px)
        args += [
            f"--loop-start={SPINNER_LOOP_START}",
            f"--loop-count={len(spinner_frames)}",
            f"--loop-offset={offset},0",
            f"--loop-interval={cfg.spinner.interval_ms}",
        ]
        images += [str(frame) for frame in spinner_frames]
    return args + images


class CompositorLifecycle:
    def __init__(self, cfg: AppConfig, session: DisplaySession) -> None:
        self.cfg = cfg
        self.session = session
        self.logger = get_logger()
        self.client = CompositorClient(session.control)

    def spinner_frames(self) -> list[Path]:
        root = Path(self.cfg.spinner.spinner_dir)
        return sorted(root.glob(self.cfg.spinner.pattern))

    def start(
        self,
        category: MessageCategory,
        bitmap: Bitmap,
        spinner_frames: Sequence[Path] | None = None,
    ) -> CompositorHandle:
        if spinner_frames is None and category is MessageCategory.SPINNER_REQUIRED:
            spinner_frames = self.spinner_frames()
            if not spinner_frames:
                self.logger.warning("no spinner frames under %s", self.cfg.spinner.spinner_dir)
        args = build_compositor_args(self.cfg, category, bitmap, spinner_frames or ())

        killed = self.session.kill_compositor()
        pid = self.session.spawn_compositor(args)
        self.logger.info(
            "compositor started pid=%s category=%s replaced=%d",
            pid,
            category.value,
            killed,
            extra={"event": "compositor_started"},
        )
        self.remap_vts()
        return CompositorHandle(pid=pid, control=self.session.control, category=category)

    def remap_vts(self) -> list[Path]:
        run_dir = Path(self.cfg.compositor.run_dir)
        linked: list[Path] = []
        for index in range(1, self.cfg.compositor.num_vts):
            node = Path(f"{self.cfg.compositor.tty_prefix}{index}")
            if self.session.link_vt(node, run_dir / f"vt{index}"):
                linked.append(node)
        return linked

    def update_in_place(self, bitmap: Bitmap) -> None:
        bg = self.cfg.render.background_rgb
        self.client.show_image(self.cfg.assets.background_path, bg)
        self.client.show_image(bitmap.path, bg)

    def mark_displayed(self) -> None:
        self.session.mark_displayed()

    def clear_displayed(self) -> None:
        self.session.clear_displayed()

    def restore(self) -> bool:
        """Tear down the boot message, if one is shown. Safe to call repeatedly."""
        if not self.session.indicator_present():
            self.logger.debug("no boot message displayed, nothing to restore")
            return False

        self.logger.info("restoring console after boot message", extra={"event": "restore"})
        self.session.clear_displayed()
        self.session.kill_compositor()
        if self.session.developer_mode():
            self.session.spawn_compositor(restore_compositor_flags())
            self.logger.info("relaunched console compositor", extra={"event": "restore_relaunch"})
        return True
