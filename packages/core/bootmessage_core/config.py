"""Process-wide settings: defaults in code, overridable from the environment."""

from __future__ import annotations

import os
import re
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from bootmessage_renderer import RenderConfig


_HEX_RGB = re.compile(r"^[0-9a-f]{6}$")


@dataclass
class RenderDefaults:
    background_rgb: str = "fefefe"
    font_name: str = "Noto Sans UI"
    font_size: int = 22
    margin_px: int = 5
    text_color: str = "Black"
    extra_options: str = ""
    renderer: str = "pango-view"
    timeout_s: float = 30.0


@dataclass
class AssetsConfig:
    message_dir: str = "/usr/share/boot-message/text"
    image_dir: str = "/usr/share/boot-message/images"
    background_image: str = "boot_message_background.png"
    temp_dir: str = "/tmp"

    @property
    def background_path(self) -> Path:
        return Path(self.image_dir) / self.background_image


@dataclass
class SpinnerConfig:
    spinner_dir: str = "/usr/share/boot-message/images/spinner"
    pattern: str = "spinner_*.png"
    interval_ms: int = 100


@dataclass
class ProgressConfig:
    width_divisor: int = 2
    color_rgb: str = "4285f4"


@dataclass
class CompositorConfig:
    binary: str = "frecon"
    run_dir: str = "/run/frecon"
    tty_prefix: str = "/dev/tty"
    num_vts: int = 2
    kill_timeout_s: float = 3.0

    @property
    def control_device(self) -> Path:
        return Path(self.run_dir) / "vt0"


@dataclass
class RuntimeConfig:
    flag_path: str = "/run/display_boot_message.displayed"
    lock_path: str = "/run/display_boot_message.lock"
    log_tag: str = "display_boot_message"
    log_file: str | None = None
    developer_mode_command: str = "crossystem cros_debug?1"


@dataclass
class AppConfig:
    render: RenderDefaults = field(default_factory=RenderDefaults)
    assets: AssetsConfig = field(default_factory=AssetsConfig)
    spinner: SpinnerConfig = field(default_factory=SpinnerConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    compositor: CompositorConfig = field(default_factory=CompositorConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


# Environment variable -> (section, field).
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "BOOT_MESSAGE_BACKGROUND": ("render", "background_rgb"),
    "BOOT_MESSAGE_FONT": ("render", "font_name"),
    "BOOT_MESSAGE_FONT_SIZE": ("render", "font_size"),
    "BOOT_MESSAGE_MARGIN": ("render", "margin_px"),
    "BOOT_MESSAGE_TEXT_COLOR": ("render", "text_color"),
    "BOOT_MESSAGE_RENDER_OPTIONS": ("render", "extra_options"),
    "BOOT_MESSAGE_RENDERER": ("render", "renderer"),
    "BOOT_MESSAGE_RENDER_TIMEOUT": ("render", "timeout_s"),
    "BOOT_MESSAGE_TEXT_DIR": ("assets", "message_dir"),
    "BOOT_MESSAGE_IMAGE_DIR": ("assets", "image_dir"),
    "BOOT_MESSAGE_BACKGROUND_IMAGE": ("assets", "background_image"),
    "BOOT_MESSAGE_TEMP_DIR": ("assets", "temp_dir"),
    "BOOT_MESSAGE_SPINNER_DIR": ("spinner", "spinner_dir"),
    "BOOT_MESSAGE_SPINNER_PATTERN": ("spinner", "pattern"),
    "BOOT_MESSAGE_SPINNER_INTERVAL": ("spinner", "interval_ms"),
    "BOOT_MESSAGE_PROGRESS_DIVISOR": ("progress", "width_divisor"),
    "BOOT_MESSAGE_PROGRESS_COLOR": ("progress", "color_rgb"),
    "BOOT_MESSAGE_COMPOSITOR": ("compositor", "binary"),
    "BOOT_MESSAGE_COMPOSITOR_RUN_DIR": ("compositor", "run_dir"),
    "BOOT_MESSAGE_TTY_PREFIX": ("compositor", "tty_prefix"),
    "BOOT_MESSAGE_NUM_VTS": ("compositor", "num_vts"),
    "BOOT_MESSAGE_FLAG_FILE": ("runtime", "flag_path"),
    "BOOT_MESSAGE_LOCK_FILE": ("runtime", "lock_path"),
    "BOOT_MESSAGE_LOG_TAG": ("runtime", "log_tag"),
    "BOOT_MESSAGE_LOG_FILE": ("runtime", "log_file"),
    "BOOT_MESSAGE_DEV_MODE_COMMAND": ("runtime", "developer_mode_command"),
}


def _coerce(current: Any, raw: str) -> Any:
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        return int(raw.strip())
    if isinstance(current, float):
        return float(raw.strip())
    return raw


def normalize_rgb(value: str, default: str) -> str:
    """Strip ``#``/``0x`` prefixes; fall back to ``default`` unless 6 hex digits remain."""
    text = str(value).strip().lower()
    if text.startswith("#"):
        text = text[1:]
    elif text.startswith("0x"):
        text = text[2:]
    return text if _HEX_RGB.match(text) else default


def _normalize(cfg: AppConfig) -> None:
    cfg.render.background_rgb = normalize_rgb(cfg.render.background_rgb, RenderDefaults.background_rgb)
    cfg.progress.color_rgb = normalize_rgb(cfg.progress.color_rgb, ProgressConfig.color_rgb)
    cfg.render.font_size = max(1, int(cfg.render.font_size))
    cfg.render.margin_px = max(0, int(cfg.render.margin_px))
    cfg.render.timeout_s = float(max(1.0, cfg.render.timeout_s))
    cfg.spinner.interval_ms = max(1, int(cfg.spinner.interval_ms))
    cfg.progress.width_divisor = max(1, int(cfg.progress.width_divisor))
    cfg.compositor.num_vts = max(1, int(cfg.compositor.num_vts))
    if cfg.runtime.log_file == "":
        cfg.runtime.log_file = None


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if environ is None else environ
    cfg = AppConfig()

    for name, (section, key) in ENV_OVERRIDES.items():
        raw = env.get(name)
        if raw is None:
            continue
        target = getattr(cfg, section)
        try:
            setattr(target, key, _coerce(getattr(target, key), raw))
        except ValueError:
            # Keep the default for unparsable numbers.
            continue

    _normalize(cfg)
    return cfg


def render_config(cfg: AppConfig, locale: str = "", markup: bool = False) -> RenderConfig:
    return RenderConfig(
        background_rgb=cfg.render.background_rgb,
        font_name=cfg.render.font_name,
        font_size=cfg.render.font_size,
        margin_px=cfg.render.margin_px,
        text_color=cfg.render.text_color,
        locale=locale,
        extra_options=tuple(shlex.split(cfg.render.extra_options)),
        markup=markup,
    )

