"""Top-level display flow: message or file -> bitmap -> compositor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from bootmessage_display import DeviceUnavailable, clamp_percent, progress_geometry
from bootmessage_renderer import Bitmap, TextRenderer, is_image_path, load_image_bitmap

from .config import AppConfig, render_config
from .errors import MessageNotFound
from .lifecycle import CompositorLifecycle, needs_restart
from .logging_setup import get_logger
from .messages import (
    ImageSource,
    MarkupSource,
    MessageCatalog,
    MessageCategory,
    MessageSource,
    TextSource,
    classify,
    split_locales,
)
from .session import DisplaySession


@dataclass(frozen=True)
class DisplayResult:
    message_id: str
    locale: str | None
    bitmap_path: Path
    category: MessageCategory
    restarted: bool


class DisplayOrchestrator:
    def __init__(
        self,
        cfg: AppConfig,
        session: DisplaySession,
        renderer: TextRenderer | None = None,
        lifecycle: CompositorLifecycle | None = None,
    ) -> None:
        self.cfg = cfg
        self.session = session
        self.logger = get_logger()
        self.renderer = renderer or TextRenderer(
            binary=cfg.render.renderer,
            temp_dir=Path(cfg.assets.temp_dir),
            timeout_s=cfg.render.timeout_s,
        )
        self.lifecycle = lifecycle or CompositorLifecycle(cfg, session)
        self.catalog = MessageCatalog(cfg.assets.message_dir)

    @property
    def background(self) -> Bitmap:
        return Bitmap(path=self.cfg.assets.background_path)

    def display_message(self, message_id: str, locale_candidates: str | Iterable[str]) -> DisplayResult:
        for locale in split_locales(locale_candidates):
            source = self.catalog.locate(message_id, locale)
            if source is None:
                continue
            # First existing resource wins; its failures are not retried elsewhere.
            return self._display(message_id, source, classify(message_id))
        raise MessageNotFound(f"no text for {message_id!r} in locales {locale_candidates!r}")

    def display_file(self, message_id: str, file_path: str | Path, spinner: bool = False) -> DisplayResult:
        path = Path(file_path)
        if not path.is_file():
            raise MessageNotFound(f"{path} does not exist")
        source: MessageSource = ImageSource(path) if is_image_path(path) else MarkupSource(path)
        return self._display(message_id, source, classify(message_id, force_spinner=spinner))

    def _bitmap_for(self, source: MessageSource) -> Bitmap:
        if isinstance(source, ImageSource):
            return load_image_bitmap(source.path)
        if isinstance(source, TextSource):
            config = render_config(self.cfg, locale=source.locale)
        else:
            config = render_config(self.cfg, markup=True)
        return self.renderer.render_fitted(source.path, config, reference=self.background)

    def _display(self, message_id: str, source: MessageSource, category: MessageCategory) -> DisplayResult:
        bitmap = self._bitmap_for(source)
        locale = source.locale if isinstance(source, TextSource) else None

        with self.session.lock():
            state = self.session.probe_state()
            restart = needs_restart(category, state)
            if restart:
                self.lifecycle.start(category, bitmap)
            else:
                self.lifecycle.update_in_place(bitmap)
            self.lifecycle.mark_displayed()

        self.logger.info(
            "displayed %s locale=%s restart=%s",
            message_id,
            locale,
            restart,
            extra={"event": "message_displayed"},
        )
        return DisplayResult(
            message_id=message_id,
            locale=locale,
            bitmap_path=bitmap.path,
            category=category,
            restarted=restart,
        )

    def update_progress(self, percent: int) -> bool:
        percent = clamp_percent(percent)
        client = self.lifecycle.client

        with self.session.lock():
            if not client.is_live():
                self.logger.info("progress %d%% skipped: compositor not running", percent)
                return False
            geometry = progress_geometry(self.background.width_px, self.cfg.progress.width_divisor, percent)
            try:
                client.draw_progress(geometry, self.cfg.progress.color_rgb, self.cfg.render.background_rgb)
            except DeviceUnavailable as exc:
                self.logger.info("progress %d%% skipped: %s", percent, exc)
                return False
        return True

    def restore(self) -> bool:
        with self.session.lock():
            return self.lifecycle.restore()
