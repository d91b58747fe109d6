"""Text-to-PNG rendering through an external pango-view style renderer."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path

from bootmessage_display.errors import FormatError

from .errors import RenderError
from .models import Bitmap, RenderConfig


_LOGGER = logging.getLogger("bootmessage.renderer")


def build_render_command(
    binary: str,
    source: Path,
    output: Path,
    config: RenderConfig,
    width: int | None = None,
) -> list[str]:
    cmd = [
        binary,
        "-q",
        f"--output={output}",
        f"--dpi={config.dpi}",
        f"--align={config.alignment}",
        f"--hinting={config.hinting}",
        f"--margin={config.margin_px}",
        f"--font={config.font_name} {config.font_size}",
        f"--foreground={config.text_color}",
        f"--background=#{config.background_rgb}",
    ]
    if config.locale:
        cmd.append(f"--language={config.locale}")
    if width is not None:
        cmd.append(f"--width={width}")
    if config.markup:
        cmd.append("--markup")
    cmd.extend(config.extra_options)
    cmd.append(str(source))
    return cmd


class TextRenderer:
    """Runs the external renderer and fits its output against a reference image."""

    def __init__(
        self,
        binary: str = "pango-view",
        temp_dir: Path | None = None,
        timeout_s: float | None = 30.0,
    ) -> None:
        self.binary = binary
        self.temp_dir = temp_dir
        self.timeout_s = timeout_s

    def _new_output(self) -> Path:
        # Never deleted here; the compositor may read it after this process exits.
        fd, name = tempfile.mkstemp(prefix="boot_message.", suffix=".png", dir=self.temp_dir)
        os.close(fd)
        return Path(name)

    def render(self, source: Path, config: RenderConfig, output: Path, width: int | None = None) -> Bitmap:
        cmd = build_render_command(self.binary, source, output, config, width=width)
        _LOGGER.debug("rendering %s", cmd)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout_s)
        except FileNotFoundError as exc:
            raise RenderError(f"renderer not found: {self.binary}") from exc
        except subprocess.TimeoutExpired as exc:
            raise RenderError(f"renderer timed out after {self.timeout_s}s on {source}") from exc
        if result.returncode != 0:
            detail = (result.stderr or "").strip()
            raise RenderError(f"renderer exited with {result.returncode} on {source}: {detail}")
        return Bitmap(path=output)

    def render_fitted(
        self,
        source: Path,
        config: RenderConfig,
        reference: Bitmap | None = None,
    ) -> Bitmap:
        """Render ``source``, re-rendering with a width limit only when it overflows.

        The renderer pads width-constrained output to the full width, which
        breaks centering for short text, so the limit is applied only when the
        unconstrained image is wider than ``reference``.
        """
        output = self._new_output()
        bitmap = self.render(source, config, output)

        if reference is None:
            return bitmap
        try:
            limit = reference.width_px
        except FormatError as exc:
            _LOGGER.warning("reference width unavailable, keeping unconstrained render: %s", exc)
            return bitmap
        if limit <= 0:
            return bitmap

        if bitmap.width_px > limit:
            _LOGGER.info(
                "rendered width %d exceeds %d, re-rendering",
                bitmap.width_px,
                limit,
                extra={"event": "render_refit"},
            )
            bitmap = self.render(source, config, output, width=limit)
        return bitmap
