"""OS-facing state shared between invocations: flag file, lock, compositor processes."""

from __future__ import annotations

import fcntl
import os
import shlex
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import psutil

from bootmessage_display import CompositorError, CompositorState, ControlDevice

from .config import AppConfig
from .logging_setup import get_logger


LOOP_FLAG = "--loop-start"


class DisplaySession:
    """Everything the lifecycle manager and orchestrator need from the host.

    Tests substitute a fake with the same methods.
    """

    def __init__(self, cfg: AppConfig) -> None:
        self.cfg = cfg
        self.logger = get_logger()
        self.flag_path = Path(cfg.runtime.flag_path)
        self.lock_path = Path(cfg.runtime.lock_path)
        self.control = ControlDevice(cfg.compositor.control_device)

    # Indicator flag.

    def indicator_present(self) -> bool:
        return self.flag_path.exists()

    def mark_displayed(self) -> None:
        self.flag_path.parent.mkdir(parents=True, exist_ok=True)
        self.flag_path.touch()

    def clear_displayed(self) -> None:
        try:
            self.flag_path.unlink()
        except FileNotFoundError:
            pass

    @contextmanager
    def lock(self) -> Iterator[None]:
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.lock_path, "a") as fh:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)

    # Compositor processes.

    def _binary_name(self) -> str:
        return os.path.basename(self.cfg.compositor.binary)

    def compositor_processes(self) -> list[psutil.Process]:
        name = self._binary_name()
        found: list[psutil.Process] = []
        for proc in psutil.process_iter(["name", "cmdline"]):
            cmdline = proc.info.get("cmdline") or []
            if proc.info.get("name") == name or (cmdline and os.path.basename(cmdline[0]) == name):
                found.append(proc)
        return found

    def probe_state(self) -> CompositorState:
        procs = self.compositor_processes()
        animated = any(LOOP_FLAG in " ".join(p.info.get("cmdline") or []) for p in procs)
        return CompositorState(
            process_running=bool(procs),
            control_device_live=self.control.is_live(),
            indicator_flag_present=self.indicator_present(),
            animated=animated,
        )

    def kill_compositor(self) -> int:
        procs = self.compositor_processes()
        for proc in procs:
            try:
                proc.kill()
            except psutil.NoSuchProcess:
                continue
        if procs:
            _gone, alive = psutil.wait_procs(procs, timeout=self.cfg.compositor.kill_timeout_s)
            for proc in alive:
                self.logger.warning("compositor pid %s survived SIGKILL", proc.pid)
        return len(procs)

    def spawn_compositor(self, args: list[str]) -> int | None:
        """Run the compositor in daemon mode and return the pid it settles on."""
        cmd = [self.cfg.compositor.binary, *args]
        self.logger.debug("starting compositor %s", cmd)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise CompositorError(f"compositor not found: {cmd[0]}") from exc
        if result.returncode != 0:
            detail = (result.stderr or "").strip()
            raise CompositorError(f"compositor exited with {result.returncode}: {detail}")
        procs = self.compositor_processes()
        return procs[0].pid if procs else None

    # Virtual terminal nodes.

    def link_vt(self, node: Path, target: Path) -> bool:
        """Point ``node`` at ``target`` unless it is already a working terminal."""
        if ControlDevice(node).is_live():
            return False
        if not target.exists():
            self.logger.warning("compositor terminal %s missing, not linking %s", target, node)
            return False
        if node.is_symlink() or node.exists():
            node.unlink()
        node.symlink_to(target)
        return True

    # Policy collaborator.

    def developer_mode(self) -> bool:
        cmd = shlex.split(self.cfg.runtime.developer_mode_command)
        if not cmd:
            return False
        try:
            return subprocess.run(cmd, capture_output=True).returncode == 0
        except FileNotFoundError:
            return False
