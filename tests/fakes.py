"""Test doubles for the host-facing display session and control device."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

from PIL import Image

from bootmessage_display import CompositorState, DeviceUnavailable


def write_png(path: Path, width: int, height: int = 10) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (width, height), (254, 254, 254)).save(path, format="PNG")
    return path


class FakeDevice:
    def __init__(self, live: bool = True) -> None:
        self.live = live
        self.writes: list[bytes] = []

    def is_live(self) -> bool:
        return self.live

    def write(self, payload: bytes) -> int:
        if not self.live:
            raise DeviceUnavailable("fake device is down")
        self.writes.append(payload)
        return len(payload)


class FakeSession:
    def __init__(
        self,
        running: bool = False,
        live: bool = False,
        flag: bool = False,
        animated: bool = False,
        developer_mode: bool = False,
    ) -> None:
        self.running = running
        self.flag = flag
        self.animated = animated
        self.dev_mode = developer_mode
        self.control = FakeDevice(live=live)
        self.kills = 0
        self.spawned: list[list[str]] = []
        self.linked: list[tuple[Path, Path]] = []
        self.lock_count = 0
        self.events: list[str] = []

    def indicator_present(self) -> bool:
        return self.flag

    def mark_displayed(self) -> None:
        self.events.append("mark")
        self.flag = True

    def clear_displayed(self) -> None:
        self.events.append("clear")
        self.flag = False

    @contextmanager
    def lock(self):
        self.lock_count += 1
        self.events.append("lock")
        yield
        self.events.append("unlock")

    def probe_state(self) -> CompositorState:
        return CompositorState(
            process_running=self.running,
            control_device_live=self.control.live,
            indicator_flag_present=self.flag,
            animated=self.animated,
        )

    def kill_compositor(self) -> int:
        self.events.append("kill")
        killed = 1 if self.running else 0
        self.kills += 1
        self.running = False
        self.control.live = False
        return killed

    def spawn_compositor(self, args: list[str]) -> int:
        self.events.append("spawn")
        self.spawned.append(list(args))
        self.running = True
        self.control.live = True
        self.animated = any(a.startswith("--loop-start") for a in args)
        return 4242

    def link_vt(self, node: Path, target: Path) -> bool:
        self.linked.append((node, target))
        return True

    def developer_mode(self) -> bool:
        return self.dev_mode
