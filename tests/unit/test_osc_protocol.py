import os
import select
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "display_protocol"))
sys.path.insert(0, str(ROOT / "tests"))

from bootmessage_display.errors import DeviceUnavailable
from bootmessage_display.geometry import progress_geometry
from bootmessage_display.osc import CompositorClient, encode_box, encode_image
from bootmessage_display.transport import ControlDevice
from fakes import FakeDevice


def _drain(fd: int) -> bytes:
    out = b""
    while select.select([fd], [], [], 0.2)[0]:
        chunk = os.read(fd, 4096)
        if not chunk:
            break
        out += chunk
    return out


class DirectiveEncodingTests(unittest.TestCase):
    def test_image_directive(self):
        self.assertEqual(
            encode_image("/tmp/boot_message.abc.png", "fefefe"),
            b"\x1b]image:file=/tmp/boot_message.abc.png;color=0xfefefe;scale=0\x1b\\",
        )

    def test_box_directive(self):
        self.assertEqual(
            encode_box(236, 16, "4285f4", -118, 120),
            b"\x1b]box:color=0x4285f4;size=236,16;offset=-118,120;scale=0\x1b\\",
        )


class CompositorClientTests(unittest.TestCase):
    def test_show_image_single_write(self):
        device = FakeDevice()
        client = CompositorClient(device)
        client.show_image(Path("/run/a.png"), "000000")
        self.assertEqual(device.writes, [b"\x1b]image:file=/run/a.png;color=0x000000;scale=0\x1b\\"])

    def test_progress_draws_largest_first(self):
        device = FakeDevice()
        client = CompositorClient(device)
        client.draw_progress(progress_geometry(960, 2, 50), "4285f4", "fefefe")
        self.assertEqual(
            device.writes,
            [
                b"\x1b]box:color=0x4285f4;size=480,24;offset=0,120;scale=0\x1b\\",
                b"\x1b]box:color=0xfefefe;size=472,16;offset=0,120;scale=0\x1b\\",
                b"\x1b]box:color=0x4285f4;size=236,16;offset=-118,120;scale=0\x1b\\",
            ],
        )

    def test_empty_fill_not_drawn(self):
        device = FakeDevice()
        CompositorClient(device).draw_progress(progress_geometry(960, 2, 0), "4285f4", "fefefe")
        self.assertEqual(len(device.writes), 2)

    def test_dead_device_raises(self):
        client = CompositorClient(FakeDevice(live=False))
        with self.assertRaises(DeviceUnavailable):
            client.draw_box(1, 1, "000000", 0, 0)


class ControlDeviceTests(unittest.TestCase):
    def test_missing_node_is_not_live(self):
        self.assertFalse(ControlDevice(Path("/nonexistent/frecon/vt0")).is_live())

    def test_regular_file_is_not_live_and_untouched(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "vt0"
            path.write_bytes(b"")
            device = ControlDevice(path)
            self.assertFalse(device.is_live())
            with self.assertRaises(DeviceUnavailable):
                device.write(b"\x1b]box:color=0x000000;size=1,1;offset=0,0;scale=0\x1b\\")
            self.assertEqual(path.read_bytes(), b"")

    def test_pty_is_live_and_receives_directive(self):
        try:
            master, slave = os.openpty()
        except OSError as exc:
            self.skipTest(f"no pty support: {exc}")
        try:
            device = ControlDevice(Path(os.ttyname(slave)))
            self.assertTrue(device.is_live())
            payload = encode_image("/tmp/x.png", "fefefe")
            self.assertEqual(device.write(payload), len(payload))
            self.assertEqual(_drain(master), payload)
        finally:
            os.close(slave)
            os.close(master)

    def test_full_terminal_does_not_block(self):
        try:
            master, slave = os.openpty()
        except OSError as exc:
            self.skipTest(f"no pty support: {exc}")
        try:
            device = ControlDevice(Path(os.ttyname(slave)))
            # Nobody drains the master side, so the terminal buffer fills up.
            with self.assertRaises(DeviceUnavailable):
                device.write(b"a" * (1 << 20))
        finally:
            os.close(slave)
            os.close(master)

    def test_probe_does_not_consume_input(self):
        try:
            master, slave = os.openpty()
        except OSError as exc:
            self.skipTest(f"no pty support: {exc}")
        try:
            os.write(master, b"x\n")
            self.assertTrue(ControlDevice(Path(os.ttyname(slave))).is_live())
            self.assertEqual(os.read(slave, 16), b"x\n")
        finally:
            os.close(slave)
            os.close(master)


if __name__ == "__main__":
    unittest.main()
