import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "decoders"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from sysprobe_telemetry import (
    SourceReader,
    UnsupportedPlatformError,
    network_interfaces,
    network_routes,
    read_gpu_metrics,
    resolve_ipv4,
)

HOST = ROOT / "tests" / "fixtures" / "host"


class SourceReaderTests(unittest.TestCase):
    def test_reads_are_trimmed(self):
        reader = SourceReader(HOST / "proc", HOST / "sys")
        self.assertEqual(reader.read_text(reader.sysfs("class", "net", "eth0", "address")), "52:54:00:12:34:56")

    def test_missing_files_are_empty(self):
        reader = SourceReader(HOST / "proc", HOST / "sys")
        self.assertEqual(reader.read_text(reader.procfs("does-not-exist")), "")
        self.assertIsNone(reader.read_bytes(reader.sysfs("class", "drm", "card0", "device", "gpu_metrics")))

    def test_platform_guard(self):
        with tempfile.TemporaryDirectory() as tmp:
            reader = SourceReader(Path(tmp) / "proc", Path(tmp) / "sys")
            self.assertFalse(reader.is_linux())
            with self.assertRaises(UnsupportedPlatformError):
                reader.ensure_linux()

    def test_every_entry_point_checks_platform(self):
        with tempfile.TemporaryDirectory() as tmp:
            reader = SourceReader(Path(tmp) / "proc", Path(tmp) / "sys")
            for entry in (network_routes, resolve_ipv4, network_interfaces, read_gpu_metrics):
                with self.assertRaises(UnsupportedPlatformError):
                    entry(reader)


if __name__ == "__main__":
    unittest.main()
