import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "decoders"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))
sys.path.insert(0, str(ROOT / "tests" / "unit"))

from sysprobe_telemetry import collector as collector_module
from sysprobe_telemetry.collector import SystemCollector
from sysprobe_telemetry.gpu import gpu_cards
from sysprobe_telemetry.sources import SourceReader
from test_gpu_metrics import build_blob

HOST = ROOT / "tests" / "fixtures" / "host"


class SystemCollectorTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name) / "host"
        shutil.copytree(HOST, self.root)
        self.reader = SourceReader(self.root / "proc", self.root / "sys")

    def tearDown(self):
        self._tmp.cleanup()

    def _install_gpu(self, card, blob):
        device = self.root / "sys" / "class" / "drm" / card / "device"
        device.mkdir(parents=True)
        (device / "gpu_metrics").write_bytes(blob)

    def test_gpu_unavailable_without_device(self):
        self.assertIsNone(SystemCollector(self.reader).gpu_metrics())

    def test_gpu_metrics_from_card(self):
        self._install_gpu("card1", build_blob(content_revision=0))
        (self.root / "sys" / "class" / "drm" / "card1-DP-1").mkdir()
        collector = SystemCollector(self.reader, gpu_card="card1")
        metrics = collector.gpu_metrics()
        self.assertTrue(metrics.legacy_layout)
        self.assertEqual(metrics.temperature_edge, 0x108)
        self.assertIsNone(collector.gpu_metrics(card="card0"))
        self.assertEqual(gpu_cards(self.reader), ["card1"])

    def test_network_snapshot_without_rate(self):
        with mock.patch("sysprobe_telemetry.interfaces.psutil.net_if_stats", return_value={}):
            snap = SystemCollector(self.reader).network_snapshot(include_rate=False)
        self.assertEqual(len(snap.routes), 7)
        self.assertEqual([b.interface for b in snap.ipv4], ["docker0", "eth0"])
        self.assertEqual(len(snap.interfaces), 3)
        self.assertIsNone(snap.rate)
        self.assertIsNotNone(snap.timestamp.tzinfo)

    def test_first_rate_waits_one_interval(self):
        counters = [SimpleNamespace(bytes_sent=0, bytes_recv=0), SimpleNamespace(bytes_sent=100, bytes_recv=400)]
        collector = SystemCollector(self.reader, rate_interval_s=0.25)
        with mock.patch("sysprobe_telemetry.interfaces.psutil.net_io_counters", side_effect=counters), mock.patch.object(
            collector_module.time, "sleep"
        ) as sleep:
            rate = collector.rate()
        sleep.assert_called_once_with(0.25)
        self.assertGreaterEqual(rate.download_bps, 0.0)
        self.assertGreater(rate.interval_s, 0.0)

    def test_reread_reflects_changed_state(self):
        collector = SystemCollector(self.reader)
        self.assertEqual(len(collector.routes()), 7)
        (self.root / "proc" / "net" / "udp6").write_text("", encoding="utf-8")
        self.assertEqual(len(collector.routes()), 6)


if __name__ == "__main__":
    unittest.main()
