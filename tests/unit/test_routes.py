import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "decoders"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from sysprobe_decoders import MalformedSourceError, RouteStatus, RouteType
from sysprobe_telemetry.routes import network_routes, parse_routes
from sysprobe_telemetry.sources import SourceReader

HOST = ROOT / "tests" / "fixtures" / "host"

TCP_HEADER = "  sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode"


class ParseRoutesTests(unittest.TestCase):
    def test_empty_and_header_only(self):
        self.assertEqual(parse_routes("", ".", RouteType.TCP), [])
        self.assertEqual(parse_routes(TCP_HEADER, ".", RouteType.TCP), [])

    def test_tcp_line(self):
        text = TCP_HEADER + "\n   1: 0701A8C0:B8F2 2A1F5C8E:BB01 01 00000000:00000000 02:000006E2 00000000  1000 0 81234"
        (route,) = parse_routes(text, ".", RouteType.TCP)
        self.assertIs(route.route_type, RouteType.TCP)
        self.assertEqual(route.local_address, "192.168.1.7")
        self.assertEqual(route.remote_address, "142.92.31.42")
        self.assertEqual(route.remote_port, 443)
        self.assertIs(route.status, RouteStatus.ESTABLISHED)

    def test_udp_is_always_listening(self):
        text = "  700: 00000000:E914 00000000:0000 07 00000000:00000000 00:00000000 00000000 0 0 19000"
        (route,) = parse_routes(text, ".", RouteType.UDP)
        self.assertEqual(route.local_port, 5353)
        self.assertIs(route.status, RouteStatus.LISTEN)

    def test_short_line_is_contract_violation(self):
        with self.assertRaises(MalformedSourceError):
            parse_routes("   0: 0100007F:5000 00000000:0000", ".", RouteType.TCP)


class NetworkRoutesTests(unittest.TestCase):
    def test_fixture_host_in_file_order(self):
        routes = network_routes(SourceReader(HOST / "proc", HOST / "sys"))
        self.assertEqual(
            [r.route_type for r in routes],
            [RouteType.TCP, RouteType.TCP, RouteType.UDP, RouteType.UDP, RouteType.TCP6, RouteType.TCP6, RouteType.UDP6],
        )
        self.assertEqual((routes[0].local_address, routes[0].local_port), ("127.0.0.53", 53))
        self.assertIs(routes[0].status, RouteStatus.LISTEN)
        self.assertEqual(routes[4].local_address, ":".join(["00"] * 16))
        self.assertEqual(routes[4].local_port, 22)
        self.assertEqual(routes[5].local_port, 631)
        self.assertTrue(all(0 <= r.local_port <= 65535 and 0 <= r.remote_port <= 65535 for r in routes))

    def test_missing_files_yield_no_routes(self):
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "proc").mkdir()
            (Path(tmp) / "sys").mkdir()
            self.assertEqual(network_routes(SourceReader(Path(tmp) / "proc", Path(tmp) / "sys")), [])


if __name__ == "__main__":
    unittest.main()
