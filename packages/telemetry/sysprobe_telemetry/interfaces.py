"""Network interface listing and throughput sampling."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

import psutil

from .models import InterfaceType, NetworkInterface, NetworkRate
from .sources import SourceReader, default_reader


_LOGGER = logging.getLogger("sysprobe.telemetry")

_PHYSICAL_MARKERS = ("phydev", "phy80211")


def _link_stats() -> dict:
    try:
        return psutil.net_if_stats()
    except (OSError, psutil.Error) as exc:
        _LOGGER.warning(f"link stats unavailable: {exc}", extra={"event": "link_stats_unavailable"})
        return {}


def network_interfaces(reader: SourceReader | None = None) -> list[NetworkInterface]:
    reader = default_reader(reader)
    base = reader.sysfs("class", "net")
    if not base.is_dir():
        return []

    stats = _link_stats()
    interfaces: list[NetworkInterface] = []
    for entry in sorted(base.iterdir(), key=lambda p: p.name):
        if not entry.is_dir():
            continue
        physical = any((entry / marker).exists() for marker in _PHYSICAL_MARKERS)
        link = stats.get(entry.name)
        interfaces.append(
            NetworkInterface(
                name=entry.name,
                mac_address=reader.read_text(entry / "address"),
                interface_type=InterfaceType.PHYSICAL if physical else InterfaceType.VIRTUAL,
                is_up=(bool(link.isup) if link else None),
                mtu=(int(link.mtu) if link else None),
            )
        )
    return interfaces


@dataclass
class _CounterSnapshot:
    ts: float
    sent: int
    recv: int


class NetworkRateSampler:
    """Byte rates across all interfaces, from the delta between successive samples."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._prev = self._read()

    def _read(self) -> _CounterSnapshot:
        counters = psutil.net_io_counters()
        return _CounterSnapshot(
            ts=self._clock(),
            sent=(counters.bytes_sent if counters else 0),
            recv=(counters.bytes_recv if counters else 0),
        )

    def sample(self) -> NetworkRate:
        current = self._read()
        elapsed = max(current.ts - self._prev.ts, 1e-6)
        rate = NetworkRate(
            download_bps=max(current.recv - self._prev.recv, 0) / elapsed,
            upload_bps=max(current.sent - self._prev.sent, 0) / elapsed,
            interval_s=elapsed,
        )
        self._prev = current
        return rate


def network_rate(reader: SourceReader | None = None, interval_s: float = 0.5) -> NetworkRate:
    default_reader(reader)
    sampler = NetworkRateSampler()
    time.sleep(interval_s)
    return sampler.sample()
