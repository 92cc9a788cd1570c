"""Linux collector for GPU metrics and network state with stable 'unavailable' defaults."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from sysprobe_decoders import GpuMetrics

from .gpu import DEFAULT_CARD, read_gpu_metrics
from .interfaces import NetworkRateSampler, network_interfaces
from .models import IPv4Binding, NetworkInterface, NetworkRate, NetworkRoute, NetworkSnapshot
from .routes import network_routes
from .sources import SourceReader
from .subnet import resolve_ipv4


_LOGGER = logging.getLogger("sysprobe.telemetry")


class SystemCollector:
    """Recomputes every answer from live kernel state; only the rate sampler keeps history."""

    def __init__(
        self,
        reader: SourceReader | None = None,
        gpu_card: str = DEFAULT_CARD,
        rate_interval_s: float = 0.5,
    ) -> None:
        self.reader = reader or SourceReader()
        self.gpu_card = gpu_card
        self.rate_interval_s = rate_interval_s
        self._sampler: NetworkRateSampler | None = None

    def gpu_metrics(self, card: str | None = None) -> GpuMetrics | None:
        card = card or self.gpu_card
        metrics = read_gpu_metrics(self.reader, card)
        if metrics is None:
            _LOGGER.debug(f"gpu metrics unavailable card={card}", extra={"event": "gpu_metrics_unavailable"})
        return metrics

    def routes(self) -> list[NetworkRoute]:
        return network_routes(self.reader)

    def ipv4(self) -> list[IPv4Binding]:
        return resolve_ipv4(self.reader)

    def interfaces(self) -> list[NetworkInterface]:
        return network_interfaces(self.reader)

    def rate(self) -> NetworkRate:
        """Rate since the previous call; the first call waits one interval."""
        self.reader.ensure_linux()
        if self._sampler is None:
            self._sampler = NetworkRateSampler()
            time.sleep(self.rate_interval_s)
        return self._sampler.sample()

    def network_snapshot(self, include_rate: bool = True) -> NetworkSnapshot:
        snapshot = NetworkSnapshot(
            routes=self.routes(),
            ipv4=self.ipv4(),
            interfaces=self.interfaces(),
            rate=(self.rate() if include_rate else None),
            timestamp=datetime.now(timezone.utc),
        )
        _LOGGER.debug(
            f"network snapshot routes={len(snapshot.routes)} ipv4={len(snapshot.ipv4)}",
            extra={"event": "network_snapshot"},
        )
        return snapshot
