"""Typed models produced by the decoders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class RouteType(str, Enum):
    TCP = "tcp"
    UDP = "udp"
    TCP6 = "tcp6"
    UDP6 = "udp6"

    @property
    def is_tcp(self) -> bool:
        return self in (RouteType.TCP, RouteType.TCP6)

    @property
    def separator(self) -> str:
        return ":" if self in (RouteType.TCP6, RouteType.UDP6) else "."


class RouteStatus(IntEnum):
    """TCP socket states as printed in the ``st`` column of /proc/net/tcp*."""

    ESTABLISHED = 0x01
    SYN_SENT = 0x02
    SYN_RECEIVED = 0x03
    FIN_WAIT1 = 0x04
    FIN_WAIT2 = 0x05
    TIME_WAIT = 0x06
    CLOSED = 0x07
    CLOSE_WAIT = 0x08
    LAST_ACK = 0x09
    LISTEN = 0x0A
    CLOSING = 0x0B
    NEW_SYN_RECEIVED = 0x0C

    @classmethod
    def from_tcp_code(cls, code: str) -> "RouteStatus":
        """Map a two-hex-digit state code; anything unknown is NEW_SYN_RECEIVED."""
        try:
            return cls(int(code, 16))
        except ValueError:
            return cls.NEW_SYN_RECEIVED

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS: dict[RouteStatus, str] = {
    RouteStatus.ESTABLISHED: "established",
    RouteStatus.SYN_SENT: "syn sent",
    RouteStatus.SYN_RECEIVED: "syn received",
    RouteStatus.FIN_WAIT1: "fin wait 1",
    RouteStatus.FIN_WAIT2: "fin wait 2",
    RouteStatus.TIME_WAIT: "time wait",
    RouteStatus.CLOSED: "closed",
    RouteStatus.CLOSE_WAIT: "close wait",
    RouteStatus.LAST_ACK: "last acknowledgment",
    RouteStatus.LISTEN: "listening",
    RouteStatus.CLOSING: "closing",
    RouteStatus.NEW_SYN_RECEIVED: "new syn received",
}


@dataclass(frozen=True)
class GpuMetrics:
    """Decoded amdgpu ``gpu_metrics`` table (temperatures, power, clocks, link)."""

    structure_size: int
    format_revision: int
    content_revision: int
    temperature_edge: int
    temperature_hotspot: int
    temperature_mem: int
    temperature_vrgfx: int
    temperature_vrsoc: int
    temperature_vrmem: int
    average_socket_power: int
    average_gfxclk_frequency: int
    average_socclk_frequency: int
    average_uclk_frequency: int
    current_gfxclk: int
    current_socclk: int
    current_uclk: int
    current_vclk0: int
    current_dclk0: int
    current_vclk1: int
    current_dclk1: int
    throttle_status: int
    current_fan_speed: int
    pcie_link_width: int
    pcie_link_speed: int

    @property
    def legacy_layout(self) -> bool:
        return self.content_revision == 0
