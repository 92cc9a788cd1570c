"""Typed network models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sysprobe_decoders import RouteStatus, RouteType
from sysprobe_decoders.addresses import IPV4_SEPARATOR
from sysprobe_decoders.errors import MalformedSourceError


def dotted_octets(address: str) -> tuple[int, int, int, int]:
    parts = address.split(IPV4_SEPARATOR)
    if len(parts) != 4 or not all(p.isdigit() and int(p) <= 255 for p in parts):
        raise MalformedSourceError(f"Not a dotted IPv4 address: {address!r}")
    a, b, c, d = (int(p) for p in parts)
    return a, b, c, d


def base_network(address: str, netmask: str) -> str:
    """Mask each octet of `address` with `netmask`."""
    return ".".join(str(a & m) for a, m in zip(dotted_octets(address), dotted_octets(netmask)))


@dataclass(frozen=True)
class NetworkRoute:
    route_type: RouteType
    local_address: str
    local_port: int
    remote_address: str
    remote_port: int
    status: RouteStatus


@dataclass(frozen=True)
class ResolvedAddress:
    """A local address recovered from fib_trie with its subnet parameters."""

    address: str
    broadcast: str
    netmask: str
    cidr: int

    @property
    def base_network(self) -> str:
        return base_network(self.address, self.netmask)


@dataclass(frozen=True)
class IPv4Binding:
    interface: str
    address: str
    broadcast: str
    netmask: str
    cidr: int

    def __str__(self) -> str:
        return f"{self.address}/{self.cidr}"


class InterfaceType(str, Enum):
    PHYSICAL = "physical"
    VIRTUAL = "virtual"


@dataclass(frozen=True)
class NetworkInterface:
    name: str
    mac_address: str
    interface_type: InterfaceType
    is_up: bool | None = None
    mtu: int | None = None


@dataclass(frozen=True)
class NetworkRate:
    download_bps: float
    upload_bps: float
    interval_s: float


@dataclass(frozen=True)
class NetworkSnapshot:
    routes: list[NetworkRoute]
    ipv4: list[IPv4Binding]
    interfaces: list[NetworkInterface]
    rate: NetworkRate | None
    timestamp: datetime
