"""Kernel source readers and network/GPU collectors for Linux hosts."""

from .collector import SystemCollector
from .gpu import gpu_cards, read_gpu_metrics
from .interfaces import NetworkRateSampler, network_interfaces, network_rate
from .models import (
    InterfaceType,
    IPv4Binding,
    NetworkInterface,
    NetworkRate,
    NetworkRoute,
    NetworkSnapshot,
    ResolvedAddress,
)
from .routes import network_routes, parse_routes
from .sources import SourceReader, UnsupportedPlatformError
from .subnet import base_network, bind_routes, netmask_from_cidr, parse_fib_trie, resolve_ipv4

__all__ = [
    "IPv4Binding",
    "InterfaceType",
    "NetworkInterface",
    "NetworkRate",
    "NetworkRateSampler",
    "NetworkRoute",
    "NetworkSnapshot",
    "ResolvedAddress",
    "SourceReader",
    "SystemCollector",
    "UnsupportedPlatformError",
    "base_network",
    "bind_routes",
    "gpu_cards",
    "netmask_from_cidr",
    "network_interfaces",
    "network_rate",
    "network_routes",
    "parse_fib_trie",
    "parse_routes",
    "read_gpu_metrics",
    "resolve_ipv4",
]
