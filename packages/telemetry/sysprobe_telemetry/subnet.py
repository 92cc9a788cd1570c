"""Local IPv4 address resolution from /proc/net/fib_trie and /proc/net/route.

fib_trie is a text rendering of the kernel FIB. A local subnet shows up as::

    +-- 192.168.1.0/28 2 0 2
       |-- 192.168.1.0
          /24 link UNICAST
       |-- 192.168.1.7
          /32 host LOCAL
    |-- 192.168.1.255
       /32 link BROADCAST

The ``link UNICAST`` marker carries the prefix length, the entry after it is
the local address, and the entry after the ``host LOCAL`` marker is the
broadcast address. The scanner below only knows this shape; anything else is
reported as a FibTrieFormatError rather than guessed at.
"""

from __future__ import annotations

from typing import Iterable

from sysprobe_decoders import IPV4_SEPARATOR, FibTrieFormatError, MalformedSourceError, decode_address, hex_value

from .models import IPv4Binding, ResolvedAddress, base_network, dotted_octets
from .sources import SourceReader, default_reader


RTF_GATEWAY = 0x0002

_UNICAST_MARKER = "link UNICAST"
_LOCAL_MARKER = "host LOCAL"
_LEAF_PREFIX = "|--"

__all__ = [
    "RTF_GATEWAY",
    "base_network",
    "bind_routes",
    "netmask_from_cidr",
    "parse_fib_trie",
    "resolve_ipv4",
]


def netmask_from_cidr(cidr: int) -> str:
    if not 0 <= cidr <= 32:
        raise MalformedSourceError(f"CIDR prefix out of range: {cidr}")
    mask = (0xFFFFFFFF << (32 - cidr)) & 0xFFFFFFFF
    return IPV4_SEPARATOR.join(str((mask >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def _prefix_length(marker: str, line_no: int) -> int:
    head = marker.strip().split(None, 1)[0]
    if not head.startswith("/") or not head[1:].isdigit():
        raise FibTrieFormatError(f"fib_trie line {line_no}: no prefix length in {marker.strip()!r}")
    return int(head[1:])


def _leaf(lines: list[str], index: int) -> str:
    if index >= len(lines):
        raise FibTrieFormatError(f"fib_trie ended at line {index} inside a subnet entry")
    return lines[index].replace(_LEAF_PREFIX, "").strip()


def _checked_address(value: str, index: int) -> str:
    try:
        dotted_octets(value)
    except MalformedSourceError:
        raise FibTrieFormatError(f"fib_trie line {index + 1}: expected an address, got {value!r}") from None
    return value


def parse_fib_trie(text: str) -> list[ResolvedAddress]:
    lines = text.splitlines()
    addresses: list[ResolvedAddress] = []
    index = 0

    while index < len(lines):
        if _UNICAST_MARKER not in lines[index]:
            index += 1
            continue

        cidr = _prefix_length(lines[index], index + 1)
        index += 1
        entry = _leaf(lines, index)
        if "+" in entry:
            # a new branch starts before any leaf; the subnet has no local address here
            index += 1
            continue
        if _UNICAST_MARKER in entry:
            continue
        address = _checked_address(entry, index)

        while index < len(lines) and _LOCAL_MARKER not in lines[index]:
            index += 1
        index += 1
        broadcast = _checked_address(_leaf(lines, index), index)

        addresses.append(
            ResolvedAddress(
                address=address,
                broadcast=broadcast,
                netmask=netmask_from_cidr(cidr),
                cidr=cidr,
            )
        )
        index += 1

    return addresses


def bind_routes(route_text: str, addresses: Iterable[ResolvedAddress]) -> list[IPv4Binding]:
    """Assign each route-table device the first unused local address in its network."""
    candidates = list(addresses)
    consumed: set[str] = set()
    bindings: list[IPv4Binding] = []

    for line_no, line in enumerate(route_text.splitlines(), start=1):
        if not line.strip() or "Gateway" in line:
            continue
        fields = line.split()
        if len(fields) < 4:
            raise MalformedSourceError(f"route line {line_no}: expected at least 4 fields, got {len(fields)}")

        device, destination, flags = fields[0], fields[1], fields[3]
        if hex_value(flags) & RTF_GATEWAY:
            continue
        network = decode_address(destination, IPV4_SEPARATOR)

        for candidate in candidates:
            if candidate.address in consumed or candidate.base_network != network:
                continue
            consumed.add(candidate.address)
            bindings.append(
                IPv4Binding(
                    interface=device,
                    address=candidate.address,
                    broadcast=candidate.broadcast,
                    netmask=candidate.netmask,
                    cidr=candidate.cidr,
                )
            )
            break

    return bindings


def resolve_ipv4(reader: SourceReader | None = None) -> list[IPv4Binding]:
    reader = default_reader(reader)
    addresses = parse_fib_trie(reader.read_text(reader.procfs("net", "fib_trie")))
    return bind_routes(reader.read_text(reader.procfs("net", "route")), addresses)
