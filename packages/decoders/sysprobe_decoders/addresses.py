"""Hex endpoint decoding for /proc/net socket and route tables."""

from __future__ import annotations

import re

from .errors import MalformedSourceError


IPV4_SEPARATOR = "."
IPV6_SEPARATOR = ":"

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def hex_value(text: str) -> int:
    if not _HEX_RE.fullmatch(text):
        raise MalformedSourceError(f"Not a hex field: {text!r}")
    return int(text, 16)


def decode_address(hex_text: str, separator: str) -> str:
    """Render a kernel hex address with its byte groups reversed.

    ``.`` joins decimal octets (IPv4), any other separator joins two-digit hex
    groups (IPv6).
    """
    if len(hex_text) % 2 or not _HEX_RE.fullmatch(hex_text):
        raise MalformedSourceError(f"Address field must be whole hex bytes: {hex_text!r}")
    groups = reversed(bytes.fromhex(hex_text))
    if separator == IPV4_SEPARATOR:
        return separator.join(str(b) for b in groups)
    return separator.join(f"{b:02x}" for b in groups)


def decode_port(hex_text: str) -> int:
    """First byte pair is the low byte, second is the high byte."""
    if len(hex_text) != 4:
        raise MalformedSourceError(f"Port field must be 4 hex digits: {hex_text!r}")
    low = hex_value(hex_text[:2])
    high = hex_value(hex_text[2:])
    return (high << 8) | low


def decode_endpoint(field: str, separator: str) -> tuple[str, int]:
    """Split an ``ADDRESS:PORT`` column and decode both halves."""
    address, sep, port = field.rpartition(":")
    if not sep or not address:
        raise MalformedSourceError(f"Endpoint field is not ADDRESS:PORT: {field!r}")
    return decode_address(address, separator), decode_port(port)
