"""Little-endian unsigned integer helpers for raw sysfs blobs."""

from __future__ import annotations

from .errors import MalformedSourceError


def _take(data: bytes, width: int) -> bytes:
    if len(data) < width:
        raise MalformedSourceError(f"Need {width} bytes, got {len(data)}")
    return bytes(data[:width])


def u16(data: bytes) -> int:
    return int.from_bytes(_take(data, 2), "little")


def u32(data: bytes) -> int:
    return int.from_bytes(_take(data, 4), "little")


def u64(data: bytes) -> int:
    return int.from_bytes(_take(data, 8), "little")
