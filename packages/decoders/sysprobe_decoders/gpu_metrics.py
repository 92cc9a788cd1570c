"""Decoder for the amdgpu ``gpu_metrics`` sysfs blob.

The blob starts with a 4-byte header (u16 structure size, u8 format revision,
u8 content revision) followed by a fixed-offset payload. Only format revision 1
is understood. Content revision 0 is the first published table layout, in which
the temperature block and socket power sit 8 bytes further into the payload.
"""

from __future__ import annotations

from .byteorder import u16, u32
from .errors import MalformedSourceError
from .models import GpuMetrics


GPU_METRICS_FORMAT = 1
HEADER_SIZE = 4
PAYLOAD_SIZE = 74

# payload offsets as (current layout, content revision 0)
_VERSIONED_U16: dict[str, tuple[int, int]] = {
    "temperature_edge": (0, 8),
    "temperature_hotspot": (2, 10),
    "temperature_mem": (4, 12),
    "temperature_vrgfx": (6, 14),
    "temperature_vrsoc": (8, 16),
    "temperature_vrmem": (10, 18),
    "average_socket_power": (18, 26),
}

_FIXED_U16: dict[str, int] = {
    "average_gfxclk_frequency": 36,
    "average_socclk_frequency": 38,
    "average_uclk_frequency": 40,
    "current_gfxclk": 50,
    "current_socclk": 52,
    "current_uclk": 54,
    "current_vclk0": 56,
    "current_dclk0": 58,
    "current_vclk1": 60,
    "current_dclk1": 62,
    "current_fan_speed": 68,
    "pcie_link_width": 70,
    "pcie_link_speed": 72,
}

_THROTTLE_STATUS_OFFSET = 64


def decode_gpu_metrics(blob: bytes | None) -> GpuMetrics | None:
    """Decode a raw blob, or return None when it is absent or in an unknown format."""
    if blob is None:
        return None
    if len(blob) < HEADER_SIZE:
        raise MalformedSourceError(f"gpu_metrics header needs {HEADER_SIZE} bytes, got {len(blob)}")

    format_revision = blob[2]
    content_revision = blob[3]
    if format_revision != GPU_METRICS_FORMAT:
        return None

    payload = blob[HEADER_SIZE:]
    if len(payload) < PAYLOAD_SIZE:
        raise MalformedSourceError(f"gpu_metrics payload needs {PAYLOAD_SIZE} bytes, got {len(payload)}")

    legacy = content_revision == 0
    values: dict[str, int] = {}
    for name, (current, old) in _VERSIONED_U16.items():
        offset = old if legacy else current
        values[name] = u16(payload[offset : offset + 2])
    for name, offset in _FIXED_U16.items():
        values[name] = u16(payload[offset : offset + 2])
    values["throttle_status"] = u32(payload[_THROTTLE_STATUS_OFFSET : _THROTTLE_STATUS_OFFSET + 4])

    return GpuMetrics(
        structure_size=u16(blob[0:2]),
        format_revision=format_revision,
        content_revision=content_revision,
        **values,
    )
