"""amdgpu metrics from /sys/class/drm."""

from __future__ import annotations

import re

from sysprobe_decoders import GpuMetrics, decode_gpu_metrics

from .sources import SourceReader, default_reader


DEFAULT_CARD = "card0"

_CARD_RE = re.compile(r"card\d+")


def gpu_cards(reader: SourceReader | None = None) -> list[str]:
    """DRM card nodes (``card0``, ``card1``...), without connector entries."""
    reader = default_reader(reader)
    base = reader.sysfs("class", "drm")
    if not base.is_dir():
        return []
    return sorted(
        (entry.name for entry in base.iterdir() if _CARD_RE.fullmatch(entry.name)),
        key=lambda name: int(name[4:]),
    )


def read_gpu_metrics(reader: SourceReader | None = None, card: str = DEFAULT_CARD) -> GpuMetrics | None:
    reader = default_reader(reader)
    blob = reader.read_bytes(reader.sysfs("class", "drm", card, "device", "gpu_metrics"))
    return decode_gpu_metrics(blob)
