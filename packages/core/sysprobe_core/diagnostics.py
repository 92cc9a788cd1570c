"""Diagnostics payloads and source-capture bundles.

A bundle carries raw copies of the kernel sources the collector parses, so a
fib_trie or route table from a host that misbehaves can be replayed as a test
fixture.
"""

from __future__ import annotations

import json
import platform
import tempfile
import zipfile
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sysprobe_decoders import MalformedSourceError
from sysprobe_telemetry import SourceReader, SystemCollector

from .config import AppConfig, build_collector, config_path
from .logging_setup import get_logger, log_dir


_NET_SOURCES = ("tcp", "udp", "tcp6", "udp6", "route", "fib_trie")


def _source_paths(reader: SourceReader, gpu_card: str) -> dict[str, Path]:
    paths = {f"net/{name}": reader.procfs("net", name) for name in _NET_SOURCES}
    paths["gpu_metrics"] = reader.sysfs("class", "drm", gpu_card, "device", "gpu_metrics")
    return paths


def source_inventory(reader: SourceReader, gpu_card: str) -> dict[str, bool]:
    return {name: path.is_file() for name, path in _source_paths(reader, gpu_card).items()}


def build_doctor_payload(cfg: AppConfig, collector: SystemCollector | None = None) -> dict[str, Any]:
    collector = collector or build_collector(cfg)
    reader = collector.reader
    linux = reader.is_linux()
    payload: dict[str, Any] = {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "config": asdict(cfg),
        "linux": linux,
        "sources": source_inventory(reader, collector.gpu_card),
        "errors": [],
    }
    if not linux:
        return payload

    try:
        payload["route_count"] = len(collector.routes())
        payload["ipv4"] = [
            {"interface": b.interface, "address": str(b), "broadcast": b.broadcast} for b in collector.ipv4()
        ]
        metrics = collector.gpu_metrics()
        payload["gpu_metrics"] = asdict(metrics) if metrics else None
    except MalformedSourceError as exc:
        get_logger().warning(f"source parse failed: {exc}", extra={"event": "doctor_parse_error"})
        payload["errors"].append(str(exc))
    return payload


class DiagnosticsExporter:
    def __init__(self, app_name: str = "sysprobe") -> None:
        self.app_name = app_name

    def bundle(
        self,
        cfg: AppConfig,
        doctor_payload: dict[str, Any],
        output_dir: Path | None = None,
        reader: SourceReader | None = None,
    ) -> Path:
        output_base = output_dir or Path(tempfile.gettempdir())
        output_base.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        zip_path = output_base / f"sysprobe-diagnostics-{stamp}.zip"
        reader = reader or build_collector(cfg).reader

        logs = sorted(log_dir().glob("*.log*"))
        captured: list[str] = []

        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            if cfg.diagnostics.capture_sources:
                for name, path in _source_paths(reader, cfg.sources.gpu_card).items():
                    blob = reader.read_bytes(path)
                    if blob is None:
                        continue
                    zf.writestr(f"sources/{name}", blob)
                    captured.append(name)

            manifest = {
                "app": self.app_name,
                "created_utc": datetime.now(timezone.utc).isoformat(),
                "host": platform.platform(),
                "python": platform.python_version(),
                "config_path": str(config_path()),
                "log_dir": str(log_dir()),
                "captured_sources": captured,
            }
            zf.writestr("manifest.json", json.dumps(manifest, indent=2, sort_keys=True))
            zf.writestr("doctor.json", json.dumps(doctor_payload, indent=2, sort_keys=True, default=str))
            zf.writestr("config.json", json.dumps(asdict(cfg), indent=2, sort_keys=True))

            for item in logs:
                zf.write(item, arcname=f"logs/{item.name}")

        get_logger().info(f"diagnostics bundle written path={zip_path}", extra={"event": "diagnostics_bundle"})
        return zip_path
