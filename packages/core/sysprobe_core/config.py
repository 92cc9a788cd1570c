"""Persistent collector settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from sysprobe_telemetry import SourceReader, SystemCollector


CONFIG_VERSION = 1

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SourcesConfig:
    proc_root: str = "/proc"
    sys_root: str = "/sys"
    gpu_card: str = "card0"


@dataclass
class NetworkConfig:
    rate_interval_ms: int = 500
    include_rate: bool = True


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    capture_sources: bool = True


@dataclass
class LoggingConfig:
    level: str = "INFO"
    console: bool = True


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    override = os.environ.get("SYSPROBE_CONFIG_DIR")
    if override:
        return Path(override)
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "sysprobe"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "sysprobe"
    return Path.home() / ".config" / "sysprobe"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_network(cfg: AppConfig) -> None:
    cfg.network.rate_interval_ms = max(100, min(5000, int(cfg.network.rate_interval_ms)))
    cfg.network.include_rate = bool(cfg.network.include_rate)


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in _LOG_LEVELS else "INFO"


def _normalize_diagnostics(cfg: AppConfig) -> None:
    cfg.diagnostics.keep_log_files = max(2, int(cfg.diagnostics.keep_log_files))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    data = dict(raw)
    for section in ("sources", "network", "diagnostics", "logging"):
        if not isinstance(data.get(section), dict):
            data[section] = {}
    data["config_version"] = CONFIG_VERSION
    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data["config_version"]),
        sources=_merge(SourcesConfig, data["sources"]),
        network=_merge(NetworkConfig, data["network"]),
        diagnostics=_merge(DiagnosticsConfig, data["diagnostics"]),
        logging=_merge(LoggingConfig, data["logging"]),
    )

    _normalize_network(cfg)
    _normalize_logging(cfg)
    _normalize_diagnostics(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def build_reader(cfg: AppConfig) -> SourceReader:
    return SourceReader(proc_root=cfg.sources.proc_root, sys_root=cfg.sources.sys_root)


def build_collector(cfg: AppConfig) -> SystemCollector:
    return SystemCollector(
        reader=build_reader(cfg),
        gpu_card=cfg.sources.gpu_card,
        rate_interval_s=cfg.network.rate_interval_ms / 1000,
    )
