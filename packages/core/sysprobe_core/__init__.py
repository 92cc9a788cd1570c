"""Core services for settings, logging, and diagnostics."""

from .config import AppConfig, build_collector, build_reader, load_config, save_config
from .diagnostics import DiagnosticsExporter, build_doctor_payload, source_inventory
from .logging_setup import configure_logging, get_logger

__all__ = [
    "AppConfig",
    "DiagnosticsExporter",
    "build_collector",
    "build_doctor_payload",
    "build_reader",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
    "source_inventory",
]
