"""Whole-file readers over /proc and /sys with overridable roots."""

from __future__ import annotations

import logging
from pathlib import Path


_LOGGER = logging.getLogger("sysprobe.telemetry")


class UnsupportedPlatformError(RuntimeError):
    """Raised when the kernel pseudo-filesystems are not present."""


class SourceReader:
    """Reads kernel sources, returning empty results instead of raising on absence."""

    def __init__(self, proc_root: str | Path = "/proc", sys_root: str | Path = "/sys") -> None:
        self.proc_root = Path(proc_root)
        self.sys_root = Path(sys_root)

    def procfs(self, *parts: str) -> Path:
        return self.proc_root.joinpath(*parts)

    def sysfs(self, *parts: str) -> Path:
        return self.sys_root.joinpath(*parts)

    def read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="replace").strip()
        except OSError as exc:
            _LOGGER.debug(f"source unavailable path={path} error={exc}", extra={"event": "source_unavailable"})
            return ""

    def read_bytes(self, path: Path) -> bytes | None:
        try:
            return path.read_bytes()
        except OSError as exc:
            _LOGGER.debug(f"source unavailable path={path} error={exc}", extra={"event": "source_unavailable"})
            return None

    def is_linux(self) -> bool:
        return self.proc_root.is_dir() and self.sys_root.is_dir()

    def ensure_linux(self) -> None:
        if not self.is_linux():
            raise UnsupportedPlatformError(
                f"Kernel sources not found at {self.proc_root} and {self.sys_root}; non-Linux system?"
            )


def default_reader(reader: SourceReader | None) -> SourceReader:
    """Return ``reader`` or a host reader, after checking the platform."""
    reader = reader or SourceReader()
    reader.ensure_linux()
    return reader
