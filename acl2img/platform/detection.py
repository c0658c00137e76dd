"""Host platform and architecture detection.

The arm64 image must be built on an arm64 host (SBCL's floating-point trap
support is unreliable under emulation), so the environment check needs to
know what it is running on. Detection is cached.
"""

from __future__ import annotations

import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

__all__ = [
    "Platform",
    "Arch",
    "PlatformInfo",
    "detect",
    "detect_arch",
    "detect_machine",
    "detect_platform",
]


class Platform(Enum):
    """Operating system, valued by its ``sys.platform`` prefix."""

    LINUX = "linux"
    MACOS = "darwin"
    WINDOWS = "win32"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.name.lower()


class Arch(Enum):
    """CPU architecture, valued by its OCI platform name."""

    X64 = "amd64"
    ARM64 = "arm64"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def oci_name(self) -> str:
        return self.value

    @classmethod
    def from_machine(cls, machine: str) -> Arch:
        """Map a ``uname -m`` style name (x86_64, aarch64, ...) to an Arch."""
        return _MACHINE_ARCH.get(machine.lower(), cls.UNKNOWN)


_MACHINE_ARCH = {
    "x86_64": Arch.X64,
    "amd64": Arch.X64,
    "aarch64": Arch.ARM64,
    "arm64": Arch.ARM64,
}


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    """Detected host information. Use :func:`detect` to get an instance."""

    platform: Platform
    arch: Arch
    machine: str

    def __str__(self) -> str:
        return f"{self.platform}-{self.arch}"


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    system = _sys.platform.lower()
    if system.startswith(("cygwin", "msys")):
        return Platform.WINDOWS
    for candidate in Platform:
        if system.startswith(candidate.value):
            return candidate
    return Platform.UNKNOWN


@lru_cache(maxsize=1)
def detect_machine() -> str:
    """Raw machine name, as ``uname -m`` prints it (cached)."""
    return _platform.machine() or "unknown"


@lru_cache(maxsize=1)
def detect_arch() -> Arch:
    """Detect the current CPU architecture (cached)."""
    return Arch.from_machine(detect_machine())


@lru_cache(maxsize=1)
def detect() -> PlatformInfo:
    """Detect complete host information (cached)."""
    return PlatformInfo(
        platform=detect_platform(),
        arch=detect_arch(),
        machine=detect_machine(),
    )
