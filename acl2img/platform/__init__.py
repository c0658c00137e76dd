"""Platform abstraction layer."""

from .detection import (
    Arch,
    Platform,
    PlatformInfo,
    detect,
    detect_arch,
)
from .process import (
    ProcessError,
    run,
    run_silent,
)

__all__ = [
    # detection
    "Arch",
    "Platform",
    "PlatformInfo",
    "detect",
    "detect_arch",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
