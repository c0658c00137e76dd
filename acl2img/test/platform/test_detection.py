"""Tests for acl2img.platform.detection module."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from acl2img.platform import detection
from acl2img.platform.detection import Arch, Platform, PlatformInfo, detect, detect_arch


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    for fn in (detection.detect, detection.detect_arch, detection.detect_machine, detection.detect_platform):
        fn.cache_clear()
    yield
    for fn in (detection.detect, detection.detect_arch, detection.detect_machine, detection.detect_platform):
        fn.cache_clear()


class TestArch:
    def test_str_is_oci_name(self) -> None:
        assert str(Arch.ARM64) == "arm64"
        assert str(Arch.X64) == "amd64"

    def test_oci_name(self) -> None:
        assert Arch.X64.oci_name == "amd64"
        assert Arch.ARM64.oci_name == "arm64"
        assert Arch.UNKNOWN.oci_name == "unknown"


@pytest.mark.parametrize(
    ("machine", "expected"),
    [
        ("arm64", Arch.ARM64),
        ("aarch64", Arch.ARM64),
        ("x86_64", Arch.X64),
        ("AMD64", Arch.X64),
        ("riscv64", Arch.UNKNOWN),
    ],
)
def test_detect_arch(monkeypatch: pytest.MonkeyPatch, machine: str, expected: Arch) -> None:
    monkeypatch.setattr(detection._platform, "machine", lambda: machine)

    assert detect_arch() == expected


def test_detect_platform_macos(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(detection._sys, "platform", "darwin")
    monkeypatch.setattr(detection._platform, "machine", lambda: "arm64")

    info = detect()

    assert info == PlatformInfo(platform=Platform.MACOS, arch=Arch.ARM64, machine="arm64")
    assert str(info) == "macos-arm64"


def test_detect_machine_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(detection._platform, "machine", lambda: "")

    assert detection.detect_machine() == "unknown"
    assert detect_arch() == Arch.UNKNOWN


@pytest.mark.parametrize(
    ("sys_platform", "expected"),
    [
        ("linux", Platform.LINUX),
        ("darwin", Platform.MACOS),
        ("win32", Platform.WINDOWS),
        ("cygwin", Platform.WINDOWS),
        ("freebsd14", Platform.UNKNOWN),
    ],
)
def test_detect_platform(monkeypatch: pytest.MonkeyPatch, sys_platform: str, expected: Platform) -> None:
    monkeypatch.setattr(detection._sys, "platform", sys_platform)

    assert detection.detect_platform() == expected
