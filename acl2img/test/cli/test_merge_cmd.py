from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import typer

from acl2img.cli.context import CLIContext
from acl2img.core.config import Config
from acl2img.core.errors import ErrorCode
from acl2img.output.console import MockConsole
from acl2img.platform.detection import Arch, Platform, PlatformInfo

if TYPE_CHECKING:
    from conftest import FakeDocker


ARM_HOST = PlatformInfo(platform=Platform.MACOS, arch=Arch.ARM64, machine="arm64")
X64_HOST = PlatformInfo(platform=Platform.LINUX, arch=Arch.X64, machine="x86_64")
AMD64 = "sha256:" + "a" * 64


def _ctx(build_root: Path, *, platform: PlatformInfo = ARM_HOST) -> CLIContext:
    return CLIContext(
        platform=platform,
        config=Config(),
        console=MockConsole(),
        build_root=build_root,
    )


def _patch_context(monkeypatch: pytest.MonkeyPatch, ctx: CLIContext) -> None:
    import acl2img.cli.commands.merge as merge_cmd

    monkeypatch.setattr(merge_cmd, "build_context", lambda config_path=None: ctx)


def _merge(**overrides: object) -> None:
    import acl2img.cli.commands.merge as merge_cmd

    kwargs: dict[str, object] = {
        "acl2_commit": "deadbeef",
        "amd64_digest": AMD64,
        "tag": "v1",
        "additional_tag": None,
        "registry": None,
        "image_name": None,
        "dockerfile": None,
        "force": False,
        "dry_run": False,
        "config": None,
    }
    kwargs.update(overrides)
    merge_cmd.merge(**kwargs)  # type: ignore[arg-type]


def test_merge_success_prints_report(
    fake_docker: FakeDocker, build_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ctx = _ctx(build_root)
    _patch_context(monkeypatch, ctx)

    _merge(additional_tag="latest")

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert console.find("SUCCESS!")
    assert console.find("Multi-platform image: ghcr.io/bendyarm/acl2:v1")
    assert console.find("Also tagged:          ghcr.io/bendyarm/acl2:latest")
    assert fake_docker.count("docker", "buildx", "imagetools", "create") == 2


def test_merge_missing_tag_exits_1_without_docker(
    fake_docker: FakeDocker, build_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ctx = _ctx(build_root)
    _patch_context(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        _merge(tag=None)

    assert exc.value.exit_code == int(ErrorCode.FAILURE)
    assert fake_docker.calls == []
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("error: --tag is required")


def test_merge_bad_digest_exits_1(
    fake_docker: FakeDocker, build_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ctx = _ctx(build_root)
    _patch_context(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        _merge(amd64_digest="sha256:short")

    assert exc.value.exit_code == 1
    assert fake_docker.calls == []


def test_merge_build_failure_exits_1(
    fake_docker: FakeDocker, build_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ctx = _ctx(build_root)
    _patch_context(monkeypatch, ctx)
    fake_docker.fail("docker", "build", returncode=2)

    with pytest.raises(typer.Exit) as exc:
        _merge()

    assert exc.value.exit_code == 1
    assert fake_docker.count("docker", "push") == 0
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("error: docker build failed (exit 2)")


def test_merge_cleanup_failure_still_succeeds(
    fake_docker: FakeDocker, build_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ctx = _ctx(build_root)
    _patch_context(monkeypatch, ctx)
    fake_docker.fail("docker", "rmi")

    _merge()

    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.has_warning()
    assert ctx.console.find("acl2img cleanup")
    assert ctx.console.find("SUCCESS!")


def test_merge_wrong_host_requires_force(
    fake_docker: FakeDocker, build_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ctx = _ctx(build_root, platform=X64_HOST)
    _patch_context(monkeypatch, ctx)

    with pytest.raises(typer.Exit):
        _merge()
    assert fake_docker.count("docker", "build") == 0

    _merge(force=True)
    assert fake_docker.count("docker", "build") == 1


def test_merge_dry_run_runs_only_environment_queries(
    fake_docker: FakeDocker, build_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    ctx = _ctx(build_root)
    _patch_context(monkeypatch, ctx)

    _merge(dry_run=True)

    assert fake_docker.count("docker", "build") == 0
    assert fake_docker.count("docker", "push") == 0
    assert fake_docker.count("docker", "buildx", "imagetools") == 0
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("DRY RUN")
    assert ctx.console.find("$ docker build --platform linux/arm64")
