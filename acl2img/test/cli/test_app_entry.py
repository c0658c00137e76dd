from __future__ import annotations

from pathlib import Path

import pytest

from acl2img import __version__
from acl2img.cli.app import main, merge_main
from acl2img.cli.context import CLIContext
from acl2img.core.config import Config
from acl2img.output.console import MockConsole
from acl2img.platform.detection import Arch, Platform, PlatformInfo

AMD64 = "sha256:" + "a" * 64


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])

    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_unknown_option_exits_1() -> None:
    with pytest.raises(SystemExit) as exc:
        merge_main(["--bogus"])

    assert exc.value.code == 1


def test_merge_help_exits_0(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        merge_main(["--help"])

    assert exc.value.code == 0
    assert "--amd64-digest" in capsys.readouterr().out


def test_unknown_subcommand_exits_1() -> None:
    with pytest.raises(SystemExit) as exc:
        main(["publish"])

    assert exc.value.code == 1


def test_option_without_value_exits_1_without_traceback(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        merge_main(["--acl2-commit", "deadbeef", "--amd64-digest", AMD64, "--tag"])

    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "--tag" in err
    assert "Traceback" not in err


def test_release_error_exits_1(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    import acl2img.cli.commands.merge as merge_cmd

    ctx = CLIContext(
        platform=PlatformInfo(platform=Platform.MACOS, arch=Arch.ARM64, machine="arm64"),
        config=Config(),
        console=MockConsole(),
        build_root=tmp_path,
    )
    monkeypatch.setattr(merge_cmd, "build_context", lambda config_path=None: ctx)

    with pytest.raises(SystemExit) as exc:
        merge_main(["--acl2-commit", "deadbeef", "--amd64-digest", AMD64])

    assert exc.value.code == 1
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("error: --tag is required")
