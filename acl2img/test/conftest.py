from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from acl2img.core.result import Err, Ok, Result
from acl2img.platform.process import ProcessError

ARM64_HEX = "b" * 64


@dataclass(frozen=True, slots=True)
class _Failure:
    prefix: tuple[str, ...]
    contains: str | None
    returncode: int
    stderr: str


def _empty_calls() -> list[list[str]]:
    return []


def _empty_failures() -> list[_Failure]:
    return []


@dataclass
class FakeDocker:
    """Records docker commands and answers them without running anything."""

    calls: list[list[str]] = field(default_factory=_empty_calls)
    failures: list[_Failure] = field(default_factory=_empty_failures)
    inspect_output: str = f"ghcr.io/bendyarm/acl2@sha256:{ARM64_HEX}\n"

    def fail(
        self,
        *prefix: str,
        contains: str | None = None,
        returncode: int = 1,
        stderr: str = "boom",
    ) -> None:
        self.failures.append(_Failure(tuple(prefix), contains, returncode, stderr))

    def _failure_for(self, cmd: list[str]) -> _Failure | None:
        for f in self.failures:
            if tuple(cmd[: len(f.prefix)]) != f.prefix:
                continue
            if f.contains is not None and f.contains not in cmd:
                continue
            return f
        return None

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        self.calls.append(cmd)
        failure = self._failure_for(cmd)
        if failure is not None:
            return Err(ProcessError(tuple(cmd), failure.returncode, "", failure.stderr))
        if cmd[:2] == ["docker", "inspect"]:
            return Ok(self.inspect_output)
        return Ok("")

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> Result[None, ProcessError]:
        self.calls.append(cmd)
        failure = self._failure_for(cmd)
        if failure is not None:
            return Err(ProcessError(tuple(cmd), failure.returncode, "", ""))
        return Ok(None)

    def matching(self, *prefix: str) -> list[list[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]

    def count(self, *prefix: str) -> int:
        return len(self.matching(*prefix))


@pytest.fixture
def fake_docker(monkeypatch: pytest.MonkeyPatch) -> FakeDocker:
    import acl2img.services.release.docker as docker_mod

    fake = FakeDocker()
    monkeypatch.setattr(docker_mod, "run_process", fake.run)
    monkeypatch.setattr(docker_mod, "run_silent", fake.run_silent)
    monkeypatch.setattr(docker_mod.shutil, "which", lambda name: f"/usr/bin/{name}")
    return fake


@pytest.fixture
def build_root(tmp_path: Path) -> Path:
    (tmp_path / "Dockerfile").write_text("FROM ubuntu:24.04\n", encoding="utf-8")
    return tmp_path
