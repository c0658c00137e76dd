"""Thin wrapper over the docker CLI.

Each method runs one docker command and maps a failure to the release error
of its stage. With ``dry_run`` the command is printed and not executed.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from acl2img.core.digest import Digest, digest_from_repo_digest
from acl2img.core.result import Err, Ok, Result
from acl2img.output.console import ConsoleProtocol, Style
from acl2img.platform.process import ProcessError
from acl2img.platform.process import run as run_process
from acl2img.platform.process import run_silent
from acl2img.services.release.config import (
    BUILD_ARG_COMMIT,
    DOCKER,
    LABEL_DESCRIPTION,
    LABEL_REVISION,
    LABEL_SOURCE,
)
from acl2img.services.release.errors import (
    AssembleError,
    BuildError,
    DigestResolutionError,
    EnvironmentCheckError,
    PublishError,
)
from acl2img.services.release.model import BuildRequest, LocalImageHandle, ManifestList
from acl2img.services.release.timeouts import DOCKER_QUERY_TIMEOUT_SECONDS

# Stands in for the arm64 digest when nothing is pushed.
DRY_RUN_DIGEST = Digest(algorithm="sha256", hex="0" * 64)


def build_command(request: BuildRequest, dockerfile: Path) -> list[str]:
    return [
        DOCKER,
        "build",
        "--platform",
        request.platform,
        "--build-arg",
        f"{BUILD_ARG_COMMIT}={request.acl2_commit}",
        "--label",
        f"{LABEL_REVISION}={request.acl2_commit}",
        "--label",
        f"{LABEL_SOURCE}={request.source_url}",
        "--label",
        f"{LABEL_DESCRIPTION}={request.description}",
        "-t",
        request.temp_reference,
        "-f",
        str(dockerfile),
        str(dockerfile.parent),
    ]


def inspect_command(reference: str) -> list[str]:
    return [DOCKER, "inspect", "--format", "{{index .RepoDigests 0}}", reference]


def manifest_command(image: str, manifest: ManifestList) -> list[str]:
    return [DOCKER, "buildx", "imagetools", "create", "-t", manifest.reference, *manifest.sources(image)]


def _stderr_hint(error: ProcessError) -> str | None:
    return error.stderr.strip() or None


class DockerClient:
    def __init__(self, *, cwd: Path, console: ConsoleProtocol, dry_run: bool = False) -> None:
        self._cwd = cwd
        self._console = console
        self._dry_run = dry_run

    def _show(self, cmd: list[str]) -> None:
        self._console.print("$ " + " ".join(cmd), Style.DIM)

    # -- environment -----------------------------------------------------

    def ensure_available(self) -> Result[None, EnvironmentCheckError]:
        if shutil.which(DOCKER) is None:
            return Err(
                EnvironmentCheckError(
                    message="docker: missing",
                    hint="Install Docker Desktop: https://docs.docker.com/get-docker/",
                )
            )
        return Ok(None)

    def ensure_daemon(self) -> Result[None, EnvironmentCheckError]:
        result = run_process([DOCKER, "info"], cwd=self._cwd, timeout=DOCKER_QUERY_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(
                EnvironmentCheckError(
                    message="Docker is not running",
                    hint=_stderr_hint(result.error) or "Start Docker Desktop and retry",
                )
            )
        return Ok(None)

    def ensure_buildx(self) -> Result[None, EnvironmentCheckError]:
        result = run_process(
            [DOCKER, "buildx", "version"], cwd=self._cwd, timeout=DOCKER_QUERY_TIMEOUT_SECONDS
        )
        if isinstance(result, Err):
            return Err(
                EnvironmentCheckError(
                    message="docker buildx: unavailable",
                    hint="buildx is needed for 'imagetools create'; update Docker Desktop",
                )
            )
        return Ok(None)

    # -- release steps ---------------------------------------------------

    def build(self, request: BuildRequest, dockerfile: Path) -> Result[LocalImageHandle, BuildError]:
        cmd = build_command(request, dockerfile)
        self._show(cmd)
        handle = LocalImageHandle(reference=request.temp_reference)
        if self._dry_run:
            return Ok(handle)

        result = run_silent(cmd, cwd=self._cwd)
        if isinstance(result, Err):
            return Err(
                BuildError(
                    message=f"docker build failed (exit {result.error.returncode})",
                    returncode=result.error.returncode,
                    hint=_stderr_hint(result.error),
                )
            )
        return Ok(handle)

    def push(self, handle: LocalImageHandle) -> Result[None, PublishError]:
        cmd = [DOCKER, "push", handle.reference]
        self._show(cmd)
        if self._dry_run:
            return Ok(None)

        result = run_silent(cmd, cwd=self._cwd)
        if isinstance(result, Err):
            return Err(
                PublishError(
                    message=f"docker push {handle.reference} failed (exit {result.error.returncode})",
                    returncode=result.error.returncode,
                    hint=_stderr_hint(result.error) or "Check registry login: docker login <registry>",
                )
            )
        return Ok(None)

    def resolve_digest(self, handle: LocalImageHandle) -> Result[Digest, DigestResolutionError]:
        cmd = inspect_command(handle.reference)
        self._show(cmd)
        if self._dry_run:
            return Ok(DRY_RUN_DIGEST)

        result = run_process(cmd, cwd=self._cwd, timeout=DOCKER_QUERY_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(
                DigestResolutionError(
                    message=f"failed to get digest of {handle.reference}",
                    hint=_stderr_hint(result.error),
                )
            )

        parsed = digest_from_repo_digest(result.value)
        if isinstance(parsed, Err):
            return Err(
                DigestResolutionError(
                    message=f"failed to get digest of {handle.reference}",
                    hint=str(parsed.error),
                )
            )
        return Ok(parsed.value)

    def create_manifest(self, image: str, manifest: ManifestList) -> Result[None, ProcessError]:
        cmd = manifest_command(image, manifest)
        self._show(cmd)
        if self._dry_run:
            return Ok(None)
        return run_silent(cmd, cwd=self._cwd)

    def assemble(
        self, image: str, manifest: ManifestList, *, tag: str, published: tuple[str, ...]
    ) -> Result[None, AssembleError]:
        result = self.create_manifest(image, manifest)
        if isinstance(result, Err):
            return Err(
                AssembleError(
                    message=f"failed to create manifest {manifest.reference} (exit {result.error.returncode})",
                    tag=tag,
                    returncode=result.error.returncode,
                    published=published,
                    hint=_stderr_hint(result.error),
                )
            )
        return Ok(None)

    def remove(self, reference: str) -> Result[None, ProcessError]:
        cmd = [DOCKER, "rmi", reference]
        self._show(cmd)
        if self._dry_run:
            return Ok(None)
        result = run_process(cmd, cwd=self._cwd, timeout=DOCKER_QUERY_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return result
        return Ok(None)
