"""Release assembler: build the arm64 image and merge it with the amd64 one.

The workflow is a straight line::

    validate -> check environment -> build -> push + resolve digest
      -> create manifest per tag -> remove temporary tag -> report

The first failing step ends the run. Nothing is retried or rolled back: if
the manifest for the additional tag fails, the one for the primary tag
stays published. Cleanup runs only after a successful run and its failure
is reported as a warning.
"""

from __future__ import annotations

from pathlib import Path

from acl2img.core.build_root import DOCKERFILE_NAME
from acl2img.core.config import Config
from acl2img.core.result import Err, Ok, Result
from acl2img.output.console import ConsoleProtocol, Style
from acl2img.platform.detection import PlatformInfo
from acl2img.services.release.config import REMOTE_ARCH
from acl2img.services.release.docker import DockerClient
from acl2img.services.release.environment import check_host, ensure_tools, locate_dockerfile
from acl2img.services.release.errors import EnvironmentCheckError, ReleaseError
from acl2img.services.release.model import (
    BuildRequest,
    LocalImageHandle,
    ManifestList,
    ReleaseInputs,
    ReleaseOutcome,
    Stage,
)
from acl2img.services.release.report import print_banner
from acl2img.services.release.validate import build_request


class ReleaseAssembler:
    def __init__(
        self,
        *,
        config: Config,
        platform: PlatformInfo,
        console: ConsoleProtocol,
        build_root: Path | None,
        dockerfile: Path | None = None,
        force: bool = False,
        dry_run: bool = False,
    ) -> None:
        self._config = config
        self._platform = platform
        self._console = console
        self._build_root = build_root
        self._dockerfile_override = dockerfile
        self._force = force
        self._dry_run = dry_run
        self._stages: list[Stage] = []
        self._docker = DockerClient(
            cwd=build_root or Path.cwd(),
            console=console,
            dry_run=dry_run,
        )

    @property
    def stages(self) -> tuple[Stage, ...]:
        """Stages entered so far, in order."""
        return tuple(self._stages)

    def _enter(self, stage: Stage) -> None:
        self._stages.append(stage)

    def _fail(self, result: Err[ReleaseError]) -> Err[ReleaseError]:
        self._stages.append(Stage.FAILED)
        return result

    def run(self, inputs: ReleaseInputs) -> Result[ReleaseOutcome, ReleaseError]:
        self._stages.clear()

        self._enter(Stage.VALIDATING)
        request = build_request(inputs, self._config)
        if isinstance(request, Err):
            return self._fail(request)
        print_banner(request.value, self._console)

        self._enter(Stage.CHECKING_ENV)
        dockerfile = self._check_environment(request.value)
        if isinstance(dockerfile, Err):
            return self._fail(dockerfile)

        self._enter(Stage.BUILDING)
        local = self._build(request.value, dockerfile.value)
        if isinstance(local, Err):
            return self._fail(local)

        self._enter(Stage.PUBLISHING)
        resolved = self._publish(local.value)
        if isinstance(resolved, Err):
            return self._fail(resolved)

        self._enter(Stage.ASSEMBLING)
        manifests = self._assemble(request.value, resolved.value)
        if isinstance(manifests, Err):
            return self._fail(manifests)

        self._enter(Stage.CLEANING_UP)
        cleanup_ok = self._cleanup(resolved.value)

        self._enter(Stage.REPORTED)
        return Ok(
            ReleaseOutcome(
                request=request.value,
                local=resolved.value,
                manifests=manifests.value,
                cleanup_ok=cleanup_ok,
                stages=self.stages,
                dry_run=self._dry_run,
            )
        )

    def _check_environment(self, request: BuildRequest) -> Result[Path, EnvironmentCheckError]:
        checks = (
            lambda: ensure_tools(self._docker),
            lambda: check_host(self._platform, expected_arch=request.arch),
        )
        for check in checks:
            result = check()
            if isinstance(result, Ok):
                continue
            error = result.error
            if self._dry_run or (error.overridable and self._force):
                self._console.warning(error.message)
                continue
            return result

        dockerfile = locate_dockerfile(override=self._dockerfile_override, build_root=self._build_root)
        if isinstance(dockerfile, Err) and self._dry_run:
            self._console.warning(dockerfile.error.message)
            # Placeholder so the build command can still be shown.
            return Ok(self._dockerfile_override or (self._build_root or Path.cwd()) / DOCKERFILE_NAME)
        return dockerfile

    def _build(self, request: BuildRequest, dockerfile: Path) -> Result[LocalImageHandle, ReleaseError]:
        self._console.header(f"=== Step 1: Building {request.arch} image ===")
        self._console.print("This may take 30-60 minutes...", Style.DIM)
        return self._docker.build(request, dockerfile)

    def _publish(self, local: LocalImageHandle) -> Result[LocalImageHandle, ReleaseError]:
        self._console.header("=== Step 2: Pushing image by digest ===")
        pushed = self._docker.push(local)
        if isinstance(pushed, Err):
            return pushed

        digest = self._docker.resolve_digest(local)
        if isinstance(digest, Err):
            return digest
        self._console.print(f"digest: {digest.value}")
        return Ok(local.resolved(digest.value))

    def _assemble(
        self, request: BuildRequest, local: LocalImageHandle
    ) -> Result[tuple[ManifestList, ...], ReleaseError]:
        self._console.header("=== Step 3: Creating multi-platform manifest ===")
        if local.digest is None:
            raise ValueError("manifest requested before the local digest was resolved")

        entries = ((REMOTE_ARCH, request.amd64_digest), (request.arch, local.digest))
        published: list[ManifestList] = []
        for tag in request.tags:
            manifest = ManifestList(reference=f"{request.image}:{tag}", entries=entries)
            result = self._docker.assemble(
                request.image,
                manifest,
                tag=tag,
                published=tuple(m.reference for m in published),
            )
            if isinstance(result, Err):
                return result
            published.append(manifest)
            self._console.success(f"Created: {manifest.reference}")
        return Ok(tuple(published))

    def _cleanup(self, local: LocalImageHandle) -> bool:
        self._console.header("=== Step 4: Cleanup ===")
        result = self._docker.remove(local.reference)
        if isinstance(result, Err):
            self._console.warning(f"could not remove {local.reference}: {result.error}")
            return False
        return True
