"""Pre-build environment checks.

The host architecture check is advisory: an arm64 image built under
emulation is slow and SBCL's floating-point traps misbehave, but the
operator may still insist with ``--force``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from acl2img.core.build_root import DOCKERFILE_NAME
from acl2img.core.result import Err, Ok, Result
from acl2img.platform.detection import PlatformInfo
from acl2img.services.release.docker import DockerClient
from acl2img.services.release.errors import EnvironmentCheckError


class CheckStatus(Enum):
    OK = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check.

    Attributes:
        name: What was checked (e.g. "docker", "host")
        status: Whether the check passed, warned, or failed
        message: Human-readable result message
        hint: Optional fix command or URL
    """

    name: str
    status: CheckStatus
    message: str
    hint: str | None = None

    @property
    def is_error(self) -> bool:
        return self.status == CheckStatus.ERROR

    @classmethod
    def success(cls, name: str, message: str) -> CheckResult:
        return cls(name=name, status=CheckStatus.OK, message=message)

    @classmethod
    def warning(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.WARNING, message=message, hint=hint)

    @classmethod
    def error(cls, name: str, message: str, hint: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.ERROR, message=message, hint=hint)


def check_host(platform: PlatformInfo, *, expected_arch: str) -> Result[None, EnvironmentCheckError]:
    if platform.arch.oci_name == expected_arch:
        return Ok(None)
    return Err(
        EnvironmentCheckError(
            message=(
                f"this build targets {expected_arch} hosts (e.g. Apple Silicon Macs); "
                f"current architecture: {platform.machine}"
            ),
            hint="pass --force to build anyway",
            overridable=True,
        )
    )


def locate_dockerfile(
    *, override: Path | None, build_root: Path | None
) -> Result[Path, EnvironmentCheckError]:
    if override is not None:
        path = override.expanduser().resolve()
    elif build_root is not None:
        path = build_root / DOCKERFILE_NAME
    else:
        return Err(
            EnvironmentCheckError(
                message=f"{DOCKERFILE_NAME} not found",
                hint="run from the image repository or pass --dockerfile",
            )
        )

    if not path.is_file():
        return Err(
            EnvironmentCheckError(
                message=f"{DOCKERFILE_NAME} not found at {path}",
                hint="run from the image repository or pass --dockerfile",
            )
        )
    return Ok(path)


def _tool_checks(docker: DockerClient) -> list[tuple[str, Callable[[], Result[None, EnvironmentCheckError]]]]:
    return [
        ("docker", docker.ensure_available),
        ("daemon", docker.ensure_daemon),
        ("buildx", docker.ensure_buildx),
    ]


def ensure_tools(docker: DockerClient) -> Result[None, EnvironmentCheckError]:
    """Fail on the first missing docker prerequisite."""
    for _, check in _tool_checks(docker):
        result = check()
        if isinstance(result, Err):
            return result
    return Ok(None)


def collect_checks(
    *,
    docker: DockerClient,
    platform: PlatformInfo,
    expected_arch: str,
    dockerfile: Result[Path, EnvironmentCheckError],
    force: bool,
) -> list[CheckResult]:
    """Run every check and report each one, for ``acl2img check``."""
    results: list[CheckResult] = []

    for name, check in _tool_checks(docker):
        outcome = check()
        if isinstance(outcome, Err):
            results.append(CheckResult.error(name, outcome.error.message, outcome.error.hint))
            # Later docker checks cannot succeed without the earlier ones.
            break
        results.append(CheckResult.success(name, "ok"))

    host = check_host(platform, expected_arch=expected_arch)
    if isinstance(host, Ok):
        results.append(CheckResult.success("host", f"{platform.machine} ({platform})"))
    elif force:
        results.append(CheckResult.warning("host", host.error.message, "--force given"))
    else:
        results.append(CheckResult.error("host", host.error.message, host.error.hint))

    if isinstance(dockerfile, Ok):
        results.append(CheckResult.success("dockerfile", str(dockerfile.value)))
    else:
        results.append(
            CheckResult.error("dockerfile", dockerfile.error.message, dockerfile.error.hint)
        )

    return results
