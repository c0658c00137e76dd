"""Error types for the release workflow.

Each error belongs to exactly one stage. ``hint`` carries either a
remediation or the external tool's own diagnostic output.
"""

from __future__ import annotations

from dataclasses import dataclass

from acl2img.services.release.model import Stage


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """Bad or missing input; the operator must fix it and rerun."""

    message: str
    hint: str | None = None

    @property
    def stage(self) -> Stage:
        return Stage.VALIDATING


@dataclass(frozen=True, slots=True)
class EnvironmentCheckError:
    """A prerequisite is missing or the host does not match.

    ``overridable`` errors can be bypassed with ``--force``.
    """

    message: str
    hint: str | None = None
    overridable: bool = False

    @property
    def stage(self) -> Stage:
        return Stage.CHECKING_ENV


@dataclass(frozen=True, slots=True)
class BuildError:
    message: str
    returncode: int
    hint: str | None = None

    @property
    def stage(self) -> Stage:
        return Stage.BUILDING


@dataclass(frozen=True, slots=True)
class PublishError:
    message: str
    returncode: int
    hint: str | None = None

    @property
    def stage(self) -> Stage:
        return Stage.PUBLISHING


@dataclass(frozen=True, slots=True)
class DigestResolutionError:
    message: str
    hint: str | None = None

    @property
    def stage(self) -> Stage:
        return Stage.PUBLISHING


@dataclass(frozen=True, slots=True)
class AssembleError:
    """Manifest creation failed for ``tag``.

    ``published`` lists the references created earlier in the same run.
    They are left in place.
    """

    message: str
    tag: str
    returncode: int
    published: tuple[str, ...] = ()
    hint: str | None = None

    @property
    def stage(self) -> Stage:
        return Stage.ASSEMBLING


ReleaseError = (
    ConfigurationError
    | EnvironmentCheckError
    | BuildError
    | PublishError
    | DigestResolutionError
    | AssembleError
)
