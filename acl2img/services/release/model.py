from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto

from acl2img.core.digest import Digest


class Stage(Enum):
    """Release stages, in execution order. FAILED is terminal."""

    VALIDATING = auto()
    CHECKING_ENV = auto()
    BUILDING = auto()
    PUBLISHING = auto()
    ASSEMBLING = auto()
    CLEANING_UP = auto()
    REPORTED = auto()
    FAILED = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True, slots=True)
class ReleaseInputs:
    """Raw values as given on the command line (None = not given)."""

    acl2_commit: str | None = None
    amd64_digest: str | None = None
    tag: str | None = None
    additional_tag: str | None = None
    registry: str | None = None
    image_name: str | None = None


@dataclass(frozen=True, slots=True)
class BuildRequest:
    """Validated parameters for one release."""

    acl2_commit: str
    amd64_digest: Digest
    tag: str
    additional_tag: str | None
    registry: str
    image_name: str
    temp_tag: str
    platform: str
    source_url: str

    @property
    def image(self) -> str:
        return f"{self.registry}/{self.image_name}"

    @property
    def temp_reference(self) -> str:
        return f"{self.image}:{self.temp_tag}"

    @property
    def tags(self) -> tuple[str, ...]:
        if self.additional_tag:
            return (self.tag, self.additional_tag)
        return (self.tag,)

    @property
    def owner(self) -> str:
        return self.image_name.split("/", 1)[0]

    @property
    def arch(self) -> str:
        """Architecture part of the build platform (``linux/arm64`` -> ``arm64``)."""
        return self.platform.rsplit("/", 1)[-1]

    @property
    def description(self) -> str:
        return f"ACL2 {self.tag} on SBCL ({self.arch})"


@dataclass(frozen=True, slots=True)
class LocalImageHandle:
    """The locally built image, known by its temporary tag until pushed."""

    reference: str
    digest: Digest | None = None

    def resolved(self, digest: Digest) -> LocalImageHandle:
        return replace(self, digest=digest)


@dataclass(frozen=True, slots=True)
class ManifestList:
    """A published multi-platform reference."""

    reference: str
    entries: tuple[tuple[str, Digest], ...]

    def sources(self, image: str) -> list[str]:
        return [f"{image}@{digest}" for _, digest in self.entries]


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    request: BuildRequest
    local: LocalImageHandle
    manifests: tuple[ManifestList, ...]
    cleanup_ok: bool
    stages: tuple[Stage, ...]
    dry_run: bool = False

    @property
    def local_digest(self) -> Digest:
        if self.local.digest is None:
            raise ValueError("release outcome without a resolved local digest")
        return self.local.digest
