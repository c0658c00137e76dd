"""Release assembler for the multi-platform ACL2 image."""

from .errors import (
    AssembleError,
    BuildError,
    ConfigurationError,
    DigestResolutionError,
    EnvironmentCheckError,
    PublishError,
    ReleaseError,
)
from .model import BuildRequest, LocalImageHandle, ManifestList, ReleaseInputs, ReleaseOutcome, Stage
from .service import ReleaseAssembler

__all__ = [
    # errors
    "AssembleError",
    "BuildError",
    "ConfigurationError",
    "DigestResolutionError",
    "EnvironmentCheckError",
    "PublishError",
    "ReleaseError",
    # model
    "BuildRequest",
    "LocalImageHandle",
    "ManifestList",
    "ReleaseInputs",
    "ReleaseOutcome",
    "Stage",
    # service
    "ReleaseAssembler",
]
