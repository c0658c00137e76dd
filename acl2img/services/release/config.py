from __future__ import annotations


DOCKER = "docker"

BUILD_ARG_COMMIT = "ACL2_COMMIT"

LABEL_REVISION = "org.opencontainers.image.revision"
LABEL_SOURCE = "org.opencontainers.image.source"
LABEL_DESCRIPTION = "org.opencontainers.image.description"

# Architecture of the image built by the CI system.
REMOTE_ARCH = "amd64"
