from __future__ import annotations

# Local docker queries (info, inspect, buildx version, rmi)
DOCKER_QUERY_TIMEOUT_SECONDS = 60.0

# build, push and imagetools create run without a timeout: an arm64 ACL2
# build takes 30-60 minutes and the operator can interrupt it.
