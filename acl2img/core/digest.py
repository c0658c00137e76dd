"""Content digests (``algorithm:hex``).

Digests arrive from two places: the operator passes the amd64 digest on the
command line, and ``docker inspect`` reports the arm64 digest as part of a
repo digest (``ghcr.io/owner/acl2@sha256:...``). Both go through
:func:`parse_digest`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = ["Digest", "DigestParseError", "parse_digest", "digest_from_repo_digest"]

_ALGORITHM_RE = re.compile(r"^[a-z0-9]+(?:[+._-][a-z0-9]+)*$")
_HEX_RE = re.compile(r"^[0-9a-f]+$")

# Registered algorithms have a fixed encoded length.
_HEX_LENGTHS = {
    "sha256": 64,
    "sha512": 128,
}


@dataclass(frozen=True, slots=True)
class DigestParseError:
    value: str
    reason: str

    def __str__(self) -> str:
        return f"invalid digest '{self.value}': {self.reason}"


@dataclass(frozen=True, slots=True)
class Digest:
    algorithm: str
    hex: str

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.hex}"


def parse_digest(value: str) -> Result[Digest, DigestParseError]:
    """Parse ``algorithm:hex``.

    The hex part must be lowercase. For sha256 and sha512 its length is
    checked as well.
    """
    text = value.strip()
    if not text:
        return Err(DigestParseError(value, "empty"))
    if ":" not in text:
        return Err(DigestParseError(value, "expected <algorithm>:<hex>"))

    algorithm, _, encoded = text.partition(":")
    if not _ALGORITHM_RE.match(algorithm):
        return Err(DigestParseError(value, f"bad algorithm '{algorithm}'"))
    if not encoded or not _HEX_RE.match(encoded):
        return Err(DigestParseError(value, "digest must be lowercase hex"))

    expected = _HEX_LENGTHS.get(algorithm)
    if expected is not None and len(encoded) != expected:
        return Err(
            DigestParseError(value, f"{algorithm} needs {expected} hex chars, got {len(encoded)}")
        )

    return Ok(Digest(algorithm=algorithm, hex=encoded))


def digest_from_repo_digest(output: str) -> Result[Digest, DigestParseError]:
    """Extract the digest from ``docker inspect`` RepoDigests output.

    Accepts ``name@algorithm:hex`` (surrounding whitespace and quotes are
    ignored) and fails when no ``@`` separator is present.
    """
    text = output.strip().strip("'\"").strip()
    if "@" not in text:
        return Err(DigestParseError(output.strip(), "no repo digest in inspect output"))
    _, _, digest = text.rpartition("@")
    return parse_digest(digest)
