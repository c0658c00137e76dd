"""Locating the image definition.

The build root is the directory holding the ``Dockerfile`` that defines the
ACL2 image (SBCL from source, then ACL2, then a slim runtime stage). It is
found by searching upward from the current directory, falling back to the
checkout this package was installed from (editable installs).
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "DOCKERFILE_NAME",
    "is_build_root",
    "find_build_root",
    "package_checkout_root",
]

DOCKERFILE_NAME = "Dockerfile"


def is_build_root(path: Path) -> bool:
    return (path / DOCKERFILE_NAME).is_file()


def package_checkout_root() -> Path:
    """Directory above the ``acl2img`` package."""
    return Path(__file__).resolve().parents[2]


def find_build_root(start: Path | None = None) -> Path | None:
    """Search upward from ``start`` (default: cwd) for a build root.

    Returns None when neither the search nor the package checkout has a
    Dockerfile.
    """
    origin = (start or Path.cwd()).resolve()
    for parent in (origin, *origin.parents):
        if is_build_root(parent):
            return parent

    fallback = package_checkout_root()
    if is_build_root(fallback):
        return fallback
    return None
