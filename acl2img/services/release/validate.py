from __future__ import annotations

import re

from acl2img.core.config import Config
from acl2img.core.digest import parse_digest
from acl2img.core.result import Err, Ok, Result
from acl2img.services.release.errors import ConfigurationError
from acl2img.services.release.model import BuildRequest, ReleaseInputs


_TAG_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]{0,127}$")
_NAME_COMPONENT_RE = re.compile(r"^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*$")
_REGISTRY_RE = re.compile(r"^[A-Za-z0-9.-]+(?::[0-9]+)?$")


def _required(value: str | None, flag: str) -> Result[str, ConfigurationError]:
    text = (value or "").strip()
    if not text:
        return Err(ConfigurationError(message=f"{flag} is required", hint="Use --help for usage"))
    return Ok(text)


def validate_tag(tag: str, flag: str) -> Result[str, ConfigurationError]:
    if not _TAG_RE.match(tag):
        return Err(
            ConfigurationError(
                message=f"{flag}: invalid tag '{tag}'",
                hint="tags use [A-Za-z0-9_.-], max 128 chars, and cannot start with '.' or '-'",
            )
        )
    return Ok(tag)


def validate_image_name(name: str) -> Result[str, ConfigurationError]:
    components = name.split("/")
    if not all(_NAME_COMPONENT_RE.match(c) for c in components):
        return Err(
            ConfigurationError(
                message=f"--image-name: invalid repository path '{name}'",
                hint="expected lowercase path components, e.g. owner/acl2",
            )
        )
    return Ok(name)


def validate_registry(registry: str) -> Result[str, ConfigurationError]:
    if not _REGISTRY_RE.match(registry):
        return Err(
            ConfigurationError(
                message=f"--registry: invalid registry host '{registry}'",
                hint="expected a host name with an optional port, e.g. ghcr.io",
            )
        )
    return Ok(registry)


def build_request(inputs: ReleaseInputs, config: Config) -> Result[BuildRequest, ConfigurationError]:
    """Validate raw inputs into a BuildRequest.

    Flags override the config file; the config file supplies defaults for
    the registry and image name.
    """
    commit = _required(inputs.acl2_commit, "--acl2-commit")
    if isinstance(commit, Err):
        return commit
    raw_digest = _required(inputs.amd64_digest, "--amd64-digest")
    if isinstance(raw_digest, Err):
        return raw_digest
    raw_tag = _required(inputs.tag, "--tag")
    if isinstance(raw_tag, Err):
        return raw_tag

    digest = parse_digest(raw_digest.value)
    if isinstance(digest, Err):
        return Err(
            ConfigurationError(
                message=f"--amd64-digest: {digest.error}",
                hint="expected e.g. sha256:<64 lowercase hex chars>",
            )
        )

    tag = validate_tag(raw_tag.value, "--tag")
    if isinstance(tag, Err):
        return tag

    additional_tag: str | None = None
    if inputs.additional_tag is not None and inputs.additional_tag.strip():
        extra = validate_tag(inputs.additional_tag.strip(), "--additional-tag")
        if isinstance(extra, Err):
            return extra
        if extra.value == tag.value:
            return Err(
                ConfigurationError(message=f"--additional-tag repeats --tag '{tag.value}'")
            )
        additional_tag = extra.value

    registry = validate_registry((inputs.registry or "").strip() or config.image.registry)
    if isinstance(registry, Err):
        return registry
    image_name = validate_image_name((inputs.image_name or "").strip() or config.image.name)
    if isinstance(image_name, Err):
        return image_name

    temp_tag = validate_tag(config.image.temp_tag, "temp_tag")
    if isinstance(temp_tag, Err):
        return temp_tag
    if temp_tag.value in (tag.value, additional_tag):
        return Err(
            ConfigurationError(
                message=f"tag '{temp_tag.value}' is reserved for the temporary arm64 image"
            )
        )

    return Ok(
        BuildRequest(
            acl2_commit=commit.value,
            amd64_digest=digest.value,
            tag=tag.value,
            additional_tag=additional_tag,
            registry=registry.value,
            image_name=image_name.value,
            temp_tag=temp_tag.value,
            platform=config.build.platform,
            source_url=config.image.source_url,
        )
    )
