from __future__ import annotations

from pathlib import Path

import typer

from acl2img.cli.commands._helpers import config_option, exit_on_release_error
from acl2img.cli.context import build_context
from acl2img.core.result import Err
from acl2img.services.release.docker import DockerClient
from acl2img.services.release.validate import validate_image_name, validate_registry


def cleanup(
    registry: str | None = typer.Option(
        None, "--registry", help="Container registry (default: ghcr.io)", show_default=False
    ),
    image_name: str | None = typer.Option(
        None, "--image-name", help="Image name (default: bendyarm/acl2)", show_default=False
    ),
    config: Path | None = config_option(),
) -> None:
    """Remove the temporary arm64 tag left behind by an interrupted run."""
    ctx = build_context(config_path=config)

    reg = validate_registry((registry or "").strip() or ctx.config.image.registry)
    if isinstance(reg, Err):
        exit_on_release_error(reg.error, ctx.console)
    name = validate_image_name((image_name or "").strip() or ctx.config.image.name)
    if isinstance(name, Err):
        exit_on_release_error(name.error, ctx.console)

    reference = f"{reg.value}/{name.value}:{ctx.config.image.temp_tag}"
    docker = DockerClient(cwd=ctx.build_root or Path.cwd(), console=ctx.console)
    result = docker.remove(reference)
    if isinstance(result, Err):
        # Already gone is fine; removal is idempotent.
        ctx.console.warning(f"could not remove {reference}: {result.error}")
        return
    ctx.console.success(f"Removed: {reference}")
