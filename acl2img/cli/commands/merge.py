"""Merge command - build arm64 locally and publish the multi-platform manifest."""

from __future__ import annotations

from pathlib import Path

import typer

from acl2img.cli.commands._helpers import config_option, exit_on_release_error
from acl2img.cli.context import build_context
from acl2img.core.result import Err, Ok
from acl2img.services.release.model import ReleaseInputs
from acl2img.services.release.report import print_report
from acl2img.services.release.service import ReleaseAssembler


def merge(
    acl2_commit: str | None = typer.Option(
        None, "--acl2-commit", help="Full ACL2 commit hash (required)", show_default=False
    ),
    amd64_digest: str | None = typer.Option(
        None,
        "--amd64-digest",
        help="Digest of the amd64 image built on GitHub (required)",
        show_default=False,
    ),
    tag: str | None = typer.Option(
        None, "--tag", help="Tag for the multi-platform manifest (required)", show_default=False
    ),
    additional_tag: str | None = typer.Option(
        None, "--additional-tag", help="Additional tag, e.g. 'latest'", show_default=False
    ),
    registry: str | None = typer.Option(
        None, "--registry", help="Container registry (default: ghcr.io)", show_default=False
    ),
    image_name: str | None = typer.Option(
        None, "--image-name", help="Image name (default: bendyarm/acl2)", show_default=False
    ),
    dockerfile: Path | None = typer.Option(
        None, "--dockerfile", help="Image definition to build", show_default=False
    ),
    force: bool = typer.Option(
        False, "--force", help="Build even when the host is not arm64"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print docker commands without running them"),
    config: Path | None = config_option(),
) -> None:
    """Build the arm64 image and merge it with the amd64 image into one manifest."""
    ctx = build_context(config_path=config)

    assembler = ReleaseAssembler(
        config=ctx.config,
        platform=ctx.platform,
        console=ctx.console,
        build_root=ctx.build_root,
        dockerfile=dockerfile,
        force=force,
        dry_run=dry_run,
    )
    inputs = ReleaseInputs(
        acl2_commit=acl2_commit,
        amd64_digest=amd64_digest,
        tag=tag,
        additional_tag=additional_tag,
        registry=registry,
        image_name=image_name,
    )

    match assembler.run(inputs):
        case Ok(outcome):
            print_report(outcome, ctx.console)
        case Err(error):
            exit_on_release_error(error, ctx.console)
