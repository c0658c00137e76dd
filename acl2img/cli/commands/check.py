from __future__ import annotations

from pathlib import Path

import typer

from acl2img.cli.commands._helpers import config_option
from acl2img.cli.context import CLIContext, build_context
from acl2img.core.errors import ErrorCode
from acl2img.output.console import Style
from acl2img.services.release.docker import DockerClient
from acl2img.services.release.environment import (
    CheckResult,
    CheckStatus,
    collect_checks,
    locate_dockerfile,
)


def check(
    dockerfile: Path | None = typer.Option(
        None, "--dockerfile", help="Image definition to look for", show_default=False
    ),
    force: bool = typer.Option(False, "--force", help="Treat a host mismatch as a warning"),
    config: Path | None = config_option(),
) -> None:
    """Check that this host can build and publish the arm64 image."""
    ctx = build_context(config_path=config)

    docker = DockerClient(cwd=ctx.build_root or Path.cwd(), console=ctx.console)
    expected_arch = ctx.config.build.platform.rsplit("/", 1)[-1]
    results = collect_checks(
        docker=docker,
        platform=ctx.platform,
        expected_arch=expected_arch,
        dockerfile=locate_dockerfile(override=dockerfile, build_root=ctx.build_root),
        force=force,
    )

    ctx.console.print(f"platform: {ctx.platform}", Style.DIM)
    _print_results(ctx, results)

    if any(r.is_error for r in results):
        raise typer.Exit(code=int(ErrorCode.FAILURE))


def _print_results(ctx: CLIContext, results: list[CheckResult]) -> None:
    console = ctx.console
    console.header("Environment")
    for r in results:
        console.print(f"{r.name}: {r.message}", _style_for_status(r.status))
        if r.hint and r.status != CheckStatus.OK:
            console.print(f"hint: {r.hint}", Style.DIM)


def _style_for_status(status: CheckStatus) -> Style:
    if status == CheckStatus.OK:
        return Style.SUCCESS
    if status == CheckStatus.WARNING:
        return Style.WARNING
    return Style.ERROR
