from __future__ import annotations

import sys

import typer

from acl2img import __version__
from acl2img.cli.commands.check import check
from acl2img.cli.commands.cleanup import cleanup
from acl2img.cli.commands.merge import merge
from acl2img.core.errors import ErrorCode

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings=CONTEXT_SETTINGS,
)

# Commands
app.command("merge")(merge)
app.command()(check)
app.command()(cleanup)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Build and publish the multi-platform ACL2 image."""


# Standalone entry point, same flags as `acl2img merge`:
# acl2-build-arm64-and-merge --acl2-commit ... --amd64-digest ... --tag ...
merge_app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    context_settings=CONTEXT_SETTINGS,
)
merge_app.command()(merge)


def _run(typer_app: typer.Typer, argv: list[str] | None) -> int:
    # Standalone mode prints usage errors itself and exits 2; every failure
    # exits 1 here, so only the status is normalised.
    try:
        typer_app(args=argv)
    except SystemExit as e:
        if e.code in (None, 0):
            return int(ErrorCode.OK)
        return int(ErrorCode.FAILURE)
    return int(ErrorCode.OK)


def main(argv: list[str] | None = None) -> None:
    sys.exit(_run(app, argv))


def merge_main(argv: list[str] | None = None) -> None:
    sys.exit(_run(merge_app, argv))
