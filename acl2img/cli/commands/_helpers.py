"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from acl2img.core.errors import ErrorCode
from acl2img.output.console import ConsoleProtocol
from acl2img.output.errors import print_release_error
from acl2img.services.release.errors import ReleaseError

CONFIG_OPTION_HELP = "Config file (default: acl2img.toml next to the Dockerfile)"


def config_option() -> Path | None:
    return typer.Option(None, "--config", help=CONFIG_OPTION_HELP, show_default=False)


def exit_on_release_error(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    """Print a release error and exit 1."""
    print_release_error(error, console)
    raise typer.Exit(code=int(ErrorCode.FAILURE))
