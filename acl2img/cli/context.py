from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from acl2img.core.build_root import find_build_root
from acl2img.core.config import CONFIG_FILENAME, Config, load_config, load_config_or_default
from acl2img.core.errors import ErrorCode
from acl2img.core.result import Err
from acl2img.output.console import ConsoleProtocol, RichConsole
from acl2img.platform.detection import PlatformInfo, detect


@dataclass(frozen=True, slots=True)
class CLIContext:
    platform: PlatformInfo
    config: Config
    console: ConsoleProtocol
    build_root: Path | None


def build_context(config_path: Path | None = None) -> CLIContext:
    """Detect the build root and load the config.

    ``config_path`` must exist when given; otherwise ``acl2img.toml`` in the
    build root is used if present.
    """
    console = RichConsole()
    build_root = find_build_root()

    if config_path is not None:
        config_result = load_config(config_path.expanduser())
    else:
        config_result = load_config_or_default(
            build_root / CONFIG_FILENAME if build_root is not None else None
        )
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        console.note(f"hint: fix or remove the config file ({CONFIG_FILENAME})")
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    return CLIContext(
        platform=detect(),
        config=config_result.value,
        console=console,
        build_root=build_root,
    )
