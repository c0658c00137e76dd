"""Subprocess execution with Result-based error handling.

Two flavours:

- :func:`run` captures stdout/stderr, for short queries such as
  ``docker info`` or ``docker inspect``;
- :func:`run_silent` lets output stream to the terminal, for the long
  ``docker build`` / ``docker push`` calls the operator wants to watch.

Usage:
    match run(["docker", "info"], cwd=Path(".")):
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from acl2img.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_silent"]

# Exit code reported when the process never started or was killed on timeout.
NOT_RUN = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not be started, timed out, or exited non-zero.

    ``stdout``/``stderr`` are empty when output was streamed rather than
    captured. ``returncode`` is -1 if the command never ran to completion.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"


def _spawn(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None,
    *,
    capture: bool,
    timeout: float | None = None,
) -> Result[subprocess.CompletedProcess[str], ProcessError]:
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=capture,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(ProcessError(command, NOT_RUN, partial, f"Command timed out after {timeout}s"))
    except OSError as e:
        # Binary missing or not executable.
        return Err(ProcessError(command, NOT_RUN, "", str(e)))
    return Ok(proc)


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    spawned = _spawn(cmd, cwd, env, capture=True, timeout=timeout)
    if isinstance(spawned, Err):
        return spawned

    proc = spawned.value
    if proc.returncode != 0:
        return Err(ProcessError(tuple(cmd), proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, streaming its output to the terminal.

    The tool's own diagnostics are already on screen when this fails, so
    the returned error carries only the exit code.
    """
    spawned = _spawn(cmd, cwd, env, capture=False)
    if isinstance(spawned, Err):
        return spawned

    if spawned.value.returncode != 0:
        return Err(ProcessError(tuple(cmd), spawned.value.returncode, "", ""))
    return Ok(None)
