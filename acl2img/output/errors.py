"""Error presentation.

Every release error exits with ``ErrorCode.FAILURE``; this module only
decides what the operator sees on stderr.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from acl2img.services.release.errors import AssembleError, ReleaseError

if TYPE_CHECKING:
    from acl2img.output.console import ConsoleProtocol

__all__ = ["print_release_error"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error: one ``error:`` line, then optional details."""
    console.error(error.message)
    match error:
        case AssembleError(published=published) if published:
            console.note(f"already published (not rolled back): {', '.join(published)}")
        case _:
            pass
    if error.hint:
        console.note(f"hint: {error.hint}")
