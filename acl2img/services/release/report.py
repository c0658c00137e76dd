from __future__ import annotations

from acl2img.output.console import ConsoleProtocol, Style
from acl2img.services.release.config import REMOTE_ARCH
from acl2img.services.release.model import BuildRequest, ReleaseOutcome

_RULE = "=" * 46


def banner_lines(request: BuildRequest) -> list[str]:
    lines = [
        f"Registry:     {request.registry}",
        f"Image:        {request.image_name}",
        f"ACL2 Commit:  {request.acl2_commit}",
        f"{REMOTE_ARCH} Digest: {request.amd64_digest}",
        f"Tag:          {request.tag}",
    ]
    if request.additional_tag:
        lines.append(f"Additional:   {request.additional_tag}")
    return lines


def print_banner(request: BuildRequest, console: ConsoleProtocol) -> None:
    console.print(_RULE, Style.HEADER)
    console.print(f"ACL2 Docker {request.arch} Build and Merge", Style.HEADER)
    console.print(_RULE, Style.HEADER)
    for line in banner_lines(request):
        console.print(line)
    console.print(_RULE, Style.HEADER)


def verification_commands(outcome: ReleaseOutcome) -> list[tuple[str, str]]:
    """(title, command) pairs the operator can run against the new tag."""
    request = outcome.request
    image = request.image
    return [
        (
            f"To verify {REMOTE_ARCH} attestation:",
            f"gh attestation verify oci://{image}@{request.amd64_digest} --owner {request.owner}",
        ),
        ("To test the image:", f"docker run --rm {image}:{request.tag} acl2 -e ':q'"),
        ("To inspect the manifest:", f"docker buildx imagetools inspect {image}:{request.tag}"),
    ]


def summary_lines(outcome: ReleaseOutcome) -> list[str]:
    request = outcome.request
    lines = [f"Multi-platform image: {request.image}:{request.tag}"]
    for manifest in outcome.manifests[1:]:
        lines.append(f"Also tagged:          {manifest.reference}")
    lines.append(f"  - {REMOTE_ARCH}: {request.amd64_digest} (built on GitHub, has attestation)")
    lines.append(f"  - {request.arch}: {outcome.local_digest} (built locally, no attestation)")
    return lines


def print_report(outcome: ReleaseOutcome, console: ConsoleProtocol) -> None:
    console.newline()
    console.print(_RULE, Style.HEADER)
    if outcome.dry_run:
        console.print("DRY RUN: nothing was built or published", Style.WARNING)
    else:
        console.print("SUCCESS!", Style.SUCCESS)
    console.print(_RULE, Style.HEADER)
    console.newline()

    for line in summary_lines(outcome):
        console.print(line)
    if not outcome.cleanup_ok:
        console.print(
            f"Temporary tag {outcome.local.reference} was not removed; run: acl2img cleanup",
            Style.DIM,
        )

    for title, command in verification_commands(outcome):
        console.newline()
        console.print(title)
        console.print(f"  {command}", Style.INFO)
    console.newline()
