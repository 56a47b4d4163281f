"""Library manifest rendering.

The manifest is the colon-delimited document consumed by the official
images tooling: a header block followed by one entry per image version.
"""

from __future__ import annotations

from .models import GeneratorConfig, ManifestEntry, ManifestHeader

MAINTAINERS_LABEL = "Maintainers: "


def build_header(config: GeneratorConfig, commit: str) -> ManifestHeader:
    """Header pinning the builder repository at the given commit."""
    return ManifestHeader(
        maintainers=config.maintainers,
        git_repo=config.docker_repo,
        git_fetch=f"refs/heads/{config.docker_branch}",
        git_commit=commit,
        builder=config.builder,
    )


def build_entries(versions: list[str], config: GeneratorConfig) -> list[ManifestEntry]:
    """One entry per version; the first (highest) version is also "latest"."""
    entries: list[ManifestEntry] = []
    for i, version in enumerate(versions):
        tags = ["latest", version] if i == 0 else [version]
        entries.append(
            ManifestEntry(
                tags=tags,
                architectures=config.architectures,
                directory=version,
                file=config.filename,
            )
        )
    return entries


def render_header(header: ManifestHeader) -> str:
    # Continuation lines line up under the first maintainer
    indent = "\n" + " " * len(MAINTAINERS_LABEL)
    lines = [
        MAINTAINERS_LABEL + ("," + indent).join(header.maintainers),
        f"GitRepo: {header.git_repo}",
        f"GitFetch: {header.git_fetch}",
        f"GitCommit: {header.git_commit}",
        f"Builder: {header.builder}",
    ]
    return "\n".join(lines) + "\n"


def render_entry(entry: ManifestEntry) -> str:
    lines = [
        "",
        f"Tags: {', '.join(entry.tags)}",
        f"Architectures: {', '.join(entry.architectures)}",
        f"Directory: {entry.directory}",
        f"File: {entry.file}",
        "",
    ]
    return "\n".join(lines) + "\n"


def render_manifest(header: ManifestHeader, entries: list[ManifestEntry]) -> str:
    """Render the complete manifest document."""
    return render_header(header) + "".join(render_entry(e) for e in entries)
