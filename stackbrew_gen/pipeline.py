"""Generation pipeline: discover → clone → filter → render → manifest.

This module orchestrates a stackbrew-gen run:
1. List the source repository's remote tags and keep numeric versions
2. Clone the source repository without a checkout into a temporary directory
3. Keep versions at or above the minimum that contain the build file
4. Resolve each accepted tag to its commit (reported, not emitted)
5. Write one build definition per version into <version>/<filename>
6. Resolve the builder repository's branch head and render the manifest

Every remote query is a blocking git call. Failing git commands raise
CalledProcessError and abort the run; there are no retries.
"""

from __future__ import annotations

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .manifest import build_entries, build_header, render_manifest
from .models import GeneratorConfig
from .render import write_dockerfiles
from .shell import fatal, git, git_ok, info, step
from .versions import is_version_tag, sort_versions, version_ge

TAG_REF_PREFIX = "refs/tags/"


def list_remote_tags(repo: str) -> list[str]:
    """List tag names on a remote, without the refs/tags/ prefix.

    Peeled refs are excluded (--refs), so annotated tags appear once.
    """
    output = git("ls-remote", "--tags", "--refs", repo)
    tags: list[str] = []
    for line in output.splitlines():
        # Each line is "<sha>\t<ref>"
        fields = line.split()
        if len(fields) < 2:
            continue
        tags.append(fields[1].removeprefix(TAG_REF_PREFIX))
    return tags


def discover_versions(repo: str) -> list[str]:
    """Return the repository's numeric version tags, highest first."""
    step("Discovering version tags")

    tags = list_remote_tags(repo)
    candidates = sort_versions(t for t in tags if is_version_tag(t))
    info(f"  {len(tags)} tags, {len(candidates)} numeric versions")
    return candidates


@contextmanager
def clone_source(repo: str) -> Iterator[Path]:
    """Clone repo without a checkout and yield the clone directory.

    The clone is blob-less, so per-tag file checks only fetch tree objects.
    The directory is removed when the block exits, however it exits.
    """
    step("Cloning source repository")

    with tempfile.TemporaryDirectory(prefix="stackbrew-gen-") as tmp:
        git("clone", "--quiet", "--filter=blob:none", "--no-checkout", repo, tmp)
        info(f"  {repo} → {tmp}")
        yield Path(tmp)


def has_file(clone_dir: Path, tag: str, filename: str) -> bool:
    """Check whether filename exists in the tree at the given tag."""
    ref = f"{TAG_REF_PREFIX}{tag}:{filename}"
    return git_ok("-C", str(clone_dir), "cat-file", "-e", ref)


def filter_versions(
    candidates: list[str], clone_dir: Path, config: GeneratorConfig
) -> list[str]:
    """Select the versions to generate build definitions for.

    A candidate is accepted if it is at or above config.min_version and
    config.filename exists at its tag. At most config.max_versions are
    accepted.

    Args:
        candidates: Version tags sorted highest first.
        clone_dir: No-checkout clone of the source repository.
        config: Generator settings.

    Returns:
        Accepted versions, highest first.
    """
    step(f"Selecting versions >= {config.min_version} with {config.filename}")

    accepted: list[str] = []
    for version in candidates:
        if len(accepted) >= config.max_versions:
            info(f"  limit of {config.max_versions} versions reached")
            break
        if not version_ge(version, config.min_version):
            # Candidates are descending, so everything after this is older too
            info(f"  {version}: below {config.min_version}, stopping")
            break
        if not has_file(clone_dir, version, config.filename):
            info(f"  {version}: no {config.filename}")
            continue
        info(f"  {version}: ok")
        accepted.append(version)
    return accepted


def resolve_commits(repo: str, versions: list[str]) -> dict[str, str]:
    """Map each version tag to the commit it currently points at.

    Only used for traceability in the progress output; the build
    definitions fetch sources by tag.
    """
    step("Resolving tag commits")

    commits: dict[str, str] = {}
    for version in versions:
        ref = f"{TAG_REF_PREFIX}{version}"
        output = git("ls-remote", "--tags", "--refs", repo, ref)
        commits[version] = output.split()[0] if output else ""
        info(f"  {version}: {commits[version] or '<unresolved>'}")
    return commits


def latest_branch_commit(repo: str, branch: str) -> str:
    """Resolve the head commit of a branch on a remote.

    Raises:
        SystemExit: If the branch does not exist on the remote.
    """
    output = git("ls-remote", repo, f"refs/heads/{branch}")
    if not output:
        fatal(f"branch {branch} not found in {repo}")
    return output.split()[0]


def run_generate(config: GeneratorConfig, output_dir: Path) -> str:
    """Execute the full generation run.

    Build definitions are written under output_dir. Nothing is written if
    no version qualifies.

    Args:
        config: Generator settings.
        output_dir: Directory that receives one subdirectory per version.

    Returns:
        The rendered manifest.

    Raises:
        SystemExit: If no version qualifies.
        subprocess.CalledProcessError: If any git command fails.
    """
    # Phase 1: Discovery
    candidates = discover_versions(config.source_repo)
    with clone_source(config.source_repo) as clone_dir:
        versions = filter_versions(candidates, clone_dir, config)

    if not versions:
        fatal(f"no tags >= {config.min_version} with Dockerfile found")

    resolve_commits(config.source_repo, versions)

    # Phase 2: Build definitions
    write_dockerfiles(versions, config, output_dir)

    # Phase 3: Manifest
    step("Rendering manifest")
    commit = latest_branch_commit(config.docker_repo, config.docker_branch)
    info(f"  {config.docker_repo} {config.docker_branch} @ {commit}")
    header = build_header(config, commit)
    return render_manifest(header, build_entries(versions, config))
