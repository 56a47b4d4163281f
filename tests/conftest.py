"""Shared test fixtures."""

from __future__ import annotations

import pytest

from stackbrew_gen.models import GeneratorConfig


class FakeRemote:
    """Stands in for the remote repositories behind the git helpers.

    Attributes:
        tags: Tag names on the source repository.
        with_file: Tags whose tree contains the build definition file.
        branch_commit: Head commit reported for the builder branch.
    """

    def __init__(
        self,
        tags: list[str],
        with_file: set[str],
        branch_commit: str = "0123456789abcdef0123456789abcdef01234567",
    ) -> None:
        self.tags = tags
        self.with_file = with_file
        self.branch_commit = branch_commit
        self.clone_dirs: list[str] = []

    @staticmethod
    def sha(tag: str) -> str:
        return tag.replace(".", "").ljust(40, "a")

    def git(self, *args: str, check: bool = True) -> str:
        if args[0] == "clone":
            self.clone_dirs.append(args[-1])
            return ""
        if args[:3] == ("ls-remote", "--tags", "--refs"):
            if len(args) == 5:
                tag = args[4].removeprefix("refs/tags/")
                return f"{self.sha(tag)}\trefs/tags/{tag}" if tag in self.tags else ""
            return "\n".join(f"{self.sha(t)}\trefs/tags/{t}" for t in self.tags)
        if args[0] == "ls-remote":
            return f"{self.branch_commit}\t{args[2]}"
        raise AssertionError(f"unexpected git call: {args}")

    def git_ok(self, *args: str) -> bool:
        tag, _, _filename = args[-1].removeprefix("refs/tags/").partition(":")
        return tag in self.with_file


@pytest.fixture
def config() -> GeneratorConfig:
    """Default configuration."""
    return GeneratorConfig()


@pytest.fixture
def remote() -> FakeRemote:
    """Remote with a mix of numeric, pre-release and pre-minimum tags."""
    return FakeRemote(
        tags=["3.8.0", "3.9.2", "3.9.3", "3.10.0", "4.0.0", "3.10.0-rc1", "nightly"],
        with_file={"3.9.3", "3.10.0", "4.0.0", "3.8.0"},
    )
