"""Shell and git utilities.

Thin wrappers around subprocess for running git, plus progress helpers.
Progress goes to stderr so that stdout only ever carries generated output
(the manifest or a rendered Dockerfile).
"""

from __future__ import annotations

import subprocess
import sys
from typing import NoReturn


def git(*args: str, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "ls-remote", "--tags").
        check: If True (default), raise CalledProcessError on non-zero exit.
               The captured stderr is attached to the exception.

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(["git", *args], capture_output=True, text=True, check=check)
    return result.stdout.strip()


def git_ok(*args: str) -> bool:
    """Run a git command purely for its exit status.

    For probes that may legitimately fail, such as `cat-file -e` on a path
    that does not exist at a given tag.
    """
    result = subprocess.run(["git", *args], capture_output=True, text=True)
    return result.returncode == 0


def step(msg: str) -> None:
    """Print a visually distinct step header to stderr."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}", file=sys.stderr)


def info(msg: str) -> None:
    """Print a progress detail line to stderr."""
    print(msg, file=sys.stderr)


def fatal(msg: str) -> NoReturn:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the run.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
