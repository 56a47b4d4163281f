"""Version tag parsing and ordering.

Release tags look like "3.9" or "3.9.2". They are compared numerically as
semver objects, with missing components treated as zero, so "3.10.0" sorts
above "3.9.2" and "3.9" equals "3.9.0".
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import semver

VERSION_TAG_RE = re.compile(r"[0-9]+\.[0-9]+(\.[0-9]+)?")


def is_version_tag(name: str) -> bool:
    """True for plain numeric MAJOR.MINOR[.PATCH] tags.

    Release candidates, pre-releases and anything branch-like are rejected.
    """
    return VERSION_TAG_RE.fullmatch(name) is not None


def parse_version(version_str: str) -> semver.Version:
    """Parse a version tag into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "1.2" → "1.2.0"
    - "1.2.3" → "1.2.3"

    Components are converted to integers before building the Version, so
    tags with leading zeros ("3.09") compare by value instead of being
    rejected by the strict semver parser.
    """
    parts = [int(p) for p in version_str.split(".")[:3]]
    while len(parts) < 3:
        parts.append(0)
    return semver.Version(*parts)


def version_ge(version_str: str, minimum: str) -> bool:
    """Return True if version_str is at or above minimum."""
    return parse_version(version_str) >= parse_version(minimum)


def sort_versions(versions: Iterable[str], *, descending: bool = True) -> list[str]:
    """Sort version tags numerically, highest first by default.

    Equal versions are ordered by how many components they spell out, so
    "3.9.0" comes before "3.9" when descending (as `sort -V` orders them).
    """
    return sorted(
        versions, key=lambda v: (parse_version(v), v.count(".")), reverse=descending
    )
