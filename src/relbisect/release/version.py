"""Release version parsing and candidate range construction.

Versions are semver.Version values, so ordering follows Semantic
Versioning (1.2.10 > 1.2.9, 1.0.0-alpha < 1.0.0-alpha.1 < 1.0.0).
A leading "v" is not part of the version: "v1.0.0" and "1.0.0"
compare and hash equal, and str() of either is "1.0.0", the spelling
release installers expect.
"""

from __future__ import annotations

from collections.abc import Iterable

from semver import Version

from relbisect.core.log import logger


class VersionParseError(ValueError):
    """A string is not a valid version."""


def parse_version(text: str) -> Version:
    """Parse a version or release tag.

    Surrounding whitespace and one leading "v" are ignored. A missing
    minor or patch number counts as zero, so "3.1" is 3.1.0.

    Raises:
        VersionParseError: If text is not a valid version
    """
    stripped = text.strip()
    if stripped[:1] in ("v", "V"):
        stripped = stripped[1:]
    try:
        return Version.parse(stripped, optional_minor_and_patch=True)
    except (ValueError, TypeError) as e:
        raise VersionParseError(f"Invalid version {text!r}: {e}") from e


def build_range(
    raw_tags: Iterable[str], lower: Version, upper: Version
) -> list[Version]:
    """Turn raw release tags into the sorted candidate sequence.

    Tags that are not versions are skipped. Duplicates are dropped by
    version equality over the whole stream, before the range filter,
    so only the first spelling of a release is ever considered. Only
    versions with lower <= v <= upper are kept.

    Args:
        raw_tags: Release tag names in any order
        lower: Inclusive lower bound
        upper: Inclusive upper bound

    Returns:
        Strictly ascending list of versions; empty when nothing matches
    """
    seen: set[Version] = set()
    selected: list[Version] = []
    skipped = 0

    for tag in raw_tags:
        try:
            version = parse_version(tag)
        except VersionParseError:
            skipped += 1
            continue
        if version in seen:
            continue
        seen.add(version)
        if lower <= version <= upper:
            selected.append(version)

    if skipped:
        logger.debug(f"Skipped {skipped} tags that are not versions")

    selected.sort()
    return selected


def resolve_range(
    raw_tags: Iterable[str], lower: str, upper: str
) -> list[Version]:
    """Parse both bounds, then build_range() over raw_tags."""
    return build_range(raw_tags, parse_version(lower), parse_version(upper))
