"""Version classification utilities."""

import re
from typing import Iterable, List, Optional

from .models import ParsedVersion
from .ranges import parse_version_strict, valid_range

# Leading alphabetic run of a prerelease identifier or tag name, e.g. "beta" in "beta2".
TAG_NAME_REGEX = re.compile(r"^[a-zA-Z]*")


def format_tag_name(text: str) -> Optional[str]:
    """Return the matched leading tag-name run of ``text``, or None without a match."""
    match = TAG_NAME_REGEX.match(text)
    return match.group(0) if match else None


def parse_version(version: str) -> ParsedVersion:
    """Classify a version as release or prerelease and extract its channel.

    ``1.0.0-RC.1`` yields ``ParsedVersion("1.0.0-RC.1", True, "rc")``. Strings
    that are not full semantic versions are treated as releases.
    """
    parsed = parse_version_strict(version)
    components = parsed.prerelease if parsed is not None else ()
    is_prerelease = len(components) > 0
    prerelease_group = ""

    if is_prerelease:
        name = format_tag_name(components[0])
        if name:
            prerelease_group = name.lower()

    return ParsedVersion(
        version=version,
        is_prerelease=is_prerelease,
        prerelease_group=prerelease_group,
    )


def pluck_semver_versions(versions: Iterable[str]) -> List[str]:
    """Keep only entries that are valid semantic versions or ranges, in order."""
    return [version for version in versions if valid_range(version)]
