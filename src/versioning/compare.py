"""Version ordering relative to requested constraints."""

from typing import Optional

from .models import TaggedVersion
from .ranges import gt, lt, ltr, parse_version_strict


def sort_descending(a: str, b: str) -> int:
    """Lexical comparator placing the greater string first."""
    if a > b:
        return -1
    if a < b:
        return 1
    return 0


def is_older_version(version: str, requested_version: Optional[str]) -> bool:
    """Return True when ``version`` is older than the ``requested_version`` range.

    Semver orders every prerelease below the release sharing its numbers, so
    ``2.0.0-beta.1`` would always look older than ``^1.0.0``. Unless the
    requested version is itself a prerelease, the prerelease suffix of
    ``version`` is stripped before the range test. A stripped version that
    appears verbatim in the requested text also counts as older, so a
    prerelease of an exact pin is not offered as an upgrade.
    """
    if not isinstance(requested_version, str):
        return False

    requested = parse_version_strict(requested_version)
    if requested is None or not requested.prerelease:
        parsed = parse_version_strict(version)
        if parsed is not None and parsed.prerelease:
            stripped = version.replace("-" + ".".join(parsed.prerelease), "")
            return ltr(stripped, requested_version) or stripped in requested_version

    return ltr(version, requested_version)


def sort_tags_by_recent_version(tag_a: TaggedVersion, tag_b: TaggedVersion) -> int:
    """Comparator ordering tags newest first, then by descending name."""
    if lt(tag_a.version, tag_b.version):
        return 1
    if gt(tag_a.version, tag_b.version):
        return -1
    return sort_descending(tag_a.name, tag_b.name)
