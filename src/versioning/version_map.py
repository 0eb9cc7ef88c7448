"""Build a VersionMap from a raw registry version list."""

import logging
from dataclasses import replace
from typing import Iterable, Optional

# Support being imported as either "src.versioning.version_map" or "versioning.version_map"
try:
    from ..common.logging_utils import extra_context, is_debug_enabled
except ImportError:
    from common.logging_utils import extra_context, is_debug_enabled
from .models import TaggedVersion, VersionMap
from .parser import parse_version, pluck_semver_versions
from .ranges import max_satisfying

logger = logging.getLogger(__name__)


def pluck_tags_and_releases(versions: Iterable[str]) -> VersionMap:
    """Split versions into releases and prerelease tags, keeping input order."""
    releases = []
    tagged_versions = []

    for info in map(parse_version, versions):
        if not info.is_prerelease:
            releases.append(info.version)
            continue
        tagged_versions.append(TaggedVersion(name=info.prerelease_group, version=info.version))

    return VersionMap(releases=tuple(releases), tagged_versions=tuple(tagged_versions))


def deduce_max_satisfying_from_semver_list(semver_list, requested_version: Optional[str]) -> Optional[str]:
    """Return the highest version satisfying ``requested_version``.

    A malformed range is not an error here: the requested text is returned
    unchanged and the caller flags it as invalid.
    """
    try:
        return max_satisfying(semver_list, requested_version)
    except ValueError as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "Requested range could not be parsed",
                extra=extra_context(
                    event="decision",
                    component="version_map",
                    action="max_satisfying",
                    outcome="invalid_range",
                    target=requested_version,
                    reason=str(exc),
                ),
            )
        return requested_version


def build_map_from_version_list(versions: Iterable[str], requested_version: Optional[str]) -> VersionMap:
    """Filter, classify and resolve a raw version list against a requested range."""
    versions = list(versions)
    semver_list = pluck_semver_versions(versions)
    version_map = pluck_tags_and_releases(semver_list)
    max_satisfying_version = deduce_max_satisfying_from_semver_list(semver_list, requested_version)

    if is_debug_enabled(logger):
        logger.debug(
            "Built version map",
            extra=extra_context(
                event="function_exit",
                component="version_map",
                action="build_map",
                count=len(versions),
                dropped=len(versions) - len(semver_list),
                releases=len(version_map.releases),
                tagged=len(version_map.tagged_versions),
                outcome="match" if max_satisfying_version else "no_match",
            ),
        )

    return replace(version_map, max_satisfying_version=max_satisfying_version)
