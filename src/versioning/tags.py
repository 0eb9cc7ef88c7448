"""Resolve the tag list shown for a requested dependency.

The list always starts with a ``satisfies`` entry, is followed by a
``latest`` entry unless the requested version already is the latest, and
ends with the relevant prerelease channels (``beta``, ``rc``...) newest
first.
"""

import logging
import re
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence

# Support being imported as either "src.versioning.tags" or "versioning.tags"
try:
    from ..common.logging_utils import extra_context, is_debug_enabled
except ImportError:
    from common.logging_utils import extra_context, is_debug_enabled
from .compare import is_older_version, sort_tags_by_recent_version
from .models import ResolvedTag, TaggedVersion, VersionMap
from .parser import format_tag_name
from .ranges import gt, is_fixed_version, satisfies, valid_range

logger = logging.getLogger(__name__)

SATISFIES_TAG = "satisfies"
LATEST_TAG = "latest"


def remove_exact_versions(tags: Iterable[TaggedVersion], version: Optional[str]) -> List[TaggedVersion]:
    return [tag for tag in tags if tag.version != version]


def remove_tags_with_name(tags: Iterable[TaggedVersion], name: str) -> List[TaggedVersion]:
    return [tag for tag in tags if tag.name != name]


def remove_older_versions(tags: Iterable[TaggedVersion], version_range: Optional[str]) -> List[TaggedVersion]:
    return [tag for tag in tags if not is_older_version(tag.version, version_range)]


def remove_ambiguous_tag_names(tags: Iterable[TaggedVersion]) -> List[TaggedVersion]:
    """Normalize tag names to their alphabetic prefix, dropping one-letter or empty labels."""
    results = []
    for tag in tags:
        name = format_tag_name(tag.name)
        if name is None:
            results.append(TaggedVersion(name=tag.name, version=tag.version))
        elif len(name) > 1:
            results.append(TaggedVersion(name=name.lower(), version=tag.version))
    return results


def reduce_tags_by_unique_names(tags: Iterable[TaggedVersion]) -> List[TaggedVersion]:
    """Keep the first tag seen for each name.

    The registry order decides which version survives, not recency.
    """
    seen = set()
    unique = []
    for tag in tags:
        if tag.name not in seen:
            seen.add(tag.name)
            unique.append(tag)
    return unique


def filter_tags_by_name(tags: Iterable[TaggedVersion], names: Iterable[str]) -> List[TaggedVersion]:
    """Keep tags whose name is one of ``names`` (case-insensitive), in order."""
    wanted = {name.lower() for name in names}
    return [tag for tag in tags if tag.name.lower() in wanted]


def resolve_version_against_tags(tags: Iterable[TaggedVersion], tag_name: str, default_version: Optional[str]) -> Optional[str]:
    """Return the version of the first tag named ``tag_name``, else ``default_version``."""
    for tag in tags:
        if tag.name == tag_name:
            return tag.version
    return default_version


def apply_tag_filter_rules(
    tagged_versions: Iterable[TaggedVersion],
    requested_version: Optional[str],
    satisfies_version: Optional[str],
    latest_version: Optional[str],
    version_match_not_found: bool,
) -> List[TaggedVersion]:
    """Reduce prerelease tags to the unique, relevant channels, newest first.

    Stages run in a fixed order; deduplication sees the list before sorting.
    """
    filtered = list(tagged_versions)

    if valid_range(requested_version):
        # prereleases older than the requested range are not upgrades
        filtered = remove_older_versions(filtered, requested_version)

    filtered = remove_exact_versions(filtered, satisfies_version)
    filtered = remove_exact_versions(filtered, latest_version)

    if version_match_not_found:
        filtered = remove_older_versions(filtered, latest_version)

    filtered = remove_ambiguous_tag_names(filtered)
    filtered = reduce_tags_by_unique_names(filtered)
    filtered = remove_tags_with_name(filtered, LATEST_TAG)

    return sorted(filtered, key=cmp_to_key(sort_tags_by_recent_version))


def build_tags_from_version_map(version_map: VersionMap, requested_version: Optional[str]) -> List[TaggedVersion]:
    """Build the ordered tag list for a requested version.

    Returns:
        ``[satisfies, latest?, *prerelease tags]``. Only the first two entries
        are ``ResolvedTag`` records carrying relationship flags.
    """
    is_requested_version_valid = valid_range(requested_version)
    max_satisfying_version = version_map.max_satisfying_version
    version_match_not_found = not max_satisfying_version
    latest_version = version_map.latest_version

    satisfies_latest = latest_version is not None and satisfies(max_satisfying_version, latest_version)
    is_fixed = is_requested_version_valid and is_fixed_version(requested_version)
    stripped_request = re.sub(r"[\^~]", "", requested_version, count=1) if isinstance(requested_version, str) else None
    is_latest_version = satisfies_latest and stripped_request == latest_version

    satisfies_entry = ResolvedTag(
        name=SATISFIES_TAG,
        version=max_satisfying_version,
        is_newer_than_latest=(
            not satisfies_latest
            and bool(max_satisfying_version)
            and gt(max_satisfying_version, latest_version)
        ),
        is_latest_version=is_latest_version,
        satisfies_latest=satisfies_latest,
        is_invalid=not is_requested_version_valid,
        version_match_not_found=version_match_not_found,
        is_fixed_version=is_fixed,
        is_primary_tag=True,
    )

    # can only be older when a match was found for a valid range
    latest_entry = ResolvedTag(
        name=LATEST_TAG,
        version=latest_version,
        is_older_than_requested=(
            not version_match_not_found
            and is_requested_version_valid
            and latest_version is not None
            and is_older_version(latest_version, requested_version)
        ),
    )

    tags = [satisfies_entry]
    if not satisfies_entry.is_latest_version:
        tags.append(latest_entry)
    tags.extend(apply_tag_filter_rules(
        version_map.tagged_versions,
        requested_version,
        max_satisfying_version,
        latest_version,
        version_match_not_found,
    ))

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved tags",
            extra=extra_context(
                event="function_exit",
                component="tags",
                action="build_tags",
                target=requested_version,
                count=len(tags),
                outcome="no_match" if version_match_not_found else "match",
            ),
        )
    return tags


def select_display_tags(
    tags: Sequence[TaggedVersion],
    show_tagged_versions: bool = True,
    tag_filter: Iterable[str] = (),
) -> List[TaggedVersion]:
    """Pick the tags a front-end shows, given explicit display settings.

    With tagged versions hidden only ``satisfies`` (and ``latest`` when it
    differs) remain. Otherwise a non-empty ``tag_filter`` keeps those
    primary entries plus the named channels.
    """
    tags = list(tags)
    if not tags:
        return tags
    satisfies_entry = tags[0]
    is_latest = getattr(satisfies_entry, "is_latest_version", False)
    tag_filter = list(tag_filter)

    if not show_tagged_versions:
        return tags[:1] if is_latest else tags[:2]
    if tag_filter:
        primary = [SATISFIES_TAG] if is_latest else [SATISFIES_TAG, LATEST_TAG]
        return filter_tags_by_name(tags, primary + tag_filter)
    return tags
