"""Classify published package versions against a requested constraint."""

from .compare import is_older_version, sort_tags_by_recent_version
from .models import ParsedVersion, ResolvedTag, TaggedVersion, VersionMap
from .parser import parse_version, pluck_semver_versions
from .tags import (
    apply_tag_filter_rules,
    build_tags_from_version_map,
    filter_tags_by_name,
    resolve_version_against_tags,
    select_display_tags,
)
from .version_map import build_map_from_version_list, deduce_max_satisfying_from_semver_list

__all__ = [
    "ParsedVersion",
    "ResolvedTag",
    "TaggedVersion",
    "VersionMap",
    "apply_tag_filter_rules",
    "build_map_from_version_list",
    "build_tags_from_version_map",
    "deduce_max_satisfying_from_semver_list",
    "filter_tags_by_name",
    "is_older_version",
    "parse_version",
    "pluck_semver_versions",
    "resolve_version_against_tags",
    "select_display_tags",
    "sort_tags_by_recent_version",
]
