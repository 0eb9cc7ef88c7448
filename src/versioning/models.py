"""Data models for version classification and tag resolution."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .ranges import parse_version_strict


@dataclass(frozen=True)
class ParsedVersion:
    """Release/prerelease classification of a single version string."""
    version: str
    is_prerelease: bool
    prerelease_group: str = ""


@dataclass(frozen=True)
class TaggedVersion:
    """A named version entry, e.g. ``beta`` -> ``1.0.0-beta.2``."""
    name: str
    version: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape consumed by front-ends."""
        return {"name": self.name, "version": self.version}


@dataclass(frozen=True)
class ResolvedTag(TaggedVersion):
    """Primary output entry ("satisfies" or "latest") with relationship flags."""
    is_latest_version: bool = False
    is_newer_than_latest: bool = False
    satisfies_latest: bool = False
    is_invalid: bool = False
    version_match_not_found: bool = False
    is_fixed_version: bool = False
    is_older_than_requested: bool = False
    is_primary_tag: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "isLatestVersion": self.is_latest_version,
            "isNewerThanLatest": self.is_newer_than_latest,
            "satisfiesLatest": self.satisfies_latest,
            "isInvalid": self.is_invalid,
            "versionMatchNotFound": self.version_match_not_found,
            "isFixedVersion": self.is_fixed_version,
            "isOlderThanRequested": self.is_older_than_requested,
            "isPrimaryTag": self.is_primary_tag,
        })
        return data


@dataclass(frozen=True)
class VersionMap:
    """Registry versions split into releases and named prerelease tags.

    Both sequences keep the order the registry reported them in.
    """
    releases: Tuple[str, ...] = ()
    tagged_versions: Tuple[TaggedVersion, ...] = ()
    max_satisfying_version: Optional[str] = field(default=None)

    @property
    def latest_version(self) -> Optional[str]:
        """Highest release, falling back to the highest prerelease when no releases exist.

        Registry order is not version order, so the pick is semantic. Entries
        that are ranges rather than versions are only used when nothing else
        parses.
        """
        for candidates in (self.releases, [tag.version for tag in self.tagged_versions]):
            latest = _highest_version(candidates)
            if latest is not None:
                return latest
        if self.releases:
            return self.releases[0]
        if self.tagged_versions:
            return self.tagged_versions[0].version
        return None


def _highest_version(versions) -> Optional[str]:
    best = None
    best_text = None
    for text in versions:
        ver = parse_version_strict(text)
        if ver is not None and (best is None or ver > best):
            best, best_text = ver, text
    return best_text
