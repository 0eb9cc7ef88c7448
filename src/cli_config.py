"""Tag display settings resolved from configuration and CLI overrides.

Precedence: CLI flags > configuration file > built-in defaults. The
resolved settings are passed explicitly to the classifier; nothing here is
read as global state during tag resolution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagSettings:
    """Which tags a front-end shows for a dependency."""
    show_tagged_versions: bool = Constants.SHOW_TAGGED_VERSIONS
    tag_filters: Dict[str, List[str]] = field(default_factory=dict)

    def filter_for(self, ecosystem: str) -> List[str]:
        return list(self.tag_filters.get(ecosystem, []))


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "1", "on"):
            return True
        if lowered in ("false", "no", "0", "off"):
            return False
    logger.warning("Ignoring non-boolean show_tagged_versions value: %r", value)
    return default


def _coerce_names(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        logger.warning("Ignoring tag filter that is not a list: %r", value)
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def settings_from_config(config: Optional[Dict[str, Any]]) -> TagSettings:
    """Build TagSettings from the ``tags`` section of a loaded configuration."""
    show = Constants.SHOW_TAGGED_VERSIONS
    filters = {name: list(names) for name, names in Constants.TAG_FILTERS.items()}

    section = (config or {}).get("tags")
    if isinstance(section, dict):
        if "show_tagged_versions" in section:
            show = _coerce_bool(section["show_tagged_versions"], show)
        configured = section.get("filter")
        if isinstance(configured, dict):
            for ecosystem, names in configured.items():
                if ecosystem not in Constants.SUPPORTED_ECOSYSTEMS:
                    logger.warning("Ignoring tag filter for unsupported ecosystem: %s", ecosystem)
                    continue
                filters[ecosystem] = _coerce_names(names)
    elif section is not None:
        logger.warning("Ignoring 'tags' configuration section: expected a mapping")

    return TagSettings(show_tagged_versions=show, tag_filters=filters)


def apply_tag_overrides(settings: TagSettings, args) -> TagSettings:
    """Apply CLI overrides (highest precedence) for the selected ecosystem."""
    show = settings.show_tagged_versions
    filters = dict(settings.tag_filters)

    if getattr(args, "HIDE_TAGS", False):
        show = False
    cli_filter = getattr(args, "TAG_FILTER", None)
    if cli_filter:
        filters[args.ECOSYSTEM] = _coerce_names(cli_filter)

    return TagSettings(show_tagged_versions=show, tag_filters=filters)
