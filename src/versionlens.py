"""versionlens - classify published versions against a requested version range

Reads a materialized list of published versions, resolves the satisfies,
latest and prerelease channel tags for the requested range and prints them
as JSON.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

import yaml

from constants import ExitCodes, Constants, _load_yaml_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled, Timer
from cli_config import apply_tag_overrides, settings_from_config
from args import parse_args

# Version classification imports support both source and installed modes:
# - Source/tests: import via src.versioning.*
# - Installed console script: import via versioning.*
try:
    from src.versioning.tags import build_tags_from_version_map, select_display_tags
    from src.versioning.version_map import build_map_from_version_list
except ImportError:  # Fall back when 'src' package is not available
    from versioning.tags import build_tags_from_version_map, select_display_tags
    from versioning.version_map import build_map_from_version_list

logger = logging.getLogger(__name__)


def parse_versions_text(text):
    """Parse published versions from file content.

    Accepts a JSON list, an npm packument (``{"versions": {...}}``), a NuGet
    flat container index (``{"versions": [...]}``) or plain text with one
    version per line.

    Args:
        text (str): Raw file content.

    Returns:
        list: Version strings in the order they appear.
    """
    stripped = text.strip()
    if stripped[:1] in ("[", "{"):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            data = data.get("versions", [])
        if isinstance(data, dict):
            return [str(v) for v in data.keys()]
        if isinstance(data, list):
            return [str(v) for v in data]
    return [line.strip() for line in stripped.splitlines() if line.strip()]


def load_versions_file(file_name):
    """Loads published versions from a file, or stdin when ``file_name`` is ``-``.

    Args:
        file_name (str): File path containing the versions.

    Returns:
        list: Version strings
    """
    if file_name == "-":
        return parse_versions_text(sys.stdin.read())
    try:
        with open(file_name, encoding='utf-8') as file:
            return parse_versions_text(file.read())
    except FileNotFoundError as e:
        logging.error("File not found: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except IOError as e:
        logging.error("IO error: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def export_json(tags, path=None):
    """Write the tag records as a JSON array to ``path`` or stdout."""
    payload = json.dumps([tag.to_dict() for tag in tags], indent=2)
    if not path:
        print(payload)
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            file.write(payload + "\n")
        logging.info("JSON file written: %s", path)
    except OSError as e:
        logging.error("Could not write JSON file %s: %s", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def load_settings(args):
    """Resolve tag display settings from the config file and CLI flags."""
    try:
        config = _load_yaml_config(getattr(args, "CONFIG", None))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logging.error("Could not load configuration: %s, aborting", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    return apply_tag_overrides(settings_from_config(config), args)


def resolve_tags(versions, requested_version, settings, ecosystem):
    """Run the classifier and apply the display settings for ``ecosystem``."""
    with Timer() as t:
        version_map = build_map_from_version_list(versions, requested_version)
        tags = build_tags_from_version_map(version_map, requested_version)
        shown = select_display_tags(
            tags,
            show_tagged_versions=settings.show_tagged_versions,
            tag_filter=settings.filter_for(ecosystem),
        )
    if is_debug_enabled(logger):
        logger.debug(
            "Tags resolved",
            extra=extra_context(
                event="function_exit",
                component="cli",
                action="resolve_tags",
                target=requested_version,
                count=len(shown),
                duration_ms=t.duration_ms(),
            ),
        )
    return shown


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(level=args.LOG_LEVEL, log_file=args.LOG_FILE, fmt=Constants.LOG_FORMAT)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    settings = load_settings(args)

    if args.LIST_FROM_FILE:
        versions = load_versions_file(args.LIST_FROM_FILE)
    elif args.VERSIONS:
        versions = list(args.VERSIONS)
    else:
        versions = parse_versions_text(sys.stdin.read())

    if not versions:
        logging.warning("No published versions provided.")
        return ExitCodes.NO_VERSIONS.value

    tags = resolve_tags(versions, args.REQUESTED, settings, args.ECOSYSTEM)
    export_json(tags, args.OUTPUT)
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
