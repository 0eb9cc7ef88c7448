"""Constants used in the project."""

import json
import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    NO_VERSIONS = 2


class Ecosystems(Enum):
    """Ecosystems with their own tag filter settings.

    Args:
        Enum (string): Ecosystem names as used in configuration files.
    """

    NPM = "npm"
    DOTNET = "dotnet"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_ECOSYSTEMS = [
        Ecosystems.NPM.value,
        Ecosystems.DOTNET.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ENV_CONFIG = "VERSIONLENS_CONFIG"
    CONFIG_FILE_NAMES = ["versionlens.yml", "versionlens.yaml"]
    USER_CONFIG_DIR = os.path.join("~", ".config", "versionlens")

    # Tag display defaults
    SHOW_TAGGED_VERSIONS = True
    TAG_FILTERS: Dict[str, list] = {
        Ecosystems.NPM.value: [],
        Ecosystems.DOTNET.value: [],
    }


def _read_config_file(path: str) -> Dict[str, Any]:
    """Read a YAML or JSON mapping from ``path``; empty on unreadable content."""
    with open(path, "r", encoding="utf-8") as fh:
        if path.lower().endswith(".json"):
            data = json.load(fh)
        else:
            data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        logger.warning("Ignoring configuration in %s: expected a mapping", path)
        return {}
    return data


def _default_config_paths():
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        yield env_path
    for name in Constants.CONFIG_FILE_NAMES:
        yield os.path.join(os.getcwd(), name)
    for name in Constants.CONFIG_FILE_NAMES:
        yield os.path.expanduser(os.path.join(Constants.USER_CONFIG_DIR, name))


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from ``path`` or the first default location found.

    An explicit path must exist and parse; default locations are best effort.

    Raises:
        OSError: if an explicit ``path`` cannot be read.
        ValueError: if an explicit ``path`` does not parse (YAML or JSON).
    """
    if path:
        try:
            return _read_config_file(path)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid configuration file {path}: {exc}") from exc

    for candidate in _default_config_paths():
        if not os.path.isfile(candidate):
            continue
        try:
            return _read_config_file(candidate)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.warning("Failed to load configuration from %s: %s", candidate, exc)
            return {}
    return {}
