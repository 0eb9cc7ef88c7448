"""Argument parsing functionality for versionlens."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="versionlens",
        description=(
            "versionlens - classify published versions against a requested version range"
        ),
        add_help=True,
    )

    parser.add_argument("-r", "--requested",
                        dest="REQUESTED",
                        help="Requested version or range, e.g. ^1.2.0 (empty matches any version)",
                        action="store", type=str,
                        required=True)

    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("-v", "--version",
                             dest="VERSIONS",
                             help="A published version. Can be used multiple times.",
                             action="append", type=str,
                             default=[])
    input_group.add_argument("-l", "--load_list",
                             dest="LIST_FROM_FILE",
                             help="Load published versions from a file (one per line, JSON list or npm packument). Use - for stdin.",
                             action="store", type=str)

    parser.add_argument("-e", "--ecosystem",
                        dest="ECOSYSTEM",
                        help="Ecosystem whose tag filter applies",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_ECOSYSTEMS,
                        default="npm")
    parser.add_argument("--hide-tags",
                        dest="HIDE_TAGS",
                        help="Only show the satisfies and latest entries.",
                        action="store_true")
    parser.add_argument("--tag-filter",
                        dest="TAG_FILTER",
                        help="Prerelease channel to show (e.g. beta). Can be used multiple times.",
                        action="append", type=str)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to JSON output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
