"""Tests for version classification and semver filtering."""

import pytest

from src.versioning.models import ParsedVersion
from src.versioning.parser import format_tag_name, parse_version, pluck_semver_versions


class TestParseVersion:
    """Release/prerelease classification."""

    def test_prerelease_group_is_lowercased(self):
        assert parse_version("1.0.0-RC.1") == ParsedVersion("1.0.0-RC.1", True, "rc")

    def test_release(self):
        assert parse_version("1.0.0") == ParsedVersion("1.0.0", False, "")

    @pytest.mark.parametrize("version,group", [
        ("2.0.0-beta.2", "beta"),
        ("2.0.0-alpha1", "alpha"),
        ("2.0.0-next.0", "next"),
        ("v3.1.0-preview.4", "preview"),
    ])
    def test_group_is_leading_alphabetic_run(self, version, group):
        parsed = parse_version(version)
        assert parsed.is_prerelease
        assert parsed.prerelease_group == group
        assert parsed.version == version

    def test_numeric_prerelease_has_empty_group(self):
        parsed = parse_version("1.0.0-1")
        assert parsed.is_prerelease
        assert parsed.prerelease_group == ""

    def test_non_semver_is_treated_as_release(self):
        assert parse_version("not-a-version") == ParsedVersion("not-a-version", False, "")

    def test_deterministic(self):
        assert parse_version("4.0.0-beta.3") == parse_version("4.0.0-beta.3")


class TestFormatTagName:
    def test_matches_prefix(self):
        assert format_tag_name("beta2") == "beta"

    def test_no_letters_gives_empty_match(self):
        assert format_tag_name("123") == ""


class TestPluckSemverVersions:
    """Filtering registry noise."""

    def test_keeps_valid_versions_and_ranges_in_order(self):
        raw = ["1.0.0", "foo", "2.0.0-beta.1", "latest", "1.2", "1.0.0.0"]
        assert pluck_semver_versions(raw) == ["1.0.0", "2.0.0-beta.1", "1.2"]

    def test_output_is_ordered_subset(self):
        raw = ["3.0.0", "bogus", "1.0.0", "2.0.0-rc.1", "???", "0.1.0"]
        result = pluck_semver_versions(raw)
        positions = [raw.index(v) for v in result]
        assert positions == sorted(positions)
        assert set(result) <= set(raw)

    def test_range_like_noise_keeps_order(self):
        raw = ["2.0.0", "", "1.2.3  -  2.0.0", "latest", "*", "1.0.0 - junk", ">= 1.0.0", "1.0.0-beta.1", None]
        result = pluck_semver_versions(raw)
        assert result == ["2.0.0", "", "1.2.3  -  2.0.0", "*", ">= 1.0.0", "1.0.0-beta.1"]
        positions = [raw.index(v) for v in result]
        assert positions == sorted(positions)

    def test_does_not_mutate_input(self):
        raw = ["1.0.0", "junk"]
        pluck_semver_versions(raw)
        assert raw == ["1.0.0", "junk"]

    def test_empty(self):
        assert pluck_semver_versions([]) == []
