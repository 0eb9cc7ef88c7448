"""Tests for the canonical range layer."""

import pytest
import semantic_version

from src.versioning.ranges import (
    ANY,
    Comparator,
    comparator_sets,
    gt,
    is_fixed_version,
    lt,
    ltr,
    max_satisfying,
    normalize_range,
    satisfies,
    valid_range,
)


def V(text):
    return semantic_version.Version(text)


class TestValidRange:
    @pytest.mark.parametrize("text", ["^1.2.3", "~1.2", ">=1.0.0 <2.0.0", "1.x", "*", "", "1.2.3", "1.0.0 - 2.0.0"])
    def test_valid(self, text):
        assert valid_range(text)

    @pytest.mark.parametrize("text", [">= 1.0.0", "^v1.2.3", "< 2.0.0", "1.2.3  -  2.0.0", "1.0.0 -  2.0.0"])
    def test_loose_spacing_and_prefix_accepted(self, text):
        assert valid_range(text)

    @pytest.mark.parametrize("text", ["latest", "[1.0,2.0)", "one.two", None, "1.0.0 - junk", " - ", ">="])
    def test_invalid(self, text):
        assert not valid_range(text)


class TestSatisfies:
    def test_in_range(self):
        assert satisfies("1.5.0", "^1.2.3")

    def test_out_of_range(self):
        assert not satisfies("2.0.0", "^1.2.3")

    def test_prerelease_excluded_outside_its_patch(self):
        assert not satisfies("1.3.0-beta.1", "^1.2.3")

    def test_prerelease_allowed_on_same_patch(self):
        assert satisfies("1.2.3-beta.2", ">=1.2.3-beta.1")

    def test_loose_spellings_match(self):
        assert satisfies("1.5.0", "^v1.2.3")
        assert satisfies("1.5.0", ">= 1.0.0")
        assert satisfies("1.9.0", "1.2.3  -  2.0.0")
        assert not satisfies("2.0.1", "1.2.3  -  2.0.0")

    def test_invalid_inputs_never_match(self):
        assert not satisfies(None, "1.0.0")
        assert not satisfies("nope", "*")
        assert not satisfies("1.0.0", "latest")


class TestMaxSatisfying:
    def test_highest_match(self):
        assert max_satisfying(["1.0.0", "1.1.0", "2.0.0"], "^1.0.0") == "1.1.0"

    def test_order_independent(self):
        assert max_satisfying(["1.1.0", "2.0.0", "1.0.0"], "^1.0.0") == "1.1.0"

    def test_skips_partial_versions(self):
        assert max_satisfying(["1.2", "1.0.0"], "1") == "1.0.0"

    def test_returns_original_spelling(self):
        assert max_satisfying(["v1.0.0"], "^1.0.0") == "v1.0.0"

    def test_no_match(self):
        assert max_satisfying(["1.0.0"], "^2.0.0") is None

    def test_invalid_range_raises(self):
        with pytest.raises(ValueError):
            max_satisfying(["1.0.0"], "latest")


class TestComparatorSets:
    """Desugaring of range shorthand."""

    @pytest.mark.parametrize("text,expected", [
        ("^1.2.3", [(">=", "1.2.3"), ("<", "2.0.0-0")]),
        ("^0.2.3", [(">=", "0.2.3"), ("<", "0.3.0-0")]),
        ("^0.0.3", [(">=", "0.0.3"), ("<", "0.0.4-0")]),
        ("^1.2.3-beta.1", [(">=", "1.2.3-beta.1"), ("<", "2.0.0-0")]),
        ("~1.2", [(">=", "1.2.0"), ("<", "1.3.0-0")]),
        ("~1.2.3", [(">=", "1.2.3"), ("<", "1.3.0-0")]),
        ("1.x", [(">=", "1.0.0"), ("<", "2.0.0-0")]),
        (">1.2", [(">=", "1.3.0")]),
        ("<=1", [("<", "2.0.0-0")]),
        ("1.2.3", [("", "1.2.3")]),
        ("=1.2.3", [("", "1.2.3")]),
        ("1.0.0 - 2.0.0", [(">=", "1.0.0"), ("<=", "2.0.0")]),
        ("1.0.0 - 2", [(">=", "1.0.0"), ("<", "3.0.0-0")]),
    ])
    def test_single_alternative(self, text, expected):
        assert comparator_sets(text) == [[Comparator(op, V(ver)) for op, ver in expected]]

    def test_empty_is_any(self):
        assert comparator_sets("") == [[ANY]]
        assert comparator_sets("*") == [[ANY]]

    def test_any_dropped_next_to_other_comparators(self):
        assert comparator_sets("* >=1.0.0") == [[Comparator(">=", V("1.0.0"))]]

    def test_alternatives(self):
        assert comparator_sets("<1.0.0 || >=2.0.0") == [
            [Comparator("<", V("1.0.0"))],
            [Comparator(">=", V("2.0.0"))],
        ]

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            comparator_sets("latest")

    def test_loose_spellings(self):
        assert comparator_sets(">= 1.0.0") == [[Comparator(">=", V("1.0.0"))]]
        assert comparator_sets("^v1.2.3") == comparator_sets("^1.2.3")
        assert comparator_sets("1.0.0  -  2.0.0") == [[Comparator(">=", V("1.0.0")), Comparator("<=", V("2.0.0"))]]


class TestNormalizeRange:
    @pytest.mark.parametrize("text,expected", [
        (">= 1.0.0", ">=1.0.0"),
        ("^v1.2.3", "^1.2.3"),
        ("~ v1.2", "~1.2"),
        ("  1.2.3  -  2.0.0 ", "1.2.3 - 2.0.0"),
        ("<1.0.0   ||  > 2.x", "<1.0.0 || >2.x"),
        ("v1.2.3", "v1.2.3"),
        ("latest", "latest"),
    ])
    def test_normalize(self, text, expected):
        assert normalize_range(text) == expected


class TestLessThanRange:
    @pytest.mark.parametrize("version,range_text", [
        ("1.0.0", "^1.2.3"),
        ("0.9.0", "1.0.0"),
        ("0.5.0", ">=1.0.0"),
        ("1.0.0", "1.1.0 - 2.0.0 || ^3.0.0"),
    ])
    def test_below(self, version, range_text):
        assert ltr(version, range_text)

    @pytest.mark.parametrize("version,range_text", [
        ("1.5.0", "^1.2.3"),
        ("3.0.0", "^1.2.3"),
        ("1.0.0", "<2.0.0"),
        ("1.5.0", "<1.0.0 || >=2.0.0"),
        ("1.2.3", "1.2.3"),
    ])
    def test_not_below(self, version, range_text):
        assert not ltr(version, range_text)

    def test_excluded_prerelease_inside_bounds_is_below(self):
        assert ltr("1.5.0-beta.1", "^1.2.3")

    def test_invalid_inputs(self):
        assert not ltr("bad", "^1.0.0")
        assert not ltr("1.0.0", "latest")
        assert not ltr(None, None)


class TestIsFixedVersion:
    @pytest.mark.parametrize("text", ["1.2.3", "=1.2.3", "= 1.2.3", "1.0.0-beta.1", ""])
    def test_fixed(self, text):
        assert is_fixed_version(text)

    @pytest.mark.parametrize("text", ["^1.2.3", "~1.2.3", ">=1.0.0", "1.x", "latest", None])
    def test_not_fixed(self, text):
        assert not is_fixed_version(text)


class TestCompare:
    def test_prerelease_below_release(self):
        assert lt("1.0.0-beta", "1.0.0")
        assert not gt("1.0.0-beta", "1.0.0")

    def test_gt(self):
        assert gt("2.0.0", "1.9.9")

    def test_invalid_is_false(self):
        assert not lt("x", "1.0.0")
        assert not gt("1.0.0", None)
