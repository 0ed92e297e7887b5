"""Tests for Cargo-style version requirement parsing."""

import pytest
import semantic_version

from matching.errors import SpecSyntaxError
from versioning.models import Comparator, Op
from versioning.parser import parse_version_range, release_version


def matches(requirement, version):
    return parse_version_range(requirement).matches(semantic_version.Version(version))


class TestBareVersionDefaultsToCaret:
    """A requirement without an operator behaves like '^'."""

    def test_bounds(self):
        assert str(parse_version_range("1.5")) == ">=1.5.0, <2.0.0"

    @pytest.mark.parametrize("version,expected", [
        ("1.5.0", True),
        ("1.5.3", True),
        ("1.9.9", True),
        ("2.0.0", False),
        ("1.4.9", False),
    ])
    def test_matching(self, version, expected):
        assert matches("1.5", version) is expected

    def test_same_as_explicit_caret(self):
        assert parse_version_range("1.5").bounds == parse_version_range("^1.5").bounds


class TestCaret:
    """Caret requirements stop at the next change of the left-most non-zero component."""

    def test_zero_major(self):
        assert matches("^0.2.3", "0.2.9")
        assert not matches("^0.2.3", "0.3.0")
        assert not matches("^0.2.3", "0.2.2")

    def test_zero_major_and_minor(self):
        assert matches("^0.0.3", "0.0.3")
        assert not matches("^0.0.3", "0.0.4")

    def test_partial_zero_minor(self):
        assert matches("^0.0", "0.0.9")
        assert not matches("^0.0", "0.1.0")

    def test_major_only(self):
        assert matches("^0", "0.9.0")
        assert not matches("^0", "1.0.0")
        assert matches("^1", "1.99.0")
        assert not matches("^1", "2.0.0")


class TestComparisonOperators:
    """Explicit operators with full and partial versions."""

    def test_less_than(self):
        assert matches("<1.4", "1.3.0")
        assert matches("<1.4", "1.3.99")
        assert not matches("<1.4", "1.4.0")

    def test_less_than_or_equal_partial(self):
        assert matches("<=1.2", "1.2.9")
        assert not matches("<=1.2", "1.3.0")

    def test_less_than_or_equal_full(self):
        assert matches("<=1.2.3", "1.2.3")
        assert not matches("<=1.2.3", "1.2.4")

    def test_greater_than_full(self):
        assert matches(">1.2.3", "1.2.4")
        assert not matches(">1.2.3", "1.2.3")

    def test_greater_than_partial(self):
        assert not matches(">1.2", "1.2.9")
        assert matches(">1.2", "1.3.0")
        assert not matches(">1", "1.9.0")
        assert matches(">1", "2.0.0")

    def test_greater_than_or_equal(self):
        assert matches(">=1.2", "1.2.0")
        assert matches(">=1.2", "3.0.0")
        assert not matches(">=1.2", "1.1.9")

    def test_exact_full(self):
        assert parse_version_range("=1.0.0").bounds == (
            Comparator(Op.EQ, semantic_version.Version("1.0.0")),
        )
        assert matches("=1.0.0", "1.0.0")
        assert not matches("=1.0.0", "1.0.1")

    def test_exact_partial(self):
        assert matches("=1.2", "1.2.9")
        assert not matches("=1.2", "1.3.0")
        assert matches("=1", "1.9.0")
        assert not matches("=1", "2.0.0")

    def test_whitespace_after_operator(self):
        assert matches(">= 1.2", "1.2.0")
        assert matches("  <1.4 ", "1.3.0")


class TestTilde:
    """Tilde allows patch-level changes, or minor-level with a major-only version."""

    def test_full(self):
        assert matches("~1.2.3", "1.2.9")
        assert not matches("~1.2.3", "1.2.2")
        assert not matches("~1.2.3", "1.3.0")

    def test_minor(self):
        assert matches("~1.2", "1.2.0")
        assert not matches("~1.2", "1.3.0")

    def test_major(self):
        assert matches("~1", "1.9.9")
        assert not matches("~1", "2.0.0")


class TestWildcards:
    """'*', 'x' and 'X' wildcards."""

    def test_star_matches_everything(self):
        assert parse_version_range("*").bounds == ()
        assert matches("*", "0.0.1")
        assert matches("*", "99.0.0")

    def test_minor_wildcard_is_exact_major(self):
        assert parse_version_range("1.*").bounds == parse_version_range("=1").bounds

    def test_patch_wildcard(self):
        assert matches("1.2.x", "1.2.5")
        assert not matches("1.2.X", "1.3.0")

    def test_wildcard_with_operator_is_partial(self):
        assert parse_version_range("^1.*").bounds == parse_version_range("^1").bounds


class TestPrereleaseAndBuild:
    """Pre-release in requirements orders before the release; build is ignored."""

    def test_prerelease_lower_bound(self):
        assert matches(">=1.2.0-beta", "1.2.0")

    def test_prerelease_upper_bound(self):
        assert matches("<1.2.0-beta", "1.1.0")
        assert not matches("<1.2.0-beta", "1.2.0")

    def test_build_metadata_ignored(self):
        assert parse_version_range("1.2.3+build.5").bounds == parse_version_range("1.2.3").bounds

    def test_raw_token_kept(self):
        assert parse_version_range(">=1.2").raw == ">=1.2"


class TestInvalidRequirements:
    """Malformed tokens raise SpecSyntaxError."""

    @pytest.mark.parametrize("token", [
        "",
        "   ",
        "abc",
        "1.2.3.4",
        "01.2",
        "1.02",
        "=>1.2",
        ">=*",
        "^*",
        "1.*.3",
        "1.2.*-beta",
        "1.2.3-",
        "1.2.3-beta..1",
        "v1.2.3",
    ])
    def test_rejected(self, token):
        with pytest.raises(SpecSyntaxError):
            parse_version_range(token)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_version_range("not-a-version")


def test_release_version_strips_prerelease_and_build():
    stripped = release_version(semantic_version.Version("1.77.0-nightly+abc"))
    assert stripped == semantic_version.Version("1.77.0")
    assert stripped.prerelease == ()
