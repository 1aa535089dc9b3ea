# SPDX-License-Identifier: MIT
"""Unit tests for requirement matching."""

import pytest

from semreq import (
    InvalidRequirementError,
    InvalidVersionError,
    compile_requirement,
    filter_versions,
    matches,
    max_satisfying,
    parse_requirement,
    parse_version,
)


def check(requirement: str, version: str, allow_pre: bool = True) -> bool:
    return matches(compile_requirement(parse_requirement(requirement)), parse_version(version), allow_pre)


class TestOperators:
    """Tests for each plain operator."""

    @pytest.mark.parametrize(
        "requirement,version,expected",
        [
            ("== 1.0.0", "1.0.0", True),
            ("== 1.0.0", "1.0.1", False),
            ("== 1.0.0", "1.0.0+build", True),
            ("!= 1.0.0", "1.0.0", False),
            ("!= 1.0.0", "1.0.1", True),
            ("!= 1.0.0", "0.9.0", True),
            ("> 1.0.0", "1.0.1", True),
            ("> 1.0.0", "1.0.0", False),
            (">= 1.0.0", "1.0.0", True),
            (">= 1.0.0", "0.9.9", False),
            ("< 1.0.0", "0.9.9", True),
            ("< 1.0.0", "1.0.0", False),
            ("<= 1.0.0", "1.0.0", True),
            ("<= 1.0.0", "1.0.1", False),
            ("1.0.0", "1.0.0", True),
        ],
    )
    def test_operator(self, requirement, version, expected):
        """Test operator semantics against the comparator."""
        assert check(requirement, version) is expected

    def test_exact_prerelease(self):
        """Test that == with a pre-release only matches that pre-release."""
        assert check("== 1.0.0-rc.1", "1.0.0-rc.1") is True
        assert check("== 1.0.0-rc.1", "1.0.0-rc.2") is False
        assert check("== 1.0.0-rc.1", "1.0.0") is False

    def test_prerelease_below_release_bound(self):
        """Test that a pre-release sorts below its release in bounds."""
        assert check("< 1.0.0", "1.0.0-alpha") is True
        assert check(">= 1.0.0", "1.0.0-alpha") is False


class TestCompatible:
    """Tests for ~> matching."""

    def test_full_version_boundaries(self):
        """Test ~> 2.1.2 admits 2.1.x from 2.1.2 up."""
        assert check("~> 2.1.2", "2.1.2") is True
        assert check("~> 2.1.2", "2.1.9") is True
        assert check("~> 2.1.2", "2.1.1") is False
        assert check("~> 2.1.2", "2.2.0") is False

    def test_partial_version_boundaries(self):
        """Test ~> 2.1 admits 2.x from 2.1.0 up."""
        assert check("~> 2.1", "2.1.0") is True
        assert check("~> 2.1", "2.9.9") is True
        assert check("~> 2.1", "2.0.9") is False
        assert check("~> 2.1", "3.0.0") is False

    def test_major_only(self):
        """Test ~> 2 admits every 2.x."""
        assert check("~> 2", "2.0.0") is True
        assert check("~> 2", "2.99.0") is True
        assert check("~> 2", "3.0.0") is False

    def test_next_minor_prerelease_excluded(self):
        """Test that a pre-release of the next minor is outside ~> 2.1.2."""
        assert check("~> 2.1.2", "2.2.0-alpha") is False
        assert check("~> 2.1.2", "2.2.0-alpha", allow_pre=False) is False

    def test_next_major_prerelease_excluded(self):
        """Test that ~> 2.1 does not admit a 3.0.0 pre-release."""
        assert check("~> 2.1", "3.0.0-alpha") is False
        assert check("~> 2.1", "3.0.0-0") is False
        assert check("~> 2", "3.0.0-rc.1") is False

    def test_next_major_prerelease_excluded_with_prerelease_lower_bound(self):
        """Test that a pre-release lower bound does not open the upper bound."""
        assert check("~> 2.1-dev", "3.0.0-alpha", allow_pre=False) is False
        assert check("~> 2.1-dev", "3.0.0-alpha") is False
        assert check("~> 2.1.3-dev", "2.2.0-alpha") is False

    def test_prereleases_inside_range_still_match(self):
        """Test that pre-releases below the bound's release are admitted."""
        assert check("~> 2.1", "2.9.9-beta") is True
        assert check("~> 2.1-dev", "2.5.0-rc.1", allow_pre=False) is True

    def test_hand_written_upper_bound_admits_prerelease(self):
        """Test that a plain < keeps ordinary precedence."""
        assert check(">= 2.1.0 and < 3.0.0", "3.0.0-alpha") is True

    def test_prerelease_lower_bound(self):
        """Test ~> with a pre-release lower bound."""
        assert check("~> 2.1.3-dev", "2.1.3-dev") is True
        assert check("~> 2.1.3-dev", "2.1.3-rc", allow_pre=False) is True
        assert check("~> 2.1.3-dev", "2.1.3-alpha") is False
        assert check("~> 2.1.3-dev", "2.1.3") is True
        assert check("~> 2.1.3-dev", "2.2.0") is False


class TestConnectives:
    """Tests for and / or evaluation."""

    def test_and_or_precedence(self):
        """Test that (a and b) or c is evaluated."""
        requirement = ">= 2.0.0 and < 2.1.0 or == 3.0.0"
        assert check(requirement, "3.0.0") is True
        assert check(requirement, "2.0.5") is True
        assert check(requirement, "2.2.0") is False
        assert check(requirement, "1.9.0") is False

    def test_and(self):
        """Test that both sides of and must hold."""
        assert check(">= 1.0.0 and != 1.2.0", "1.1.0") is True
        assert check(">= 1.0.0 and != 1.2.0", "1.2.0") is False

    def test_or(self):
        """Test that either side of or suffices."""
        assert check("== 1.0.0 or == 2.0.0", "2.0.0") is True
        assert check("== 1.0.0 or == 2.0.0", "3.0.0") is False


class TestPrereleasePolicy:
    """Tests for the allow_pre gate."""

    def test_default_allows_prerelease(self):
        """Test that pre-releases match by default."""
        assert check(">= 2.0.0", "2.1.0-dev") is True

    def test_disallowed_without_prerelease_operand(self):
        """Test that pre-releases are refused when not allowed."""
        assert check(">= 2.0.0", "2.1.0-dev", allow_pre=False) is False

    def test_prerelease_operand_opts_in(self):
        """Test that a pre-release operand lets pre-releases match."""
        assert check(">= 2.0.0-dev", "2.1.0-dev", allow_pre=False) is True

    def test_prerelease_operand_in_other_branch(self):
        """Test that the opt-in applies to the requirement as a whole."""
        requirement = "== 1.0.0-rc.1 or >= 2.0.0"
        assert check(requirement, "2.1.0-dev", allow_pre=False) is True

    def test_releases_unaffected(self):
        """Test that releases are matched normally when allow_pre is False."""
        assert check(">= 2.0.0", "2.1.0", allow_pre=False) is True

    def test_gate_does_not_widen(self):
        """Test that opting in still requires the clauses to hold."""
        assert check(">= 2.0.0-dev", "1.9.0-dev", allow_pre=False) is False


class TestConvenienceInputs:
    """Tests for string and AST inputs to matches."""

    def test_strings(self):
        """Test that strings are parsed and compiled on the fly."""
        assert matches("~> 2.1", "2.5.0") is True
        assert matches("~> 2.1", "3.0.0", allow_pre=False) is False

    def test_requirement_ast(self):
        """Test that an uncompiled Requirement is accepted."""
        assert matches(parse_requirement("~> 2.1"), "2.5.0") is True

    def test_invalid_version(self):
        """Test that an invalid version string raises."""
        with pytest.raises(InvalidVersionError):
            matches("~> 2.1", "2.5")

    def test_invalid_requirement(self):
        """Test that an invalid requirement string raises."""
        with pytest.raises(InvalidRequirementError):
            matches("~>", "2.5.0")


class TestFilterVersions:
    """Tests for filter_versions and max_satisfying."""

    versions = ["1.0.0", "2.0.0-rc.1", "2.0.0", "2.1.4", "2.9.0", "3.0.0"]

    def test_filter(self):
        """Test that matching versions are kept in input order."""
        result = filter_versions("~> 2.0", self.versions)
        assert [str(v) for v in result] == ["2.0.0", "2.1.4", "2.9.0"]

    def test_filter_prerelease(self):
        """Test that allow_pre applies to every candidate."""
        result = filter_versions(">= 1.0.0", self.versions, allow_pre=False)
        assert "2.0.0-rc.1" not in [str(v) for v in result]

    def test_max_satisfying(self):
        """Test picking the highest matching version."""
        assert max_satisfying("~> 2.0", self.versions) == parse_version("2.9.0")

    def test_max_satisfying_none(self):
        """Test that no match gives None."""
        assert max_satisfying("> 5.0.0", self.versions) is None

    def test_version_objects(self):
        """Test that Version objects are accepted."""
        versions = [parse_version(v) for v in self.versions]
        assert max_satisfying("< 2.0.0", versions, allow_pre=True) == parse_version("2.0.0-rc.1")
