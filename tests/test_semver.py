"""
Tests for version parsing and comparison.
"""

import pytest

from devfleet.utils import semver


class TestParse:
    """Tests for semver.parse."""

    def test_plain(self):
        version = semver.parse("2.29.2")
        assert (version.major, version.minor, version.patch) == (2, 29, 2)
        assert version.prerelease == ()
        assert version.build == ()

    @pytest.mark.parametrize(
        "text",
        ["Resin OS 2.0.6+rev3.prod", "balenaOS 2.0.6+rev3.prod", "resinOS 2.0.6+rev3.prod"],
    )
    def test_os_prefix(self, text):
        version = semver.parse(text)
        assert str(version) == "2.0.6+rev3.prod"
        assert version.revision == 3

    def test_variant_suffix(self):
        version = semver.parse("2.0.0 (prod)")
        assert version.build == ("prod",)

    def test_legacy_dotted_revision(self):
        version = semver.parse("Resin OS 2.0.0.rev1 (prod)")
        assert version.build == ("rev1", "prod")
        assert version.revision == 1
        assert semver.lt("2.0.0+rev1", "2.0.0.rev2")

    def test_prerelease(self):
        version = semver.parse("1.8.0-alpha.0")
        assert version.prerelease == ("alpha", "0")
        assert version.is_prerelease

    @pytest.mark.parametrize("text", [None, "", "not a version", "2.0", "Resin OS"])
    def test_invalid(self, text):
        assert semver.parse(text) is None
        assert semver.valid(text) is False


class TestCompare:
    """Tests for precedence rules."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("2.0.0", "1.9.9", 1),
            ("1.0.0", "1.0.0", 0),
            ("1.0.0-alpha", "1.0.0", -1),
            ("1.0.0-alpha", "1.0.0-alpha.1", -1),
            ("1.0.0-alpha.1", "1.0.0-beta", -1),
            ("1.0.0-beta.2", "1.0.0-beta.11", -1),
            ("1.0.0-1", "1.0.0-alpha", -1),
            ("2.0.0+rev2", "2.0.0+rev1", 1),
            ("2.0.0+rev1", "2.0.0", 1),
            ("2.0.0+rev1.prod", "2.0.0+rev1.dev", 0),
            ("balenaOS 2.29.2+rev1", "2.29.2+rev1", 0),
        ],
    )
    def test_compare(self, a, b, expected):
        assert semver.compare(a, b) == expected

    def test_prerelease_between_alpha_and_release(self):
        """1.8.0-p1 sorts after 1.8.0-alpha.0 but before 1.8.0."""
        assert semver.gte("1.8.0-p1", "1.8.0-alpha.0")
        assert semver.lt("1.8.0-p1", "1.8.0")

    def test_invalid_raises(self):
        with pytest.raises(ValueError):
            semver.compare("garbage", "1.0.0")


class TestRsort:
    """Tests for newest-first sorting."""

    def test_sorted_newest_first(self):
        versions = ["2.0.0+rev1", "2.2.0+rev1", "2.1.0-beta.1", "2.1.0", "garbage", "2.2.0+rev2"]
        assert semver.rsort(versions) == [
            "2.2.0+rev2",
            "2.2.0+rev1",
            "2.1.0",
            "2.1.0-beta.1",
            "2.0.0+rev1",
        ]
