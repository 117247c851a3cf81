"""Tests for version and release models."""

import pytest
from pydantic import ValidationError

from release_set.versions.models import ReleaseEntry, ReleaseSet, SemanticVersion


def test_parse_strips_prefix():
    """Test a leading v is accepted."""
    assert SemanticVersion.parse("v1.28.4") == SemanticVersion(1, 28, 4)
    assert str(SemanticVersion.parse("v1.28.4")) == "1.28.4"


def test_parse_prerelease_and_build():
    version = SemanticVersion.parse("1.29.0-rc.1+abc")
    assert version.prerelease == "rc.1"
    assert version.build == "abc"
    assert version.is_prerelease()
    assert str(version) == "1.29.0-rc.1+abc"


@pytest.mark.parametrize("text", ["1.2", "1.2.3.4", "v1.x.0", "latest", "", "1.2.3-"])
def test_parse_rejects_malformed(text):
    with pytest.raises(ValueError):
        SemanticVersion.parse(text)


def test_ordering():
    """Test numeric fields compare numerically and releases beat pre-releases."""
    ordered = [
        SemanticVersion.parse(text)
        for text in ["1.9.0", "1.10.0-alpha", "1.10.0-alpha.2", "1.10.0-alpha.10",
                     "1.10.0-beta", "1.10.0", "1.10.1", "2.0.0"]
    ]
    assert sorted(reversed(ordered)) == ordered


def test_build_metadata_ignored_for_equality():
    assert SemanticVersion.parse("1.2.3+a") == SemanticVersion.parse("1.2.3+b")
    assert len({SemanticVersion.parse("1.2.3+a"), SemanticVersion.parse("1.2.3")}) == 1


def test_release_entry_is_frozen():
    entry = ReleaseEntry(name="helm", version="3.16.2")
    with pytest.raises(ValidationError):
        entry.version = "3.0.0"


def test_release_entry_rejects_unknown_component():
    with pytest.raises(ValidationError):
        ReleaseEntry(name="docker", version="1.0.0")


def test_release_set_orders_by_component():
    release_set = ReleaseSet(entries=(
        ReleaseEntry(name="helm", version="3.16.2"),
        ReleaseEntry(name="kubernetes", version="1.28.4"),
    ))
    assert release_set.names() == ["kubernetes", "helm"]
    assert release_set["helm"].version == "3.16.2"
    assert "k9s" not in release_set
    assert release_set.get("k9s") is None
    assert release_set.to_manifest() == {
        "kubernetes": {"name": "kubernetes", "version": "1.28.4"},
        "helm": {"name": "helm", "version": "3.16.2"},
    }
    assert release_set.to_env_lines() == ["kubernetes=1.28.4", "helm=3.16.2"]


def test_release_set_rejects_duplicates():
    with pytest.raises(ValidationError):
        ReleaseSet(entries=(
            ReleaseEntry(name="helm", version="3.16.2"),
            ReleaseEntry(name="helm", version="3.15.0"),
        ))
