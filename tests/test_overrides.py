"""Tests for the override table."""

import pytest

from release_set.versions.models import ReleaseEntry
from release_set.versions.overrides import OVERRIDES, apply_overrides

TABLE = {"cilium": {"1.14.4": "1.14.3"}, "cni-plugins": {"1.4.0": "1.3.0"}}


def test_replaces_listed_version():
    entries = [ReleaseEntry(name="cilium", version="1.14.4"), ReleaseEntry(name="helm", version="3.16.2")]
    patched = apply_overrides(entries, TABLE)
    assert [e.version for e in patched] == ["1.14.3", "3.16.2"]


def test_leaves_other_versions():
    entries = [ReleaseEntry(name="cilium", version="1.14.5")]
    assert apply_overrides(entries, TABLE) == entries


def test_matches_after_normalizing():
    entries = [ReleaseEntry(name="cilium", version=" v1.14.4\n")]
    assert apply_overrides(entries, TABLE)[0].version == "1.14.3"


def test_does_not_mutate_input():
    entry = ReleaseEntry(name="cilium", version="1.14.4")
    apply_overrides([entry], TABLE)
    assert entry.version == "1.14.4"


def test_idempotent():
    entries = [
        ReleaseEntry(name="cilium", version="1.14.4"),
        ReleaseEntry(name="cni-plugins", version="1.4.0"),
        ReleaseEntry(name="k9s", version="0.32.5"),
    ]
    once = apply_overrides(entries, TABLE)
    assert apply_overrides(once, TABLE) == once


def test_shipped_table_is_idempotent():
    """Test no replacement in the shipped table is itself overridden."""
    for name, versions in OVERRIDES.items():
        assert not set(versions.values()) & set(versions)


def test_shipped_table_is_read_only():
    with pytest.raises(TypeError):
        OVERRIDES["helm"] = {}


def test_only_one_prefix_is_normalized():
    entries = [ReleaseEntry(name="cilium", version="vv1.14.4")]
    assert apply_overrides(entries, TABLE)[0].version == "vv1.14.4"
