"""Shared fixtures: canned upstream tag listings and stable channels."""

from unittest.mock import AsyncMock, patch

import pytest

from release_set.config import DEFAULT_REPOSITORIES, DEFAULT_STABLE_CHANNELS, Settings
from release_set.exceptions import SourceUnavailable
from release_set.versions.sources import parse_tags

TAGS = {
    "kubernetes": ["v1.28.4", "v1.28.3", "v1.27.8", "v1.27.1-rc.1"],
    "cni-plugins": ["v1.3.0", "v1.4.0", "v1.4.0^{}"],
    "cri-tools": ["v1.27.1", "v1.28.0", "v1.29.0"],
    "containerd": ["v2.0.0", "v1.7.20", "v1.7.19", "api/v1.8.0"],
    "runc": ["v1.1.12", "v1.2.0-rc.1"],
    "buildkit": ["v0.12.5", "dockerfile/1.6.0"],
    "nerdctl": ["v1.7.6", "v2.0.0"],
    "helm": ["v3.15.0", "v3.16.2", "v4.0.0"],
    "k9s": ["v0.32.5"],
}

CHANNELS = {
    "cilium": "1.14.4",
    "cilium-cli": "0.16.0",
}


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def upstream():
    """Patch the version sources with the canned listings above.

    Yields the (fetch_tags, fetch_stable_channel) mocks; set `broken` on the
    fetch_tags mock to a set of component names to make them unavailable.
    """
    by_url = {DEFAULT_REPOSITORIES[name]: name for name in TAGS}
    by_channel = {DEFAULT_STABLE_CHANNELS[name]: name for name in CHANNELS}

    async def fake_fetch_tags(url, include_prereleases=False, timeout=60.0):
        name = by_url[url]
        if name in fetch_tags.broken:
            raise SourceUnavailable(url, "connection refused")
        refs = [f"refs/tags/{tag}" for tag in TAGS[name]]
        return parse_tags(refs, include_prereleases)

    async def fake_fetch_stable_channel(url, timeout=30.0):
        name = by_channel[url]
        if name in fetch_tags.broken:
            raise SourceUnavailable(url, "HTTP 503")
        return CHANNELS[name]

    fetch_tags = AsyncMock(side_effect=fake_fetch_tags)
    fetch_tags.broken = set()
    fetch_stable_channel = AsyncMock(side_effect=fake_fetch_stable_channel)

    with patch("release_set.versions.sources.fetch_tags", fetch_tags), \
            patch("release_set.versions.sources.fetch_stable_channel", fetch_stable_channel):
        yield fetch_tags, fetch_stable_channel
