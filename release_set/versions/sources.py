"""Upstream version sources: git tag listings and stable-channel files."""

import asyncio
import logging
from typing import List, Optional

import aiohttp

from ..exceptions import SourceUnavailable
from ..utils.async_http import AsyncHTTPClient
from ..utils.git import GitError, ls_remote_tags
from .models import SemanticVersion, strip_version_prefix

logger = logging.getLogger(__name__)

TAG_PREFIX = "refs/tags/"
PEELED_SUFFIX = "^{}"


def is_peeled_ref(ref: str) -> bool:
    """True for the `^{}` duplicate git lists for each annotated tag."""
    return ref.endswith(PEELED_SUFFIX)


def is_prerelease(version: SemanticVersion) -> bool:
    return version.is_prerelease()


def tag_name(ref: str) -> str:
    """'refs/tags/v1.2.3' -> '1.2.3'."""
    if ref.startswith(TAG_PREFIX):
        ref = ref[len(TAG_PREFIX):]
    return strip_version_prefix(ref)


def parse_tag(ref: str) -> Optional[SemanticVersion]:
    try:
        return SemanticVersion.parse(tag_name(ref))
    except ValueError:
        return None


def parse_tags(refs: List[str], include_prereleases: bool = False) -> List[SemanticVersion]:
    """Turn raw tag refs into ascending release versions."""
    versions = []
    for ref in refs:
        if is_peeled_ref(ref):
            continue

        version = parse_tag(ref)
        if version is None:
            logger.debug("Skipping non-version tag %s", ref)
            continue
        if is_prerelease(version) and not include_prereleases:
            continue

        versions.append(version)

    return sorted(versions)


async def fetch_tags(repository_url: str, include_prereleases: bool = False,
                     timeout: float = 60.0) -> List[SemanticVersion]:
    """Fetch the tags of a repository as ascending semantic versions."""
    try:
        refs = await ls_remote_tags(repository_url, timeout=timeout)
    except GitError as e:
        raise SourceUnavailable(repository_url, str(e)) from e

    versions = parse_tags([ref for _, ref in refs], include_prereleases)
    logger.info("Found %d releases in %s", len(versions), repository_url)
    return versions


async def fetch_stable_channel(url: str, timeout: float = 30.0) -> str:
    """Fetch a plain-text stable version pointer, e.g. 'v1.14.4\\n' -> '1.14.4'."""
    try:
        async with AsyncHTTPClient(timeout=timeout) as client:
            text = await client.get_text(url)
    except aiohttp.ClientResponseError as e:
        raise SourceUnavailable(url, f"HTTP {e.status}") from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise SourceUnavailable(url, str(e) or type(e).__name__) from e
    except UnicodeDecodeError as e:
        raise SourceUnavailable(url, "response is not valid text") from e

    version = strip_version_prefix(text.strip())
    if not version:
        raise SourceUnavailable(url, "empty response")

    logger.info("Stable channel %s points at %s", url, version)
    return version
