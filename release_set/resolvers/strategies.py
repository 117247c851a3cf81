"""
Per-component version resolution strategies.

Every resolver answers the same question: given the Kubernetes version the
cluster will run, which version of this component should be installed?
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from ..exceptions import NoMatchingRelease
from ..versions import selector, sources
from ..versions.models import ReleaseEntry, SemanticVersion

logger = logging.getLogger(__name__)


class Resolver(ABC):
    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    async def resolve(self, kubernetes: SemanticVersion) -> ReleaseEntry:
        """Resolve this component for the given Kubernetes version."""

    def entry(self, version) -> ReleaseEntry:
        logger.debug("Resolved %s to %s", self.name, version)
        return ReleaseEntry(name=self.name, version=str(version))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class BundledResolver(Resolver):
    """Ships with Kubernetes itself, so it carries the Kubernetes version."""

    async def resolve(self, kubernetes: SemanticVersion) -> ReleaseEntry:
        return self.entry(kubernetes)


class TagResolver(Resolver):
    """Base for resolvers that pick from a repository's release tags."""

    def __init__(self, name: str, repository: str, timeout: float = 60.0):
        super().__init__(name)
        self.repository = repository
        self.timeout = timeout

    async def releases(self) -> List[SemanticVersion]:
        return await sources.fetch_tags(self.repository, timeout=self.timeout)

    def newest(self, versions: List[SemanticVersion], requirement: str = "latest") -> SemanticVersion:
        if not versions:
            raise NoMatchingRelease(self.name, requirement)
        return versions[-1]

    def select(self, wanted: str, versions: List[SemanticVersion]) -> SemanticVersion:
        version = selector.match(wanted, versions)
        if version is None:
            raise NoMatchingRelease(self.name, wanted, [str(v) for v in versions[-10:]])
        return version


class LatestResolver(TagResolver):
    """Newest release, whatever the Kubernetes version."""

    async def resolve(self, kubernetes: SemanticVersion) -> ReleaseEntry:
        return self.entry(self.newest(await self.releases()))


class MatchedMinorResolver(TagResolver):
    """Release line numbered after the Kubernetes minor it supports (cri-tools)."""

    async def resolve(self, kubernetes: SemanticVersion) -> ReleaseEntry:
        wanted = f"{kubernetes.major}.{kubernetes.minor}"
        return self.entry(self.select(wanted, await self.releases()))


class CompatibleLatestResolver(TagResolver):
    """Newest release, capped below `ceiling` for Kubernetes older than `threshold`."""

    def __init__(self, name: str, repository: str, threshold: SemanticVersion,
                 ceiling: SemanticVersion, timeout: float = 60.0):
        super().__init__(name, repository, timeout)
        self.threshold = threshold
        self.ceiling = ceiling

    def compatible(self, kubernetes: SemanticVersion, versions: List[SemanticVersion]) -> List[SemanticVersion]:
        if kubernetes >= self.threshold:
            return versions
        return [v for v in versions if v < self.ceiling]

    async def resolve(self, kubernetes: SemanticVersion) -> ReleaseEntry:
        versions = self.compatible(kubernetes, await self.releases())
        return self.entry(self.newest(versions, f"<{self.ceiling} for kubernetes {kubernetes}"))


class FixedMajorResolver(TagResolver):
    """Newest release of one pinned major line."""

    def __init__(self, name: str, repository: str, major: int, timeout: float = 60.0):
        super().__init__(name, repository, timeout)
        self.major = major

    async def resolve(self, kubernetes: SemanticVersion) -> ReleaseEntry:
        return self.entry(self.select(str(self.major), await self.releases()))


class StableChannelResolver(Resolver):
    """Version published in a plain-text stable channel file."""

    def __init__(self, name: str, url: str, timeout: float = 30.0):
        super().__init__(name)
        self.url = url
        self.timeout = timeout

    async def resolve(self, kubernetes: SemanticVersion) -> ReleaseEntry:
        return self.entry(await sources.fetch_stable_channel(self.url, timeout=self.timeout))
