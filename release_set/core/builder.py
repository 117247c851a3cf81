"""Release set builder: resolves Kubernetes first, then everything else."""

import asyncio
import logging
from typing import Iterable, List, Mapping, Optional

from ..config import Settings
from ..exceptions import NoMatchingRelease, ResolutionCancelled, UnknownComponent
from ..resolvers.registry import build_registry
from ..resolvers.strategies import Resolver
from ..versions import selector, sources
from ..versions.models import COMPONENTS, ReleaseEntry, ReleaseSet, SemanticVersion
from ..versions.overrides import apply_overrides

logger = logging.getLogger(__name__)


def requested_components(limit: Optional[Iterable[str]] = None) -> List[str]:
    """Components to resolve, in manifest order. An empty limit means all."""
    limit = set(limit or ())
    for name in sorted(limit):
        if name not in COMPONENTS:
            raise UnknownComponent(name, list(COMPONENTS))
    return [name for name in COMPONENTS if not limit or name in limit]


async def resolve_kubernetes(kubernetes_selector: str, settings: Settings) -> SemanticVersion:
    versions = await sources.fetch_tags(settings.repository("kubernetes"), timeout=settings.git_timeout)
    version = selector.match(kubernetes_selector, versions)
    if version is None:
        raise NoMatchingRelease(
            "kubernetes", kubernetes_selector or "latest", [str(v) for v in versions[-10:]]
        )
    logger.info("Kubernetes %s resolves to %s", kubernetes_selector or "latest", version)
    return version


async def _resolve_all(kubernetes: SemanticVersion, resolvers: List[Resolver],
                       concurrency: int) -> List[ReleaseEntry]:
    semaphore = asyncio.Semaphore(concurrency)

    async def run(resolver: Resolver) -> ReleaseEntry:
        async with semaphore:
            return await resolver.resolve(kubernetes)

    tasks = [asyncio.ensure_future(run(resolver)) for resolver in resolvers]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def build_release_set(kubernetes_selector: str = "", limit: Optional[Iterable[str]] = None,
                            settings: Optional[Settings] = None,
                            registry: Optional[Mapping[str, Resolver]] = None) -> ReleaseSet:
    """
    Resolve a compatible set of component versions.

    Args:
        kubernetes_selector: Selector for the Kubernetes version
        limit: Component names to include, empty for all
        settings: Upstream locations and limits
        registry: Resolver per component, defaults to build_registry(settings)

    Raises:
        InvalidSelector: Bad selector shape, before any network call
        UnknownComponent: A limit names an unknown component
        NoMatchingRelease: A selector matched nothing
        SourceUnavailable: An upstream could not be queried
        ResolutionCancelled: The settings.timeout deadline expired
    """
    settings = settings or Settings()
    registry = registry if registry is not None else build_registry(settings)

    selector.parse_selector(kubernetes_selector)
    names = requested_components(limit)

    async def build() -> ReleaseSet:
        kubernetes = await resolve_kubernetes(kubernetes_selector, settings)
        entries = await _resolve_all(kubernetes, [registry[name] for name in names], settings.concurrency)
        return ReleaseSet(entries=tuple(apply_overrides(entries)))

    try:
        return await asyncio.wait_for(build(), timeout=settings.timeout)
    except asyncio.TimeoutError:
        raise ResolutionCancelled(settings.timeout) from None
