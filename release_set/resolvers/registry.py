"""Which resolution strategy each component uses."""

from types import MappingProxyType
from typing import Mapping, Optional

from ..config import Settings
from ..versions.models import SemanticVersion
from .strategies import (
    BundledResolver,
    CompatibleLatestResolver,
    FixedMajorResolver,
    LatestResolver,
    MatchedMinorResolver,
    Resolver,
    StableChannelResolver,
)

# containerd 2.x needs Kubernetes 1.31 or newer
CONTAINERD_THRESHOLD = SemanticVersion(1, 31, 0)
CONTAINERD_CEILING = SemanticVersion(2, 0, 0)

# Helm 4 is expected to break the chart workflow
HELM_MAJOR = 3


def build_registry(settings: Optional[Settings] = None) -> Mapping[str, Resolver]:
    """Map every component to its resolver."""
    settings = settings or Settings()

    def tags(cls, name, **kwargs):
        return cls(name, settings.repository(name), timeout=settings.git_timeout, **kwargs)

    def channel(name):
        return StableChannelResolver(name, settings.stable_channel(name), timeout=settings.http_timeout)

    return MappingProxyType({
        "kubernetes": BundledResolver("kubernetes"),
        "kubeadm": BundledResolver("kubeadm"),
        "kubelet": BundledResolver("kubelet"),
        "kubectl": BundledResolver("kubectl"),
        "cni-plugins": tags(LatestResolver, "cni-plugins"),
        "cri-tools": tags(MatchedMinorResolver, "cri-tools"),
        "containerd": tags(
            CompatibleLatestResolver, "containerd",
            threshold=CONTAINERD_THRESHOLD, ceiling=CONTAINERD_CEILING,
        ),
        "runc": tags(LatestResolver, "runc"),
        "buildkit": tags(LatestResolver, "buildkit"),
        "nerdctl": tags(LatestResolver, "nerdctl"),
        "cilium": channel("cilium"),
        "cilium-cli": channel("cilium-cli"),
        "helm": tags(FixedMajorResolver, "helm", major=HELM_MAJOR),
        "k9s": tags(LatestResolver, "k9s"),
    })
