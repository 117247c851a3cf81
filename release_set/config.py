"""Runtime configuration, auto-loaded from RELEASE_SET_* env vars."""

from pathlib import Path
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

KUBERNETES_REPOSITORY = "https://github.com/kubernetes/kubernetes"

DEFAULT_REPOSITORIES: Dict[str, str] = {
    "kubernetes": KUBERNETES_REPOSITORY,
    "cni-plugins": "https://github.com/containernetworking/plugins",
    "cri-tools": "https://github.com/kubernetes-sigs/cri-tools",
    "containerd": "https://github.com/containerd/containerd",
    "runc": "https://github.com/opencontainers/runc",
    "buildkit": "https://github.com/moby/buildkit",
    "nerdctl": "https://github.com/containerd/nerdctl",
    "helm": "https://github.com/helm/helm",
    "k9s": "https://github.com/derailed/k9s",
}

DEFAULT_STABLE_CHANNELS: Dict[str, str] = {
    "cilium": "https://raw.githubusercontent.com/cilium/cilium/main/stable.txt",
    "cilium-cli": "https://raw.githubusercontent.com/cilium/cilium-cli/main/stable.txt",
}


class Settings(BaseSettings):
    """Upstream locations and resolution limits."""

    model_config = SettingsConfigDict(env_prefix="RELEASE_SET_", extra="ignore")

    repositories: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_REPOSITORIES))
    stable_channels: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_STABLE_CHANNELS))

    # Resolvers in flight at once
    concurrency: int = Field(default=8, ge=1, le=32)

    # Seconds for the whole resolution, and per upstream call
    timeout: float = Field(default=120.0, gt=0)
    git_timeout: float = Field(default=60.0, gt=0)
    http_timeout: float = Field(default=30.0, gt=0)

    log_dir: Path = Path.home() / ".cache" / "release_set"

    def repository(self, component: str) -> str:
        return self.repositories.get(component, DEFAULT_REPOSITORIES[component])

    def stable_channel(self, component: str) -> str:
        return self.stable_channels.get(component, DEFAULT_STABLE_CHANNELS[component])
