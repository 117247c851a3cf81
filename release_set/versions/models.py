"""Data models for resolved component versions."""

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

# Every component a release set can contain, in manifest order.
COMPONENTS: Tuple[str, ...] = (
    "kubernetes",
    "kubeadm",
    "kubelet",
    "kubectl",
    "cni-plugins",
    "cri-tools",
    "containerd",
    "runc",
    "buildkit",
    "nerdctl",
    "cilium",
    "cilium-cli",
    "helm",
    "k9s",
)

VERSION_PATTERN = re.compile(
    r"^v?([0-9]+)\.([0-9]+)\.([0-9]+)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def strip_version_prefix(text: str) -> str:
    """Drop one leading 'v': 'v1.2.3' -> '1.2.3', 'vv1.2.3' -> 'v1.2.3'."""
    return text[1:] if text.startswith("v") else text


@total_ordering
@dataclass(frozen=True)
class SemanticVersion:
    """
    Immutable semantic version.

    Ordered by major, minor, patch and then pre-release, where a release
    sorts above any of its pre-releases. Build metadata is carried along but
    ignored for equality and ordering.
    """

    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = field(default=None, compare=False)

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion":
        """Parse '1.2.3', 'v1.2.3-rc.1' or '1.2.3+meta'. Raises ValueError."""
        match = VERSION_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Invalid semantic version: '{text}'")

        major, minor, patch, prerelease, build = match.groups()
        return cls(int(major), int(minor), int(patch), prerelease, build)

    def _sort_key(self) -> tuple:
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, ())

        identifiers = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease.split(".")
        )
        return (self.major, self.minor, self.patch, 0, identifiers)

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    def is_prerelease(self) -> bool:
        return self.prerelease is not None


class ReleaseEntry(BaseModel):
    """A resolved component and the exact version to install."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str

    @field_validator("name")
    @classmethod
    def _known_component(cls, value: str) -> str:
        if value not in COMPONENTS:
            raise ValueError(f"unknown component '{value}'")
        return value


class ReleaseSet(BaseModel):
    """The resolved bill of materials, keyed by component name."""

    model_config = ConfigDict(frozen=True)

    entries: Tuple[ReleaseEntry, ...] = ()

    @field_validator("entries")
    @classmethod
    def _unique_and_ordered(cls, value: Tuple[ReleaseEntry, ...]) -> Tuple[ReleaseEntry, ...]:
        names = [entry.name for entry in value]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate components: {', '.join(duplicates)}")
        return tuple(sorted(value, key=lambda entry: COMPONENTS.index(entry.name)))

    def __getitem__(self, name: str) -> ReleaseEntry:
        entry = self.get(name)
        if entry is None:
            raise KeyError(name)
        return entry

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self.entries)

    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]

    def get(self, name: str) -> Optional[ReleaseEntry]:
        return next((entry for entry in self.entries if entry.name == name), None)

    def to_manifest(self) -> Dict[str, Dict[str, str]]:
        """Manifest form consumed by the provisioning playbooks."""
        return {entry.name: entry.model_dump() for entry in self.entries}

    def to_env_lines(self) -> List[str]:
        return [f"{entry.name}={entry.version}" for entry in self.entries]
