"""Known-broken releases and the versions to install instead."""

from types import MappingProxyType
from typing import Iterable, List, Mapping

from .models import ReleaseEntry, strip_version_prefix

# component -> {resolved version -> replacement version}
OVERRIDES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "cilium": MappingProxyType({
        "1.14.4": "1.14.3",
    }),
})


def normalize_version(version: str) -> str:
    return strip_version_prefix(version.strip())


def apply_overrides(
    entries: Iterable[ReleaseEntry],
    table: Mapping[str, Mapping[str, str]] = OVERRIDES,
) -> List[ReleaseEntry]:
    """Return the entries with any overridden versions replaced."""
    patched = []
    for entry in entries:
        replacement = table.get(entry.name, {}).get(normalize_version(entry.version))
        if replacement is not None:
            entry = entry.model_copy(update={"version": replacement})
        patched.append(entry)
    return patched
