"""Error types raised while resolving a release set."""

from typing import Any, Dict, List, Optional


class ReleaseSetError(Exception):
    """Base class for all release-set errors."""

    exit_code = 1

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class SourceUnavailable(ReleaseSetError):
    """A tag listing or stable-channel fetch failed."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Could not query {source}: {reason}",
            details={"source": source, "reason": reason},
        )
        self.source = source
        self.reason = reason


class InvalidSelector(ReleaseSetError):
    """A selector string has an unsupported shape."""

    exit_code = 2

    def __init__(self, selector: str):
        super().__init__(
            f"Invalid version selector: '{selector}'",
            details={"selector": selector},
        )
        self.selector = selector


class UnknownComponent(ReleaseSetError):
    """A component name outside the known enumeration was requested."""

    exit_code = 2

    def __init__(self, name: str, known: List[str]):
        super().__init__(
            f"Unknown component '{name}' (expected one of: {', '.join(known)})",
            details={"name": name},
        )
        self.name = name


class NoMatchingRelease(ReleaseSetError):
    """A valid selector matched none of the fetched versions."""

    def __init__(self, component: str, selector: str, available: Optional[List[str]] = None):
        super().__init__(
            f"No {component} release matches '{selector}'",
            details={"component": component, "selector": selector, "available": available or []},
        )
        self.component = component
        self.selector = selector


class ResolutionCancelled(ReleaseSetError):
    """The deadline expired before every component was resolved."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Release resolution did not finish within {timeout:g}s",
            details={"timeout": timeout},
        )
        self.timeout = timeout
