"""Version parsing, sources and selection."""

from .models import COMPONENTS, ReleaseEntry, ReleaseSet, SemanticVersion
from .selector import match, parse_selector

__all__ = ["COMPONENTS", "ReleaseEntry", "ReleaseSet", "SemanticVersion", "match", "parse_selector"]
