"""Per-component resolvers."""

from .registry import build_registry
from .strategies import Resolver

__all__ = ["build_registry", "Resolver"]
