"""Release set orchestration."""

from .builder import build_release_set

__all__ = ["build_release_set"]
