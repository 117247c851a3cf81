"""
Version selector.

A selector picks one version out of an ascending list:

    "", "latest", "0"   newest version
    "N"                 newest version with major N
    "-N"                newest version N minor releases behind the newest
    "X.Y"               newest patch of X.Y
    "X.Y.Z"             exactly X.Y.Z
"""

import logging
import re
from typing import Optional, Sequence, Tuple

from ..exceptions import InvalidSelector
from .models import SemanticVersion

logger = logging.getLogger(__name__)

LATEST_SELECTORS = ("", "latest", "0")
NUMBER = re.compile(r"[0-9]+")


def is_latest(selector: Optional[str]) -> bool:
    return (selector or "").strip() in LATEST_SELECTORS


def _relative_offset(selector: str) -> int:
    offset = selector[1:]
    if not NUMBER.fullmatch(offset):
        raise InvalidSelector(selector)
    return int(offset)


def parse_selector(selector: Optional[str]) -> Optional[Tuple[int, ...]]:
    """
    Validate a selector and return its numeric parts.

    Returns None for selectors that only make sense against a version list
    (latest and relative forms).

    Raises:
        InvalidSelector: If the selector has more than two dots or a
            non-numeric part.
    """
    selector = (selector or "").strip()

    if selector in LATEST_SELECTORS:
        return None
    if selector.startswith("-"):
        _relative_offset(selector)
        return None

    parts = selector.split(".")
    if len(parts) > 3 or not all(NUMBER.fullmatch(part) for part in parts):
        raise InvalidSelector(selector)
    return tuple(int(part) for part in parts)


def match(selector: Optional[str], versions: Sequence[SemanticVersion]) -> Optional[SemanticVersion]:
    """
    Resolve a selector against an ascending list of versions.

    Returns the newest version matching every component the selector gives,
    or None if there is none.

    Raises:
        InvalidSelector: If the selector shape is unsupported.
    """
    wanted = parse_selector(selector)

    if not versions:
        return None

    latest = versions[-1]
    if is_latest(selector):
        return latest

    if wanted is None:
        target_minor = latest.minor - _relative_offset(selector.strip())
        if target_minor < 0:
            logger.debug("Selector %s reaches before %s.0", selector, latest.major)
            return None
        wanted = (latest.major, target_minor)

    for version in reversed(versions):
        if (version.major, version.minor, version.patch)[:len(wanted)] == wanted:
            return version

    return None
