"""Version and channel models with Cargo requirement parsing."""

from .models import Channel, Comparator, Op, VersionRange
from .parser import parse_version_range, release_version

__all__ = [
    "Channel",
    "Comparator",
    "Op",
    "VersionRange",
    "parse_version_range",
    "release_version",
]
