"""Data models for channels and version requirements."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import semantic_version


class Channel(Enum):
    """Enum for rustc release channels."""
    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"

    @classmethod
    def from_name(cls, name: str) -> Optional["Channel"]:
        """Return the channel for a case-insensitive name, or None if unknown."""
        try:
            return cls(name.lower())
        except ValueError:
            return None


class Op(Enum):
    """Comparison operator of a single version bound."""
    EQ = "="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="


@dataclass(frozen=True)
class Comparator:
    """A single (operator, version) bound."""
    op: Op
    version: semantic_version.Version

    def matches(self, version: semantic_version.Version) -> bool:
        if self.op == Op.EQ:
            return version == self.version
        if self.op == Op.GT:
            return version > self.version
        if self.op == Op.GTE:
            return version >= self.version
        if self.op == Op.LT:
            return version < self.version
        return version <= self.version

    def __str__(self) -> str:
        return f"{self.op.value}{self.version}"


@dataclass(frozen=True)
class VersionRange:
    """One version requirement alternative.

    ``bounds`` holds every comparator derived from the raw token; a version
    satisfies the range only when all of them hold. An empty tuple (``*``)
    matches any version.
    """
    raw: str
    bounds: Tuple[Comparator, ...]

    def matches(self, version: semantic_version.Version) -> bool:
        return all(bound.matches(version) for bound in self.bounds)

    def __str__(self) -> str:
        return ", ".join(str(bound) for bound in self.bounds) or "*"
