"""Parsing of match options into a MatchSpec.

Every option takes a comma-separated list of alternatives. Any alternative
of an option may match; every option that is present must match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from constants import Constants
from versioning.models import Channel, VersionRange
from versioning.parser import parse_version_range

from .errors import EmptyPredicateError, SpecSyntaxError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSpec:
    """Fully parsed predicate; an empty clause is an absent clause."""

    channels: FrozenSet[Channel] = frozenset()
    versions: Tuple[VersionRange, ...] = ()
    env_exists: FrozenSet[str] = frozenset()
    env_equals: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        if self.is_empty():
            raise EmptyPredicateError(
                "at least one of --channel, --version, --exists or --equals is required"
            )

    def is_empty(self) -> bool:
        return not (self.channels or self.versions or self.env_exists or self.env_equals)


def split_alternatives(option: str, value: str) -> List[str]:
    """Split an option value on commas, rejecting empty alternatives.

    Args:
        option: Option name used in error messages (e.g. "--channel").
        value: Raw option value.

    Returns:
        List of alternatives in the order given.

    Raises:
        SpecSyntaxError: If the value or any alternative is empty.
    """
    items = value.split(Constants.LIST_SEPARATOR)
    if any(item == "" for item in items):
        raise SpecSyntaxError(f"{option}: empty value in '{value}'")
    return items


def parse_channel(token: str) -> Channel:
    channel = Channel.from_name(token)
    if channel is None:
        raise SpecSyntaxError(
            f"--channel: invalid channel '{token}' (possible values: {', '.join(Constants.CHANNELS)})"
        )
    return channel


def _validate_name(option: str, name: str, token: str) -> str:
    if not name or "=" in name:
        raise SpecSyntaxError(f"{option}: invalid variable name in '{token}'")
    return name


def parse_equals(token: str) -> Tuple[str, str]:
    """Split ``NAME=VALUE`` on the first '='; the value is kept verbatim."""
    name, sep, value = token.partition("=")
    if not sep:
        raise SpecSyntaxError(f"--equals: expected NAME=VALUE, got '{token}'")
    return _validate_name("--equals", name, token), value


def parse_match_spec(
    channels: Optional[List[str]] = None,
    versions: Optional[List[str]] = None,
    exists: Optional[List[str]] = None,
    equals: Optional[List[str]] = None,
) -> MatchSpec:
    """Build a MatchSpec from raw CLI option values.

    Each argument is the list of values given for that option (an option may be
    repeated); each value is itself a comma-separated list of alternatives.
    None or an empty list means the option was not supplied.

    Raises:
        SpecSyntaxError: On any malformed alternative.
        EmptyPredicateError: If no option was supplied.
    """
    channel_set = set()
    for value in channels or []:
        channel_set.update(parse_channel(tok) for tok in split_alternatives("--channel", value))

    ranges = []
    for value in versions or []:
        ranges.extend(parse_version_range(tok) for tok in split_alternatives("--version", value))

    names = set()
    for value in exists or []:
        names.update(_validate_name("--exists", tok, tok) for tok in split_alternatives("--exists", value))

    pairs = []
    for value in equals or []:
        pairs.extend(parse_equals(tok) for tok in split_alternatives("--equals", value))

    spec = MatchSpec(
        channels=frozenset(channel_set),
        versions=tuple(ranges),
        env_exists=frozenset(names),
        env_equals=tuple(pairs),
    )
    logger.debug(
        "Parsed match spec: channels=%s versions=%s exists=%s equals=%s",
        sorted(c.value for c in spec.channels),
        [str(r) for r in spec.versions],
        sorted(spec.env_exists),
        list(spec.env_equals),
    )
    return spec
