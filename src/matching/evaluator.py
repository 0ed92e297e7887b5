"""Predicate evaluation against a toolchain and environment snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

import semantic_version

from common.logging_utils import extra_context, is_debug_enabled
from constants import Verbs
from versioning.models import Channel

from .spec import MatchSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Environment:
    """Facts the predicate is checked against.

    ``channel`` is None when the toolchain reports a channel outside
    stable/beta/nightly; such an environment matches no channel clause.
    """

    channel: Optional[Channel]
    version: semantic_version.Version
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))


def _clauses(spec: MatchSpec, env: Environment) -> List[Callable[[], bool]]:
    """One inner OR per clause present in the spec."""
    clauses = []
    if spec.channels:
        clauses.append(lambda: env.channel in spec.channels)
    if spec.versions:
        clauses.append(lambda: any(r.matches(env.version) for r in spec.versions))
    if spec.env_exists:
        clauses.append(lambda: any(name in env.variables for name in spec.env_exists))
    if spec.env_equals:
        clauses.append(lambda: any(env.variables.get(name) == value for name, value in spec.env_equals))
    return clauses


def evaluate(spec: MatchSpec, env: Environment) -> bool:
    """Return True when every present clause has at least one matching alternative."""
    result = all(clause() for clause in _clauses(spec, env))
    if is_debug_enabled(logger):
        logger.debug(
            "Predicate evaluated to %s (channel=%s, version=%s)",
            result,
            env.channel.value if env.channel else None,
            env.version,
            extra=extra_context(event="decision", component="evaluator", action="evaluate"),
        )
    return result


def verdict(verb: Verbs, spec: MatchSpec, env: Environment) -> bool:
    """Whether the forwarded command should run for the given verb."""
    matched = evaluate(spec, env)
    return matched if verb == Verbs.WHEN else not matched
