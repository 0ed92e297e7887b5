"""Cargo-style version requirement parsing.

A requirement token such as ``1.5``, ``<1.4``, ``~1.2`` or ``1.*`` is reduced
to the tuple of comparator bounds it stands for, using the same rules Cargo
applies to dependency requirements. A bare version defaults to a caret
requirement.
"""

import re
from typing import Optional, Tuple

import semantic_version

from matching.errors import SpecSyntaxError
from .models import Comparator, Op, VersionRange

_NUMBER = r"(?:0|[1-9][0-9]*|[*xX])"

_REQUIREMENT_PATTERN = re.compile(
    rf"""^
    (?P<op>>=|<=|>|<|=|~|\^)?
    \s*
    (?P<major>{_NUMBER})
    (?:\.(?P<minor>{_NUMBER})
        (?:\.(?P<patch>{_NUMBER})
            (?:-(?P<pre>[0-9A-Za-z.-]+))?
        )?
    )?
    (?:\+(?P<build>[0-9A-Za-z.-]+))?
    $""",
    re.VERBOSE,
)

_WILDCARDS = ("*", "x", "X")


def _version(major: int, minor: int, patch: int, prerelease: Tuple[str, ...] = ()) -> semantic_version.Version:
    return semantic_version.Version(major=major, minor=minor, patch=patch, prerelease=prerelease)


def _next_boundary(major: int, minor: Optional[int]) -> semantic_version.Version:
    """Smallest version outside a partial ``major[.minor]`` requirement."""
    if minor is None:
        return _version(major + 1, 0, 0)
    return _version(major, minor + 1, 0)


def _split_components(token: str, match) -> Tuple[list, bool]:
    """Return the numeric components and whether a wildcard was present.

    Raises:
        SpecSyntaxError: If a number follows a wildcard component.
    """
    numbers = []
    wildcard = False
    for part in (match.group("major"), match.group("minor"), match.group("patch")):
        if part is None:
            break
        if part in _WILDCARDS:
            wildcard = True
            continue
        if wildcard:
            raise SpecSyntaxError(f"invalid version requirement '{token}': unexpected number after wildcard")
        numbers.append(int(part))
    return numbers, wildcard


def _decompose(op: str, numbers: list, prerelease: Tuple[str, ...]) -> Tuple[Comparator, ...]:
    """Expand an operator and (possibly partial) version into bounds."""
    major = numbers[0]
    minor = numbers[1] if len(numbers) > 1 else None
    patch = numbers[2] if len(numbers) > 2 else None
    lower = _version(major, minor or 0, patch or 0, prerelease)

    if op == "=":
        if patch is not None:
            return (Comparator(Op.EQ, lower),)
        return (Comparator(Op.GTE, lower), Comparator(Op.LT, _next_boundary(major, minor)))
    if op == ">":
        if patch is not None:
            return (Comparator(Op.GT, lower),)
        return (Comparator(Op.GTE, _next_boundary(major, minor)),)
    if op == ">=":
        return (Comparator(Op.GTE, lower),)
    if op == "<":
        return (Comparator(Op.LT, lower),)
    if op == "<=":
        if patch is not None:
            return (Comparator(Op.LTE, lower),)
        return (Comparator(Op.LT, _next_boundary(major, minor)),)
    if op == "~":
        return (Comparator(Op.GTE, lower), Comparator(Op.LT, _next_boundary(major, minor)))

    # Caret: compatible up to the next change of the left-most non-zero component
    if major > 0 or minor is None:
        upper = _version(major + 1, 0, 0)
    elif minor > 0 or patch is None:
        upper = _version(0, minor + 1, 0)
    else:
        upper = _version(0, 0, patch + 1)
    return (Comparator(Op.GTE, lower), Comparator(Op.LT, upper))


def parse_version_range(token: str) -> VersionRange:
    """Parse a single Cargo requirement token into a VersionRange.

    Args:
        token: Requirement such as ``"1.5"``, ``">=1.2"`` or ``"~1.2.3"``.

    Returns:
        VersionRange whose bounds must all hold for a version to match.

    Raises:
        SpecSyntaxError: If the token is empty or not a valid requirement.
    """
    text = token.strip()
    if not text:
        raise SpecSyntaxError("empty version requirement")
    match = _REQUIREMENT_PATTERN.match(text)
    if match is None:
        raise SpecSyntaxError(f"invalid version requirement '{token}'")

    op = match.group("op") or ""
    numbers, wildcard = _split_components(token, match)
    pre = match.group("pre")

    if not numbers:
        if op:
            raise SpecSyntaxError(f"invalid version requirement '{token}': wildcard cannot take an operator")
        return VersionRange(raw=token, bounds=())
    if wildcard and pre:
        raise SpecSyntaxError(f"invalid version requirement '{token}': pre-release on a wildcard version")
    if not op:
        op = "=" if wildcard else "^"

    prerelease = tuple(pre.split(".")) if pre else ()
    try:
        bounds = _decompose(op, numbers, prerelease)
    except ValueError as e:
        raise SpecSyntaxError(f"invalid version requirement '{token}': {e}") from e
    return VersionRange(raw=token, bounds=bounds)


def release_version(version: semantic_version.Version) -> semantic_version.Version:
    """Drop pre-release and build metadata, keeping (major, minor, patch)."""
    return _version(version.major, version.minor, version.patch)
