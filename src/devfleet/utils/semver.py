"""
Semantic version helpers for supervisor and host OS versions.

Host OS versions are not always plain semver: older devices report strings
such as "Resin OS 2.0.6+rev3.prod" or "balenaOS 2.29.2+rev1", and the
os_variant may be embedded as a build tag. parse() accepts those and
exposes the pieces; compare() follows semver precedence with the "+revN"
build tag as a final tie-breaker.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cmp_to_key

_OS_PREFIX = re.compile(r"^\s*(?:resin\s*os|balena\s*os)\s+", re.IGNORECASE)
_VERSION = re.compile(
    r"^v?(\d+)\.(\d+)\.(\d+)"
    r"(?:-([0-9A-Za-z.-]+))?"
    r"(?:\+([0-9A-Za-z.-]+))?"
    r"(?:\s+\((\w+)\))?\s*$"
)
_REV = re.compile(r"^rev(\d+)$")
# Legacy "2.0.0.rev1" puts the revision after a dot instead of a "+"
_LEGACY_REV = re.compile(r"^(\d+\.\d+\.\d+)\.(rev\d+)")


@dataclass(frozen=True)
class Version:
    """Parsed version."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = field(default=(), compare=False)

    @property
    def revision(self) -> int:
        for tag in self.build:
            m = _REV.match(tag)
            if m:
                return int(m.group(1))
        return 0

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


def parse(value: str | None) -> Version | None:
    """Parse a version string, returning None if it is not a version."""
    if not value or not isinstance(value, str):
        return None
    text = _LEGACY_REV.sub(r"\1+\2", _OS_PREFIX.sub("", value))
    m = _VERSION.match(text)
    if not m:
        return None
    prerelease = tuple(m.group(4).split(".")) if m.group(4) else ()
    build = list(m.group(5).split(".")) if m.group(5) else []
    # "2.0.0 (prod)" style variant suffix
    if m.group(6) and m.group(6) not in build:
        build.append(m.group(6))
    return Version(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        prerelease=prerelease,
        build=tuple(build),
    )


def valid(value: str | None) -> bool:
    return parse(value) is not None


def _compare_identifiers(a: str, b: str) -> int:
    a_num, b_num = a.isdigit(), b.isdigit()
    if a_num and b_num:
        return (int(a) > int(b)) - (int(a) < int(b))
    # Numeric identifiers have lower precedence than alphanumeric ones
    if a_num:
        return -1
    if b_num:
        return 1
    return (a > b) - (a < b)


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    if not a and not b:
        return 0
    # A release ranks above any of its prereleases
    if not a:
        return 1
    if not b:
        return -1
    for x, y in zip(a, b):
        result = _compare_identifiers(x, y)
        if result:
            return result
    return (len(a) > len(b)) - (len(a) < len(b))


def compare(a: str | Version, b: str | Version) -> int:
    """
    Compare two versions.

    Returns:
        -1, 0 or 1

    Raises:
        ValueError: If either side is not a version
    """
    va = a if isinstance(a, Version) else parse(a)
    vb = b if isinstance(b, Version) else parse(b)
    if va is None or vb is None:
        raise ValueError(f"Invalid version comparison: {a!r} vs {b!r}")
    core_a = (va.major, va.minor, va.patch)
    core_b = (vb.major, vb.minor, vb.patch)
    if core_a != core_b:
        return (core_a > core_b) - (core_a < core_b)
    result = _compare_prerelease(va.prerelease, vb.prerelease)
    if result:
        return result
    return (va.revision > vb.revision) - (va.revision < vb.revision)


def gte(a: str | Version, b: str | Version) -> bool:
    return compare(a, b) >= 0


def lt(a: str | Version, b: str | Version) -> bool:
    return compare(a, b) < 0


def rsort(versions: list[str]) -> list[str]:
    """Sort version strings newest first; unparseable entries are dropped."""
    parsed = [v for v in versions if valid(v)]
    return sorted(parsed, key=cmp_to_key(compare), reverse=True)


__all__ = ["Version", "parse", "valid", "compare", "gte", "lt", "rsort"]
