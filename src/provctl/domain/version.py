"""Runtime versions and the configuration schema they select.

Tomcat changed the shape of ``conf/server.xml`` and ``conf/context.xml``
at 8.0.0. The variant is computed once per run with :func:`schema_for`
and passed explicitly to every mutation site.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:[-_.][A-Za-z][\w.-]*)?$")


@dataclass(frozen=True, order=True)
class Version:
    """An immutable ``major.minor.patch`` triple."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


TOMCAT_8 = Version(8, 0, 0)


class ConfigSchema(StrEnum):
    """Mutually exclusive configuration shapes on either side of 8.0.0."""

    LEGACY = "legacy"
    MODERN = "modern"


def parse_version(raw: str) -> Version:
    """Parse ``"7.0.50"`` (optionally ``"8.0.32-beta"``) into a :class:`Version`.

    Raises ValueError unless exactly three numeric components are present.
    """
    match = _VERSION_PATTERN.match(raw.strip())
    if match is None:
        msg = f"Invalid version {raw!r}: expected major.minor.patch"
        raise ValueError(msg)
    major, minor, patch = (int(part) for part in match.groups())
    return Version(major, minor, patch)


def is_below(version: Version, boundary: Version = TOMCAT_8) -> bool:
    """Return True when *version* sorts strictly before *boundary*."""
    return version < boundary


def schema_for(version: Version) -> ConfigSchema:
    """Select the configuration schema variant for *version*."""
    return ConfigSchema.LEGACY if is_below(version) else ConfigSchema.MODERN
