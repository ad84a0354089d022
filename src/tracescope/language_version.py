"""Language version tags carried on the first line of a trace."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass

_VERSION_RE = re.compile(r"^\s*(\d+)\.(\d+)(?:\.(\d+))?(?:\.(\d+))?\s*$", re.ASCII)

# Oldest grammar ast.parse(feature_version=...) still honours.
_MIN_FEATURE_VERSION = (3, 7)


@dataclass(frozen=True, order=True)
class LanguageVersion:
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    def feature_version(self) -> tuple[int, int] | None:
        if self.major != 3:
            return None
        current = tuple(sys.version_info[:2])
        requested = (self.major, self.minor)
        if requested < _MIN_FEATURE_VERSION:
            return _MIN_FEATURE_VERSION
        if requested > current:
            return (current[0], current[1])
        return requested

    def cst_version(self) -> str:
        return str(self)


def try_parse_version(text: str) -> LanguageVersion | None:
    """Parse a dotted version such as ``3.11`` or ``2.7.18``.

    Two to four numeric components are accepted; only major and minor are
    kept. Anything else is not a version tag and yields ``None``.
    """
    match = _VERSION_RE.match(text)
    if match is None:
        return None
    return LanguageVersion(major=int(match.group(1)), minor=int(match.group(2)))
