# topmark:header:start
#
#   project      : MapMerge
#   file         : version.py
#   file_relpath : src/mapmerge/utils/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version utilities for MapMerge."""

from __future__ import annotations

import re

# Recognize the numeric head of a Maven version and ignore its qualifier:
#   1.3.0.Final, 1.5.5.Final, 1.6.0.Beta1, 1.2.0-SNAPSHOT, 1.4
_MAVEN_RE: re.Pattern[str] = re.compile(
    r"""
    ^
    (?P<numbers>\d+(?:\.\d+)*)
    (?:
      [.\-]?(?P<qualifier>[A-Za-z][0-9A-Za-z.\-]*)
    )?
    $
    """,
    re.VERBOSE,
)


def parse_maven_version(version: str) -> tuple[int, ...]:
    """Return the numeric components of a Maven version string.

    Qualifiers (``Final``, ``Beta1``, ``SNAPSHOT``) are dropped; trailing zero
    components are trimmed so that ``1.3`` and ``1.3.0.Final`` compare equal.

    Args:
        version (str): The version as found in a dependency coordinate.

    Returns:
        tuple[int, ...]: Numeric components.

    Raises:
        ValueError: If ``version`` does not start with a number.
    """
    m: re.Match[str] | None = _MAVEN_RE.match(version.strip())
    if not m:
        raise ValueError(f"Not a recognized Maven version: {version!r}")
    parts: list[int] = [int(p) for p in m.group("numbers").split(".")]
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def version_at_least(version: str, minimum: str) -> bool:
    """Return True if ``version`` is at least ``minimum`` (numeric comparison)."""
    return parse_maven_version(version) >= parse_maven_version(minimum)
