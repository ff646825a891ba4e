# topmark:header:start
#
#   project      : MapMerge
#   file         : test_maven_version.py
#   file_relpath : tests/utils/test_maven_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Maven version parsing and comparison."""

from __future__ import annotations

import pytest

from mapmerge.utils.version import parse_maven_version, version_at_least


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("1.3.0.Final", (1, 3)),
        ("1.5.5.Final", (1, 5, 5)),
        ("1.6.0.Beta1", (1, 6)),
        ("1.2.0-SNAPSHOT", (1, 2)),
        ("1.4", (1, 4)),
        ("0", (0,)),
    ],
)
def test_parse_maven_version(version: str, expected: tuple[int, ...]) -> None:
    assert parse_maven_version(version) == expected


@pytest.mark.parametrize("version", ["", "Final", "v1.3", "1..3"])
def test_parse_maven_version_rejects(version: str) -> None:
    with pytest.raises(ValueError, match="Not a recognized Maven version"):
        parse_maven_version(version)


def test_version_at_least() -> None:
    assert version_at_least("1.3.0.Final", "1.3")
    assert version_at_least("1.10.0", "1.9")
    assert not version_at_least("1.2.0.Final", "1.3")
