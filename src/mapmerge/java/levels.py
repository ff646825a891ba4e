# topmark:header:start
#
#   project      : MapMerge
#   file         : levels.py
#   file_relpath : src/mapmerge/java/levels.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Java language levels.

`LanguageLevel` is an ordered enum of Java feature releases. Build tools spell
the same level in several ways (``1.8``, ``8``, ``JDK_1_8``, ``java8``); all of
them parse to the same member.
"""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Final

_LEVEL_RE: Final[re.Pattern[str]] = re.compile(
    r"^(?:jdk|java)?[_ -]?(?:1[._])?(?P<feature>\d+)(?:[._]\d+)*$",
    re.IGNORECASE,
)


class LanguageLevel(IntEnum):
    """Java language levels, ordered by feature release."""

    JDK_1_3 = 3
    JDK_1_4 = 4
    JDK_1_5 = 5
    JDK_1_6 = 6
    JDK_1_7 = 7
    JDK_1_8 = 8
    JDK_9 = 9
    JDK_10 = 10
    JDK_11 = 11
    JDK_12 = 12
    JDK_13 = 13
    JDK_14 = 14
    JDK_15 = 15
    JDK_16 = 16
    JDK_17 = 17
    JDK_18 = 18
    JDK_19 = 19
    JDK_20 = 20
    JDK_21 = 21
    JDK_22 = 22
    JDK_23 = 23
    JDK_24 = 24
    JDK_25 = 25

    @classmethod
    def parse(cls, value: str | int) -> LanguageLevel:
        """Parse a language level from its common spellings.

        Args:
            value (str | int): E.g. ``"1.8"``, ``"8"``, ``"JDK_1_8"``, ``"java17"``, ``11``.

        Returns:
            LanguageLevel: The matching level. Feature releases newer than the
                newest known member map to the newest member.

        Raises:
            ValueError: If ``value`` is not a recognizable language level.
        """
        if isinstance(value, int):
            feature: int = value
        else:
            m: re.Match[str] | None = _LEVEL_RE.match(value.strip())
            if m is None:
                raise ValueError(f"Not a Java language level: {value!r}")
            feature = int(m.group("feature"))
        newest: LanguageLevel = max(cls)
        if feature > newest.value:
            return newest
        try:
            return cls(feature)
        except ValueError:
            raise ValueError(f"Unsupported Java language level: {value!r}") from None

    def is_at_least(self, other: LanguageLevel) -> bool:
        """Return True if this level includes every feature of ``other``."""
        return self >= other

    @property
    def label(self) -> str:
        """Human-readable label (``1.8``, ``17``)."""
        return f"1.{self.value}" if self.value <= 8 else str(self.value)
