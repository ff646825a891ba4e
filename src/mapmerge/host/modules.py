# topmark:header:start
#
#   project      : MapMerge
#   file         : modules.py
#   file_relpath : src/mapmerge/host/modules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build modules, their classpath libraries and the module resolver.

A `Module` carries the two facts the capability check consumes: the effective
language level and the libraries on the module classpath. `ProjectLayout`
maps source files to modules through source roots (longest root wins) and
implements the ``ModuleResolver`` protocol.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final

from mapmerge.config.logging import get_logger
from mapmerge.utils.version import version_at_least

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.java.levels import LanguageLevel

logger: MapmergeLogger = get_logger(__name__)

_REQUIREMENT_RE: Final[re.Pattern[str]] = re.compile(
    r"^\s*(?P<group>[\w.\-]+):(?P<artifact>[\w.\-]+)\s*(?:>=\s*(?P<min>[\w.\-]+))?\s*$"
)


@dataclass(frozen=True, slots=True)
class Library:
    """A classpath library identified by Maven coordinates.

    Attributes:
        group (str): Group id (``org.mapstruct``).
        artifact (str): Artifact id (``mapstruct-jdk8``).
        version (str | None): Version, when known.
    """

    group: str
    artifact: str
    version: str | None = None

    @property
    def coordinate(self) -> str:
        """``group:artifact`` without version."""
        return f"{self.group}:{self.artifact}"

    @classmethod
    def parse(cls, coordinate: str) -> Library:
        """Parse ``group:artifact[:version]``.

        Raises:
            ValueError: If ``coordinate`` has fewer than two or more than three parts.
        """
        parts: list[str] = [p.strip() for p in coordinate.strip().split(":")]
        if len(parts) not in (2, 3) or not all(parts):
            raise ValueError(f"Expected 'group:artifact[:version]', got {coordinate!r}")
        return cls(group=parts[0], artifact=parts[1], version=parts[2] if len(parts) == 3 else None)


@dataclass(frozen=True, slots=True)
class LibraryRequirement:
    """A library that must be present, optionally with a minimum version.

    Written as ``group:artifact`` or ``group:artifact>=version``.
    """

    coordinate: str
    min_version: str | None = None

    @classmethod
    def parse(cls, text: str) -> LibraryRequirement:
        """Parse a requirement string.

        Raises:
            ValueError: If ``text`` is malformed.
        """
        m: re.Match[str] | None = _REQUIREMENT_RE.match(text)
        if m is None:
            raise ValueError(f"Expected 'group:artifact[>=version]', got {text!r}")
        return cls(coordinate=f"{m.group('group')}:{m.group('artifact')}", min_version=m.group("min"))

    def __str__(self) -> str:
        if self.min_version is None:
            return self.coordinate
        return f"{self.coordinate}>={self.min_version}"


@dataclass(frozen=True, slots=True)
class Module:
    """A build module.

    Attributes:
        name (str): Module name.
        language_level (LanguageLevel): Effective language level.
        libraries (tuple[Library, ...]): Libraries on the module classpath.
        source_roots (tuple[Path, ...]): Absolute source root directories.
    """

    name: str
    language_level: LanguageLevel
    libraries: tuple[Library, ...] = ()
    source_roots: tuple[Path, ...] = field(default=())

    def has_library(self, coordinate: str, min_version: str | None = None) -> bool:
        """Return True if ``coordinate`` is on the classpath (at ``min_version`` or later).

        A library of unknown version never satisfies a minimum version.
        """
        for library in self.libraries:
            if library.coordinate != coordinate:
                continue
            if min_version is None:
                return True
            if library.version is None:
                continue
            try:
                if version_at_least(library.version, min_version):
                    return True
            except ValueError:
                logger.warning("Ignoring unparsable version %r of %s", library.version, coordinate)
        return False


class ProjectLayout:
    """Resolve the module owning a source element from its file path.

    Args:
        modules (Sequence[Module]): Known modules.
        default (Module | None): Module answered for paths outside every
            source root (and for elements without a path).
    """

    def __init__(self, modules: Sequence[Module] = (), default: Module | None = None) -> None:
        self.modules: tuple[Module, ...] = tuple(modules)
        self.default: Module | None = default

    def find_module(self, element: object) -> Module | None:
        """Return the module owning ``element``, or ``None``.

        ``element`` is anything with a ``path`` attribute (a method handle, a
        document) or a ``Path`` itself.
        """
        path: Path | None = element if isinstance(element, Path) else getattr(element, "path", None)
        if path is None:
            logger.debug("No path for %r; using default module %s", element, self.default)
            return self.default
        resolved: Path = path.resolve()
        best: Module | None = None
        best_depth: int = -1
        for module in self.modules:
            for root in module.source_roots:
                if resolved.is_relative_to(root) and len(root.parts) > best_depth:
                    best, best_depth = module, len(root.parts)
        if best is None:
            logger.debug("No module owns %s; using default module %s", resolved, self.default)
            return self.default
        logger.debug("Module %s owns %s", best.name, resolved)
        return best


def parse_libraries(coordinates: Iterable[str]) -> tuple[Library, ...]:
    """Parse a list of ``group:artifact[:version]`` coordinates."""
    return tuple(Library.parse(c) for c in coordinates)
