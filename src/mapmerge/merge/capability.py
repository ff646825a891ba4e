# topmark:header:start
#
#   project      : MapMerge
#   file         : capability.py
#   file_relpath : src/mapmerge/merge/capability.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decide whether the repeatable directive form is usable for an element."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mapmerge.config.logging import get_logger
from mapmerge.java.levels import LanguageLevel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.config.model import Config
    from mapmerge.host.modules import LibraryRequirement
    from mapmerge.host.protocols import ModuleLike, ModuleResolver

logger: MapmergeLogger = get_logger(__name__)


class CapabilityChecker:
    """Check language level and classpath of the module owning an element.

    The repeatable form is usable when the module's effective language level
    is at least ``since`` and at least one of ``libraries`` is present.

    Args:
        resolver (ModuleResolver): Finds the owning module.
        since (LanguageLevel): First level with repeatable annotations.
        libraries (Sequence[LibraryRequirement]): Libraries declaring the
            directive repeatable.
    """

    def __init__(
        self,
        resolver: ModuleResolver,
        *,
        since: LanguageLevel = LanguageLevel.JDK_1_8,
        libraries: Sequence[LibraryRequirement] = (),
    ) -> None:
        self.resolver: ModuleResolver = resolver
        self.since: LanguageLevel = since
        self.libraries: tuple[LibraryRequirement, ...] = tuple(libraries)

    @classmethod
    def from_config(cls, config: Config, resolver: ModuleResolver | None = None) -> CapabilityChecker:
        """Build a checker from configuration (and its project layout by default)."""
        return cls(
            resolver if resolver is not None else config.build_layout(),
            since=config.repeatable_since,
            libraries=config.repeatable_libraries,
        )

    def can_use_repeatable_form(self, element: object) -> bool:
        """Return True if multiple directives may be attached without a container.

        An element without a resolvable module answers ``False``.
        """
        module: ModuleLike | None = self.resolver.find_module(element)
        if module is None:
            logger.debug("No module for %r: repeatable form unavailable", element)
            return False
        level_ok: bool = module.language_level >= self.since
        library_ok: bool = any(
            module.has_library(req.coordinate, req.min_version) for req in self.libraries
        )
        logger.debug(
            "Repeatable form: level %s >= %s: %s; library present: %s",
            module.language_level.label,
            self.since.label,
            level_ok,
            library_ok,
        )
        return level_ok and library_ok
