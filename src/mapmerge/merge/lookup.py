# topmark:header:start
#
#   project      : MapMerge
#   file         : lookup.py
#   file_relpath : src/mapmerge/merge/lookup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Find the directive container of a method, or synthesize one in memory.

The outcome is one of three variants:

| Existing container? | Repeatable usable? | Variant |
|---|---|---|
| yes | any | `ExistingContainer` |
| no | yes | `StandaloneAllowed` |
| no | no | `SyntheticContainer` (holding every existing directive, in order) |

Lookup only reads the document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mapmerge.config.logging import get_logger
from mapmerge.constants import DEFAULT_INDENT
from mapmerge.core.errors import InvariantViolationError
from mapmerge.java.annotations import ContainerAnnotation, Directive
from mapmerge.merge.synthesis import render_container

if TYPE_CHECKING:
    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.java.annotations import AnnotationNode
    from mapmerge.java.methods import MappingMethod
    from mapmerge.merge.capability import CapabilityChecker

logger: MapmergeLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ExistingContainer:
    """The method already carries a (physical) container."""

    container: ContainerAnnotation


@dataclass(frozen=True, slots=True)
class StandaloneAllowed:
    """No container exists and the directive may be attached on its own."""


@dataclass(frozen=True, slots=True)
class SyntheticContainer:
    """A container built in memory.

    Attributes:
        container (ContainerAnnotation): Synthetic array-form container.
        supersedes (tuple[Directive, ...]): Physical directives now embedded in
            ``container``, in source order; all are removed from the method.
    """

    container: ContainerAnnotation
    supersedes: tuple[Directive, ...] = ()


LookupResult = ExistingContainer | StandaloneAllowed | SyntheticContainer


def as_pair(result: LookupResult) -> tuple[ContainerAnnotation | None, tuple[Directive, ...]]:
    """Return the ``(container, to_remove)`` pair form of a lookup result."""
    match result:
        case ExistingContainer(container=container):
            return container, ()
        case SyntheticContainer(container=container, supersedes=supersedes):
            return container, supersedes
        case StandaloneAllowed():
            return None, ()
    raise InvariantViolationError(f"Unknown lookup result {result!r}")


def locate_or_synthesize_container(
    method: MappingMethod,
    checker: CapabilityChecker,
    *,
    directive_fqn: str,
    container_fqn: str,
    indent: str = DEFAULT_INDENT,
) -> LookupResult:
    """Decide which container, if any, the new directive goes into.

    Args:
        method (MappingMethod): Method to inspect.
        checker (CapabilityChecker): Repeatable-form capability check.
        directive_fqn (str): Qualified name of the directive annotation.
        container_fqn (str): Qualified name of the container annotation.
        indent (str): Item indentation for a synthetic container.

    Returns:
        LookupResult: See the module docstring.
    """
    existing: AnnotationNode | None = method.find_annotation(container_fqn)
    if existing is not None:
        logger.debug("Method %s has a container: %r", method.name, existing.text)
        return ExistingContainer(ContainerAnnotation.from_node(existing))

    if checker.can_use_repeatable_form(method):
        logger.debug("Method %s: repeatable form usable, no container needed", method.name)
        return StandaloneAllowed()

    supersedes: tuple[Directive, ...] = tuple(
        Directive.from_node(node) for node in method.annotations if node.qualified_name == directive_fqn
    )
    items: list[str] = [d.text for d in supersedes]
    container = ContainerAnnotation.from_text(
        render_container(container_fqn, items, indent), qualified_name=container_fqn
    )
    logger.debug("Method %s: synthetic container embedding %d directive(s)", method.name, len(supersedes))
    return SyntheticContainer(container=container, supersedes=supersedes)
