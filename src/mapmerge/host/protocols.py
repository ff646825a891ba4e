# topmark:header:start
#
#   project      : MapMerge
#   file         : protocols.py
#   file_relpath : src/mapmerge/host/protocols.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Interfaces of the services the merge core depends on.

The merge core only talks to these protocols, so any transactional text
buffer, module model or method index can stand in for the reference
implementations shipped in ``mapmerge.host`` and ``mapmerge.java``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from contextlib import AbstractContextManager

    from mapmerge.host.document import SourceDocument
    from mapmerge.java.annotations import AnnotationNode
    from mapmerge.java.levels import LanguageLevel
    from mapmerge.java.methods import MappingMethod


@runtime_checkable
class ModuleLike(Protocol):
    """Language-level and library-presence facts of a build module."""

    @property
    def language_level(self) -> LanguageLevel:
        """Effective language level of the module."""
        ...

    def has_library(self, coordinate: str, min_version: str | None = None) -> bool:
        """Return True if ``coordinate`` is resolvable from the module."""
        ...


class ModuleResolver(Protocol):
    """Find the module owning a source element."""

    def find_module(self, element: object) -> ModuleLike | None:
        """Return the owning module, or ``None`` when no module is found."""
        ...


class MethodLocator(Protocol):
    """Find method declarations in documents."""

    def find_method(self, document: SourceDocument, name: str, ordinal: int = 0) -> MappingMethod:
        """Return the ``ordinal``-th method called ``name`` in ``document``."""
        ...


class EditHost(Protocol):
    """Scoped, undoable text edits on documents.

    Every mutating call must happen inside ``write_action`` for the same
    document. When the body of ``write_action`` raises, the host restores the
    document to its state at scope entry and re-raises.
    """

    def write_action(self, document: SourceDocument, label: str) -> AbstractContextManager[None]:
        """Open an exclusive, all-or-nothing write scope on ``document``."""
        ...

    def replace(self, document: SourceDocument, node: AnnotationNode, text: str) -> AnnotationNode:
        """Replace ``node`` with annotation ``text``; return the new node."""
        ...

    def insert_annotation(self, method: MappingMethod, text: str) -> AnnotationNode:
        """Attach annotation ``text`` at the method's attachment point."""
        ...

    def remove_annotation(self, document: SourceDocument, node: AnnotationNode) -> None:
        """Delete ``node`` (and the line it leaves empty) from ``document``."""
        ...

    def shorten_references(self, document: SourceDocument, node: AnnotationNode) -> AnnotationNode:
        """Shorten qualified annotation names inside ``node``, adding imports."""
        ...

    def mark_for_undo(self, document: SourceDocument) -> None:
        """Flag ``document`` as carrying undoable history."""
        ...
