# topmark:header:start
#
#   project      : MapMerge
#   file         : merger.py
#   file_relpath : src/mapmerge/merge/merger.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Attach a mapping directive to a method and commit the result atomically.

`AnnotationMerger.add_mapping_annotation` runs the three phases:

1. **lookup**: existing container, standalone allowed, or synthetic container
   (see ``mapmerge.merge.lookup``);
2. **synthesis**: the merged annotation, computed entirely in memory
   (see ``mapmerge.merge.synthesis``). A failure here aborts before any write;
3. **commit**: one write action on the method's document.

Commit paths:
  * **Replace**: the container was physical; it is replaced in place.
  * **Insert**: the container was absent or synthetic. Every superseded
    directive is removed, the merged annotation is inserted at the
    method's attachment point, and qualified references in it are shortened.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from mapmerge.config.logging import get_logger
from mapmerge.core.errors import InvariantViolationError
from mapmerge.host.editor import TextEditHost
from mapmerge.java.annotations import ContainerAnnotation, Directive
from mapmerge.java.imports import simple_name
from mapmerge.merge.capability import CapabilityChecker
from mapmerge.merge.lookup import as_pair, locate_or_synthesize_container
from mapmerge.merge.synthesis import build_merged_annotation

if TYPE_CHECKING:
    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.config.model import Config
    from mapmerge.host.protocols import EditHost, ModuleResolver
    from mapmerge.java.annotations import AnnotationNode
    from mapmerge.java.methods import MappingMethod
    from mapmerge.merge.lookup import LookupResult

logger: MapmergeLogger = get_logger(__name__)


class MergePath(str, Enum):
    """How a merge was committed."""

    REPLACE = "replace"
    INSERT_CONTAINER = "insert-container"
    INSERT_STANDALONE = "insert-standalone"


@dataclass(frozen=True, slots=True)
class MergeOutcome:
    """Result of a committed merge.

    Attributes:
        path (MergePath): Commit path taken.
        node (AnnotationNode): The annotation now carrying the new directive.
        removed (tuple[AnnotationNode, ...]): Superseded directives that were
            deleted, in source order.
        lookup (LookupResult): Lookup decision the merge was based on.
    """

    path: MergePath
    node: AnnotationNode
    removed: tuple[AnnotationNode, ...]
    lookup: LookupResult

    @property
    def text(self) -> str:
        """Relative text of the committed annotation."""
        return self.node.text


class AnnotationMerger:
    """Merge new directives into method annotations.

    Args:
        config (Config): Annotation names and layout settings.
        checker (CapabilityChecker): Repeatable-form capability check.
        host (EditHost): Transactional edit host.
    """

    def __init__(self, config: Config, checker: CapabilityChecker, host: EditHost) -> None:
        self.config: Config = config
        self.checker: CapabilityChecker = checker
        self.host: EditHost = host

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        host: EditHost | None = None,
        resolver: ModuleResolver | None = None,
    ) -> AnnotationMerger:
        """Wire a merger with the reference collaborators unless given."""
        return cls(
            config,
            CapabilityChecker.from_config(config, resolver),
            host if host is not None else TextEditHost(),
        )

    def locate_or_synthesize_container(self, method: MappingMethod) -> LookupResult:
        """See ``mapmerge.merge.lookup.locate_or_synthesize_container``."""
        return locate_or_synthesize_container(
            method,
            self.checker,
            directive_fqn=self.config.directive_fqn,
            container_fqn=self.config.container_fqn,
            indent=self.config.indent,
        )

    def build_merged_annotation(
        self,
        container: ContainerAnnotation | None,
        directive: Directive,
    ) -> ContainerAnnotation | Directive:
        """See ``mapmerge.merge.synthesis.build_merged_annotation``."""
        return build_merged_annotation(container, directive, self.config.indent)

    def _qualify(self, directive: Directive) -> Directive:
        """Give a directive written by simple name the configured qualified name."""
        if "." in directive.qualified_name:
            if directive.qualified_name != self.config.directive_fqn:
                logger.warning(
                    "Directive %s is not a %s annotation", directive.qualified_name, self.config.directive_fqn
                )
            return directive
        if directive.qualified_name == simple_name(self.config.directive_fqn):
            return dataclasses.replace(directive, qualified_name=self.config.directive_fqn)
        logger.warning("Directive @%s does not resolve to %s", directive.name, self.config.directive_fqn)
        return directive

    def _prepare(self, method: MappingMethod, directive: Directive) -> Directive:
        """Qualify ``directive`` for insertion into the method's file.

        A directive whose written name does not resolve in that file is spelled
        out in full; shortening at commit then adds the import.
        """
        directive = self._qualify(directive)
        written: str = method.imports().resolve(directive.name, self.config.known_annotations)
        if written == directive.qualified_name:
            return directive
        logger.debug(
            "@%s does not resolve in %s; writing it qualified", directive.name, method.document.display_name
        )
        return Directive.from_text(directive.render_qualified(), qualified_name=directive.qualified_name)

    def apply(
        self,
        method: MappingMethod,
        merged: ContainerAnnotation | Directive,
        lookup: LookupResult,
    ) -> MergeOutcome:
        """Commit ``merged`` to ``method`` in one write action.

        Args:
            method (MappingMethod): Target method.
            merged (ContainerAnnotation | Directive): Result of synthesis.
            lookup (LookupResult): The lookup decision ``merged`` was built from.

        Returns:
            MergeOutcome: What was written.

        Raises:
            InvariantViolationError: If ``merged`` does not fit ``lookup``.
            TransactionError: Propagated from the host; the document is left
                as it was before the call.
        """
        container, to_remove = as_pair(lookup)
        document = method.document
        label: str = f"Add @{simple_name(self.config.directive_fqn)}"

        if container is not None and container.node is not None:
            if not isinstance(merged, ContainerAnnotation):
                raise InvariantViolationError("A physical container can only be replaced by a container")
            with self.host.write_action(document, label):
                node: AnnotationNode = self.host.replace(document, container.node, merged.text)
            self.host.mark_for_undo(document)
            logger.info("Replaced container on %s in %s", method.name, document.display_name)
            return MergeOutcome(path=MergePath.REPLACE, node=node, removed=(), lookup=lookup)

        if isinstance(merged, Directive):
            text: str = self._qualify(merged).render_qualified()
            path: MergePath = MergePath.INSERT_STANDALONE
        else:
            text = merged.text
            path = MergePath.INSERT_CONTAINER

        removed: tuple[AnnotationNode, ...] = tuple(d.node for d in to_remove if d.node is not None)
        with self.host.write_action(document, label):
            # Last first: earlier offsets stay valid.
            for stale in sorted(removed, key=lambda n: n.start, reverse=True):
                self.host.remove_annotation(document, stale)
            inserted: AnnotationNode = self.host.insert_annotation(method, text)
            inserted = self.host.shorten_references(document, inserted)
        self.host.mark_for_undo(document)
        logger.info("Inserted %s on %s in %s", path.value, method.name, document.display_name)
        return MergeOutcome(path=path, node=inserted, removed=removed, lookup=lookup)

    def add_mapping_annotation(self, method: MappingMethod, directive: Directive) -> MergeOutcome:
        """Add ``directive`` to ``method``, merging with existing directives.

        Raises:
            StructuralCorruptionError: If an existing container cannot be
                extended; nothing is written.
            InvariantViolationError: If an existing container has an
                unsupported shape; nothing is written.
            TransactionError: Propagated from the host; nothing is written.
        """
        directive = self._prepare(method, directive)
        lookup: LookupResult = self.locate_or_synthesize_container(method)
        container, _ = as_pair(lookup)
        merged: ContainerAnnotation | Directive = self.build_merged_annotation(container, directive)
        return self.apply(method, merged, lookup)
