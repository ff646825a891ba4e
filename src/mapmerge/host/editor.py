# topmark:header:start
#
#   project      : MapMerge
#   file         : editor.py
#   file_relpath : src/mapmerge/host/editor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Text edit host: atomic, undoable annotation edits on `SourceDocument`.

`TextEditHost` implements the ``EditHost`` protocol:

* ``write_action`` takes the document lock, refuses read-only documents and
  nested scopes, snapshots the text, and either records one undo entry for the
  whole scope or restores the snapshot when the scope body raises.
* ``replace`` / ``insert_annotation`` / ``remove_annotation`` splice annotation
  text, re-applying the target line indentation to relative text.
* ``shorten_references`` rewrites ``@a.b.C`` to ``@C`` inside one annotation
  and adds the import declarations this requires.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from mapmerge.config.logging import get_logger
from mapmerge.core.errors import DocumentNotWritableError, NestedWriteError, TransactionError
from mapmerge.java.annotations import AnnotationNode, parse_annotation
from mapmerge.java.imports import (
    ImportTable,
    find_import_insertion,
    render_import_block,
    shorten_annotation_references,
)
from mapmerge.java.lexer import dedent_continuation, indent_continuation, line_indent

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.host.document import SourceDocument
    from mapmerge.java.methods import MappingMethod

logger: MapmergeLogger = get_logger(__name__)


def _removal_span(text: str, start: int, end: int) -> tuple[int, int]:
    """Return the span to delete for an annotation at ``[start, end)``.

    An annotation alone on its line(s) takes the whole lines with it; an inline
    one takes the blanks that follow it.
    """
    line_start: int = text.rfind("\n", 0, start) + 1
    j: int = end
    while j < len(text) and text[j] in " \t":
        j += 1
    alone: bool = not text[line_start:start].strip() and (j >= len(text) or text[j] == "\n")
    if alone:
        return line_start, min(j + 1, len(text))
    return start, j


class TextEditHost:
    """Reference ``EditHost`` over in-memory `SourceDocument` objects."""

    @contextmanager
    def write_action(self, document: SourceDocument, label: str = "Edit") -> Iterator[None]:
        """Run the enclosed edits as one atomic, undoable command.

        Args:
            document (SourceDocument): Document to modify.
            label (str): Undo entry label.

        Raises:
            DocumentNotWritableError: If the document is read-only.
            NestedWriteError: If a write action is already open on the document.
        """
        if not document.writable:
            raise DocumentNotWritableError(f"{document.display_name} is not writable")
        with document.lock:
            if document.in_write_action:
                raise NestedWriteError(f"Write action already open on {document.display_name}")
            before: str = document.text
            document.write_depth += 1
            logger.trace("Write action %r opened on %s", label, document.display_name)
            try:
                yield
            except BaseException:
                document.text = before
                logger.warning(
                    "Write action %r on %s failed; changes rolled back", label, document.display_name
                )
                raise
            finally:
                document.write_depth -= 1
            if document.text != before:
                document.record(label, before)
            logger.debug("Write action %r committed on %s", label, document.display_name)

    def _require_write(self, document: SourceDocument) -> None:
        if not document.in_write_action:
            raise TransactionError(f"Edit on {document.display_name} outside of a write action")

    def _require_current(self, document: SourceDocument, node: AnnotationNode) -> None:
        current: str = document.text[node.start : node.end]
        if dedent_continuation(current, node.indent) != node.text:
            raise TransactionError(f"Stale annotation node at {node.start} in {document.display_name}")

    def replace(self, document: SourceDocument, node: AnnotationNode, text: str) -> AnnotationNode:
        """Replace ``node`` with ``text`` in place.

        Returns:
            AnnotationNode: Node describing the replacement.
        """
        self._require_write(document)
        self._require_current(document, node)
        rendered: str = indent_continuation(text, node.indent)
        document.text = document.text[: node.start] + rendered + document.text[node.end :]
        logger.trace("Replaced %r with %r", node.text, text)
        return AnnotationNode(
            name=parse_annotation(text).name,
            qualified_name=node.qualified_name,
            text=text,
            start=node.start,
            end=node.start + len(rendered),
            indent=node.indent,
        )

    def insert_annotation(self, method: MappingMethod, text: str) -> AnnotationNode:
        """Attach ``text`` in front of the method's modifiers.

        The annotation gets its own line when the attachment point starts a
        line; otherwise it is placed inline, followed by a blank.

        Returns:
            AnnotationNode: Node describing the inserted annotation.
        """
        document: SourceDocument = method.document
        self._require_write(document)
        at: int = method.declaration().attachment
        indent: str = line_indent(document.text, at)
        line_start: int = document.text.rfind("\n", 0, at) + 1
        rendered: str = indent_continuation(text, indent)
        if document.text[line_start:at].strip():
            inserted: str = rendered + " "
        else:
            inserted = rendered + "\n" + indent
        document.text = document.text[:at] + inserted + document.text[at:]
        name: str = parse_annotation(text).name
        logger.trace("Inserted %r at %d in %s", text, at, document.display_name)
        return AnnotationNode(
            name=name,
            qualified_name=method.imports().resolve(name, method.known),
            text=text,
            start=at,
            end=at + len(rendered),
            indent=indent,
        )

    def remove_annotation(self, document: SourceDocument, node: AnnotationNode) -> None:
        """Delete ``node`` and the whitespace it leaves behind."""
        self._require_write(document)
        self._require_current(document, node)
        start, end = _removal_span(document.text, node.start, node.end)
        document.text = document.text[:start] + document.text[end:]
        logger.trace("Removed %r from %s", node.text, document.display_name)

    def shorten_references(self, document: SourceDocument, node: AnnotationNode) -> AnnotationNode:
        """Shorten qualified annotation references in ``node`` and add imports.

        References whose simple name is already bound to another class by a
        single-type import stay qualified.

        Returns:
            AnnotationNode: The node after rewriting (offsets shifted by any
                added import lines).
        """
        self._require_write(document)
        self._require_current(document, node)
        table: ImportTable = ImportTable.parse(document.text)
        offset, prefix, suffix = find_import_insertion(document.text, table)
        short, added = shorten_annotation_references(node.text, table)
        if short == node.text:
            return node
        current: AnnotationNode = self.replace(document, node, short)
        if added:
            block: str = prefix + render_import_block(added) + suffix
            document.text = document.text[:offset] + block + document.text[offset:]
            logger.debug("Added import(s) %s to %s", ", ".join(added), document.display_name)
            if offset <= current.start:
                current = AnnotationNode(
                    name=current.name,
                    qualified_name=current.qualified_name,
                    text=current.text,
                    start=current.start + len(block),
                    end=current.end + len(block),
                    indent=current.indent,
                )
        return current

    def mark_for_undo(self, document: SourceDocument) -> None:
        """Flag ``document`` as carrying undoable history."""
        document.undo_marked = True
