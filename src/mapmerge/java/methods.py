# topmark:header:start
#
#   project      : MapMerge
#   file         : methods.py
#   file_relpath : src/mapmerge/java/methods.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Locate method declarations and the annotations in front of them.

The scanner walks the document once, skipping comments and literals, and keeps
the annotations seen since the last statement boundary (``;``, ``{``, ``}``).
An identifier followed by a parameter list is a method *declaration* when the
token before it can end a type (identifier, ``>``, ``]``) and the parameter list
is followed by a body, a ``;``, ``throws`` or ``default``.

`MappingMethod` never caches offsets: every access re-scans the current text,
so it stays valid across edits made by the host.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from mapmerge.config.logging import get_logger
from mapmerge.core.errors import MethodNotFoundError
from mapmerge.java.annotations import AnnotationNode
from mapmerge.java.imports import ImportTable
from mapmerge.java.lexer import (
    NOT_FOUND,
    dedent_continuation,
    find_closing,
    is_identifier_start,
    line_indent,
    read_identifier,
    read_qualified_name,
    skip_literal,
    skip_trivia,
)

if TYPE_CHECKING:
    from pathlib import Path

    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.host.document import SourceDocument

logger: MapmergeLogger = get_logger(__name__)

# Keywords that may precede ``name(`` in a statement without declaring a method.
_NON_TYPE_KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "new",
        "return",
        "throw",
        "else",
        "case",
        "yield",
        "assert",
        "do",
        "if",
        "while",
        "for",
        "switch",
        "catch",
        "synchronized",
        "try",
        "instanceof",
    }
)

_BOUNDARIES: Final[str] = ";{}"
_TYPE_ENDERS: Final[str] = ">]"


@dataclass(frozen=True, slots=True)
class MethodDeclaration:
    """A method declaration found in a document.

    Attributes:
        name (str): Method name.
        start (int): Offset of the first token of the declaration (first
            annotation or modifier).
        name_offset (int): Offset of the method name.
        annotations (tuple[AnnotationNode, ...]): Annotations in front of the
            declaration, in source order.
        attachment (int): Offset where a new annotation line is inserted: the
            first token after the existing annotations.
        indent (str): Leading whitespace of the declaration's first line.
    """

    name: str
    start: int
    name_offset: int
    annotations: tuple[AnnotationNode, ...]
    attachment: int
    indent: str


def _read_annotation(
    text: str,
    at: int,
    imports: ImportTable,
    known: tuple[str, ...],
) -> AnnotationNode | None:
    name_start: int = skip_trivia(text, at + 1)
    if name_start >= len(text) or not is_identifier_start(text[name_start]):
        return None
    name_end: int = read_qualified_name(text, name_start)
    name: str = "".join(text[name_start:name_end].split())
    if name == "interface":
        return None
    end: int = name_end
    after: int = skip_trivia(text, name_end)
    if after < len(text) and text[after] == "(":
        close: int = find_closing(text, after)
        if close == NOT_FOUND:
            return None
        end = close + 1
    indent: str = line_indent(text, at)
    return AnnotationNode(
        name=name,
        qualified_name=imports.resolve(name, known),
        text=dedent_continuation(text[at:end], indent),
        start=at,
        end=end,
        indent=indent,
    )


def _is_declaration_tail(text: str, params_open: int) -> bool:
    close: int = find_closing(text, params_open)
    if close == NOT_FOUND:
        return False
    after: int = skip_trivia(text, close + 1)
    if after >= len(text):
        return False
    return text[after] in "{;" or text.startswith("throws", after) or text.startswith("default", after)


def _may_end_type(token: str) -> bool:
    if not token:
        return False
    if token in _TYPE_ENDERS:
        return True
    return is_identifier_start(token[0]) and token not in _NON_TYPE_KEYWORDS


def scan_methods(text: str, known: tuple[str, ...] = ()) -> list[MethodDeclaration]:
    """Return every method declaration in ``text``, in source order.

    Args:
        text (str): Java compilation unit.
        known (tuple[str, ...]): Qualified annotation names the import
            resolver may assume (see `ImportTable.resolve`).

    Returns:
        list[MethodDeclaration]: Declarations with their annotations.
    """
    imports: ImportTable = ImportTable.parse(text)
    found: list[MethodDeclaration] = []
    pending: list[AnnotationNode] = []
    decl_start: int | None = None
    prev: str = ""
    i: int = skip_trivia(text, 0)
    while i < len(text):
        ch: str = text[i]
        if ch in "\"'":
            i = skip_trivia(text, skip_literal(text, i))
            prev = ch
            continue
        if ch == "@":
            node: AnnotationNode | None = _read_annotation(text, i, imports, known)
            if node is not None:
                if decl_start is None:
                    decl_start = i
                pending.append(node)
                prev = "@"
                i = skip_trivia(text, node.end)
                continue
        if text.startswith("->", i):
            # Lambda or switch arrow: what follows is an expression.
            prev = "->"
            i = skip_trivia(text, i + 2)
            continue
        if ch in _BOUNDARIES:
            pending = []
            decl_start = None
            prev = ch
            i = skip_trivia(text, i + 1)
            continue
        if is_identifier_start(ch):
            end: int = read_identifier(text, i)
            word: str = text[i:end]
            nxt: int = skip_trivia(text, end)
            if (
                nxt < len(text)
                and text[nxt] == "("
                and _may_end_type(prev)
                and _is_declaration_tail(text, nxt)
            ):
                start: int = decl_start if decl_start is not None else i
                attachment: int = skip_trivia(text, pending[-1].end) if pending else start
                found.append(
                    MethodDeclaration(
                        name=word,
                        start=start,
                        name_offset=i,
                        annotations=tuple(pending),
                        attachment=attachment,
                        indent=line_indent(text, start),
                    )
                )
                logger.trace("Method %s at %d with %d annotation(s)", word, i, len(pending))
            if decl_start is None:
                decl_start = i
            prev = word
            i = nxt
            continue
        if decl_start is None and not ch.isspace():
            decl_start = i
        prev = ch
        i = skip_trivia(text, i + 1)
    return found


@dataclass(frozen=True, slots=True)
class MappingMethod:
    """A method declaration that receives mapping directives.

    The method is identified by name and overload ordinal inside its document;
    all structural facts are re-read from the current document text.

    Attributes:
        document (SourceDocument): Enclosing source file.
        name (str): Method name.
        ordinal (int): Index among same-named declarations (0 = first).
        known (tuple[str, ...]): Qualified annotation names used for import
            resolution of written names.
    """

    document: SourceDocument
    name: str
    ordinal: int = 0
    known: tuple[str, ...] = ()

    @property
    def path(self) -> Path | None:
        """Path of the enclosing document, if it has one."""
        return self.document.path

    def declaration(self) -> MethodDeclaration:
        """Return the current declaration of this method.

        Raises:
            MethodNotFoundError: If the document no longer declares the method.
        """
        matches: list[MethodDeclaration] = [
            m for m in scan_methods(self.document.text, self.known) if m.name == self.name
        ]
        if self.ordinal >= len(matches):
            raise MethodNotFoundError(
                f"Method {self.name!r} (#{self.ordinal}) not found in {self.document.display_name}"
            )
        return matches[self.ordinal]

    @property
    def annotations(self) -> tuple[AnnotationNode, ...]:
        """Annotations currently attached to the method, in source order."""
        return self.declaration().annotations

    def find_annotation(self, qualified_name: str) -> AnnotationNode | None:
        """Return the first attached annotation with ``qualified_name``, if any."""
        for node in self.annotations:
            if node.qualified_name == qualified_name:
                return node
        return None

    def imports(self) -> ImportTable:
        """Return the import table of the enclosing document."""
        return ImportTable.parse(self.document.text)


class JavaMethodLocator:
    """Find `MappingMethod` handles in documents.

    Args:
        known (tuple[str, ...]): Qualified annotation names the resolver may
            assume, typically the directive and container names.
    """

    def __init__(self, known: tuple[str, ...] = ()) -> None:
        self.known: tuple[str, ...] = known

    def find_method(self, document: SourceDocument, name: str, ordinal: int = 0) -> MappingMethod:
        """Return a handle on method ``name`` in ``document``.

        Raises:
            MethodNotFoundError: If no such declaration exists.
        """
        method = MappingMethod(document=document, name=name, ordinal=ordinal, known=self.known)
        method.declaration()
        return method
