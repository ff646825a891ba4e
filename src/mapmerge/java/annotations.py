# topmark:header:start
#
#   project      : MapMerge
#   file         : annotations.py
#   file_relpath : src/mapmerge/java/annotations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Annotation values: physical nodes, directives and container annotations.

Three value types model what MapMerge reads and writes:

* `AnnotationNode` is a *physical* annotation occurrence in a document, with
  offsets. It is produced by the method scanner and consumed by the edit host.
* `Directive` is one mapping annotation (``@Mapping(...)``), physical or built
  from text by the caller.
* `ContainerAnnotation` aggregates directives (``@Mappings(...)``) in either
  `ContainerShape.ARRAY` (``@Mappings({ ... })``) or `ContainerShape.SINGLE`
  (``@Mappings(@Mapping(...))``) form. A container read from a document keeps
  its node and is *physical*; one built in memory has no node and is
  *synthetic*.

Text held by these values is *relative*: lines after the first carry no base
indentation (see ``mapmerge.java.lexer.dedent_continuation``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from mapmerge.core.errors import AnnotationSyntaxError
from mapmerge.java.lexer import (
    NOT_FOUND,
    find_closing,
    is_identifier_start,
    read_qualified_name,
    skip_trivia,
    split_top_level,
)

if TYPE_CHECKING:
    from mapmerge.java.imports import ImportTable

VALUE_ATTRIBUTE: str = "value"


@dataclass(frozen=True, slots=True)
class Attribute:
    """One ``name = value`` pair of an annotation parameter list.

    Attributes:
        name (str): Attribute name; ``value`` when written without a name.
        value (str): Raw value text (trimmed).
        text (str): Raw attribute text as written (trimmed).
    """

    name: str
    value: str
    text: str

    @property
    def is_array(self) -> bool:
        """Whether the value is a brace-delimited array initializer."""
        return self.value.startswith("{")


@dataclass(frozen=True, slots=True)
class ParsedAnnotation:
    """Result of `parse_annotation`."""

    name: str
    attributes: tuple[Attribute, ...]
    parameters: str | None
    """Text between the outer parentheses, or ``None`` for marker annotations."""


def parse_attributes(parameters: str) -> tuple[Attribute, ...]:
    """Split an annotation parameter list into attributes."""
    if not parameters.strip():
        return ()
    attributes: list[Attribute] = []
    for start, end in split_top_level(parameters):
        raw: str = parameters[start:end].strip()
        if not raw:
            continue
        name, value = VALUE_ATTRIBUTE, raw
        ident_end: int = 0
        if is_identifier_start(raw[0]):
            while ident_end < len(raw) and (raw[ident_end].isalnum() or raw[ident_end] in "_$"):
                ident_end += 1
            eq: int = skip_trivia(raw, ident_end)
            if eq < len(raw) and raw[eq] == "=" and not raw.startswith("==", eq):
                name, value = raw[:ident_end], raw[eq + 1 :].strip()
        attributes.append(Attribute(name=name, value=value, text=raw))
    return tuple(attributes)


def parse_annotation(text: str) -> ParsedAnnotation:
    """Parse annotation source text such as ``@Mapping(target = "a")``.

    Args:
        text (str): Annotation text starting with ``@``. Surrounding whitespace
            is ignored.

    Returns:
        ParsedAnnotation: Written name, attributes and raw parameter text.

    Raises:
        AnnotationSyntaxError: If ``text`` is not exactly one annotation.
    """
    src: str = text.strip()
    if not src.startswith("@"):
        raise AnnotationSyntaxError(f"Annotation must start with '@': {text!r}")
    name_start: int = skip_trivia(src, 1)
    if name_start >= len(src) or not is_identifier_start(src[name_start]):
        raise AnnotationSyntaxError(f"Missing annotation name: {text!r}")
    name_end: int = read_qualified_name(src, name_start)
    name: str = "".join(src[name_start:name_end].split())
    if name == "interface":
        raise AnnotationSyntaxError(f"Annotation type declarations are not annotations: {text!r}")

    rest: int = skip_trivia(src, name_end)
    if rest >= len(src):
        return ParsedAnnotation(name=name, attributes=(), parameters=None)
    if src[rest] != "(":
        raise AnnotationSyntaxError(f"Unexpected text after annotation name: {text!r}")
    close: int = find_closing(src, rest)
    if close == NOT_FOUND:
        raise AnnotationSyntaxError(f"Unbalanced parentheses in annotation: {text!r}")
    if skip_trivia(src, close + 1) != len(src):
        raise AnnotationSyntaxError(f"Unexpected text after annotation: {text!r}")
    parameters: str = src[rest + 1 : close]
    return ParsedAnnotation(name=name, attributes=parse_attributes(parameters), parameters=parameters)


@dataclass(frozen=True, slots=True)
class AnnotationNode:
    """A physical annotation in a document.

    Attributes:
        name (str): Name as written after ``@``.
        qualified_name (str): Name resolved through the file's imports.
        text (str): Relative annotation text.
        start (int): Offset of ``@`` in the document.
        end (int): Offset just past the annotation.
        indent (str): Leading whitespace of the line holding ``start``.
    """

    name: str
    qualified_name: str
    text: str
    start: int
    end: int
    indent: str


@dataclass(frozen=True, slots=True)
class Directive:
    """A single mapping directive annotation.

    Attributes:
        text (str): Relative annotation text, as written.
        name (str): Name as written after ``@``.
        qualified_name (str): Resolved qualified name.
        attributes (tuple[Attribute, ...]): Parsed parameter list.
        parameters (str | None): Raw text between the parentheses.
        node (AnnotationNode | None): Source node for physical directives.
    """

    text: str
    name: str
    qualified_name: str
    attributes: tuple[Attribute, ...]
    parameters: str | None = None
    node: AnnotationNode | None = None

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        qualified_name: str | None = None,
        imports: ImportTable | None = None,
        known: tuple[str, ...] = (),
    ) -> Directive:
        """Build a directive from annotation text supplied by the caller.

        Args:
            text (str): Annotation text, e.g. ``@Mapping(target = "id", ignore = true)``.
            qualified_name (str | None): Explicit qualified name; takes
                precedence over import resolution.
            imports (ImportTable | None): Imports used to resolve the written name.
            known (tuple[str, ...]): Qualified names the resolver may assume.

        Returns:
            Directive: The parsed directive (synthetic, without node).
        """
        parsed: ParsedAnnotation = parse_annotation(text)
        fqn: str = qualified_name or (
            imports.resolve(parsed.name, known) if imports is not None else parsed.name
        )
        return cls(
            text=text.strip(),
            name=parsed.name,
            qualified_name=fqn,
            attributes=parsed.attributes,
            parameters=parsed.parameters,
        )

    @classmethod
    def from_node(cls, node: AnnotationNode) -> Directive:
        """Wrap a physical annotation node as a directive."""
        parsed: ParsedAnnotation = parse_annotation(node.text)
        return cls(
            text=node.text,
            name=node.name,
            qualified_name=node.qualified_name,
            attributes=parsed.attributes,
            parameters=parsed.parameters,
            node=node,
        )

    @property
    def physical(self) -> bool:
        """Whether the directive was read from a document."""
        return self.node is not None

    def render_qualified(self) -> str:
        """Render ``@<qualified name>(<parameters>)`` for physical insertion."""
        if self.parameters is None:
            return f"@{self.qualified_name}"
        return f"@{self.qualified_name}({self.parameters})"


class ContainerShape(str, Enum):
    """Textual shape of a container annotation."""

    ARRAY = "array"
    SINGLE = "single"


@dataclass(frozen=True, slots=True)
class ContainerAnnotation:
    """An annotation aggregating directives.

    Attributes:
        text (str): Relative annotation text.
        name (str): Name as written after ``@``.
        qualified_name (str): Resolved qualified name.
        attributes (tuple[Attribute, ...]): Parsed parameter list.
        shape (ContainerShape): ARRAY when the value attribute is a brace list.
        node (AnnotationNode | None): Source node; ``None`` for synthetic containers.
    """

    text: str
    name: str
    qualified_name: str
    attributes: tuple[Attribute, ...]
    shape: ContainerShape
    node: AnnotationNode | None = None

    @classmethod
    def from_text(cls, text: str, *, qualified_name: str | None = None) -> ContainerAnnotation:
        """Build a synthetic container from annotation text."""
        parsed: ParsedAnnotation = parse_annotation(text)
        return cls(
            text=text.strip(),
            name=parsed.name,
            qualified_name=qualified_name or parsed.name,
            attributes=parsed.attributes,
            shape=_shape_of(parsed.attributes),
        )

    @classmethod
    def from_node(cls, node: AnnotationNode) -> ContainerAnnotation:
        """Wrap a physical annotation node as a container."""
        parsed: ParsedAnnotation = parse_annotation(node.text)
        return cls(
            text=node.text,
            name=node.name,
            qualified_name=node.qualified_name,
            attributes=parsed.attributes,
            shape=_shape_of(parsed.attributes),
            node=node,
        )

    @property
    def physical(self) -> bool:
        """Whether the container is attached to a document."""
        return self.node is not None

    def value_attribute(self) -> Attribute | None:
        """Return the ``value`` attribute, if present."""
        for attribute in self.attributes:
            if attribute.name == VALUE_ATTRIBUTE:
                return attribute
        return None

    def directives(self) -> list[Directive]:
        """Return the directives held by the container, in order.

        Items that do not parse as annotations are skipped.
        """
        attribute: Attribute | None = self.value_attribute()
        if attribute is None:
            return []
        body: str = attribute.value
        if attribute.is_array:
            body = body[1:]
            if body.rstrip().endswith("}"):
                body = body.rstrip()[:-1]
        items: list[Directive] = []
        for start, end in split_top_level(body):
            raw: str = body[start:end].strip()
            if not raw:
                continue
            try:
                items.append(Directive.from_text(raw))
            except AnnotationSyntaxError:
                continue
        return items


def _shape_of(attributes: tuple[Attribute, ...]) -> ContainerShape:
    for attribute in attributes:
        if attribute.name == VALUE_ATTRIBUTE and attribute.is_array:
            return ContainerShape.ARRAY
    return ContainerShape.SINGLE
