# topmark:header:start
#
#   project      : MapMerge
#   file         : test_annotations.py
#   file_relpath : tests/java/test_annotations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Annotation parsing and the directive / container value types."""

from __future__ import annotations

import pytest

from mapmerge.core.errors import AnnotationSyntaxError
from mapmerge.java.annotations import (
    ContainerAnnotation,
    ContainerShape,
    Directive,
    parse_annotation,
)
from mapmerge.java.imports import ImportTable


def test_parse_marker_annotation() -> None:
    parsed = parse_annotation("  @Override ")
    assert parsed.name == "Override"
    assert parsed.attributes == ()
    assert parsed.parameters is None


def test_parse_named_attributes() -> None:
    parsed = parse_annotation('@Mapping(target = "a", source = "b.c")')
    assert [(a.name, a.value) for a in parsed.attributes] == [("target", '"a"'), ("source", '"b.c"')]


def test_parse_unnamed_value_attribute() -> None:
    parsed = parse_annotation('@Mappings({@Mapping(target = "a"), @Mapping(target = "b")})')
    assert len(parsed.attributes) == 1
    assert parsed.attributes[0].name == "value"
    assert parsed.attributes[0].is_array


def test_parse_qualified_name_is_squashed() -> None:
    assert parse_annotation("@org. mapstruct .Mapping(target = \"x\")").name == "org.mapstruct.Mapping"


@pytest.mark.parametrize(
    "text",
    [
        "Mapping(target = \"a\")",
        "@",
        "@Mapping(target = \"a\"",
        "@Mapping(target = \"a\") trailing",
        "@interface Foo",
    ],
)
def test_parse_rejects_non_annotations(text: str) -> None:
    with pytest.raises(AnnotationSyntaxError):
        parse_annotation(text)


def test_directive_from_text_resolves_through_imports() -> None:
    imports = ImportTable.parse("package a;\nimport org.mapstruct.Mapping;\n")
    directive = Directive.from_text('@Mapping(target = "id", ignore = true)', imports=imports)
    assert directive.qualified_name == "org.mapstruct.Mapping"
    assert not directive.physical
    assert directive.render_qualified() == '@org.mapstruct.Mapping(target = "id", ignore = true)'


def test_directive_explicit_qualified_name_wins() -> None:
    directive = Directive.from_text("@Mapping", qualified_name="org.mapstruct.Mapping")
    assert directive.qualified_name == "org.mapstruct.Mapping"
    assert directive.render_qualified() == "@org.mapstruct.Mapping"


def test_container_single_form() -> None:
    container = ContainerAnnotation.from_text('@Mappings(@Mapping(target = "a"))')
    assert container.shape is ContainerShape.SINGLE
    assert not container.physical
    assert [d.text for d in container.directives()] == ['@Mapping(target = "a")']


def test_container_array_form_named_value() -> None:
    container = ContainerAnnotation.from_text(
        '@Mappings(value = {\n    @Mapping(target = "a"),\n    @Mapping(target = "b")\n})',
        qualified_name="org.mapstruct.Mappings",
    )
    assert container.shape is ContainerShape.ARRAY
    assert container.qualified_name == "org.mapstruct.Mappings"
    assert [d.text for d in container.directives()] == ['@Mapping(target = "a")', '@Mapping(target = "b")']


def test_container_empty_array() -> None:
    container = ContainerAnnotation.from_text("@Mappings({\n})")
    assert container.shape is ContainerShape.ARRAY
    assert container.directives() == []
