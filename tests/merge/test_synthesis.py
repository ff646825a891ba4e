# topmark:header:start
#
#   project      : MapMerge
#   file         : test_synthesis.py
#   file_relpath : tests/merge/test_synthesis.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Merged annotation text: container rendering, array append, single-form wrap."""

from __future__ import annotations

import pytest

from mapmerge.core.errors import InvariantViolationError, StructuralCorruptionError
from mapmerge.java.annotations import ContainerAnnotation, ContainerShape, Directive
from mapmerge.merge.synthesis import (
    append_to_array,
    build_merged_annotation,
    render_container,
    wrap_single,
)

D = Directive.from_text('@Mapping(target = "id", ignore = true)', qualified_name="org.mapstruct.Mapping")


def test_render_container() -> None:
    assert render_container("Mappings", []) == "@Mappings({\n})"
    assert render_container("Mappings", ["@Mapping(target = \"a\")", "@Mapping(target = \"b\")"]) == (
        '@Mappings({\n    @Mapping(target = "a"),\n    @Mapping(target = "b")\n})'
    )


def test_render_container_indents_multiline_items() -> None:
    item = '@Mapping(target = "a",\n    source = "b")'
    assert render_container("M", [item], "  ") == '@M({\n  @Mapping(target = "a",\n      source = "b")\n})'


def test_append_to_array_keeps_existing_text_verbatim() -> None:
    container = (
        '@Mappings({\n    @Mapping(target = "a", source = "x"),   // keep\n    @Mapping(target = "b")\n})'
    )
    merged = append_to_array(container, D.text)
    assert merged == (
        '@Mappings({\n    @Mapping(target = "a", source = "x"),   // keep\n    @Mapping(target = "b"),\n'
        '    @Mapping(target = "id", ignore = true)\n})'
    )


def test_append_after_last_directive_with_trailing_comment() -> None:
    container = '@Mappings({\n    @Mapping(target = "a") // see foo()\n})'
    assert append_to_array(container, D.text) == (
        '@Mappings({\n    @Mapping(target = "a"), // see foo()\n'
        '    @Mapping(target = "id", ignore = true)\n})'
    )


def test_append_replaces_trailing_comma() -> None:
    assert append_to_array('@Mappings({ @Mapping(target = "a"), })', D.text) == (
        '@Mappings({ @Mapping(target = "a"),\n    @Mapping(target = "id", ignore = true)\n})'
    )


def test_append_to_named_array() -> None:
    merged = append_to_array('@Mappings(value = {@Mapping(target = "a")})', D.text)
    assert merged == (
        '@Mappings(value = {@Mapping(target = "a"),\n    @Mapping(target = "id", ignore = true)\n})'
    )


def test_append_to_empty_array() -> None:
    assert append_to_array("@Mappings({})", D.text, "\t") == (
        '@Mappings({\n\t@Mapping(target = "id", ignore = true)\n})'
    )


@pytest.mark.parametrize(
    "container",
    [
        "@Mappings({ @Mapping })",
        "@Mappings(@Mapping(target = \"a\"))",
        "@Mappings({ @Mapping(target = \"a\")",
    ],
)
def test_append_rejects_unextendable(container: str) -> None:
    with pytest.raises(StructuralCorruptionError) as info:
        append_to_array(container, D.text)
    assert info.value.text == container


def test_wrap_single() -> None:
    container = ContainerAnnotation.from_text('@Mappings(@Mapping(target = "a", source = "x"))')
    assert wrap_single(container, D) == (
        '@Mappings({\n    @Mapping(target = "a", source = "x"),\n'
        '    @Mapping(target = "id", ignore = true)\n})'
    )


def test_wrap_single_requires_exactly_one_attribute() -> None:
    container = ContainerAnnotation.from_text('@Mappings(value = @Mapping(target = "a"), other = 1)')
    with pytest.raises(InvariantViolationError):
        wrap_single(container, D)


def test_build_merged_without_container_returns_directive() -> None:
    assert build_merged_annotation(None, D) is D


def test_build_merged_keeps_container_identity() -> None:
    container = ContainerAnnotation.from_text(
        '@Mappings(@Mapping(target = "a"))', qualified_name="org.mapstruct.Mappings"
    )
    merged = build_merged_annotation(container, D)
    assert isinstance(merged, ContainerAnnotation)
    assert merged.shape is ContainerShape.ARRAY
    assert merged.qualified_name == "org.mapstruct.Mappings"
    assert not merged.physical
    assert [d.text for d in merged.directives()] == ['@Mapping(target = "a")', D.text]
