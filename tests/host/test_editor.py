# topmark:header:start
#
#   project      : MapMerge
#   file         : test_editor.py
#   file_relpath : tests/host/test_editor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Text edit host: write actions, rollback, and annotation splicing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mapmerge.core.errors import DocumentNotWritableError, NestedWriteError, TransactionError
from mapmerge.host.editor import TextEditHost

if TYPE_CHECKING:
    from collections.abc import Callable

    from mapmerge.java.methods import MappingMethod

SOURCE = """\
package com.acme;

import org.mapstruct.Mapping;

public interface CarMapper {

    @Mapping(target = "seats", source = "seatCount")
    CarDto toDto(Car car);

    @Override public String toString();
}
"""


def test_write_action_records_one_undo_entry(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE)
    document = method.document
    host = TextEditHost()
    node = method.annotations[0]

    with host.write_action(document, "Edit twice"):
        node = host.replace(document, node, '@Mapping(target = "a")')
        host.replace(document, node, '@Mapping(target = "b")')

    assert '@Mapping(target = "b")\n    CarDto' in document.text
    assert len(document.undo_stack) == 1
    document.undo()
    assert document.text == SOURCE


def test_write_action_rolls_back_on_error(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE)
    document = method.document
    host = TextEditHost()

    with pytest.raises(RuntimeError, match="boom"):
        with host.write_action(document, "Broken"):
            host.remove_annotation(document, method.annotations[0])
            assert "seatCount" not in document.text
            raise RuntimeError("boom")

    assert document.text == SOURCE
    assert not document.can_undo
    assert not document.in_write_action


def test_write_action_refuses_read_only(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE, writable=False)
    with pytest.raises(DocumentNotWritableError):
        with TextEditHost().write_action(method.document, "Edit"):
            pass


def test_nested_write_action_is_rejected(method_factory: Callable[..., MappingMethod]) -> None:
    document = method_factory(SOURCE).document
    host = TextEditHost()
    with host.write_action(document, "Outer"):
        with pytest.raises(NestedWriteError):
            with host.write_action(document, "Inner"):
                pass
    assert not document.in_write_action


def test_edits_require_write_action(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE)
    with pytest.raises(TransactionError, match="outside of a write action"):
        TextEditHost().remove_annotation(method.document, method.annotations[0])


def test_stale_node_is_rejected(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE)
    document = method.document
    host = TextEditHost()
    node = method.annotations[0]
    document.text = "// shifted\n" + document.text
    with pytest.raises(TransactionError, match="Stale"):
        with host.write_action(document, "Edit"):
            host.remove_annotation(document, node)
    assert document.text.startswith("// shifted\n")


def test_remove_whole_line(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE)
    document = method.document
    host = TextEditHost()
    with host.write_action(document, "Remove"):
        host.remove_annotation(document, method.annotations[0])
    assert "public interface CarMapper {\n\n    CarDto toDto(Car car);" in document.text


def test_insert_own_line_and_inline(method_factory: Callable[..., MappingMethod]) -> None:
    host = TextEditHost()

    own_line = method_factory(SOURCE)
    with host.write_action(own_line.document, "Insert"):
        node = host.insert_annotation(own_line, "@Deprecated")
    expected = '@Mapping(target = "seats", source = "seatCount")\n    @Deprecated\n    CarDto'
    assert expected in own_line.document.text
    assert own_line.document.text[node.start : node.end] == "@Deprecated"

    inline = method_factory(SOURCE, "toString")
    with host.write_action(inline.document, "Insert"):
        host.insert_annotation(inline, "@Deprecated")
    assert "@Override @Deprecated public String toString();" in inline.document.text


def test_insert_multiline_reindents(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE, "toString")
    document = method.document
    # Put the method on its own line first so the insertion gets its own line too.
    host = TextEditHost()
    with host.write_action(document, "Insert"):
        host.remove_annotation(document, method.annotations[0])
        node = host.insert_annotation(method, "@A({\n    @B\n})")
    assert "    @A({\n        @B\n    })\n    public String toString();" in document.text
    assert node.text == "@A({\n    @B\n})"
    assert node.indent == "    "


def test_shorten_references_adds_import(method_factory: Callable[..., MappingMethod]) -> None:
    method = method_factory(SOURCE)
    document = method.document
    host = TextEditHost()
    with host.write_action(document, "Insert"):
        node = host.insert_annotation(
            method, "@org.mapstruct.Mappings({\n    @org.mapstruct.Mapping(target = \"x\")\n})"
        )
        node = host.shorten_references(document, node)
    assert "import org.mapstruct.Mapping;\nimport org.mapstruct.Mappings;\n" in document.text
    assert node.text == '@Mappings({\n    @Mapping(target = "x")\n})'
    assert document.text[node.start : node.end] == '@Mappings({\n        @Mapping(target = "x")\n    })'


def test_mark_for_undo(method_factory: Callable[..., MappingMethod]) -> None:
    document = method_factory(SOURCE).document
    TextEditHost().mark_for_undo(document)
    assert document.undo_marked
