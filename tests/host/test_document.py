# topmark:header:start
#
#   project      : MapMerge
#   file         : test_document.py
#   file_relpath : tests/host/test_document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source documents: newline/BOM round trips and undo/redo history."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mapmerge.host.document import SourceDocument

if TYPE_CHECKING:
    from pathlib import Path


def test_crlf_and_bom_round_trip(tmp_path: Path) -> None:
    raw = "\ufeffclass A {\r\n    int x;\r\n}\r\n"
    f: Path = tmp_path / "A.java"
    f.write_bytes(raw.encode("utf-8"))

    doc = SourceDocument.load(f)
    assert doc.text == "class A {\n    int x;\n}\n"
    assert doc.newline == "\r\n"
    assert doc.leading_bom
    assert doc.writable

    doc.save()
    assert f.read_bytes().decode("utf-8") == raw


def test_save_without_path_raises() -> None:
    with pytest.raises(ValueError, match="no path"):
        SourceDocument.from_text("class A {}").save()


def test_undo_redo() -> None:
    doc = SourceDocument.from_text("a")
    assert not doc.can_undo
    assert doc.undo() is None

    doc.text = "b"
    doc.record("first", "a")
    doc.text = "c"
    doc.record("second", "b")

    entry = doc.undo()
    assert entry is not None and entry.label == "second"
    assert doc.text == "b"
    assert doc.can_redo

    assert doc.redo() is not None
    assert doc.text == "c"
    assert doc.redo() is None


def test_record_clears_redo() -> None:
    doc = SourceDocument.from_text("a")
    doc.text = "b"
    doc.record("edit", "a")
    doc.undo()
    doc.text = "z"
    doc.record("other", "a")
    assert not doc.can_redo


def test_display_name() -> None:
    assert SourceDocument.from_text("").display_name == "<memory>"
