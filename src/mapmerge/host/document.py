# topmark:header:start
#
#   project      : MapMerge
#   file         : document.py
#   file_relpath : src/mapmerge/host/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory source documents with undo history.

A `SourceDocument` is the shared resource every edit goes through. It keeps
the text with ``\\n`` line endings (the original newline style is restored on
save), an undo and a redo stack, and a lock that serializes write actions.
Mutating ``text`` directly is reserved to the edit host.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mapmerge.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from mapmerge.config.logging import MapmergeLogger

logger: MapmergeLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """One recorded edit.

    Attributes:
        label (str): Command name shown to users.
        before (str): Document text before the edit.
        after (str): Document text after the edit.
    """

    label: str
    before: str
    after: str


def _detect_newline(text: str) -> str:
    crlf: int = text.count("\r\n")
    lf: int = text.count("\n") - crlf
    return "\r\n" if crlf > lf else "\n"


@dataclass(eq=False)
class SourceDocument:
    """A text buffer bound to an optional file path.

    Attributes:
        text (str): Current text, ``\\n`` line endings.
        path (Path | None): Backing file, if any.
        writable (bool): Whether write actions may modify the document.
        newline (str): Newline style restored on save.
        leading_bom (bool): Whether the file started with a UTF-8 BOM.
    """

    text: str
    path: Path | None = None
    writable: bool = True
    newline: str = "\n"
    leading_bom: bool = False
    undo_stack: list[UndoEntry] = field(default_factory=list)
    redo_stack: list[UndoEntry] = field(default_factory=list)
    undo_marked: bool = False
    write_depth: int = 0
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @classmethod
    def from_text(cls, text: str, *, path: Path | None = None, writable: bool = True) -> SourceDocument:
        """Create a document from text, normalizing line endings and a leading BOM."""
        bom: bool = text.startswith("\ufeff")
        if bom:
            text = text[1:]
        newline: str = _detect_newline(text)
        return cls(
            text=text.replace("\r\n", "\n"),
            path=path,
            writable=writable,
            newline=newline,
            leading_bom=bom,
        )

    @classmethod
    def load(cls, path: Path, *, writable: bool | None = None) -> SourceDocument:
        """Read a UTF-8 file into a document.

        Args:
            path (Path): File to read.
            writable (bool | None): Force the writable flag; by default it
                follows the file's write permission.

        Returns:
            SourceDocument: The loaded document.
        """
        # newline="" keeps CRLF so the newline style can be detected.
        with path.open("r", encoding="utf-8", newline="") as fp:
            raw: str = fp.read()
        if writable is None:
            writable = os.access(path, os.W_OK)
        logger.debug("Loaded %s (%d chars, writable=%s)", path, len(raw), writable)
        return cls.from_text(raw, path=path, writable=writable)

    def render(self) -> str:
        """Return the text as it would be written to disk."""
        out: str = self.text if self.newline == "\n" else self.text.replace("\n", self.newline)
        return ("\ufeff" + out) if self.leading_bom else out

    def save(self, path: Path | None = None) -> Path:
        """Write the document to ``path`` (default: its own path).

        Raises:
            ValueError: If neither ``path`` nor ``self.path`` is set.
        """
        target: Path | None = path or self.path
        if target is None:
            raise ValueError("Document has no path to save to")
        # newline="" keeps the newline style rendered above.
        with target.open("w", encoding="utf-8", newline="") as fp:
            fp.write(self.render())
        logger.info("Wrote %s", target)
        return target

    @property
    def display_name(self) -> str:
        """Path as string, or ``<memory>`` for unsaved documents."""
        return str(self.path) if self.path is not None else "<memory>"

    @property
    def in_write_action(self) -> bool:
        """Whether a write action is currently open on this document."""
        return self.write_depth > 0

    def record(self, label: str, before: str) -> None:
        """Push an undo entry for a completed edit and clear the redo stack."""
        self.undo_stack.append(UndoEntry(label=label, before=before, after=self.text))
        self.redo_stack.clear()
        logger.trace("Recorded undo entry %r on %s", label, self.display_name)

    @property
    def can_undo(self) -> bool:
        """Whether an undo entry is available."""
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        """Whether a redo entry is available."""
        return bool(self.redo_stack)

    def undo(self) -> UndoEntry | None:
        """Revert the most recent edit; return it, or ``None`` if there is none."""
        with self.lock:
            if not self.undo_stack:
                return None
            entry: UndoEntry = self.undo_stack.pop()
            self.text = entry.before
            self.redo_stack.append(entry)
            logger.debug("Undid %r on %s", entry.label, self.display_name)
            return entry

    def redo(self) -> UndoEntry | None:
        """Re-apply the most recently undone edit; return it, or ``None``."""
        with self.lock:
            if not self.redo_stack:
                return None
            entry: UndoEntry = self.redo_stack.pop()
            self.text = entry.after
            self.undo_stack.append(entry)
            logger.debug("Redid %r on %s", entry.label, self.display_name)
            return entry
