# topmark:header:start
#
#   project      : MapMerge
#   file         : errors.py
#   file_relpath : src/mapmerge/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the MapMerge core and its reference collaborators.

Usage:
    Library code raises these exceptions; the CLI translates them into
    Click exceptions with sysexits-aligned exit codes (see
    ``mapmerge.cli.errors``).

Taxonomy:
    - ``StructuralCorruptionError``: an existing container annotation has a shape
      that cannot be extended safely. Fatal; nothing has been written.
    - ``InvariantViolationError``: an internally unreachable shape was reached.
    - ``TransactionError``: the edit host refused or aborted a write action. The
      document has been restored to its pre-transaction text.
    - ``MethodNotFoundError``, ``AnnotationSyntaxError``, ``ConfigError``: input
      problems reported by the collaborators.

An unresolved module is *not* an error: capability checks answer ``False``.
"""

from __future__ import annotations


class MapmergeError(Exception):
    """Base class for all MapMerge errors."""


class StructuralCorruptionError(MapmergeError):
    """Container annotation text does not match a shape that can be extended.

    Attributes:
        text (str): The offending container annotation text.
    """

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"{reason}: {text!r}")
        self.text: str = text
        self.reason: str = reason


class InvariantViolationError(MapmergeError):
    """An annotation shape that the lookup contract rules out was encountered."""


class AnnotationSyntaxError(MapmergeError):
    """Text passed as an annotation is not a syntactically valid annotation."""


class MethodNotFoundError(MapmergeError):
    """The requested method declaration does not exist in the document."""


class ConfigError(MapmergeError):
    """Configuration errors (missing/invalid/malformed config)."""


class TransactionError(MapmergeError):
    """Base class for failures raised by the edit host."""


class DocumentNotWritableError(TransactionError):
    """The target document is read-only."""


class NestedWriteError(TransactionError):
    """A write action was started while another one is open on the same document."""
