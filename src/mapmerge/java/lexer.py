# topmark:header:start
#
#   project      : MapMerge
#   file         : lexer.py
#   file_relpath : src/mapmerge/java/lexer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment- and literal-aware scanning primitives for Java source text.

All helpers work on plain ``str`` offsets and never raise on odd input: callers
get sentinel values (``NOT_FOUND``) and decide whether that is an error.
"""

from __future__ import annotations

from typing import Final

NOT_FOUND: Final[int] = -1

OPENERS: Final[dict[str, str]] = {"(": ")", "{": "}", "[": "]"}
CLOSERS: Final[frozenset[str]] = frozenset(OPENERS.values())


def is_identifier_start(ch: str) -> bool:
    """Return True if ``ch`` may start a Java identifier."""
    return ch.isalpha() or ch in "_$"


def is_identifier_part(ch: str) -> bool:
    """Return True if ``ch`` may continue a Java identifier."""
    return ch.isalnum() or ch in "_$"


def skip_literal(text: str, index: int) -> int:
    """Skip a string, text block or char literal starting at ``index``.

    Args:
        text (str): Source text.
        index (int): Offset of the opening quote.

    Returns:
        int: Offset just past the closing quote, or ``len(text)`` when the
            literal is unterminated.
    """
    quote: str = text[index]
    if text.startswith('"""', index):
        end: int = text.find('"""', index + 3)
        while end != NOT_FOUND and _is_escaped(text, end):
            end = text.find('"""', end + 1)
        return len(text) if end == NOT_FOUND else end + 3
    i: int = index + 1
    while i < len(text):
        ch: str = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote or ch == "\n":
            return i + 1
        i += 1
    return len(text)


def _is_escaped(text: str, index: int) -> bool:
    backslashes: int = 0
    i: int = index - 1
    while i >= 0 and text[i] == "\\":
        backslashes += 1
        i -= 1
    return backslashes % 2 == 1


def skip_comment(text: str, index: int) -> int:
    """Skip a ``//`` or ``/* */`` comment starting at ``index``.

    Returns:
        int: Offset just past the comment, or ``index`` unchanged when no comment
            starts there.
    """
    if text.startswith("//", index):
        end: int = text.find("\n", index)
        return len(text) if end == NOT_FOUND else end
    if text.startswith("/*", index):
        end = text.find("*/", index + 2)
        return len(text) if end == NOT_FOUND else end + 2
    return index


def skip_trivia(text: str, index: int) -> int:
    """Skip whitespace and comments from ``index``; return the next code offset."""
    i: int = index
    while i < len(text):
        if text[i].isspace():
            i += 1
            continue
        after: int = skip_comment(text, i)
        if after == i:
            return i
        i = after
    return i


def read_identifier(text: str, index: int) -> int:
    """Return the offset just past the identifier starting at ``index``."""
    i: int = index
    while i < len(text) and is_identifier_part(text[i]):
        i += 1
    return i


def read_qualified_name(text: str, index: int) -> int:
    """Return the offset just past a dotted name (``a.b.C``) starting at ``index``.

    Whitespace and comments around the dots are tolerated, as Java allows.
    """
    end: int = read_identifier(text, index)
    while True:
        dot: int = skip_trivia(text, end)
        if dot >= len(text) or text[dot] != ".":
            return end
        start: int = skip_trivia(text, dot + 1)
        if start >= len(text) or not is_identifier_start(text[start]):
            return end
        end = read_identifier(text, start)


def find_closing(text: str, open_index: int) -> int:
    """Find the bracket closing the one at ``open_index``.

    Only brackets of the same kind are counted; literals and comments are
    skipped. Braces or brackets of another kind do not need to balance.

    Args:
        text (str): Source text.
        open_index (int): Offset of ``(``, ``{`` or ``[``.

    Returns:
        int: Offset of the matching closer, or ``NOT_FOUND``.
    """
    opener: str = text[open_index]
    closer: str = OPENERS[opener]
    depth: int = 0
    i: int = open_index
    while i < len(text):
        ch: str = text[i]
        if ch in "\"'":
            i = skip_literal(text, i)
            continue
        after: int = skip_comment(text, i)
        if after != i:
            i = after
            continue
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return NOT_FOUND


def rfind_code(text: str, target: str, start: int = 0, end: int | None = None) -> int:
    """Return the last offset of ``target`` in ``text[start:end]`` outside literals and comments.

    The scan runs forward from ``start``, so literals and comments are only
    recognized when they begin at or after it.

    Returns:
        int: Offset of the last match, or ``NOT_FOUND``.
    """
    stop: int = len(text) if end is None else min(end, len(text))
    found: int = NOT_FOUND
    i: int = start
    while i < stop:
        ch: str = text[i]
        if ch in "\"'":
            i = skip_literal(text, i)
            continue
        after: int = skip_comment(text, i)
        if after != i:
            i = after
            continue
        if ch == target:
            found = i
        i += 1
    return found


def split_top_level(text: str, separator: str = ",") -> list[tuple[int, int]]:
    """Split ``text`` at ``separator`` characters outside brackets and literals.

    Args:
        text (str): Text to split (e.g. the inside of an annotation's parentheses).
        separator (str): Single separator character.

    Returns:
        list[tuple[int, int]]: ``(start, end)`` spans of the pieces, untrimmed.
            An empty input yields a single empty span.
    """
    spans: list[tuple[int, int]] = []
    depth: int = 0
    start: int = 0
    i: int = 0
    while i < len(text):
        ch: str = text[i]
        if ch in "\"'":
            i = skip_literal(text, i)
            continue
        after: int = skip_comment(text, i)
        if after != i:
            i = after
            continue
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth = max(0, depth - 1)
        elif ch == separator and depth == 0:
            spans.append((start, i))
            start = i + 1
        i += 1
    spans.append((start, len(text)))
    return spans


def line_indent(text: str, index: int) -> str:
    """Return the leading whitespace of the line containing ``index``."""
    line_start: int = text.rfind("\n", 0, index) + 1
    i: int = line_start
    while i < len(text) and text[i] in " \t":
        i += 1
    return text[line_start:i]


def dedent_continuation(text: str, indent: str) -> str:
    """Strip ``indent`` from every line of ``text`` after the first.

    Lines that do not start with ``indent`` are kept as they are.
    """
    if not indent or "\n" not in text:
        return text
    first, *rest = text.split("\n")
    return "\n".join([first, *(ln[len(indent) :] if ln.startswith(indent) else ln for ln in rest)])


def indent_continuation(text: str, indent: str) -> str:
    """Prefix every non-blank line of ``text`` after the first with ``indent``."""
    if not indent or "\n" not in text:
        return text
    first, *rest = text.split("\n")
    return "\n".join([first, *(indent + ln if ln.strip() else ln for ln in rest)])
