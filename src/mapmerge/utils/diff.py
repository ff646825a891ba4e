# topmark:header:start
#
#   project      : MapMerge
#   file         : diff.py
#   file_relpath : src/mapmerge/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering.

The CLI uses these helpers to preview what a merge would change before the
file is written.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

from mapmerge.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mapmerge.config.logging import MapmergeLogger

logger: MapmergeLogger = get_logger(__name__)


def unified_patch(before: str, after: str, name: str) -> list[str]:
    """Return the unified diff lines turning ``before`` into ``after``.

    Args:
        before (str): Current text.
        after (str): Updated text.
        name (str): File name shown in the diff headers.

    Returns:
        list[str]: Diff lines, each ending with ``\\n``; empty when the texts are equal.
    """
    patch: list[str] = list(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"{name} (current)",
            tofile=f"{name} (updated)",
            n=3,
        )
    )
    # difflib leaves the last line bare when the text has no final newline.
    patch = [line if line.endswith("\n") else line + "\n" for line in patch]
    logger.trace("Patch for %s: %d line(s)", name, len(patch))
    return patch


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as either a sequence of
            lines or a single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = [line.rstrip("\n") for line in patch]

    def process_line(line: str) -> str:
        content: str = line.replace("\r", "\\r")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers:
        return chalk.gray("".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1)))
    return chalk.gray("".join(f"{process_line(line)}\n" for line in lines))
