# topmark:header:start
#
#   project      : MapMerge
#   file         : imports.py
#   file_relpath : src/mapmerge/java/imports.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Package and import declarations of a Java compilation unit.

`ImportTable` answers two questions for annotation handling:

* which qualified name does a written annotation name (``Mapping``) refer to, and
* can a fully-qualified reference (``@org.mapstruct.Mapping``) be shortened to its
  simple name, and which import has to be added for that.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from mapmerge.config.logging import get_logger
from mapmerge.java.lexer import NOT_FOUND, skip_literal, skip_trivia

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mapmerge.config.logging import MapmergeLogger

logger: MapmergeLogger = get_logger(__name__)

_PACKAGE_RE: Final[re.Pattern[str]] = re.compile(r"package\s+([\w$.\s]+?)\s*;")
_IMPORT_RE: Final[re.Pattern[str]] = re.compile(r"import\s+(static\s+)?([\w$.\s]+?)(\s*\.\s*\*)?\s*;")

# Annotation references written with a package prefix: ``@org.mapstruct.Mapping``.
_QUALIFIED_ANNOTATION_RE: Final[re.Pattern[str]] = re.compile(
    r"@((?:[a-z_$][\w$]*\.)+)([A-Z][\w$]*)\b"
)


def simple_name(qualified_name: str) -> str:
    """Return the last segment of a dotted name."""
    return qualified_name.rsplit(".", 1)[-1]


def package_of(qualified_name: str) -> str:
    """Return everything before the last dot of a dotted name (may be empty)."""
    return qualified_name.rpartition(".")[0]


def _squash(name: str) -> str:
    return "".join(name.split())


@dataclass(slots=True)
class ImportTable:
    """Package and imports of one compilation unit.

    Attributes:
        package (str): Declared package, empty for the default package.
        single (dict[str, str]): Single-type imports keyed by simple name.
        on_demand (list[str]): Packages imported with ``.*``.
        insert_offset (int): Offset where a new import line belongs (after the
            last import, else after the package declaration, else 0).
    """

    package: str = ""
    single: dict[str, str] = field(default_factory=dict)
    on_demand: list[str] = field(default_factory=list)
    insert_offset: int = 0
    has_imports: bool = False

    @classmethod
    def parse(cls, text: str) -> ImportTable:
        """Read the package and import declarations heading ``text``.

        Scanning stops at the first token that is neither a package nor an
        import declaration (annotations on the package are not supported).
        """
        table = cls()
        i: int = skip_trivia(text, 0)
        while i < len(text):
            if text.startswith("package", i):
                m = _PACKAGE_RE.match(text, i)
                if m is None:
                    break
                table.package = _squash(m.group(1))
                table.insert_offset = m.end()
                i = skip_trivia(text, m.end())
                continue
            if text.startswith("import", i):
                m = _IMPORT_RE.match(text, i)
                if m is None:
                    break
                if not m.group(1):
                    name: str = _squash(m.group(2))
                    if m.group(3):
                        table.on_demand.append(name)
                    else:
                        table.single[simple_name(name)] = name
                table.insert_offset = m.end()
                table.has_imports = True
                i = skip_trivia(text, m.end())
                continue
            break
        logger.trace(
            "Imports: package=%r single=%d on_demand=%d",
            table.package,
            len(table.single),
            len(table.on_demand),
        )
        return table

    def resolve(self, written_name: str, known: Iterable[str] = ()) -> str:
        """Resolve a written annotation name to a qualified name.

        Dotted names are returned as written. A simple name resolves through a
        single-type import, else to one of ``known`` when that class lives in
        the current package or an on-demand imported package. Unresolvable
        names are returned unchanged.

        Args:
            written_name (str): Name as written after ``@``.
            known (Iterable[str]): Qualified names of interest, used for
                on-demand and same-package resolution.

        Returns:
            str: The qualified name, or ``written_name`` when unknown.
        """
        name: str = _squash(written_name)
        if "." in name:
            return name
        if name in self.single:
            return self.single[name]
        for fqn in known:
            if simple_name(fqn) != name:
                continue
            pkg: str = package_of(fqn)
            if pkg == self.package or pkg in self.on_demand:
                return fqn
        return name

    def can_shorten(self, qualified_name: str) -> bool:
        """Return True if ``@qualified_name`` may be written by its simple name."""
        short: str = simple_name(qualified_name)
        bound: str | None = self.single.get(short)
        return bound is None or bound == qualified_name

    def needs_import(self, qualified_name: str) -> bool:
        """Return True if shortening ``qualified_name`` requires a new import line."""
        pkg: str = package_of(qualified_name)
        if pkg in ("", "java.lang", self.package):
            return False
        if pkg in self.on_demand:
            return False
        return simple_name(qualified_name) not in self.single


def shorten_annotation_references(text: str, table: ImportTable) -> tuple[str, list[str]]:
    """Replace ``@a.b.C`` references in ``text`` with ``@C`` where the imports allow.

    String literals inside ``text`` are left untouched.

    Args:
        text (str): Annotation text.
        table (ImportTable): Imports of the file receiving ``text``. The table
            is updated in place with any import this function decides to add.

    Returns:
        tuple[str, list[str]]: The rewritten text and the qualified names that
            need a new import declaration, in first-use order.
    """
    out: list[str] = []
    added: list[str] = []
    i: int = 0
    while i < len(text):
        ch: str = text[i]
        if ch in "\"'":
            end: int = skip_literal(text, i)
            out.append(text[i:end])
            i = end
            continue
        if ch == "@":
            m = _QUALIFIED_ANNOTATION_RE.match(text, i)
            if m is not None:
                fqn: str = m.group(1) + m.group(2)
                if table.can_shorten(fqn):
                    if table.needs_import(fqn):
                        table.single[m.group(2)] = fqn
                        added.append(fqn)
                    out.append("@" + m.group(2))
                    i = m.end()
                    continue
        out.append(ch)
        i += 1
    return "".join(out), added


def render_import_block(qualified_names: Iterable[str]) -> str:
    """Render sorted import declarations, one per line, without a trailing newline."""
    return "\n".join(f"import {fqn};" for fqn in sorted(qualified_names))


def _separator_after(text: str, offset: int) -> str:
    """Return a newline when the line after ``offset`` holds code other than an import."""
    line_end: int = text.find("\n", offset)
    if line_end == NOT_FOUND or text[offset:line_end].strip():
        return ""
    following: str = text[line_end + 1 :].split("\n", 1)[0].strip()
    if not following or following.startswith("import"):
        return ""
    return "\n"


def find_import_insertion(text: str, table: ImportTable) -> tuple[int, str, str]:
    """Return ``(offset, prefix, suffix)`` for inserting new import lines.

    The prefix/suffix strings carry the newlines needed to keep one import per
    line. Blank lines separate the imports from the package declaration and
    from the code that follows them.
    """
    if table.has_imports:
        return table.insert_offset, "\n", _separator_after(text, table.insert_offset)
    if table.package:
        return table.insert_offset, "\n\n", _separator_after(text, table.insert_offset)
    # Default package without imports: before the first type declaration.
    return skip_trivia(text, 0), "", "\n\n"
