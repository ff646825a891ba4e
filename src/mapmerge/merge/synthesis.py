# topmark:header:start
#
#   project      : MapMerge
#   file         : synthesis.py
#   file_relpath : src/mapmerge/merge/synthesis.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compose merged annotation text.

Everything here is pure string assembly on relative annotation text; nothing
touches a document. Existing directive text is copied verbatim; the new
directive is always appended last.

Array-form containers are extended with a brace/parenthesis rule: the last
``}`` closes the directive list, and the last ``)`` before it closes the last
directive. Both are searched outside comments and literals. Text up to that
``)`` is kept, followed by ``,``, any comment trailing the last directive, a
line break and the new directive. A container whose list is non-empty but
holds no ``)`` cannot be extended without guessing and raises
`StructuralCorruptionError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mapmerge.config.logging import get_logger
from mapmerge.constants import DEFAULT_INDENT
from mapmerge.core.errors import InvariantViolationError, StructuralCorruptionError
from mapmerge.java.annotations import ContainerAnnotation, ContainerShape, Directive
from mapmerge.java.lexer import NOT_FOUND, indent_continuation, rfind_code

if TYPE_CHECKING:
    from mapmerge.config.logging import MapmergeLogger

logger: MapmergeLogger = get_logger(__name__)


def render_container(container_name: str, items: list[str], indent: str = DEFAULT_INDENT) -> str:
    """Render ``@<name>({ ... })`` holding ``items``, one per line.

    Args:
        container_name (str): Container name as it should be written.
        items (list[str]): Directive texts, in order.
        indent (str): Indentation of each item line.

    Returns:
        str: The container annotation text.
    """
    body: str = ",\n".join(indent + indent_continuation(item, indent) for item in items)
    if body:
        return f"@{container_name}({{\n{body}\n}})"
    return f"@{container_name}({{\n}})"


def append_to_array(container_text: str, directive_text: str, indent: str = DEFAULT_INDENT) -> str:
    """Append ``directive_text`` as the last item of an array-form container.

    Args:
        container_text (str): Relative text of an array-form container.
        directive_text (str): Relative text of the directive to append.
        indent (str): Indentation of the appended item line.

    Returns:
        str: The extended container text.

    Raises:
        StructuralCorruptionError: If the array has no closing brace, or holds
            items but no invocation close ``)`` to append after.
    """
    array_open: int = container_text.find("{")
    if array_open == NOT_FOUND:
        raise StructuralCorruptionError(container_text, "container has no array initializer")
    array_close: int = rfind_code(container_text, "}", array_open)
    if array_close <= array_open:
        raise StructuralCorruptionError(container_text, "array initializer is not closed")

    before_close: str = container_text[:array_close]
    paren: int = rfind_code(before_close, ")", array_open + 1)
    if paren > array_open:
        tail: str = before_close[paren + 1 :].strip()
        if tail.startswith(","):
            # Trailing comma of the list; ours replaces it.
            tail = tail[1:].strip()
        preserved: str = before_close[: paren + 1] + "," + (f" {tail}" if tail else "") + "\n"
    elif not before_close[array_open + 1 :].strip():
        # Empty list: nothing to separate from.
        preserved = before_close[: array_open + 1] + "\n"
    else:
        raise StructuralCorruptionError(
            container_text, "no directive invocation close before the end of the array"
        )
    item: str = indent + indent_continuation(directive_text, indent)
    return f"{preserved}{item}\n}})"


def wrap_single(container: ContainerAnnotation, directive: Directive, indent: str = DEFAULT_INDENT) -> str:
    """Turn a single-form container into an array-form one ending with ``directive``.

    Raises:
        InvariantViolationError: If the container does not hold exactly one attribute.
    """
    if len(container.attributes) != 1:
        raise InvariantViolationError(
            f"Single-form container with {len(container.attributes)} attributes: {container.text!r}"
        )
    existing: str = container.attributes[0].value
    added: str = indent_continuation(directive.text, indent)
    return f"@{container.name}({{\n{indent}{existing},\n{indent}{added}\n}})"


def build_merged_annotation(
    container: ContainerAnnotation | None,
    directive: Directive,
    indent: str = DEFAULT_INDENT,
) -> ContainerAnnotation | Directive:
    """Return the annotation that carries every existing directive plus ``directive``.

    Args:
        container (ContainerAnnotation | None): Existing or synthetic container;
            ``None`` when the directive can be attached standalone.
        directive (Directive): The new directive.
        indent (str): Item indentation inside containers.

    Returns:
        ContainerAnnotation | Directive: ``directive`` itself when there is no
            container, else a synthetic array-form container.

    Raises:
        StructuralCorruptionError: See `append_to_array`.
        InvariantViolationError: See `wrap_single`.
    """
    if container is None:
        logger.debug("No container: directive is attached standalone")
        return directive
    match container.shape:
        case ContainerShape.SINGLE:
            text: str = wrap_single(container, directive, indent)
        case ContainerShape.ARRAY:
            text = append_to_array(container.text, directive.text, indent)
        case _:  # pragma: no cover - exhaustive over ContainerShape
            raise InvariantViolationError(f"Unknown container shape {container.shape!r}")
    logger.trace("Merged container text:\n%s", text)
    return ContainerAnnotation.from_text(text, qualified_name=container.qualified_name)
