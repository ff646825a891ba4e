# topmark:header:start
#
#   project      : MapMerge
#   file         : add.py
#   file_relpath : src/mapmerge/cli/commands/add.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MapMerge `add` command.

Adds a mapping directive to a method of a Java source file, merging it with
the directives already attached.

By default the command performs a dry run: nothing is written and the exit
code is ``2`` (``WOULD_CHANGE``) when the file would be modified. Pass
``--apply`` to write the file, ``--diff`` to preview the change.

Examples:
    ```bash
    mapmerge add src/main/java/com/acme/CarMapper.java --method toDto \\
        --directive '@Mapping(target = "seats", source = "seatCount")' --diff
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mapmerge.cli.errors import translate_errors
from mapmerge.cli.exit_codes import ExitCode
from mapmerge.cli.options import config_options, resolve_cli_config, target_options
from mapmerge.config.logging import get_logger
from mapmerge.host.document import SourceDocument
from mapmerge.java.annotations import Directive
from mapmerge.java.methods import JavaMethodLocator
from mapmerge.merge.merger import AnnotationMerger
from mapmerge.utils.diff import render_patch, unified_patch

if TYPE_CHECKING:
    from pathlib import Path

    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.config.model import Config
    from mapmerge.java.methods import MappingMethod
    from mapmerge.merge.merger import MergeOutcome

logger: MapmergeLogger = get_logger(__name__)


@click.command(
    name="add",
    help="Add a mapping directive to a method (dry run unless --apply).",
)
@target_options
@click.option(
    "--directive",
    "directive_text",
    required=True,
    metavar="TEXT",
    help="Directive annotation to add, e.g. '@Mapping(target = \"id\", ignore = true)'.",
)
@config_options
@click.option(
    "--apply",
    "apply_changes",
    is_flag=True,
    default=False,
    help="Write the merged file (default: dry run).",
)
@click.option(
    "--diff",
    "show_diff",
    is_flag=True,
    default=False,
    help="Show a unified diff of the change.",
)
def add_command(
    *,
    file: Path,
    method_name: str,
    ordinal: int,
    directive_text: str,
    config_path: Path | None,
    language_level: str | None,
    libraries: tuple[str, ...],
    apply_changes: bool,
    show_diff: bool,
) -> None:
    """Add a mapping directive to a method.

    Args:
        file (Path): Java source file.
        method_name (str): Target method name.
        ordinal (int): Overload index of the target method.
        directive_text (str): Directive annotation text.
        config_path (Path | None): Explicit configuration file.
        language_level (str | None): Module language level override.
        libraries (tuple[str, ...]): Module library override.
        apply_changes (bool): Write the file when True.
        show_diff (bool): Print a unified diff when True.
    """
    ctx = click.get_current_context()

    with translate_errors():
        config: Config = resolve_cli_config(
            file, config_path=config_path, language_level=language_level, libraries=libraries
        )
        # A dry run only edits the in-memory copy, so read-only files may be previewed.
        document: SourceDocument = SourceDocument.load(file, writable=None if apply_changes else True)
        locator = JavaMethodLocator(config.known_annotations)
        method: MappingMethod = locator.find_method(document, method_name, ordinal)
        directive: Directive = Directive.from_text(
            directive_text, imports=method.imports(), known=config.known_annotations
        )
        before: str = document.text
        outcome: MergeOutcome = AnnotationMerger.from_config(config).add_mapping_annotation(method, directive)

    changed: bool = document.text != before
    if show_diff and changed:
        click.echo(render_patch(unified_patch(before, document.text, str(file))), nl=False)

    if not changed:
        click.echo(f"{file}: {method_name} unchanged")
        return

    if apply_changes:
        with translate_errors():
            document.save()
        click.echo(f"{file}: {method_name} updated ({outcome.path.value})")
        return

    click.echo(f"{file}: {method_name} would be updated ({outcome.path.value})")
    logger.debug("Dry run on %s; exiting with %s", file, ExitCode.WOULD_CHANGE.name)
    ctx.exit(ExitCode.WOULD_CHANGE)
