# topmark:header:start
#
#   project      : MapMerge
#   file         : check.py
#   file_relpath : src/mapmerge/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MapMerge `check` command.

Reports, without modifying anything, how a directive added to the method
would be attached: into its existing container, standalone (repeatable form),
or into a new container.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mapmerge.cli.errors import translate_errors
from mapmerge.cli.options import config_options, resolve_cli_config, target_options
from mapmerge.host.document import SourceDocument
from mapmerge.java.annotations import ContainerAnnotation
from mapmerge.java.methods import JavaMethodLocator
from mapmerge.merge.lookup import ExistingContainer, StandaloneAllowed, SyntheticContainer
from mapmerge.merge.merger import AnnotationMerger

if TYPE_CHECKING:
    from pathlib import Path

    from mapmerge.config.model import Config
    from mapmerge.host.protocols import ModuleLike
    from mapmerge.java.methods import MappingMethod
    from mapmerge.merge.lookup import LookupResult


def describe_lookup(result: LookupResult) -> str:
    """Return a one-line description of a lookup decision."""
    match result:
        case ExistingContainer(container=container):
            return f"append to existing @{container.name} ({container.shape.value} form)"
        case StandaloneAllowed():
            return "attach standalone (repeatable form)"
        case SyntheticContainer(supersedes=()):
            return "create a new container"
        case SyntheticContainer(supersedes=(_,)):
            return "create a new container holding the existing directive"
        case SyntheticContainer(supersedes=supersedes):
            return f"create a new container holding the {len(supersedes)} existing directives"
    return repr(result)


def count_directives(method: MappingMethod, config: Config) -> int:
    """Count the directives on ``method``, standalone or inside its container."""
    count: int = 0
    for node in method.annotations:
        if node.qualified_name == config.directive_fqn:
            count += 1
        elif node.qualified_name == config.container_fqn:
            count += len(ContainerAnnotation.from_node(node).directives())
    return count


@click.command(
    name="check",
    help="Show how a directive would be attached to a method.",
)
@target_options
@config_options
def check_command(
    *,
    file: Path,
    method_name: str,
    ordinal: int,
    config_path: Path | None,
    language_level: str | None,
    libraries: tuple[str, ...],
) -> None:
    """Report the module, repeatable-form capability and lookup decision.

    Args:
        file (Path): Java source file.
        method_name (str): Target method name.
        ordinal (int): Overload index of the target method.
        config_path (Path | None): Explicit configuration file.
        language_level (str | None): Module language level override.
        libraries (tuple[str, ...]): Module library override.
    """
    with translate_errors():
        config: Config = resolve_cli_config(
            file, config_path=config_path, language_level=language_level, libraries=libraries
        )
        document: SourceDocument = SourceDocument.load(file)
        method: MappingMethod = JavaMethodLocator(config.known_annotations).find_method(
            document, method_name, ordinal
        )
        merger: AnnotationMerger = AnnotationMerger.from_config(config)
        module: ModuleLike | None = merger.checker.resolver.find_module(method)
        repeatable: bool = merger.checker.can_use_repeatable_form(method)
        lookup: LookupResult = merger.locate_or_synthesize_container(method)
        directives: int = count_directives(method, config)

    click.echo(f"{file}: {method_name}")
    if module is None:
        click.echo("  module     : (none)")
    else:
        click.echo(f"  module     : {getattr(module, 'name', module)} (level {module.language_level.label})")
    click.echo(f"  repeatable : {'yes' if repeatable else 'no'}")
    click.echo(f"  directives : {directives} attached")
    click.echo(f"  decision   : {describe_lookup(lookup)}")
