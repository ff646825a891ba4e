# topmark:header:start
#
#   project      : MapMerge
#   file         : options.py
#   file_relpath : src/mapmerge/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI options and their resolution into a `Config`.

The ``add`` and ``check`` commands share the target selection (file, method,
ordinal) and the configuration overrides (config file, language level,
libraries). Both option groups are defined once here as decorators.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click

from mapmerge.cli.errors import MapmergeUsageError
from mapmerge.config.io import resolve_config
from mapmerge.config.logging import get_logger
from mapmerge.config.model import ModuleSpec
from mapmerge.host.modules import parse_libraries
from mapmerge.java.levels import LanguageLevel

if TYPE_CHECKING:
    from collections.abc import Callable

    from mapmerge.config.logging import MapmergeLogger
    from mapmerge.config.model import Config, MutableConfig

P = ParamSpec("P")
R = TypeVar("R")

CLI_MODULE_NAME: str = "<command line>"

logger: MapmergeLogger = get_logger(__name__)


def target_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``FILE``, ``--method`` and ``--ordinal`` target selection."""
    f = click.option(
        "--ordinal",
        type=click.IntRange(min=0),
        default=0,
        show_default=True,
        help="Which overload of the method to target (0 = first declaration).",
    )(f)
    f = click.option(
        "--method",
        "method_name",
        required=True,
        metavar="NAME",
        help="Name of the mapping method.",
    )(f)
    f = click.argument(
        "file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )(f)
    return f


def config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config``, ``--language-level`` and ``--library``."""
    f = click.option(
        "--library",
        "libraries",
        multiple=True,
        metavar="COORD",
        help="Library on the module classpath, 'group:artifact[:version]'. Repeatable. "
        "Requires --language-level.",
    )(f)
    f = click.option(
        "--language-level",
        metavar="LEVEL",
        default=None,
        help="Language level of the module owning FILE (e.g. 1.8, 11, 17). "
        "Overrides the modules of the configuration.",
    )(f)
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Configuration file (mapmerge.toml or pyproject.toml). Discovered from FILE when omitted.",
    )(f)
    return f


def resolve_cli_config(
    file: Path,
    *,
    config_path: Path | None,
    language_level: str | None,
    libraries: tuple[str, ...],
) -> Config:
    """Build the effective configuration for a command.

    Configuration comes from ``config_path`` or the file discovered from
    ``file``. A ``--language-level`` replaces the configured modules with a
    single module owning every file.

    Raises:
        MapmergeUsageError: If the override options are malformed or
            ``--library`` is given without ``--language-level``.
        ConfigError: Propagated from configuration loading.
    """
    draft: MutableConfig = resolve_config(file, config_path)
    if language_level is None:
        if libraries:
            raise MapmergeUsageError("--library requires --language-level")
        return draft.freeze()
    try:
        level: LanguageLevel = LanguageLevel.parse(language_level)
        parse_libraries(libraries)
    except ValueError as exc:
        raise MapmergeUsageError(str(exc)) from exc
    logger.debug("Module override: level %s, libraries %s", level.label, ", ".join(libraries) or "-")
    draft.modules = []
    draft.default_module = ModuleSpec(name=CLI_MODULE_NAME, language_level=level, libraries=libraries)
    return draft.freeze()
