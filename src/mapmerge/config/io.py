# topmark:header:start
#
#   project      : MapMerge
#   file         : io.py
#   file_relpath : src/mapmerge/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module reads MapMerge configuration from on-disk TOML files
(``mapmerge.toml`` or the ``[tool.mapmerge]`` table of ``pyproject.toml``) and
discovers them by walking up from a source file.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from mapmerge.config.logging import get_logger
from mapmerge.config.model import MutableConfig
from mapmerge.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME, PYPROJECT_TOOL_TABLE
from mapmerge.core.errors import ConfigError

if TYPE_CHECKING:
    from mapmerge.config.logging import MapmergeLogger

TomlTable = dict[str, Any]

logger: MapmergeLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except TomlkitParseError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_tool_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the MapMerge table of a parsed TOML file.

    For ``pyproject.toml`` this is ``[tool.mapmerge]`` (``None`` when absent);
    any other file is taken as a whole.
    """
    if path.name != PYPROJECT_FILE_NAME:
        return data
    tool: Any = data.get("tool", {})
    table: Any = tool.get(PYPROJECT_TOOL_TABLE) if isinstance(tool, dict) else None
    return cast("TomlTable", table) if isinstance(table, dict) else None


def discover_config_file(start: Path) -> Path | None:
    """Return the nearest config file at or above ``start``.

    In each directory ``mapmerge.toml`` wins over a ``pyproject.toml`` that
    has a ``[tool.mapmerge]`` table.
    """
    current: Path = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate: Path = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        pyproject: Path = directory / PYPROJECT_FILE_NAME
        if pyproject.is_file():
            try:
                if extract_tool_table(pyproject, load_toml_dict(pyproject)) is not None:
                    return pyproject
            except ConfigError as exc:
                logger.warning("Skipping %s during discovery: %s", pyproject, exc)
    return None


def load_config_file(path: Path) -> MutableConfig:
    """Load a config draft from ``path`` on top of the defaults.

    Module source roots are resolved relative to the file's directory.

    Raises:
        ConfigError: If the file is unreadable, malformed, or a
            ``pyproject.toml`` without ``[tool.mapmerge]``.
    """
    logger.debug("Loading config from %s", path)
    table: TomlTable | None = extract_tool_table(path, load_toml_dict(path))
    if table is None:
        raise ConfigError(f"[tool.{PYPROJECT_TOOL_TABLE}] section missing in {path}")
    draft: MutableConfig = MutableConfig.from_defaults().apply_toml_table(
        table, base_dir=path.parent.resolve(), source=str(path)
    )
    draft.config_files.append(path)
    return draft


def resolve_config(source_file: Path | None = None, explicit: Path | None = None) -> MutableConfig:
    """Return the config draft that applies to ``source_file``.

    An explicit file wins; otherwise the nearest discovered file is used;
    otherwise the defaults.
    """
    if explicit is not None:
        return load_config_file(explicit)
    if source_file is not None:
        found: Path | None = discover_config_file(source_file)
        if found is not None:
            return load_config_file(found)
    logger.debug("No config file found; using defaults")
    return MutableConfig.from_defaults()
