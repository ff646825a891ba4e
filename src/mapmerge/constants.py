# topmark:header:start
#
#   project      : MapMerge
#   file         : constants.py
#   file_relpath : src/mapmerge/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MapMerge Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    MAPMERGE_VERSION: str = get_version("mapmerge")
except PackageNotFoundError:  # pragma: no cover - source checkout without metadata
    MAPMERGE_VERSION = "0.0.0"

# Qualified names of the directive and its container annotation.
MAPPING_ANNOTATION_FQN: Final[str] = "org.mapstruct.Mapping"
MAPPINGS_ANNOTATION_FQN: Final[str] = "org.mapstruct.Mappings"

# Language level that introduced repeatable annotations.
REPEATABLE_SINCE: Final[str] = "1.8"

# Libraries that declare the directive as repeatable (``group:artifact[>=version]``).
REPEATABLE_LIBRARIES: Final[tuple[str, ...]] = (
    "org.mapstruct:mapstruct-jdk8",
    "org.mapstruct:mapstruct>=1.3",
)

DEFAULT_INDENT: Final[str] = "    "

CONFIG_FILE_NAME: Final[str] = "mapmerge.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_TABLE: Final[str] = "mapmerge"

LOG_LEVEL_ENV: Final[str] = "MAPMERGE_LOG_LEVEL"
