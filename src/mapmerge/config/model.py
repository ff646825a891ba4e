# topmark:header:start
#
#   project      : MapMerge
#   file         : model.py
#   file_relpath : src/mapmerge/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for MapMerge.

Two classes follow the usual build-then-freeze split:

- `MutableConfig`: a draft assembled from defaults, TOML tables and CLI
  arguments, each applied in turn onto the same draft.
- `Config`: the frozen snapshot consumed by the merge core.

Example:
    ```python
    draft = MutableConfig.from_defaults()
    draft.modules.append(ModuleSpec(name="app", language_level=LanguageLevel.JDK_11))
    config = draft.freeze()
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mapmerge.config.logging import get_logger
from mapmerge.constants import (
    DEFAULT_INDENT,
    MAPPING_ANNOTATION_FQN,
    MAPPINGS_ANNOTATION_FQN,
    REPEATABLE_LIBRARIES,
    REPEATABLE_SINCE,
)
from mapmerge.core.errors import ConfigError
from mapmerge.host.modules import LibraryRequirement, Module, ProjectLayout, parse_libraries
from mapmerge.java.levels import LanguageLevel

if TYPE_CHECKING:
    from mapmerge.config.io import TomlTable
    from mapmerge.config.logging import MapmergeLogger

logger: MapmergeLogger = get_logger(__name__)

_KNOWN_KEYS: frozenset[str] = frozenset(
    {"directive_fqn", "container_fqn", "repeatable_since", "repeatable_libraries", "indent", "modules"}
)
_KNOWN_MODULE_KEYS: frozenset[str] = frozenset({"name", "source_roots", "language_level", "libraries"})


@dataclass(frozen=True, slots=True)
class ModuleSpec:
    """Declarative description of a build module.

    Attributes:
        name (str): Module name.
        language_level (LanguageLevel): Effective language level.
        source_roots (tuple[str, ...]): Source roots, relative to ``base_dir``
            unless absolute.
        libraries (tuple[str, ...]): ``group:artifact[:version]`` coordinates.
        base_dir (Path | None): Directory relative roots are resolved against.
    """

    name: str
    language_level: LanguageLevel
    source_roots: tuple[str, ...] = ()
    libraries: tuple[str, ...] = ()
    base_dir: Path | None = None

    def to_module(self) -> Module:
        """Materialize the runtime `Module`."""
        base: Path = self.base_dir or Path.cwd()
        roots: tuple[Path, ...] = tuple((base / r).resolve() for r in self.source_roots)
        return Module(
            name=self.name,
            language_level=self.language_level,
            libraries=parse_libraries(self.libraries),
            source_roots=roots,
        )


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        directive_fqn (str): Qualified name of the directive annotation.
        container_fqn (str): Qualified name of its container annotation.
        repeatable_since (LanguageLevel): First level with repeatable annotations.
        repeatable_libraries (tuple[LibraryRequirement, ...]): Libraries that
            declare the directive repeatable; any one of them suffices.
        indent (str): Indentation of directives inside a container.
        modules (tuple[ModuleSpec, ...]): Known build modules.
        default_module (ModuleSpec | None): Module for files outside every
            source root.
        config_files (tuple[Path, ...]): Files this configuration was read from.
    """

    directive_fqn: str
    container_fqn: str
    repeatable_since: LanguageLevel
    repeatable_libraries: tuple[LibraryRequirement, ...]
    indent: str
    modules: tuple[ModuleSpec, ...]
    default_module: ModuleSpec | None
    config_files: tuple[Path, ...]

    @property
    def known_annotations(self) -> tuple[str, ...]:
        """Qualified names used to resolve simple annotation names."""
        return (self.directive_fqn, self.container_fqn)

    def build_layout(self) -> ProjectLayout:
        """Create the module resolver described by this configuration."""
        default: Module | None = self.default_module.to_module() if self.default_module else None
        return ProjectLayout(modules=[m.to_module() for m in self.modules], default=default)


@dataclass
class MutableConfig:
    """Mutable configuration draft; see module docstring."""

    directive_fqn: str = MAPPING_ANNOTATION_FQN
    container_fqn: str = MAPPINGS_ANNOTATION_FQN
    repeatable_since: LanguageLevel = field(default_factory=lambda: LanguageLevel.parse(REPEATABLE_SINCE))
    repeatable_libraries: list[LibraryRequirement] = field(
        default_factory=lambda: [LibraryRequirement.parse(s) for s in REPEATABLE_LIBRARIES]
    )
    indent: str = DEFAULT_INDENT
    modules: list[ModuleSpec] = field(default_factory=list)
    default_module: ModuleSpec | None = None
    config_files: list[Path] = field(default_factory=list)

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft holding the built-in defaults."""
        return cls()

    def freeze(self) -> Config:
        """Return the immutable snapshot of this draft."""
        return Config(
            directive_fqn=self.directive_fqn,
            container_fqn=self.container_fqn,
            repeatable_since=self.repeatable_since,
            repeatable_libraries=tuple(self.repeatable_libraries),
            indent=self.indent,
            modules=tuple(self.modules),
            default_module=self.default_module,
            config_files=tuple(self.config_files),
        )

    def apply_toml_table(
        self,
        table: TomlTable,
        *,
        base_dir: Path | None = None,
        source: str = "<toml>",
    ) -> MutableConfig:
        """Override settings from a ``[tool.mapmerge]``-shaped table.

        Unknown keys are logged and ignored.

        Args:
            table (TomlTable): Parsed table.
            base_dir (Path | None): Directory module source roots are relative to.
            source (str): Name of the table's origin, for messages.

        Returns:
            MutableConfig: ``self``, for chaining.

        Raises:
            ConfigError: If a known key has a value of the wrong type or format.
        """
        for key in table:
            if key not in _KNOWN_KEYS:
                logger.warning("%s: ignoring unknown key %r", source, key)

        if "directive_fqn" in table:
            self.directive_fqn = _require_str(table, "directive_fqn", source)
        if "container_fqn" in table:
            self.container_fqn = _require_str(table, "container_fqn", source)
        if "indent" in table:
            self.indent = _require_str(table, "indent", source)
        if "repeatable_since" in table:
            self.repeatable_since = _parse_level(table["repeatable_since"], source)
        if "repeatable_libraries" in table:
            try:
                raw_libraries: list[str] = _require_str_list(table, "repeatable_libraries", source)
                self.repeatable_libraries = [LibraryRequirement.parse(s) for s in raw_libraries]
            except ValueError as exc:
                raise ConfigError(f"{source}: {exc}") from exc
        if "modules" in table:
            raw_modules: Any = table["modules"]
            if not isinstance(raw_modules, list):
                raise ConfigError(f"{source}: 'modules' must be an array of tables")
            self.modules = [_module_from_table(t, base_dir, source) for t in raw_modules]
        logger.trace("Applied %s: %s", source, self)
        return self


def _require_str(table: TomlTable, key: str, source: str) -> str:
    value: Any = table[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source}: {key!r} must be a string, got {type(value).__name__}")
    return value


def _require_str_list(table: TomlTable, key: str, source: str) -> list[str]:
    value: Any = table[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{source}: {key!r} must be a list of strings")
    return list(value)


def _parse_level(value: Any, source: str) -> LanguageLevel:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise ConfigError(f"{source}: language level must be a string or integer, got {value!r}")
    try:
        return LanguageLevel.parse(value)
    except ValueError as exc:
        raise ConfigError(f"{source}: {exc}") from exc


def _module_from_table(table: Any, base_dir: Path | None, source: str) -> ModuleSpec:
    if not isinstance(table, dict):
        raise ConfigError(f"{source}: each 'modules' entry must be a table")
    for key in table:
        if key not in _KNOWN_MODULE_KEYS:
            logger.warning("%s: ignoring unknown module key %r", source, key)
    if "name" not in table or "language_level" not in table:
        raise ConfigError(f"{source}: module entries need 'name' and 'language_level'")
    libraries: list[str] = _require_str_list(table, "libraries", source) if "libraries" in table else []
    for coordinate in libraries:
        try:
            parse_libraries([coordinate])
        except ValueError as exc:
            raise ConfigError(f"{source}: {exc}") from exc
    roots: tuple[str, ...] = (
        tuple(_require_str_list(table, "source_roots", source)) if "source_roots" in table else ()
    )
    return ModuleSpec(
        name=_require_str(table, "name", source),
        language_level=_parse_level(table["language_level"], source),
        source_roots=roots,
        libraries=tuple(libraries),
        base_dir=base_dir,
    )
