# topmark:header:start
#
#   project      : MapMerge
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the mutable/frozen configuration model."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any

import pytest

from mapmerge.config.model import Config, ModuleSpec, MutableConfig
from mapmerge.core.errors import ConfigError
from mapmerge.host.modules import LibraryRequirement
from mapmerge.java.levels import LanguageLevel


def test_defaults() -> None:
    config: Config = MutableConfig.from_defaults().freeze()
    assert config.directive_fqn == "org.mapstruct.Mapping"
    assert config.container_fqn == "org.mapstruct.Mappings"
    assert config.known_annotations == ("org.mapstruct.Mapping", "org.mapstruct.Mappings")
    assert config.repeatable_since is LanguageLevel.JDK_1_8
    assert [str(r) for r in config.repeatable_libraries] == [
        "org.mapstruct:mapstruct-jdk8",
        "org.mapstruct:mapstruct>=1.3",
    ]
    assert config.indent == "    "
    assert config.modules == ()
    assert config.default_module is None


def test_frozen_config_is_an_independent_snapshot() -> None:
    draft: MutableConfig = MutableConfig.from_defaults()
    config: Config = draft.freeze()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.indent = "\t"  # type: ignore[misc]

    draft.indent = "\t"
    draft.modules.append(ModuleSpec(name="late", language_level=LanguageLevel.JDK_11))
    assert config.indent == "    "
    assert config.modules == ()
    assert draft.freeze().indent == "\t"


def test_apply_toml_table_overrides_known_keys() -> None:
    draft = MutableConfig.from_defaults().apply_toml_table(
        {
            "directive_fqn": "com.example.Rule",
            "container_fqn": "com.example.Rules",
            "repeatable_since": 11,
            "repeatable_libraries": ["com.example:rules>=2.0"],
        }
    )
    assert draft.directive_fqn == "com.example.Rule"
    assert draft.container_fqn == "com.example.Rules"
    assert draft.repeatable_since is LanguageLevel.JDK_11
    assert draft.repeatable_libraries == [LibraryRequirement.parse("com.example:rules>=2.0")]


def test_unknown_keys_are_ignored_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    draft = MutableConfig.from_defaults().apply_toml_table(
        {"indnet": "  ", "modules": [{"name": "m", "language_level": "1.8", "jdk": "x"}]}, source="cfg"
    )
    assert draft.indent == "    "
    assert "ignoring unknown key 'indnet'" in caplog.text
    assert "ignoring unknown module key 'jdk'" in caplog.text


@pytest.mark.parametrize(
    ("table", "message"),
    [
        ({"indent": 4}, "'indent' must be a string"),
        ({"repeatable_since": True}, "language level must be"),
        ({"repeatable_since": "eight"}, "Not a Java language level"),
        ({"repeatable_libraries": "org.mapstruct:mapstruct"}, "must be a list of strings"),
        ({"modules": {"name": "m"}}, "must be an array of tables"),
        ({"modules": ["m"]}, "must be a table"),
        ({"modules": [{"name": "m"}]}, "need 'name' and 'language_level'"),
        ({"modules": [{"name": "m", "language_level": "1.8", "source_roots": "src"}]}, "list of strings"),
    ],
)
def test_invalid_values_raise_config_error(table: dict[str, Any], message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        MutableConfig.from_defaults().apply_toml_table(table, source="cfg")


def test_module_spec_resolves_relative_roots(tmp_path: Path) -> None:
    base: Path = tmp_path.resolve()
    spec = ModuleSpec(
        name="core",
        language_level=LanguageLevel.JDK_1_8,
        source_roots=("src/main/java",),
        libraries=("org.mapstruct:mapstruct-jdk8:1.2.0.Final",),
        base_dir=base,
    )
    module = spec.to_module()
    assert module.source_roots == (base / "src" / "main" / "java",)
    assert module.has_library("org.mapstruct:mapstruct-jdk8")

