# topmark:header:start
#
#   project      : MapMerge
#   file         : test_check.py
#   file_relpath : tests/cli/test_check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `mapmerge check`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mapmerge.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from click.testing import Result

pytestmark = pytest.mark.cli


def test_check_legacy_module(run_cli: Callable[..., Result], mapper_file: Path) -> None:
    before: str = mapper_file.read_text(encoding="utf-8")
    result = run_cli("check", "CarMapper.java", "--method", "toDto", "--language-level", "1.7")

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert result.output.splitlines() == [
        "CarMapper.java: toDto",
        "  module     : <command line> (level 1.7)",
        "  repeatable : no",
        "  directives : 1 attached",
        "  decision   : create a new container holding the existing directive",
    ]
    assert mapper_file.read_text(encoding="utf-8") == before


def test_check_repeatable_module(run_cli: Callable[..., Result], mapper_file: Path) -> None:
    result = run_cli(
        "check",
        "CarMapper.java",
        "--method",
        "toDto",
        "--language-level",
        "21",
        "--library",
        "org.mapstruct:mapstruct:1.6.3",
    )
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "  module     : <command line> (level 21)" in result.output
    assert "  repeatable : yes" in result.output
    assert "  decision   : attach standalone (repeatable form)" in result.output


def test_check_without_module(run_cli: Callable[..., Result], mapper_file: Path) -> None:
    result = run_cli("check", "CarMapper.java", "--method", "toDto")
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "  module     : (none)" in result.output
    assert "  repeatable : no" in result.output


def test_check_existing_container(run_cli: Callable[..., Result], tmp_path: Path) -> None:
    (tmp_path / "CarMapper.java").write_text(
        "import org.mapstruct.Mapping;\nimport org.mapstruct.Mappings;\n\ninterface CarMapper {\n"
        '    @Mappings(@Mapping(target = "a"))\n    CarDto toDto(Car car);\n}\n',
        encoding="utf-8",
    )
    result = run_cli("check", "CarMapper.java", "--method", "toDto")
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "  decision   : append to existing @Mappings (single form)" in result.output


def test_check_counts_directives_not_other_annotations(
    run_cli: Callable[..., Result], tmp_path: Path
) -> None:
    (tmp_path / "CarMapper.java").write_text(
        "import org.mapstruct.Mapping;\nimport org.mapstruct.Mappings;\n\nabstract class CarMapper {\n"
        '    @Override\n    @Mappings({ @Mapping(target = "a"), @Mapping(target = "b") })\n'
        "    public abstract CarDto toDto(Car car);\n}\n",
        encoding="utf-8",
    )
    result = run_cli("check", "CarMapper.java", "--method", "toDto")
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "  directives : 2 attached" in result.output


def test_check_several_loose_directives(run_cli: Callable[..., Result], tmp_path: Path) -> None:
    (tmp_path / "CarMapper.java").write_text(
        "import org.mapstruct.Mapping;\n\ninterface CarMapper {\n"
        '    @Mapping(target = "a")\n    @Mapping(target = "b")\n    CarDto toDto(Car car);\n}\n',
        encoding="utf-8",
    )
    result = run_cli("check", "CarMapper.java", "--method", "toDto", "--language-level", "1.7")
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert "  directives : 2 attached" in result.output
    assert "  decision   : create a new container holding the 2 existing directives" in result.output


def test_check_missing_file_is_a_click_usage_error(run_cli: Callable[..., Result]) -> None:
    result = run_cli("check", "Missing.java", "--method", "toDto")
    assert result.exit_code == 2
    assert "does not exist" in result.output
