# topmark:header:start
#
#   project      : MapMerge
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running MapMerge against files in a temporary directory.

Commands are invoked through `click.testing.CliRunner` with the working
directory set to ``tmp_path``, so relative file arguments and config discovery
only see files created by the test.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from mapmerge.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

CAR_MAPPER = """\
package com.acme;

import org.mapstruct.Mapper;
import org.mapstruct.Mapping;

@Mapper
public interface CarMapper {

    @Mapping(target = "seats", source = "seatCount")
    CarDto toDto(Car car);
}
"""


def run_cli_in(tmp_path: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (Sequence[str]): CLI argument vector, e.g. ``["add", "CarMapper.java", ...]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, list(argv))
    finally:
        os.chdir(cwd)


@pytest.fixture
def run_cli(tmp_path: Path) -> Callable[..., Result]:
    """Return a runner bound to the test's temporary directory."""

    def _run(*argv: str) -> Result:
        return run_cli_in(tmp_path, argv)

    return _run


@pytest.fixture
def mapper_file(tmp_path: Path) -> Path:
    """Write ``CarMapper.java`` (one method with one directive) into `tmp_path`."""
    path: Path = tmp_path / "CarMapper.java"
    path.write_text(CAR_MAPPER, encoding="utf-8")
    return path
