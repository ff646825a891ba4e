# topmark:header:start
#
#   project      : MapMerge
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the MapMerge test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split: build a
    `mapmerge.config.model.MutableConfig`, then `freeze()` it into a `Config`.
    Do **not** mutate a frozen `Config`; build a new draft instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from mapmerge.config import logging
from mapmerge.config.model import ModuleSpec, MutableConfig
from mapmerge.host.document import SourceDocument
from mapmerge.java.levels import LanguageLevel
from mapmerge.java.methods import JavaMethodLocator

if TYPE_CHECKING:
    from collections.abc import Callable

    from mapmerge.config.model import Config
    from mapmerge.java.methods import MappingMethod


@pytest.fixture(autouse=True)
def silence_mapmerge_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure MapMerge's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("MAPMERGE_LOG_LEVEL", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    This function sets the logging level to TRACE for all tests,
    ensuring detailed output is captured during test execution.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_mutable_config(
    language_level: str | None = None,
    libraries: tuple[str, ...] = (),
    **overrides: Any,
) -> MutableConfig:
    """Return a mutable config whose default module owns every file.

    Args:
        language_level (str | None): Level of the default module; no module at
            all when ``None``.
        libraries (tuple[str, ...]): Library coordinates of the default module.
        **overrides (Any): Attributes set verbatim on the draft.

    Returns:
        MutableConfig: The draft.
    """

    m: MutableConfig = MutableConfig.from_defaults()
    if language_level is not None:
        m.default_module = ModuleSpec(
            name="test", language_level=LanguageLevel.parse(language_level), libraries=libraries
        )
    for k, v in overrides.items():
        setattr(m, k, v)
    return m


def make_config(
    language_level: str | None = None, libraries: tuple[str, ...] = (), **overrides: Any
) -> Config:
    """Frozen variant of `make_mutable_config`."""
    return make_mutable_config(language_level, libraries, **overrides).freeze()


@pytest.fixture
def config_factory() -> Callable[..., Config]:
    """Return `make_config` for tests that need several configurations."""
    return make_config


@pytest.fixture
def method_factory() -> Callable[..., MappingMethod]:
    """Return a helper building a `MappingMethod` from Java source text."""

    def _make(text: str, name: str = "toDto", *, ordinal: int = 0, writable: bool = True) -> MappingMethod:
        document: SourceDocument = SourceDocument.from_text(text, writable=writable)
        locator = JavaMethodLocator(("org.mapstruct.Mapping", "org.mapstruct.Mappings"))
        return locator.find_method(document, name, ordinal)

    return _make
