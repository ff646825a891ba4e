# topmark:header:start
#
#   project      : MapMerge
#   file         : errors.py
#   file_relpath : src/mapmerge/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the MapMerge CLI.

Usage:
    Commands raise these exceptions (or let `translate_errors` convert core
    exceptions into them) to exit with a standardized message and exit code.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from mapmerge.cli.exit_codes import ExitCode
from mapmerge.core.errors import (
    AnnotationSyntaxError,
    ConfigError,
    DocumentNotWritableError,
    InvariantViolationError,
    MethodNotFoundError,
    StructuralCorruptionError,
    TransactionError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


class MapmergeCliError(click.ClickException):
    """Base class for all MapMerge CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error in bright red on stderr."""
        click.secho(f"Error: {self.format_message()}", file=file, err=True, fg="bright_red")


class MapmergeUsageError(MapmergeCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class MapmergeDataError(MapmergeCliError):
    """Error for source files that cannot be merged into."""

    exit_code = ExitCode.DATA_ERROR


class MapmergeFileNotFoundError(MapmergeCliError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class MapmergeInternalError(MapmergeCliError):
    """Error for internal contract violations and aborted write actions."""

    exit_code = ExitCode.INTERNAL_ERROR


class MapmergeIOError(MapmergeCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class MapmergePermissionDeniedError(MapmergeCliError):
    """Error for read-only target files."""

    exit_code = ExitCode.PERMISSION_DENIED


class MapmergeConfigError(MapmergeCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


@contextmanager
def translate_errors() -> Iterator[None]:
    """Convert core and OS exceptions raised in the block into CLI errors."""
    try:
        yield
    except ConfigError as exc:
        raise MapmergeConfigError(str(exc)) from exc
    except AnnotationSyntaxError as exc:
        raise MapmergeUsageError(str(exc)) from exc
    except (MethodNotFoundError, StructuralCorruptionError) as exc:
        raise MapmergeDataError(str(exc)) from exc
    except DocumentNotWritableError as exc:
        raise MapmergePermissionDeniedError(str(exc)) from exc
    except (InvariantViolationError, TransactionError) as exc:
        raise MapmergeInternalError(str(exc)) from exc
    except UnicodeError as exc:
        raise MapmergeDataError(f"Cannot decode file: {exc}") from exc
    except FileNotFoundError as exc:
        raise MapmergeFileNotFoundError(str(exc)) from exc
    except PermissionError as exc:
        raise MapmergePermissionDeniedError(str(exc)) from exc
    except OSError as exc:
        raise MapmergeIOError(str(exc)) from exc
