# topmark:header:start
#
#   project      : MapMerge
#   file         : exit_codes.py
#   file_relpath : src/mapmerge/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the MapMerge CLI.

MapMerge aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. The one deliberate divergence is `WOULD_CHANGE=2`,
which signals a dry run where the merge would modify the file; Click usage errors also
exit with 2, so tests must assert `result.exception is None` to tell them apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the MapMerge CLI.

    Attributes:
        SUCCESS: The command succeeded; nothing (more) to change.
        FAILURE: Generic failure.
        WOULD_CHANGE: Dry run: the file would change if ``--apply`` were set.
        USAGE_ERROR: Invalid flags or arguments (e.g. a malformed ``--directive``).
            Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: The source file cannot be merged into: unknown method,
            corrupted container annotation, undecodable text. Mirrors BSD
            ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        INTERNAL_ERROR: An internal contract was violated or a write action was
            aborted. Mirrors BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: The target file is read-only. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Missing/invalid/malformed configuration. Mirrors BSD
            ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see class docstring

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    INTERNAL_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG
