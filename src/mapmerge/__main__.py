# topmark:header:start
#
#   project      : MapMerge
#   file         : __main__.py
#   file_relpath : src/mapmerge/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running MapMerge via ``python -m mapmerge``.

Equivalent to running the ``mapmerge`` console script.
"""

from __future__ import annotations

from mapmerge.cli.main import cli

if __name__ == "__main__":
    cli()
