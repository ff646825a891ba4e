# topmark:header:start
#
#   project      : MapMerge
#   file         : __init__.py
#   file_relpath : src/mapmerge/merge/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Directive merging core.

Steps, each in its own module:

- ``capability``: may the directive be repeated as standalone annotations?
- ``lookup``: find the existing container or synthesize one in memory.
- ``synthesis``: compute the merged annotation text (pure).
- ``merger``: commit the result in one write action.
"""
