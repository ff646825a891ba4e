# topmark:header:start
#
#   project      : MapMerge
#   file         : __init__.py
#   file_relpath : src/mapmerge/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MapMerge package.

MapMerge attaches mapping directive annotations (``@Mapping``) to Java method
declarations, merging them with directives already present. It decides between
repeated standalone annotations and a ``@Mappings({...})`` container from the
owning module's language level and classpath, and commits the edit as one
undoable transaction.
"""

from __future__ import annotations
