# topmark:header:start
#
#   project      : MapMerge
#   file         : __init__.py
#   file_relpath : src/mapmerge/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic building blocks shared across MapMerge."""
