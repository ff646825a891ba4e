# topmark:header:start
#
#   project      : MapMerge
#   file         : __init__.py
#   file_relpath : src/mapmerge/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for MapMerge.

Import the model classes from ``mapmerge.config.model`` and the loaders from
``mapmerge.config.io``; this package module stays import-light so that
``mapmerge.config.logging`` can be used from anywhere without cycles.
"""
