# topmark:header:start
#
#   project      : MapMerge
#   file         : __init__.py
#   file_relpath : src/mapmerge/host/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Collaborators the merge core calls into.

``protocols`` defines the narrow interfaces; the other modules are reference
implementations over plain text documents and a TOML-described project layout.
"""
