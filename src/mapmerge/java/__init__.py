# topmark:header:start
#
#   project      : MapMerge
#   file         : __init__.py
#   file_relpath : src/mapmerge/java/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Syntactic helpers for Java source text.

Nothing in this package resolves types or builds a full AST. It knows just enough
Java lexical structure (comments, string/char literals, brackets, annotations,
imports, method headers) to read and splice annotation text safely.
"""
