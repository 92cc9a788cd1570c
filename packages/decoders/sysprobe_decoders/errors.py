"""Error types for kernel data that breaks its documented layout."""

from __future__ import annotations


class MalformedSourceError(ValueError):
    """Raised when kernel-provided data does not fit the fixed layout it is parsed with."""


class FibTrieFormatError(MalformedSourceError):
    """Raised when /proc/net/fib_trie has a line shape the scanner does not know."""
