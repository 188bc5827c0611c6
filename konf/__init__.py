"""
.. include:: ../README.md
"""

__all__ = [
    "activation",
    "config",
    "exceptions",
    "filesystem",
    "manifest",
    "search",
    "store",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
