"""LIRS Language Server package.

This package provides:
- A pygls-based Language Server for LIRS source files.
- A lightweight indexer that scans documents for top-level definitions and
  reports reader errors without evaluation.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
]
