"""
toylang Command-Line Interface
==============================

This package provides the command-line tools for toylang:

- **tlc**: parse a source file and report or dump the result

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["tlc"]
