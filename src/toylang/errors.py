"""
Toy Language Error Hierarchy
============================

This module defines the root of the exception hierarchy for the toylang
toolchain. All exceptions inherit from ToyLangError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
ToyLangError (base)
└── FrontEndError (see toylang.frontend.errors)
    ├── LexicalError
    ├── ParseError
    ├── ScopeError
    ├── PrecedenceError
    └── CompilationError

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class ToyLangError(Exception):
    """
    Base exception for all toylang errors.

        try:
            program = parse_source(text)
        except ToyLangError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
