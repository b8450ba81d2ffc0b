"""
Front End Error Hierarchy
=========================

This module defines the exception hierarchy for the toylang front end.
All exceptions inherit from FrontEndError, which itself inherits from
the base ToyLangError.

Exception Hierarchy
-------------------
FrontEndError (base for all front end errors)
├── LexicalError - malformed characters in the source
│   └── UnterminatedTextError - missing closing quote
├── ParseError - grammar errors
│   ├── UnexpectedTokenError - token does not fit the grammar
│   └── MissingTokenError - a required token is absent
├── ScopeError - declaration in the wrong place
│   └── MisplacedDeclarationError - VAR not leading its block
├── PrecedenceError - invalid operator precedence table
└── CompilationError - aggregate report of several errors

Error Message Format
--------------------
    prog.toy:5:12: error: expected THEN
        IF a > b RETURN a
                 ^
    hint: an IF condition must be followed by THEN
"""

from typing import Optional

from toylang.errors import ToyLangError, SourceLocation


# =============================================================================
# Base Front End Exception
# =============================================================================

class FrontEndError(ToyLangError):
    """
    Base exception for all front end errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            prog.toy:3:9: error: need := in assignment statement
                x = 1
                  ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def with_source_line(self, source_line: Optional[str]) -> "FrontEndError":
        """Attach the offending source line after the fact and re-render."""
        if source_line is None or self.source_line is not None:
            return self
        self.source_line = source_line
        self.args = (self._format_message(),)
        return self


class CompilationError(FrontEndError):
    """
    Aggregate error containing every diagnostic of a parse run.

    The message is already a formatted report from DiagnosticReporter
    and is passed through unchanged.
    """

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(FrontEndError):
    """
    Characters that cannot be turned into a token.
    """
    pass


class UnterminatedTextError(LexicalError):
    """
    Quoted text with no closing quote before end of input.

    Example:
        PRINT "value is , x
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated text literal",
            location=location,
            hint="add closing '\"' to complete the text",
            source_line=source_line,
        )


# =============================================================================
# Grammar Errors
# =============================================================================

class ParseError(FrontEndError):
    """
    Grammar error: the token stream does not match the language grammar.

    Examples:
        - missing ')' in a call
        - missing THEN after an IF condition
        - missing := in an assignment
    """
    pass


class UnexpectedTokenError(ParseError):
    """
    A token appeared where the grammar allows no such token.
    """

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = f"expected {expected}" if expected else None

        super().__init__(
            message or f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(ParseError):
    """
    A required token (like ')' or DONE) is not where it must be.
    """

    def __init__(
        self,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        message: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        super().__init__(
            message or f"expected {expected}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Scope Errors
# =============================================================================

class ScopeError(FrontEndError):
    """
    Syntactically valid code that violates the block scoping rules.
    """
    pass


class MisplacedDeclarationError(ScopeError):
    """
    VAR declaration anywhere other than the start of a block.

    Example:
        {
            x := 1
            VAR y      // declarations must come first
        }
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "Can't declare VAR here!",
            location=location,
            hint="a block may declare variables once, as its first statement",
            source_line=source_line,
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class PrecedenceError(FrontEndError):
    """
    Invalid operator precedence table entry.
    """
    pass
