"""
toylang - Front End for a Small Imperative Teaching Language
============================================================

This package turns source text of a small imperative language into an
abstract syntax tree that a separate code generator can lower to an
executable form.

A program is a list of functions:

    FUNC main()
    {
        VAR i
        i := 0
        WHILE i < 3 DO
        {
            PRINT "i is ", i
            i := i + 1
        }
        DONE
        RETURN 0
    }

Main Components
---------------
- **frontend.lexer**: character stream to tokens
- **frontend.precedence**: binary operator ranks
- **frontend.parser**: recursive descent parser producing the AST
- **frontend.diagnostics**: error collection and reporting
- **frontend.compiler**: pipeline driver and options
- **cli**: the ``tlc`` command-line tool

Quick Start
-----------
    >>> from toylang import parse_source
    >>> program = parse_source("FUNC main() RETURN 1 + 2 * 3")
    >>> program.functions[0].name
    'main'

Or from the shell:
    $ tlc --ast program.toy
"""

__version__ = "1.0.0"
__author__ = "toylang contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from toylang.errors import ToyLangError, SourceLocation
from toylang.frontend import (
    FrontEnd,
    FrontEndOptions,
    FrontEndResult,
    compile_toy,
    parse_source,
)

__all__ = [
    "__version__",
    "ToyLangError",
    "SourceLocation",
    "FrontEnd",
    "FrontEndOptions",
    "FrontEndResult",
    "compile_toy",
    "parse_source",
]
