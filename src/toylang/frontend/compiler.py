"""
Front End Driver
================

This module provides the main interface to the front end. It runs the
pipeline

    Source → Lex → Parse → AST → (optional) Code Generator

and gathers the results and diagnostics of one run.

Usage
-----
Command line:
    $ tlc program.toy --ast

Programmatic:
    >>> from toylang.frontend import compile_toy
    >>> program = compile_toy('FUNC main() RETURN 0')

Error Handling
--------------
The parser keeps going after a bad function, so one run can report many
errors. In strict mode (the default) a run with any error raises a
CompilationError holding the full report; otherwise the result carries
the functions that did parse alongside the errors.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, TextIO, Union

from toylang.errors import SourceLocation
from toylang.frontend.ast import ProgramNode
from toylang.frontend.codegen import CodeGenerator
from toylang.frontend.diagnostics import DiagnosticReporter
from toylang.frontend.errors import FrontEndError, CompilationError
from toylang.frontend.lexer import Lexer
from toylang.frontend.parser import Parser
from toylang.frontend.precedence import DEFAULT_PRECEDENCE, PrecedenceTable

logger = logging.getLogger(__name__)


@dataclass
class FrontEndOptions:
    """
    Front end configuration options.

    Attributes:
        precedence: Binary operator ranks (single character -> rank)
        max_errors: Errors after which parsing stops (None for no limit)
        strict: Raise CompilationError if any error was reported
    """
    precedence: Optional[Mapping[str, int]] = None
    max_errors: Optional[int] = 100
    strict: bool = True

    def __post_init__(self):
        if self.precedence is None:
            self.precedence = DEFAULT_PRECEDENCE


@dataclass
class FrontEndResult:
    """
    Result of one front end run.

    Attributes:
        filename: Source filename
        program: Functions that parsed, in order
        errors: Every error reported during the run
        warnings: Warning lines reported during the run
        success: True if no error was reported
    """
    filename: str
    program: Optional[ProgramNode] = None
    errors: list[FrontEndError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    success: bool = False

    @property
    def function_count(self) -> int:
        return len(self.program.functions) if self.program else 0


class FrontEnd:
    """
    Toy language front end.

    Example:
        front_end = FrontEnd(FrontEndOptions(strict=False))
        result = front_end.compile_file("program.toy")
        for error in result.errors:
            print(error)

    Attributes:
        options: Front end configuration options
    """

    def __init__(self, options: Optional[FrontEndOptions] = None):
        self.options = options or FrontEndOptions()
        self._precedence = PrecedenceTable(self.options.precedence)
        self._reporter = DiagnosticReporter(max_errors=self.options.max_errors)

    def compile_source(
        self,
        source: Union[str, TextIO],
        filename: str = "<input>",
        generator: Optional[CodeGenerator] = None,
    ) -> FrontEndResult:
        """
        Parse source text or a text stream.

        Args:
            source: Source string or readable text stream
            filename: Source filename for error messages
            generator: Receives each function as soon as it parses

        Raises:
            CompilationError: In strict mode, if any error was reported
        """
        self._reporter.clear()
        result = FrontEndResult(filename=filename)

        parser = Parser(Lexer(source, filename), self._precedence, self._reporter)
        functions = []
        for function in parser.iter_functions():
            functions.append(function)
            if generator is not None:
                generator.generate_function(function)

        result.program = ProgramNode(location=SourceLocation(filename, 1, 1), functions=functions)
        if generator is not None:
            generator.finish_program(result.program)

        result.errors = list(self._reporter.errors)
        result.warnings = list(self._reporter.warnings)
        result.success = not self._reporter.has_errors()

        logger.info(
            f"{filename}: {result.function_count} functions, "
            f"{len(result.errors)} errors"
        )

        if self.options.strict and not result.success:
            raise CompilationError(self._reporter.report())

        return result

    def compile_file(
        self,
        filepath: Union[str, Path],
        generator: Optional[CodeGenerator] = None,
    ) -> FrontEndResult:
        """
        Parse a source file.

        Raises:
            CompilationError: In strict mode, if any error was reported
            FileNotFoundError: If the source file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        # Undecodable bytes become U+FFFD and reach the parser as ERROR tokens
        with path.open(encoding="utf-8", errors="replace") as stream:
            return self.compile_source(stream, str(path), generator)

    def report(self) -> str:
        """Formatted diagnostics of the last run."""
        return self._reporter.report()


def compile_toy(
    source: str,
    filename: str = "<input>",
    **options,
) -> ProgramNode:
    """
    Parse source with the given FrontEndOptions fields and return the program.

    Raises:
        CompilationError: In strict mode, if any error was reported
    """
    front_end = FrontEnd(FrontEndOptions(**options))
    return front_end.compile_source(source, filename).program
