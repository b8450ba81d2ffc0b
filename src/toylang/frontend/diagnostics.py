"""
Diagnostic Reporter
===================

Every parse function signals failure by raising. The program assembler
catches the error at the function level and hands it to a
DiagnosticReporter, then keeps parsing; the reporter decides when enough
is enough and renders everything at the end.

Example:
    reporter = DiagnosticReporter(max_errors=100)
    program = Parser(Lexer(source), reporter=reporter).parse()

    if reporter.has_errors():
        print(reporter.report())
"""

import logging
from typing import Optional

from toylang.errors import SourceLocation
from toylang.frontend.errors import FrontEndError, CompilationError

logger = logging.getLogger(__name__)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class DiagnosticReporter:
    """
    Diagnostics of one parse run, in the order they were reported.

    Attributes:
        errors: Reported FrontEndError instances
        warnings: Rendered warning lines
        max_errors: Error count at which the parse should give up
            (None for no limit)
    """

    def __init__(self, max_errors: Optional[int] = 100):
        self.errors: list[FrontEndError] = []
        self.warnings: list[str] = []
        self.max_errors = max_errors

    def add(self, error: FrontEndError) -> None:
        self.errors.append(error)
        logger.debug(f"reported {error.location or '<input>'}: {error.message}")

    def add_warning(self, message: str, location: Optional[SourceLocation] = None) -> None:
        prefix = f"{location}: " if location else ""
        self.warnings.append(f"{prefix}warning: {message}")
        logger.debug(f"warning: {message}")

    def has_errors(self) -> bool:
        return bool(self.errors)

    def should_stop(self) -> bool:
        """True once max_errors errors have been reported."""
        if self.max_errors is None:
            return False
        return len(self.errors) >= self.max_errors

    def error_count(self) -> int:
        return len(self.errors)

    def warning_count(self) -> int:
        return len(self.warnings)

    def messages(self) -> list[str]:
        """Bare message of each error, without location or context."""
        return [error.message for error in self.errors]

    def summary(self) -> str:
        """Count line such as '2 errors, 1 warning'."""
        return f"{_plural(self.error_count(), 'error')}, {_plural(self.warning_count(), 'warning')}"

    def report(self) -> str:
        """
        Render every diagnostic followed by the summary line.

        Each error is followed by a blank line; warnings come after all
        errors.
        """
        blocks = [f"{error}\n" for error in self.errors]
        blocks.extend(self.warnings)
        blocks.append(f"\n{self.summary()}")
        return "\n".join(blocks)

    def clear(self) -> None:
        self.errors.clear()
        self.warnings.clear()

    def raise_if_errors(self) -> None:
        """
        Raises:
            CompilationError: Holding the full report, if any error was reported
        """
        if self.errors:
            raise CompilationError(self.report())
