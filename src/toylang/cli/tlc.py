"""
tlc - Toy Language Front End Command-Line Interface
===================================================

This module implements the command-line interface for the front end.
It parses a source file, reports diagnostics, and can dump the AST or
re-render it as source.

Usage Examples
--------------
Check a file:
    $ tlc program.toy

Dump the AST:
    $ tlc --ast program.toy

Read from standard input:
    $ cat program.toy | tlc -

Change operator ranks:
    $ tlc -P '^=50' -P '<=0' program.toy
"""

import logging
import sys
from pathlib import Path

import click

from toylang import __version__
from toylang.frontend import FrontEnd, FrontEndOptions, PrecedenceTable
from toylang.frontend.ast import ASTPrinter, SourcePrinter
from toylang.cli.errors import ExitCode, handle_cli_exception


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(name)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the AST of the functions that parsed",
)
@click.option(
    "--emit-source",
    is_flag=True,
    help="Print the parsed program re-rendered as source",
)
@click.option(
    "-P", "--precedence",
    "precedence_entries",
    multiple=True,
    metavar="OP=RANK",
    help="Set the rank of a binary operator (can be repeated, rank 0 disables)",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Stop after this many errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="tlc")
def main(
    input_file: Path,
    ast: bool,
    emit_source: bool,
    precedence_entries: tuple[str, ...],
    max_errors: int,
    verbose: bool,
) -> None:
    """
    Parse a toy language program.

    INPUT_FILE is the source file to parse, or '-' for standard input.

    \b
    Examples:
        tlc program.toy              # Check for errors
        tlc --ast program.toy        # Dump the syntax tree
        tlc --emit-source prog.toy   # Print normalized source
        tlc -P '%=0' prog.toy        # Disable the % operator
    """
    setup_logging(verbose)

    try:
        table = PrecedenceTable.from_strings(precedence_entries)
        options = FrontEndOptions(
            precedence=table.ranks,
            max_errors=max_errors,
            strict=False,
        )
        front_end = FrontEnd(options)

        if str(input_file) == "-":
            result = front_end.compile_source(
                click.get_text_stream("stdin", errors="replace"), "<stdin>"
            )
        else:
            if verbose:
                click.echo(f"Parsing {input_file}...")
            result = front_end.compile_file(input_file)

        if ast:
            click.echo(ASTPrinter().print(result.program))
        elif emit_source:
            click.echo(SourcePrinter().print(result.program))

        if not result.success:
            click.echo(front_end.report(), err=True)
            sys.exit(ExitCode.PARSE_ERROR)

        if verbose or not (ast or emit_source):
            click.echo(f"Parsed {result.function_count} functions from {result.filename}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
