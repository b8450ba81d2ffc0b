# =============================================================================
# test_cli.py - tlc Command-Line Tests
# =============================================================================
# Tests for the tlc command: options, output and exit codes.
# =============================================================================

from pathlib import Path

import pytest
from click.testing import CliRunner

from toylang import __version__
from toylang.cli.tlc import main
from toylang.cli.errors import ExitCode


GOOD_SOURCE = """
FUNC double(x) RETURN x + x
FUNC main() PRINT "twice: ", double(21)
"""

BAD_SOURCE = """
FUNC main() x = 1
"""


@pytest.fixture
def runner():
    return CliRunner()


def write_source(name: str, text: str) -> str:
    Path(name).write_text(text)
    return name


class TestHelpAndVersion:
    """Test informational options."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "INPUT_FILE" in result.output
        assert "--precedence" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestParsing:
    """Test parsing files with tlc."""

    def test_success(self, runner):
        with runner.isolated_filesystem():
            write_source("good.toy", GOOD_SOURCE)
            result = runner.invoke(main, ["good.toy"])
            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "Parsed 2 functions from good.toy" in result.output

    def test_parse_error(self, runner):
        with runner.isolated_filesystem():
            write_source("bad.toy", BAD_SOURCE)
            result = runner.invoke(main, ["bad.toy"])
            assert result.exit_code == ExitCode.PARSE_ERROR
            assert "bad.toy:2:15: error: need := in assignment statement" in result.output
            assert "1 error, 0 warnings" in result.output

    def test_invalid_utf8_is_parse_error(self, runner):
        with runner.isolated_filesystem():
            Path("bad.toy").write_bytes(b"FUNC f() RETURN \xff\nFUNC g() RETURN 1\n")
            result = runner.invoke(main, ["bad.toy"])
            assert result.exit_code == ExitCode.PARSE_ERROR
            assert "bad.toy:1:17: error: unknown token when expecting an expression" in result.output
            assert "Internal error" not in result.output

    def test_unterminated_text_reported_with_other_errors(self, runner):
        with runner.isolated_filesystem():
            write_source("bad.toy", 'FUNC f() RETURN 1\nFUNC ( "oops')
            result = runner.invoke(main, ["bad.toy"])
            assert result.exit_code == ExitCode.PARSE_ERROR
            assert "Expected function name in prototype" in result.output
            assert "unterminated text literal" in result.output
            assert "2 errors, 0 warnings" in result.output

    def test_missing_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["missing.toy"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_stdin(self, runner):
        result = runner.invoke(main, ["-"], input=GOOD_SOURCE)
        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "Parsed 2 functions from <stdin>" in result.output

    def test_stdin_error_location(self, runner):
        result = runner.invoke(main, ["-"], input=BAD_SOURCE)
        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "<stdin>:2:15" in result.output

    def test_verbose(self, runner):
        with runner.isolated_filesystem():
            write_source("good.toy", GOOD_SOURCE)
            result = runner.invoke(main, ["-v", "good.toy"])
            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "Parsing good.toy..." in result.output


class TestDumps:
    """Test --ast and --emit-source."""

    def test_ast(self, runner):
        with runner.isolated_filesystem():
            write_source("good.toy", GOOD_SOURCE)
            result = runner.invoke(main, ["--ast", "good.toy"])
            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "Function: double(x)" in result.output
            assert "Return (x + x)" in result.output
            assert "Parsed" not in result.output

    def test_emit_source(self, runner):
        with runner.isolated_filesystem():
            write_source("good.toy", GOOD_SOURCE)
            result = runner.invoke(main, ["--emit-source", "good.toy"])
            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert 'PRINT "twice: ", double(21)' in result.output

    def test_ast_of_partial_program(self, runner):
        """Functions that parsed are dumped even when others failed."""
        with runner.isolated_filesystem():
            write_source("mixed.toy", "FUNC ok() RETURN 1\n" + BAD_SOURCE)
            result = runner.invoke(main, ["--ast", "mixed.toy"])
            assert result.exit_code == ExitCode.PARSE_ERROR
            assert "Function: ok()" in result.output


class TestOptions:
    """Test parser configuration options."""

    def test_precedence_option(self, runner):
        with runner.isolated_filesystem():
            write_source("p.toy", "FUNC f(a, b, c) RETURN a + b * c")
            result = runner.invoke(main, ["--emit-source", "-P", "+=50", "p.toy"])
            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "RETURN ((a + b) * c)" in result.output

    def test_disable_operator(self, runner):
        with runner.isolated_filesystem():
            write_source("p.toy", "FUNC f(a, b) RETURN a % b")
            result = runner.invoke(main, ["-P", "%=0", "p.toy"])
            assert result.exit_code == ExitCode.PARSE_ERROR

    def test_bad_precedence_entry(self, runner):
        with runner.isolated_filesystem():
            write_source("p.toy", GOOD_SOURCE)
            result = runner.invoke(main, ["-P", "nonsense", "p.toy"])
            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "expected OP=RANK" in result.output

    def test_max_errors(self, runner):
        with runner.isolated_filesystem():
            write_source("junk.toy", "a b c d e")
            result = runner.invoke(main, ["--max-errors", "2", "junk.toy"])
            assert result.exit_code == ExitCode.PARSE_ERROR
            assert "2 errors, 1 warning" in result.output

    def test_max_errors_must_be_positive(self, runner):
        with runner.isolated_filesystem():
            write_source("p.toy", GOOD_SOURCE)
            result = runner.invoke(main, ["--max-errors", "0", "p.toy"])
            assert result.exit_code == 2
