# =============================================================================
# test_diagnostics.py - Diagnostic Reporter Tests
# =============================================================================
# Tests for error collection, the error limit and report formatting.
# =============================================================================

import pytest
from toylang.errors import SourceLocation
from toylang.frontend.diagnostics import DiagnosticReporter
from toylang.frontend.errors import ParseError, CompilationError, FrontEndError


def make_error(message="bad thing", line=1, column=2, **kwargs):
    return ParseError(message, SourceLocation("a.toy", line, column), **kwargs)


class TestCollection:
    """Test adding and counting diagnostics."""

    def test_empty(self):
        reporter = DiagnosticReporter()
        assert not reporter.has_errors()
        assert reporter.error_count() == 0
        assert reporter.warning_count() == 0

    def test_errors_kept_in_order(self):
        reporter = DiagnosticReporter()
        reporter.add(make_error("first"))
        reporter.add(make_error("second"))
        assert reporter.messages() == ["first", "second"]
        assert reporter.has_errors()

    def test_warning_with_location(self):
        reporter = DiagnosticReporter()
        reporter.add_warning("careful", SourceLocation("a.toy", 3, 4))
        assert reporter.warnings == ["a.toy:3:4: warning: careful"]

    def test_warning_without_location(self):
        reporter = DiagnosticReporter()
        reporter.add_warning("careful")
        assert reporter.warnings == ["warning: careful"]
        assert not reporter.has_errors()

    def test_clear(self):
        reporter = DiagnosticReporter()
        reporter.add(make_error())
        reporter.add_warning("w")
        reporter.clear()
        assert reporter.error_count() == 0
        assert reporter.warning_count() == 0

    def test_add_logs_at_debug(self, caplog):
        caplog.set_level("DEBUG", logger="toylang.frontend.diagnostics")
        DiagnosticReporter().add(make_error("oops"))
        assert "a.toy:1:2: oops" in caplog.text


class TestErrorLimit:
    """Test the max_errors threshold."""

    def test_should_stop_at_limit(self):
        reporter = DiagnosticReporter(max_errors=2)
        reporter.add(make_error())
        assert not reporter.should_stop()
        reporter.add(make_error())
        assert reporter.should_stop()

    def test_no_limit(self):
        reporter = DiagnosticReporter(max_errors=None)
        for _ in range(1000):
            reporter.add(make_error())
        assert not reporter.should_stop()


class TestReport:
    """Test report formatting."""

    def test_single_error(self):
        reporter = DiagnosticReporter()
        reporter.add(make_error())
        assert reporter.report() == "a.toy:1:2: error: bad thing\n\n\n1 error, 0 warnings"

    def test_counts_are_pluralized(self):
        reporter = DiagnosticReporter()
        reporter.add(make_error())
        reporter.add(make_error())
        reporter.add_warning("w")
        assert reporter.report().endswith("2 errors, 1 warning")

    def test_empty_report(self):
        assert DiagnosticReporter().report().endswith("0 errors, 0 warnings")

    def test_report_includes_source_context(self):
        reporter = DiagnosticReporter()
        reporter.add(make_error(column=3, source_line="x = 1", hint="use :="))
        report = reporter.report()
        assert "    x = 1\n      ^\nhint: use :=" in report

    def test_raise_if_errors(self):
        reporter = DiagnosticReporter()
        reporter.raise_if_errors()
        reporter.add(make_error())
        with pytest.raises(CompilationError) as exc_info:
            reporter.raise_if_errors()
        assert str(exc_info.value) == reporter.report()


class TestFrontEndError:
    """Test error rendering."""

    def test_without_location(self):
        assert str(FrontEndError("broken")) == "error: broken"

    def test_with_source_line_rerenders(self):
        error = make_error("bad", column=1)
        error.with_source_line("abc")
        assert str(error).splitlines() == ["a.toy:1:1: error: bad", "    abc", "    ^"]

    def test_with_source_line_keeps_existing(self):
        error = make_error(source_line="first")
        error.with_source_line("second")
        assert error.source_line == "first"
