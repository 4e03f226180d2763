"""Tests for error handling."""

import logging

import pytest

from blast_report.error_handler import (
    BlastReportError, ErrorHandler, ErrorSeverity, ErrorType, InvalidSearchError,
    ReportInputError, UpstreamRunError
)


class TestErrorHandler:
    """Test cases for error handler."""

    @pytest.fixture
    def handler(self):
        """Create error handler for testing."""
        return ErrorHandler(logging.getLogger("blast_report.test"))

    def test_error_classification(self, handler):
        """Test error type classification."""
        assert handler._classify_error(UpstreamRunError(400, "bad option")) == ErrorType.UPSTREAM_FAILURE
        assert handler._classify_error(ReportInputError("Cannot read x")) == ErrorType.FILE_IO_ERROR
        assert handler._classify_error(FileNotFoundError("missing")) == ErrorType.FILE_IO_ERROR
        assert handler._classify_error(InvalidSearchError("Unknown BLAST method: rm.")) == ErrorType.INVALID_SEARCH
        assert handler._classify_error(ValueError("malformed report")) == ErrorType.UNKNOWN
        assert handler._classify_error(Exception("Something went wrong")) == ErrorType.UNKNOWN

    def test_severity_determination(self, handler):
        """Test severity determination."""
        assert handler._determine_severity(ErrorType.INVALID_SEARCH) == ErrorSeverity.WARNING
        assert handler._determine_severity(ErrorType.FILE_IO_ERROR) == ErrorSeverity.ERROR
        assert handler._determine_severity(ErrorType.UNKNOWN) == ErrorSeverity.CRITICAL

    def test_handle_error(self, handler, caplog):
        """Test error handling records and logs the error."""
        with caplog.at_level(logging.INFO, logger="blast_report.test"):
            context = handler.handle_error(
                ReportInputError("Cannot read report.html"), "render", item_id="report.html"
            )

        assert context.error_type == ErrorType.FILE_IO_ERROR
        assert context.severity == ErrorSeverity.ERROR
        assert context.operation == "render"
        assert context.item_id == "report.html"
        assert context.suggestion
        assert handler.error_history == [context]
        assert "render - file_io_error: Cannot read report.html (item: report.html)" in caplog.text
        assert "Suggestion:" in caplog.text

    def test_error_summary(self, handler):
        """Test error summary generation."""
        handler.handle_error(UpstreamRunError(500, "crashed"), "search")
        handler.handle_error(FileNotFoundError("missing"), "render")
        handler.handle_error(OSError("disk"), "render")

        summary = handler.get_error_summary()

        assert summary['total_errors'] == 3
        assert summary['by_type'] == {'upstream_failure': 1, 'file_io_error': 2}
        assert summary['by_severity'] == {'error': 3}

    def test_exception_hierarchy(self):
        """Test tool errors share a base class."""
        assert issubclass(UpstreamRunError, BlastReportError)
        assert issubclass(ReportInputError, BlastReportError)
        assert issubclass(InvalidSearchError, ValueError)
        assert str(UpstreamRunError(400, "No BLAST method provided.")) == \
            "BLAST run failed (400): No BLAST method provided."
