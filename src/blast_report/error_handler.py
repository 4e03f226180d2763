"""Error types and handling for the BLAST report tool."""

import logging
import time
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class BlastReportError(Exception):
    """Base class for errors raised by the BLAST report tool."""


class UpstreamRunError(BlastReportError):
    """The aligner reported a failed run."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"BLAST run failed ({self.status}): {self.message}"


class ReportInputError(BlastReportError):
    """A report or query file could not be read."""


class InvalidSearchError(BlastReportError, ValueError):
    """The search parameters were rejected before running the aligner."""


class ErrorType(Enum):
    """Types of errors that can occur."""
    INVALID_SEARCH = "invalid_search"
    UPSTREAM_FAILURE = "upstream_failure"
    FILE_IO_ERROR = "file_io_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error."""
    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    timestamp: float
    operation: str
    item_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    exception: Optional[Exception] = None
    traceback: Optional[str] = None
    suggestion: Optional[str] = None


class ErrorHandler:
    """Classifies, logs and keeps track of errors."""

    SUGGESTIONS = {
        ErrorType.INVALID_SEARCH: "Use a known BLAST method and leave -out, -html, -outfmt, -db and -query out of the advanced options.",
        ErrorType.UPSTREAM_FAILURE: "Check the BLAST method, databases and advanced options.",
        ErrorType.FILE_IO_ERROR: "Check that the file exists and is readable.",
        ErrorType.UNKNOWN: "Run again with --verbose for details.",
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger to report errors to
        """
        self.logger = logger or logging.getLogger(__name__)
        self.error_history: List[ErrorContext] = []

    def handle_error(self,
                     error: Exception,
                     operation: str,
                     item_id: Optional[str] = None,
                     **kwargs) -> ErrorContext:
        """
        Handle an error with appropriate logging.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            item_id: Optional item identifier, e.g. a file name
            **kwargs: Additional context data

        Returns:
            ErrorContext with error details and suggestions
        """
        error_type = self._classify_error(error)
        severity = self._determine_severity(error_type)

        context = ErrorContext(
            error_type=error_type,
            severity=severity,
            message=str(error),
            timestamp=time.time(),
            operation=operation,
            item_id=item_id,
            details=kwargs,
            exception=error,
            traceback=traceback.format_exc() if severity == ErrorSeverity.CRITICAL else None,
            suggestion=self.SUGGESTIONS.get(error_type),
        )

        self._log_error(context)
        self.error_history.append(context)
        return context

    def _classify_error(self, error: Exception) -> ErrorType:
        """Classify the error type based on exception."""
        if isinstance(error, UpstreamRunError):
            return ErrorType.UPSTREAM_FAILURE

        if isinstance(error, (ReportInputError, OSError)):
            return ErrorType.FILE_IO_ERROR

        if isinstance(error, InvalidSearchError):
            return ErrorType.INVALID_SEARCH

        return ErrorType.UNKNOWN

    def _determine_severity(self, error_type: ErrorType) -> ErrorSeverity:
        """Determine error severity based on type."""
        if error_type == ErrorType.INVALID_SEARCH:
            return ErrorSeverity.WARNING
        if error_type == ErrorType.UNKNOWN:
            return ErrorSeverity.CRITICAL
        return ErrorSeverity.ERROR

    def _log_error(self, context: ErrorContext):
        """Log error with appropriate level and details."""
        log_message = f"{context.operation} - {context.error_type.value}: {context.message}"

        if context.item_id:
            log_message += f" (item: {context.item_id})"

        if context.severity == ErrorSeverity.INFO:
            self.logger.info(log_message)
        elif context.severity == ErrorSeverity.WARNING:
            self.logger.warning(log_message)
        elif context.severity == ErrorSeverity.ERROR:
            self.logger.error(log_message)
        else:
            self.logger.critical(log_message)
            if context.traceback:
                self.logger.critical(f"Traceback:\n{context.traceback}")

        if context.suggestion:
            self.logger.info(f"Suggestion: {context.suggestion}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of errors handled so far."""
        by_type: Dict[str, int] = {}
        by_severity: Dict[str, int] = {}
        for context in self.error_history:
            by_type[context.error_type.value] = by_type.get(context.error_type.value, 0) + 1
            by_severity[context.severity.value] = by_severity.get(context.severity.value, 0) + 1

        return {
            'total_errors': len(self.error_history),
            'by_type': by_type,
            'by_severity': by_severity,
        }
