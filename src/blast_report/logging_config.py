"""Logging configuration and utilities."""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors if enabled."""
        levelname = record.levelname
        if self.use_colors and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        result = super().format(record)

        record.levelname = levelname
        return result


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: str = ".blast_report_logs",
    console: bool = True,
    colors: bool = True,
    rotate_logs: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    quiet: bool = False,
    to_file: bool = False
) -> Dict[str, logging.Logger]:
    """
    Setup logging for the command line tool.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Custom log file name, implies to_file
        log_dir: Directory for log files
        console: Enable console output (on stderr, stdout carries the HTML)
        colors: Enable colored console output
        rotate_logs: Enable log rotation
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup files to keep
        quiet: Suppress all but error logs to console
        to_file: Write a log file in log_dir

    Returns:
        Dictionary of configured loggers
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    log_path = None
    if to_file or log_file:
        log_dir_path = Path(log_dir)
        log_dir_path.mkdir(parents=True, exist_ok=True)
        if log_file is None:
            log_path = log_dir_path / f"blast_report_{datetime.now().strftime('%Y%m%d')}.log"
        else:
            log_path = log_dir_path / log_file

        if rotate_logs:
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count
            )
        else:
            file_handler = logging.FileHandler(log_path)

        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.ERROR if quiet else level)
        console_handler.setFormatter(ColoredFormatter('%(levelname)s - %(message)s', use_colors=colors))
        root_logger.addHandler(console_handler)

    loggers = {
        'main': logging.getLogger('blast_report'),
        'report': logging.getLogger('blast_report.report_formatter'),
        'hyperlinks': logging.getLogger('blast_report.hyperlinks'),
        'retrieval': logging.getLogger('blast_report.retrieval'),
        'performance': logging.getLogger('blast_report.performance')
    }

    loggers['main'].debug(f"Logging initialized - Level: {log_level}, File: {log_path}")
    return loggers


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(f"blast_report.{name}")


class LogTimer:
    """Context manager for timing operations."""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None):
        """
        Initialize timer.

        Args:
            operation: Operation description
            logger: Logger to use (defaults to performance logger)
        """
        self.operation = operation
        self.logger = logger or get_logger('performance')
        self.start_time = None
        self.elapsed = None

    def __enter__(self):
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            self.elapsed = (datetime.now() - self.start_time).total_seconds()
            if exc_type is None:
                self.logger.debug(f"{self.operation} completed in {self.elapsed:.2f}s")
            else:
                self.logger.error(f"{self.operation} failed after {self.elapsed:.2f}s")
