#!/usr/bin/env python3
"""
Error handling with context tracking for batch font-name classification.

Every per-font failure is recorded as an ErrorInfo with the phase it happened in,
the file, and (for classification failures) the raw name and triggering rule, so
an operator can fix the dictionary or pattern and rerun.

Usage:
    from FontNameCore.core_error_handling import ErrorContext, ErrorTracker

    tracker = ErrorTracker()
    try:
        result = classify(raw_name, dictionary, options)
    except NameClassificationError as e:
        tracker.add_from_exception(context_for_exception(e), e, filepath=path)

    if tracker.has_errors():
        tracker.print_summary(console)
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from FontNameCore.core_font_record_io import (
    FontLoadError,
    FontTableError,
    FontWriteError,
)
from FontNameCore.core_logging_config import get_logger
from FontNameCore.core_name_classifier import NameClassificationError, PatternError
from FontNameCore.core_style_word_dictionary import DictionaryLoadError

logger = get_logger(__name__)


class ErrorContext(Enum):
    """
    Error context categories for precise failure point identification.

    Each context is a distinct phase of the run where errors can occur.
    """

    # File I/O operations
    FILE_IO = "file_io"  # Disk read/write errors
    LOADING = "loading"  # Font file loading/parsing from disk
    SAVING = "saving"  # Font file save operation

    # Configuration
    DICTIONARY = "dictionary"  # Rule file loading/validation
    PATTERN = "pattern"  # Custom match pattern

    # Classification
    CLASSIFICATION = "classification"  # Family/style split of one raw name

    # Font table operations
    NAME_TABLE = "name_table"
    OS2_TABLE = "os2_table"

    # Other
    UNKNOWN = "unknown"

    @property
    def is_recoverable_by_default(self) -> bool:
        """Recoverable errors skip the font; the batch continues."""
        return self not in {ErrorContext.DICTIONARY, ErrorContext.UNKNOWN}

    @property
    def severity(self) -> str:
        """Get default severity level for this context."""
        if self in {ErrorContext.DICTIONARY, ErrorContext.FILE_IO}:
            return "critical"
        if self is ErrorContext.CLASSIFICATION:
            return "warning"
        return "error"


class ErrorSeverity(Enum):
    """Error severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"  # Font skipped, name needs a dictionary/pattern fix
    ERROR = "error"  # Error occurred, file skipped
    CRITICAL = "critical"  # Run cannot continue


def context_for_exception(exception: BaseException) -> ErrorContext:
    """Pick the ErrorContext for an exception raised by the pipeline."""
    if isinstance(exception, DictionaryLoadError):
        return ErrorContext.DICTIONARY
    if isinstance(exception, PatternError):
        return ErrorContext.PATTERN
    if isinstance(exception, NameClassificationError):
        return ErrorContext.CLASSIFICATION
    if isinstance(exception, FontLoadError):
        return ErrorContext.LOADING
    if isinstance(exception, FontWriteError):
        return ErrorContext.SAVING
    if isinstance(exception, FontTableError):
        if exception.table == "OS/2":
            return ErrorContext.OS2_TABLE
        return ErrorContext.NAME_TABLE
    if isinstance(exception, OSError):
        return ErrorContext.FILE_IO
    return ErrorContext.UNKNOWN


@dataclass
class ErrorInfo:
    """
    Detailed error information with context.

    Captures what is needed for reporting: phase, file, raw name and rule.
    """

    context: ErrorContext
    message: str
    filepath: Optional[str] = None
    exception: Optional[BaseException] = None
    raw_name: Optional[str] = None
    rule: Optional[str] = None
    recoverable: Optional[bool] = None  # None = use context default
    severity: Optional[ErrorSeverity] = None  # None = use context default
    timestamp: datetime = field(default_factory=datetime.now)
    stack_trace: Optional[str] = None

    def __post_init__(self):
        if self.recoverable is None:
            self.recoverable = self.context.is_recoverable_by_default
        if self.severity is None:
            self.severity = ErrorSeverity(self.context.severity)
        if self.exception is not None and not self.stack_trace:
            self.stack_trace = "".join(
                traceback.format_exception(
                    type(self.exception), self.exception, self.exception.__traceback__
                )
            )

    @classmethod
    def from_exception(
        cls,
        context: ErrorContext,
        exception: BaseException,
        filepath: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs,
    ) -> "ErrorInfo":
        """
        Create ErrorInfo from an exception.

        Classification errors contribute their raw name and rule.

        Examples:
            >>> try:
            ...     classify("", dictionary)
            ... except NameClassificationError as e:
            ...     error = ErrorInfo.from_exception(ErrorContext.CLASSIFICATION, e)
            >>> error.raw_name
            ''
        """
        kwargs.setdefault("raw_name", getattr(exception, "raw_name", None))
        kwargs.setdefault("rule", getattr(exception, "rule", None))
        return cls(
            context=context,
            message=message if message is not None else str(exception),
            filepath=filepath,
            exception=exception,
            **kwargs,
        )

    @property
    def filename(self) -> Optional[str]:
        if self.filepath:
            return Path(self.filepath).name
        return None

    @property
    def exception_type(self) -> Optional[str]:
        if self.exception is not None:
            return type(self.exception).__name__
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary representation suitable for JSON/logging."""
        return {
            "context": self.context.value,
            "message": self.message,
            "filepath": self.filepath,
            "filename": self.filename,
            "raw_name": self.raw_name,
            "rule": self.rule,
            "exception_type": self.exception_type,
            "recoverable": self.recoverable,
            "severity": self.severity.value if self.severity else None,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_user_message(self) -> str:
        """Brief message for console display (no stack trace)."""
        parts = [f"[{self.context.value.upper()}]"]
        if self.filename:
            parts.append(self.filename)
        parts.append(self.message)
        if self.exception is not None and str(self.exception) != self.message:
            parts.append(f"({self.exception})")
        return " ".join(parts)

    def to_log_message(self) -> str:
        parts = [
            f"Context: {self.context.value}",
            f"Severity: {self.severity.value if self.severity else 'unknown'}",
            f"Message: {self.message}",
        ]
        if self.filepath:
            parts.append(f"File: {self.filepath}")
        if self.raw_name is not None:
            parts.append(f"Name: {self.raw_name!r}")
        if self.rule:
            parts.append(f"Rule: {self.rule}")
        if self.exception is not None:
            parts.append(f"Exception: {self.exception_type}")
        if not self.recoverable:
            parts.append("Recoverable: NO")
        return " | ".join(parts)


class ErrorTracker:
    """
    Track and aggregate errors during batch processing.

    One tracker per run; errors are indexed by context and by file.
    """

    def __init__(self):
        self.errors: List[ErrorInfo] = []
        self._errors_by_context: Dict[ErrorContext, List[ErrorInfo]] = {}
        self._errors_by_file: Dict[str, List[ErrorInfo]] = {}

    def add_error(self, error: ErrorInfo) -> None:
        self.errors.append(error)
        self._errors_by_context.setdefault(error.context, []).append(error)
        if error.filepath:
            self._errors_by_file.setdefault(error.filepath, []).append(error)

        log_message = error.to_log_message()
        if error.severity == ErrorSeverity.CRITICAL:
            logger.error(log_message)
            if error.stack_trace:
                logger.debug(f"Stack trace:\n{error.stack_trace}")
        elif error.severity == ErrorSeverity.ERROR:
            logger.error(log_message)
        elif error.severity == ErrorSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.info(log_message)

    def add_from_exception(
        self,
        context: ErrorContext,
        exception: BaseException,
        filepath: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs,
    ) -> ErrorInfo:
        """Create, record and return an ErrorInfo for ``exception``."""
        error = ErrorInfo.from_exception(context, exception, filepath, message, **kwargs)
        self.add_error(error)
        return error

    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "total_errors": len(self.errors),
            "recoverable_errors": sum(1 for e in self.errors if e.recoverable),
            "non_recoverable_errors": sum(1 for e in self.errors if not e.recoverable),
            "by_context": {
                ctx.value: len(errs) for ctx, errs in self._errors_by_context.items()
            },
            "files_with_errors": len(self._errors_by_file),
        }

    def get_errors_for_file(self, filepath: str) -> List[ErrorInfo]:
        return self._errors_by_file.get(filepath, [])

    def get_errors_by_context(self, context: ErrorContext) -> List[ErrorInfo]:
        return self._errors_by_context.get(context, [])

    def print_summary(self, console=None) -> None:
        """Print error summary (one line per failed font) to the console."""
        from FontNameCore.core_console_styles import (
            ERROR_LABEL,
            emit,
            fmt_count,
            fmt_header,
            fmt_value,
        )

        summary = self.get_summary()
        if summary["total_errors"] == 0:
            return

        emit("", console=console)
        fmt_header("ERROR SUMMARY", console=console)
        emit(
            f"{ERROR_LABEL} Total errors: {fmt_count(summary['total_errors'])}",
            console=console,
        )
        for context, count in sorted(summary["by_context"].items()):
            emit(f"    {context:20} : {fmt_count(count)}", console=console)
        emit("", console=console)
        for error in self.errors:
            emit(f"  {fmt_value(error.to_user_message())}", console=console)

    def clear(self) -> None:
        self.errors.clear()
        self._errors_by_context.clear()
        self._errors_by_file.clear()


__all__ = [
    "ErrorContext",
    "ErrorSeverity",
    "ErrorInfo",
    "ErrorTracker",
    "context_for_exception",
]
