import logging

from FontNameCore.core_error_handling import (
    ErrorContext,
    ErrorInfo,
    ErrorSeverity,
    ErrorTracker,
    context_for_exception,
)
from FontNameCore.core_font_record_io import FontLoadError, FontTableError
from FontNameCore.core_name_classifier import EmptyNameError, PatternError
from FontNameCore.core_style_word_dictionary import DictionaryLoadError


def test_context_for_exception():
    classification = EmptyNameError("empty", "")
    assert context_for_exception(classification) is ErrorContext.CLASSIFICATION
    pattern = PatternError("bad", "x", rule="(a)")
    assert context_for_exception(pattern) is ErrorContext.PATTERN
    assert context_for_exception(DictionaryLoadError("bad")) is ErrorContext.DICTIONARY
    assert context_for_exception(FontLoadError("gone")) is ErrorContext.LOADING
    assert context_for_exception(FontTableError("OS/2")) is ErrorContext.OS2_TABLE
    assert context_for_exception(FontTableError("name")) is ErrorContext.NAME_TABLE
    assert context_for_exception(PermissionError()) is ErrorContext.FILE_IO
    assert context_for_exception(RuntimeError()) is ErrorContext.UNKNOWN


def test_context_defaults():
    assert ErrorContext.CLASSIFICATION.is_recoverable_by_default
    assert not ErrorContext.DICTIONARY.is_recoverable_by_default
    assert ErrorContext.CLASSIFICATION.severity == "warning"
    assert ErrorContext.FILE_IO.severity == "critical"


def test_error_info_from_classification_failure():
    try:
        raise EmptyNameError("nothing to classify", "   ")
    except EmptyNameError as exc:
        error = ErrorInfo.from_exception(
            ErrorContext.CLASSIFICATION, exc, filepath="/fonts/Blank.ttf"
        )
    assert error.raw_name == "   "
    assert error.filename == "Blank.ttf"
    assert error.severity is ErrorSeverity.WARNING
    assert error.recoverable
    assert "EmptyNameError" in error.stack_trace
    assert error.to_dict()["exception_type"] == "EmptyNameError"
    assert error.to_user_message().startswith("[CLASSIFICATION] Blank.ttf")


def test_error_info_carries_rule():
    error = ErrorInfo.from_exception(
        ErrorContext.PATTERN, PatternError("no match", "Foo", rule=r"(.+)-(.+)")
    )
    assert error.rule == r"(.+)-(.+)"
    assert "Rule: (.+)-(.+)" in error.to_log_message()
    assert "Name: 'Foo'" in error.to_log_message()


def test_tracker_indexes_and_summarizes(caplog):
    tracker = ErrorTracker()
    with caplog.at_level(logging.DEBUG, logger="FontNameCore"):
        tracker.add_from_exception(
            ErrorContext.CLASSIFICATION, EmptyNameError("empty", ""), filepath="a.ttf"
        )
        tracker.add_from_exception(
            ErrorContext.LOADING, FontLoadError("broken"), filepath="b.ttf"
        )
    assert tracker.has_errors()
    summary = tracker.get_summary()
    assert summary["total_errors"] == 2
    assert summary["by_context"] == {"classification": 1, "loading": 1}
    assert summary["files_with_errors"] == 2
    assert len(tracker.get_errors_for_file("b.ttf")) == 1
    assert tracker.get_errors_by_context(ErrorContext.PATTERN) == []
    assert any(r.levelno == logging.WARNING for r in caplog.records)
    assert any(r.levelno == logging.ERROR for r in caplog.records)

    tracker.clear()
    assert not tracker.has_errors()
    assert tracker.get_errors_for_file("b.ttf") == []
