"""Unified logging and output management for font name fixing.

Combines Python logging for diagnostics with console_styles-powered HandlerAPI
for UX events. Tracks metrics and prints a final summary.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from pathlib import Path
from typing import Dict, Optional, Tuple


class Verbosity(IntEnum):
    """Verbosity levels following Ubuntu CLI guidelines."""

    QUIET = 0  # Minimal output, errors only
    BRIEF = 1  # Normal user interface messages (default)
    VERBOSE = 2  # Descriptive, thorough descriptions
    DEBUG = 3  # Internal execution steps, developer-focused
    TRACE = 4  # System-generated information


VERBOSITY_TO_LEVEL = {
    Verbosity.QUIET: logging.ERROR,
    Verbosity.BRIEF: logging.WARNING,
    Verbosity.VERBOSE: logging.INFO,
    Verbosity.DEBUG: logging.DEBUG,
    Verbosity.TRACE: logging.DEBUG,
}


def verbosity_from_flags(quiet: bool = False, verbose: int = 0) -> Verbosity:
    """Map -q / -v counts from argparse onto a Verbosity level."""
    if quiet:
        return Verbosity.QUIET
    return Verbosity(min(Verbosity.BRIEF + verbose, Verbosity.TRACE))


class MetricsTracker:
    def __init__(self) -> None:
        self.processed: int = 0
        self.saved: int = 0
        self.skipped: int = 0
        self.errors: int = 0
        self.name_sources: Dict[str, int] = {}
        self.families: Dict[str, int] = {}

    def increment(self, metric: str) -> None:
        if hasattr(self, metric):
            setattr(self, metric, getattr(self, metric) + 1)
            if metric in {"saved", "skipped", "errors"}:
                self.processed += 1

    def track_name_source(self, source: str) -> None:
        if not source:
            return
        self.name_sources[source] = self.name_sources.get(source, 0) + 1

    def track_family(self, family: Optional[str]) -> None:
        if not family:
            return
        self.families[family] = self.families.get(family, 0) + 1


class HandlerAPI:
    def __init__(
        self, verbosity: Verbosity, metrics: MetricsTracker, dry_run: bool = False
    ) -> None:
        self.verbosity = verbosity
        self.metrics = metrics
        self.dry_run = dry_run

    def discovered(self, filename: str, raw_name: str, source: str) -> None:
        if self.verbosity < Verbosity.BRIEF:
            return
        import FontNameCore.core_console_styles as cs

        cs.StatusIndicator("discovered").add_file(filename).add_message(
            f"{cs.fmt_value(raw_name, 'before')} via {source}"
        ).emit()
        self.metrics.track_name_source(source)

    def mapping(
        self,
        key: str,
        value: str,
        context: Optional[str] = None,
    ) -> None:
        if self.verbosity < Verbosity.VERBOSE:
            return
        import FontNameCore.core_console_styles as cs

        msg = f"{cs.fmt_value(key)} → {cs.fmt_value(value, 'after')}"
        if context:
            msg += f" ({cs.fmt_value(context)})"
        cs.StatusIndicator("mapping").add_message(msg).emit()

    def classified(self, filename: str, family: str, style: str) -> None:
        self.metrics.track_family(family)
        if self.verbosity < Verbosity.BRIEF:
            return
        import FontNameCore.core_console_styles as cs

        status = "preview" if self.dry_run else "updated"
        cs.StatusIndicator(status).add_file(filename).add_values(
            old_value=filename, new_value=f"{family} / {style or 'Regular'}"
        ).emit()

    def saved(self, filepath: Path) -> None:
        import FontNameCore.core_console_styles as cs

        if self.verbosity >= Verbosity.BRIEF:
            if self.dry_run:
                cs.StatusIndicator("preview").add_file(
                    str(filepath), filename_only=False
                ).add_message("(not written)").emit()
            else:
                cs.StatusIndicator("saved").add_file(
                    str(filepath), filename_only=False
                ).emit()
        self.metrics.increment("saved")

    def skipped(self, filename: str, reason: str) -> None:
        import FontNameCore.core_console_styles as cs

        if self.verbosity >= Verbosity.BRIEF:
            cs.StatusIndicator("skipped").add_file(filename).with_explanation(
                reason
            ).emit()
        self.metrics.increment("skipped")

    def info(self, message: str, verbose_only: bool = True) -> None:
        min_level = Verbosity.VERBOSE if verbose_only else Verbosity.BRIEF
        if self.verbosity < min_level:
            return
        import FontNameCore.core_console_styles as cs

        cs.StatusIndicator("info").add_message(message).emit()

    def warning(self, message: str, filename: Optional[str] = None) -> None:
        if self.verbosity < Verbosity.BRIEF:
            return
        import FontNameCore.core_console_styles as cs

        indicator = cs.StatusIndicator("warning")
        if filename:
            indicator.add_file(filename)
        indicator.with_explanation(message).emit()

    def error(self, message: str, filename: Optional[str] = None) -> None:
        import FontNameCore.core_console_styles as cs

        indicator = cs.StatusIndicator("error")
        if filename:
            indicator.add_file(filename)
        indicator.with_explanation(message).emit()
        self.metrics.increment("errors")


def print_summary(metrics: MetricsTracker, dry_run: bool = False, console=None) -> None:
    if metrics.processed == 0:
        return
    import FontNameCore.core_console_styles as cs

    current_verbosity = _handler_api.verbosity if _handler_api else Verbosity.BRIEF

    cs.emit(f"\n{'=' * 60}", console=console)
    cs.fmt_processing_summary(
        dry_run=dry_run,
        saved=metrics.saved,
        skipped=metrics.skipped,
        errors=metrics.errors,
        console=console,
    )
    if metrics.name_sources and current_verbosity >= Verbosity.BRIEF:
        cs.StatusIndicator("info").add_message("Name Sources Used:").emit(console)
        for label, count in sorted(
            metrics.name_sources.items(), key=lambda x: x[0].lower()
        ):
            cs.emit(
                f"{cs.indent(1)}• {cs.fmt_value(label)}: {cs.fmt_count(count)}",
                console=console,
            )

    if metrics.families and current_verbosity >= Verbosity.VERBOSE:
        cs.StatusIndicator("info").add_message("Families:").emit(console)
        for family, count in sorted(
            metrics.families.items(), key=lambda x: x[1], reverse=True
        ):
            cs.emit(
                f"{cs.indent(2)}- {cs.fmt_value(family)} ({count})", console=console
            )
    cs.emit(f"{'=' * 60}\n", console=console)


_logger: Optional[logging.Logger] = None
_handler_api: Optional[HandlerAPI] = None
_metrics: Optional[MetricsTracker] = None
_initialized: bool = False


def setup_logging(
    verbosity: Verbosity = Verbosity.BRIEF, dry_run: bool = False
) -> Tuple[logging.Logger, HandlerAPI, MetricsTracker]:
    global _logger, _handler_api, _metrics, _initialized
    if _initialized:
        if _handler_api:
            _handler_api.verbosity = verbosity
            _handler_api.dry_run = dry_run
        logging.getLogger().setLevel(VERBOSITY_TO_LEVEL[verbosity])
        return (_logger, _handler_api, _metrics)
    _metrics = MetricsTracker()
    _handler_api = HandlerAPI(verbosity, _metrics, dry_run)
    logging.basicConfig(
        level=VERBOSITY_TO_LEVEL[verbosity],
        format="%(levelname)s: %(name)s: %(message)s",
        force=True,
    )
    _logger = logging.getLogger("FontNameFixer")
    _initialized = True
    return (_logger, _handler_api, _metrics)


def reset_logging() -> None:
    """Forget the process-wide handler state (used between batch runs and in tests)."""
    global _logger, _handler_api, _metrics, _initialized
    _logger = None
    _handler_api = None
    _metrics = None
    _initialized = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
