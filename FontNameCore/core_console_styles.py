#!/usr/bin/env python3
"""
Shared console styling utilities for consistent output.

Primary API: StatusIndicator class for unified console output formatting.
Secondary APIs: formatting primitives and a few high-level helpers.

Usage:
from FontNameCore.core_console_styles import (
    INFO_LABEL, ERROR_LABEL, WARNING_LABEL, SAVED_LABEL, SKIPPED_LABEL,
    indent, fmt_change, fmt_field, fmt_file, fmt_value, fmt_count, fmt_header,
    fmt_processing_summary, emit, get_console, create_table, StatusIndicator,
)

Anything that can carry user data (font names, file names, rule text) goes through
fmt_value/fmt_file, which escape Rich markup, so "Font[wght]" prints literally.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich import box
from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from FontNameCore.core_logging_config import get_logger

logger = get_logger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================
CONSOLE_CONFIG = {
    "label_width": 11,  # width for labels (keeps alignment)
    "indent_size": 12,  # base indent spaces
}

# ============================================================================
# THEME DEFINITION
# ============================================================================
CUSTOM_THEME = Theme(
    {
        # Text colors
        "darktext": "#282a39",
        "lighttext": "grey100",
        # Label backgrounds
        "info": "dodger_blue1",
        "updated": "magenta2",
        "error": "red3",
        "warning": "gold1",
        "saved": "green",
        "success": "green_yellow",
        "preview": "gold3",
        "skipped": "orange1",
        "discovered": "magenta",
        "mapping": "cyan3",
        # Content styling
        "value.before": "turquoise2",
        "value.after": "magenta2",
        "value.unchanged": "dim turquoise2",
        "file.name": "green",
        "file.path": "grey37",
        "count": "bold turquoise2",
        "field": "honeydew2",
        "field.number": "bold honeydew2",
        "repr.number": "bold turquoise2",
        "repr.str": "grey100",
        "repr.path": "grey37",
        "repr.filename": "green",
    }
)

# Module-level console singleton
_console_singleton: Optional[Console] = None


# ============================================================================
# CONSOLE INFRASTRUCTURE
# ============================================================================


def get_console() -> Console:
    """Get the shared Rich console instance."""
    global _console_singleton
    if _console_singleton is None:
        _console_singleton = Console(theme=CUSTOM_THEME)
    return _console_singleton


def emit(message: str, console: Optional[Console] = None, end: str = "\n") -> None:
    """Print a markup message via the Rich console."""
    (console or get_console()).print(message, end=end, overflow="fold", no_wrap=False)


def indent(level: int = 1, additional: int = 0) -> str:
    """Indentation for hierarchical output, aligned past the status labels."""
    if level <= 0:
        return ""
    base = CONSOLE_CONFIG.get("indent_size", 12)
    return " " * (base + (level - 1) * 2 + additional)


# ============================================================================
# STATUS LABELS
# ============================================================================


def _build_status_label(
    text: str, foreground_theme_key: str, background_theme_key: str = "lighttext"
) -> str:
    """Build a fixed-width label using theme colors."""
    width = CONSOLE_CONFIG.get("label_width", 11)
    foreground_color = CUSTOM_THEME.styles.get(foreground_theme_key, "yellow1")
    background_color = CUSTOM_THEME.styles.get(background_theme_key, "red3")
    style = f"bold {foreground_color} on {background_color}"
    return f"[{style}]{text:<{width}}[/{style}]"


INFO_LABEL: str = _build_status_label(" INFO", "lighttext", "info")
UPDATED_LABEL: str = _build_status_label(" FIXED", "darktext", "updated")
ERROR_LABEL: str = _build_status_label(" ERROR", "lighttext", "error")
WARNING_LABEL: str = _build_status_label(" WARNING", "darktext", "warning")
SAVED_LABEL: str = _build_status_label(" SAVED TO", "darktext", "saved")
PREVIEW_LABEL: str = _build_status_label(" PREVIEW", "darktext", "preview")
SUCCESS_LABEL: str = _build_status_label(" SUCCESS", "darktext", "success")
SKIPPED_LABEL: str = _build_status_label(" SKIPPED", "darktext", "skipped")
DISCOVERED_LABEL: str = _build_status_label(" FOUND", "darktext", "discovered")
MAPPING_LABEL: str = _build_status_label(" MAPPING", "darktext", "mapping")

INDENT: str = " " * CONSOLE_CONFIG.get("indent_size", 12)


# ============================================================================
# CORE FORMATTING PRIMITIVES
# ============================================================================


def fmt_change(old_value: str, new_value: str) -> str:
    """
    Format a change as old → new.

    Example:
        >>> fmt_change("MyFontBold", "MyFont / Bold")
        '[value.before]MyFontBold[/value.before] → [value.after]MyFont / Bold[/value.after]'
    """
    return (
        f"[value.before]{escape(str(old_value))}[/value.before] → "
        f"[value.after]{escape(str(new_value))}[/value.after]"
    )


def fmt_field(field_name: str, value: str | int) -> str:
    """Format a field as name: value with number styling for ints."""
    if isinstance(value, int):
        return f"[field]{field_name}[/field]: [field.number]{value}[/field.number]"
    return f"[field]{field_name}[/field]: {escape(str(value))}"


def fmt_value(value: str | int, style: str = "plain") -> str:
    """
    Format a user-supplied value; style is "plain", "before", "after" or "unchanged".

    Example:
        >>> fmt_value("Font[wght]")
        'Font\\\\[wght]'
    """
    text = escape(str(value))
    if style in ("before", "after", "unchanged"):
        return f"[value.{style}]{text}[/value.{style}]"
    return text


def fmt_count(value: int | str) -> str:
    """Format a count or aggregate number with emphasis."""
    return f"[count]{value}[/count]"


def fmt_file(path: str, filename_only: bool = True) -> str:
    """Format a file path: green file name, dimmed parent directory."""
    path_obj = Path(path)
    name = f"[file.name]{escape(path_obj.name)}[/file.name]"
    if filename_only:
        return name
    parent = str(path_obj.parent) + "/" if path_obj.parent != Path(".") else ""
    return f"[file.path]{escape(parent)}[/file.path]{name}"


def fmt_header(text: str, console: Optional[Console] = None) -> None:
    """Print a centered header panel."""
    panel = Panel(
        Align.center(text),
        box=box.HORIZONTALS,
        border_style="dodger_blue1",
        style="bold grey100",
        padding=0,
        expand=True,
    )
    (console or get_console()).print(panel)


# ============================================================================
# MAIN API - STATUS INDICATOR CLASS
# ============================================================================


class StatusIndicator:
    """
    Status line builder for consistent message formatting.

    Builds messages in layers:
    - Level 1: Base label (FIXED, ERROR, etc.)
    - Level 2: Context (file, message)
    - Level 3: Values/changes
    - Level 4: Indented detail lines

    Usage:
        StatusIndicator("info").add_message("Processing files").emit()

        StatusIndicator("updated")
            .add_file("MyFontBold.otf")
            .add_values(old_value="MyFontBold", new_value="MyFont / Bold")
            .emit()

        # Dry-run: operational labels are dimmed, 'saved' lines are suppressed
        StatusIndicator("saved", dry_run=True).add_file("out/MyFont-Bold.otf").emit()
    """

    STATUS_THEMES = {
        "updated": {"label": UPDATED_LABEL, "template": "{context}", "show_change": True},
        "saved": {"label": SAVED_LABEL, "template": "{context}", "show_change": False},
        "success": {
            "label": SUCCESS_LABEL,
            "template": "{context}{details}",
            "show_change": False,
        },
        "info": {
            "label": INFO_LABEL,
            "template": "{context}{details}",
            "show_change": False,
        },
        "warning": {
            "label": WARNING_LABEL,
            "template": "{context}{details}",
            "show_change": False,
        },
        "error": {
            "label": ERROR_LABEL,
            "template": "{context}: {details}",
            "show_change": False,
        },
        "skipped": {
            "label": SKIPPED_LABEL,
            "template": "{context}{details}",
            "show_change": False,
        },
        "discovered": {
            "label": DISCOVERED_LABEL,
            "template": "{context}",
            "show_change": False,
        },
        "mapping": {"label": MAPPING_LABEL, "template": "{context}", "show_change": False},
        "preview": {"label": PREVIEW_LABEL, "template": "{context}", "show_change": True},
    }

    def __init__(self, status: str, dry_run: bool = False):
        if status not in self.STATUS_THEMES:
            available = ", ".join(sorted(self.STATUS_THEMES.keys()))
            raise ValueError(f"Unknown status: '{status}'. Available: {available}")
        self.status = status
        self.theme = self.STATUS_THEMES[status]
        self.context_parts = []
        self.explanation = None
        self.old_value = None
        self.new_value = None
        self.dry_run = dry_run

    def add_message(self, message: str, style: Optional[str] = None):
        """Add markup text to the main line (escape user data with fmt_value)."""
        self.context_parts.append(f"[{style}]{message}[/{style}]" if style else message)
        return self

    def add_file(self, filepath: str, filename_only: bool = True):
        self.context_parts.append(fmt_file(str(filepath), filename_only))
        return self

    def add_values(self, old_value: str = None, new_value: str = None):
        """Show a change from old to new beneath the main line."""
        if self.theme["show_change"] and old_value and new_value:
            self.old_value = old_value
            self.new_value = new_value
        return self

    def with_explanation(self, message: str):
        """Trailing reason (plain text, escaped)."""
        self.explanation = fmt_value(message)
        return self

    def with_summary_block(
        self,
        saved: int = 0,
        skipped: int = 0,
        errors: int = 0,
        additional_info: list = None,
    ):
        summary = " | ".join(
            [
                fmt_field("saved", saved),
                fmt_field("skipped", skipped),
                fmt_field("errors", errors),
            ]
        )
        self.context_parts.append(f"\n{INDENT}{summary}")
        for info in additional_info or []:
            self.context_parts.append(f"\n{INDENT}{info}")
        return self

    def build(self) -> str:
        """Build the final formatted status message."""
        if self.dry_run and self.status == "saved":
            return ""

        label = self.theme["label"]
        if self.dry_run and self.status not in ("info", "warning", "error"):
            label = f"[dim]{label}[/dim]"

        context = " ".join(self.context_parts)
        details = self.explanation or ""
        if details and context and "{context}{details}" in self.theme["template"]:
            details = f" {details}"
        if context:
            message = self.theme["template"].format(context=context, details=details)
        else:
            message = details.strip()

        if self.theme["show_change"] and self.old_value and self.new_value:
            message += f"\n{INDENT} {fmt_change(self.old_value, self.new_value)}"
        return f"{label} {message}"

    def emit(self, console=None):
        """Build and emit the message in one call."""
        text = self.build()
        if text:
            emit(text, console=console)


# ============================================================================
# HIGH-LEVEL HELPERS
# ============================================================================


def fmt_processing_summary(
    dry_run: bool = False,
    saved: int = 0,
    skipped: int = 0,
    errors: int = 0,
    console=None,
    additional_info: list = None,
) -> None:
    """
    Display a standardized processing summary.

    Example:
        >>> fmt_processing_summary(dry_run=False, saved=35, skipped=3, errors=2)
        # Displays "Processing Completed! saved: 35 | skipped: 3 | errors: 2"
    """
    console = console or get_console()
    emit("", console=console)
    label = "Preview" if dry_run else "Processing Completed!"
    StatusIndicator("success", dry_run=dry_run).add_message(label).with_summary_block(
        saved=saved,
        skipped=skipped,
        errors=errors,
        additional_info=additional_info,
    ).emit(console)


def create_table(title: Optional[str] = None, show_header: bool = True) -> Table:
    """Create a Rich Table with consistent styling."""
    return Table(
        title=title,
        title_justify="center",
        title_style="bold deep_sky_blue1",
        show_header=show_header,
        header_style="bold dodger_blue1",
        border_style="dim",
        highlight=False,
    )


__all__ = [
    "CONSOLE_CONFIG",
    "CUSTOM_THEME",
    "INFO_LABEL",
    "UPDATED_LABEL",
    "ERROR_LABEL",
    "WARNING_LABEL",
    "SAVED_LABEL",
    "PREVIEW_LABEL",
    "SUCCESS_LABEL",
    "SKIPPED_LABEL",
    "DISCOVERED_LABEL",
    "MAPPING_LABEL",
    "INDENT",
    "indent",
    "emit",
    "get_console",
    "fmt_change",
    "fmt_field",
    "fmt_value",
    "fmt_count",
    "fmt_file",
    "fmt_header",
    "fmt_processing_summary",
    "create_table",
    "StatusIndicator",
]
