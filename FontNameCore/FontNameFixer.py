#!/usr/bin/env python3
"""
Font Name Fixer

Splits each font's raw name (file name by default) into a family name and a style
name using a style-word dictionary, writes the result into the name table and the
OS/2 weight/width/fsSelection fields, and saves the fonts grouped by family.

Usage:
    fontname-fixer <paths...> [options]

Examples:
    fontname-fixer ~/Downloads/fonts -r
    fontname-fixer MyFontBold.otf -n -v
    fontname-fixer fonts/ -d rules.json --merge-defaults -o out --format woff2
    fontname-fixer fonts/ -p "^(.+?)-(.+)$"
    fontname-fixer --names "MyFontBold" "Myriad Pro Bold Italic"
    fontname-fixer fonts/ -g "Rough Love,Love Script"

Exit status: 0 when every font was fixed, 1 when any font failed,
2 for a bad dictionary, pattern or command line.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import FontNameCore.core_console_styles as cs
from FontNameCore.core_error_handling import ErrorTracker, context_for_exception
from FontNameCore.core_file_collector import collect_font_files
from FontNameCore.core_font_record_io import (
    NAME_SOURCES,
    OUTPUT_FORMATS,
    FontLoadError,
    FontRecord,
    FontTableError,
    FontWriteError,
    load_font,
    target_path,
    write_font,
)
from FontNameCore.core_font_sorter import (
    FontSorter,
    family_directory_name,
    font_info_from_result,
    parse_forced_groups,
)
from FontNameCore.core_logging_config import (
    HandlerAPI,
    print_summary,
    reset_logging,
    setup_logging,
    verbosity_from_flags,
)
from FontNameCore.core_name_classifier import (
    ClassificationResult,
    ClassifyOptions,
    NameClassificationError,
    PatternError,
    classify,
    classify_names,
    compile_match_pattern,
)
from FontNameCore.core_name_policies import NAME_ID_POSTSCRIPT
from FontNameCore.core_style_word_dictionary import (
    DictionaryLoadError,
    StyleWordDictionary,
    default_dictionary,
    load_dictionary,
)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG = 2

Classified = Tuple[FontRecord, ClassificationResult]


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="fontname-fixer",
        description="Split font names into family and style and fix the name table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fontname-fixer ~/Downloads/fonts -r
  fontname-fixer MyFontBold.otf -n -v
  fontname-fixer fonts/ -p "^(.+?)-(.+)$"
  fontname-fixer --names "MyFontBold" "Myriad Pro Bold Italic"
        """,
    )
    parser.add_argument("paths", nargs="*", help="Font files or directories")
    parser.add_argument(
        "--names",
        nargs="+",
        metavar="NAME",
        help="Preview classification of raw names without touching any font",
    )
    parser.add_argument(
        "-r", "--recursive", action="store_true", help="Recurse into directories"
    )
    parser.add_argument(
        "-d",
        "--dictionary",
        metavar="FILE",
        help="JSON rule file (default: built-in dictionary)",
    )
    parser.add_argument(
        "--merge-defaults",
        action="store_true",
        help="Append the built-in rules after the rules from --dictionary",
    )
    parser.add_argument(
        "-p",
        "--pattern",
        metavar="REGEX",
        help="Match pattern: group 1 is the family, group 2 the style words",
    )
    parser.add_argument(
        "-f", "--family", metavar="NAME", help="Use NAME as the family for every font"
    )
    parser.add_argument(
        "--no-protect-beginning",
        action="store_true",
        help="Allow style words to be split off at the very start of a name",
    )
    parser.add_argument(
        "--split-camel-case",
        action="store_true",
        help='Split CamelCase family names ("MyFont" -> "My Font")',
    )
    parser.add_argument(
        "-s",
        "--source",
        choices=NAME_SOURCES,
        default="filename",
        help="Where the raw name comes from (default: filename)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        default="fixed",
        metavar="DIR",
        help="Output directory (default: ./fixed)",
    )
    parser.add_argument(
        "--format",
        choices=("same",) + OUTPUT_FORMATS,
        default="same",
        help="Output format (default: same as source)",
    )
    parser.add_argument(
        "--flat",
        action="store_true",
        help="Write every font directly into the output directory",
    )
    parser.add_argument(
        "-g",
        "--group",
        action="append",
        metavar="FAMILIES",
        help="Force families into one output directory (comma-separated)",
    )
    parser.add_argument(
        "-n", "--dry-run", action="store_true", help="Preview without writing files"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only show errors"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="More output (-vv for debug logging)",
    )
    return parser


def build_dictionary(args: argparse.Namespace) -> StyleWordDictionary:
    """Load the rule file (or the built-in rules). Raises DictionaryLoadError."""
    if not args.dictionary:
        return default_dictionary()
    dictionary = load_dictionary(args.dictionary)
    if args.merge_defaults:
        dictionary = dictionary.merged_with(default_dictionary())
    return dictionary


def build_options(args: argparse.Namespace) -> ClassifyOptions:
    """Run options from the command line. Raises PatternError for a bad pattern."""
    pattern = compile_match_pattern(args.pattern) if args.pattern else None
    return ClassifyOptions(
        match_pattern=pattern,
        protect_beginning=not args.no_protect_beginning,
        family_override=args.family,
        split_family_camel_case=args.split_camel_case,
    )


def preview_names(
    names: List[str],
    dictionary: StyleWordDictionary,
    options: ClassifyOptions,
    tracker: ErrorTracker,
) -> None:
    """Print a classification table for raw names."""
    table = cs.create_table(title="Name Classification")
    for column in ("Raw name", "Family", "Style", "Weight", "Width", "fsSelection"):
        table.add_column(column)

    for raw_name, result, error in classify_names(names, dictionary, options):
        if error is not None:
            tracker.add_from_exception(context_for_exception(error), error)
            table.add_row(
                cs.fmt_value(raw_name),
                f"[error]{cs.fmt_value(str(error))}[/error]",
                "",
                "",
                "",
                "",
            )
            continue
        metrics = result.metrics
        table.add_row(
            cs.fmt_value(raw_name),
            cs.fmt_value(result.family_name, "after"),
            cs.fmt_value(result.style_or_regular, "after"),
            "" if metrics.weight is None else str(metrics.weight),
            "" if metrics.width is None else str(metrics.width),
            f"0x{metrics.selection_flags:04x}" if metrics.selection_flags else "",
        )
    cs.get_console().print(table)


def fix_font(
    path: str,
    dictionary: StyleWordDictionary,
    options: ClassifyOptions,
    source: str,
    handler: HandlerAPI,
    tracker: ErrorTracker,
) -> Optional[Classified]:
    """Load, classify and rename one font. Returns None (error recorded) on failure."""
    filename = Path(path).name
    try:
        record = load_font(path)
    except FontLoadError as exc:
        tracker.add_from_exception(context_for_exception(exc), exc, filepath=path)
        handler.error(str(exc), filename)
        return None

    raw_name, source_used = record.raw_name(source)
    handler.discovered(filename, raw_name, source_used)
    if source_used != source:
        handler.warning(f"no {source} name found, using the file name", filename)

    try:
        result = classify(raw_name, dictionary, options)
        result.metrics.apply_to(record)
        values = record.set_family(result.family_name, result.style_name)
    except (NameClassificationError, FontTableError, ValueError) as exc:
        record.close()
        tracker.add_from_exception(context_for_exception(exc), exc, filepath=path)
        handler.error(str(exc), filename)
        return None

    handler.classified(filename, result.family_name, result.style_name)
    metrics = result.metrics
    if metrics.weight is not None:
        handler.mapping("usWeightClass", str(metrics.weight))
    if metrics.width is not None:
        handler.mapping("usWidthClass", str(metrics.width))
    if metrics.selection_flags:
        handler.mapping("fsSelection", f"|= 0x{metrics.selection_flags:04x}")
    handler.mapping("PostScript name", values[NAME_ID_POSTSCRIPT])
    return record, result


def write_groups(
    classified: List[Classified],
    args: argparse.Namespace,
    handler: HandlerAPI,
    tracker: ErrorTracker,
) -> None:
    """Group the finished batch by family and write (or preview) every font."""
    records: Dict[str, FontRecord] = {str(rec.path): rec for rec, _ in classified}
    infos = [font_info_from_result(str(rec.path), res) for rec, res in classified]
    groups = FontSorter(infos).group_by_family(parse_forced_groups(args.group))
    output_root = Path(args.output_dir).expanduser()
    claimed: Dict[Path, str] = {}

    for family, fonts in groups.items():
        if args.flat:
            directory = output_root
        else:
            directory = output_root / family_directory_name(family)
        handler.info(f"{cs.fmt_value(family)}: {cs.fmt_count(len(fonts))} font(s)")
        for info in fonts:
            record = records[info.path]
            try:
                target = target_path(record, directory, args.format)
                if target in claimed:
                    # Two inputs classified to the same name; keep the first
                    handler.skipped(
                        record.filename, f"same output name as {claimed[target]}"
                    )
                    continue
                claimed[target] = record.filename
                if args.dry_run:
                    handler.saved(target)
                else:
                    handler.saved(write_font(record, directory, args.format))
            except FontWriteError as exc:
                tracker.add_from_exception(
                    context_for_exception(exc), exc, filepath=info.path
                )
                handler.error(str(exc), record.filename)
            finally:
                record.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if not args.paths and not args.names:
        parser.error("give font paths or --names")

    reset_logging()
    verbosity = verbosity_from_flags(args.quiet, args.verbose)
    logger, handler, metrics = setup_logging(verbosity, dry_run=args.dry_run)
    tracker = ErrorTracker()

    try:
        dictionary = build_dictionary(args)
        options = build_options(args)
    except (DictionaryLoadError, PatternError) as exc:
        tracker.add_from_exception(context_for_exception(exc), exc)
        handler.error(str(exc))
        return EXIT_CONFIG
    logger.info(
        f"Dictionary {dictionary.source}: {len(dictionary.style_words)} style words"
    )

    if args.names:
        preview_names(args.names, dictionary, options, tracker)
        return EXIT_FAILURES if tracker.has_errors() else EXIT_OK

    files = collect_font_files(
        args.paths, recursive=args.recursive, exclude=[args.output_dir]
    )
    if not files:
        handler.warning("No font files found")
        return EXIT_FAILURES
    handler.info(f"Found {cs.fmt_count(len(files))} font file(s)", verbose_only=False)

    classified: List[Classified] = []
    for path in files:
        outcome = fix_font(path, dictionary, options, args.source, handler, tracker)
        if outcome is not None:
            classified.append(outcome)

    write_groups(classified, args, handler, tracker)

    print_summary(metrics, dry_run=args.dry_run)
    if tracker.has_errors():
        tracker.print_summary(cs.get_console())
        return EXIT_FAILURES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
