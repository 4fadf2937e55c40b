"""
core_file_collector: shared helpers to collect font files from files/dirs.

Features:
- Supports TTF, OTF, WOFF, WOFF2, TTX by default
- Optional recursive directory scanning
- Case-insensitive extension matching
- Optional excluded directories (e.g. the fixer's own output directory)
- De-duplicates and returns sorted list of absolute paths

Usage:
    from FontNameCore.core_file_collector import collect_font_files

    fonts = collect_font_files(["~/Fonts", "Extra.otf"], recursive=True)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

from FontNameCore.core_font_record_io import FONT_EXTENSIONS
from FontNameCore.core_logging_config import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS: Set[str] = set(FONT_EXTENSIONS)


def _normalize_paths(paths: Iterable[str | Path]) -> List[Path]:
    """Convert input paths to Path objects, expanding user paths."""
    return [Path(p).expanduser() for p in paths if str(p).strip()]


def _matches_extension(path: Path, allowed_extensions: Set[str]) -> bool:
    """Check if path has an allowed extension (case-insensitive)."""
    ext = path.suffix.lower()
    if not ext:
        return False
    return ext in {e.lower() for e in allowed_extensions}


def _is_excluded(path: Path, excluded: List[Path]) -> bool:
    return any(path == ex or ex in path.parents for ex in excluded)


def iter_font_files(
    paths: Iterable[str | Path],
    recursive: bool = False,
    *,
    allowed_extensions: Optional[Set[str]] = None,
    exclude: Iterable[str | Path] = (),
) -> Iterator[Path]:
    """Iterate over font file paths as they are discovered.

    - paths: files and/or directories
    - recursive: recurse into directories
    - allowed_extensions: override supported extensions; compared case-insensitively
    - exclude: directories whose contents are never yielded

    Missing paths and unreadable directories are logged and skipped.
    """
    allowed = allowed_extensions or SUPPORTED_EXTENSIONS
    excluded = [p.resolve() for p in _normalize_paths(exclude)]

    for path_obj in _normalize_paths(paths):
        if path_obj.is_file():
            # Explicitly named files are taken even inside an excluded directory
            if _matches_extension(path_obj, allowed):
                yield path_obj.resolve()
            else:
                logger.debug(f"Not a font file: {path_obj}")
        elif path_obj.is_dir():
            if recursive:
                for root, dirs, files in os.walk(path_obj):
                    root_path = Path(root).resolve()
                    if _is_excluded(root_path, excluded):
                        dirs[:] = []
                        continue
                    dirs.sort()
                    for filename in files:
                        file_path = root_path / filename
                        if _matches_extension(file_path, allowed):
                            yield file_path
            else:
                if _is_excluded(path_obj.resolve(), excluded):
                    continue
                try:
                    entries = sorted(os.listdir(path_obj))
                except OSError as exc:
                    logger.warning(f"Cannot list {path_obj}: {exc}")
                    continue
                for filename in entries:
                    file_path = path_obj / filename
                    if file_path.is_file() and _matches_extension(file_path, allowed):
                        yield file_path.resolve()
        else:
            logger.warning(f"Path not found: {path_obj}")


def collect_font_files(
    paths: Iterable[str | Path],
    recursive: bool = False,
    *,
    allowed_extensions: Optional[Set[str]] = None,
    exclude: Iterable[str | Path] = (),
) -> List[str]:
    """Collect font file paths from a list of files and/or directories.

    Returns a sorted, de-duplicated list of absolute paths.
    """
    found = iter_font_files(
        paths,
        recursive,
        allowed_extensions=allowed_extensions,
        exclude=exclude,
    )
    return sorted({str(p) for p in found})


__all__ = [
    "SUPPORTED_EXTENSIONS",
    "collect_font_files",
    "iter_font_files",
]
