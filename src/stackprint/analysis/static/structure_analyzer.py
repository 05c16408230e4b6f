"""Summarise project size and conventional directory layout."""

from __future__ import annotations

from pathlib import Path

from stackprint.analysis.static._files import resolve_settings, walk_files
from stackprint.analysis.static.schemas import (
    DirectoryPatterns,
    StructureAnalysisResult,
)
from stackprint.config import Settings
from stackprint.constants import (
    AVG_LINES_PER_FILE,
    DEFAULT_LINES_PER_FILE,
    LANGUAGE_EXTENSIONS,
)

# pattern flag → accepted top-level directory names
_DIRECTORY_PATTERNS: dict[str, tuple[str, ...]] = {
    "has_src_dir": ("src",),
    "has_lib_dir": ("lib", "libs"),
    "has_app_dir": ("app", "apps"),
    "has_tests_dir": ("tests", "test", "__tests__", "spec"),
    "has_docs_dir": ("docs", "doc"),
    "has_scripts_dir": ("scripts",),
    "has_components_dir": ("components",),
    "has_config_dir": ("config", "configs"),
    "has_public_dir": ("public", "static"),
    "has_examples_dir": ("examples", "example"),
}


def analyze_structure(
    project_path: Path,
    settings: Settings | None = None,
) -> StructureAnalysisResult:
    """Count files, estimate lines, and flag common directories.

    Only source files contribute to the line estimate; every other
    file still counts toward ``total_files``.
    """
    cfg = resolve_settings(settings)
    root = Path(project_path)
    skip = set(cfg.skip_directories)

    total_files = 0
    total_lines = 0
    for path in walk_files(root, skip, cfg.max_walk_depth):
        total_files += 1
        lang = LANGUAGE_EXTENSIONS.get(path.suffix.lower())
        if lang is not None:
            total_lines += AVG_LINES_PER_FILE.get(lang, DEFAULT_LINES_PER_FILE)

    top_level = _top_level_directories(root, skip)
    present = set(top_level)
    patterns = DirectoryPatterns(
        **{
            flag: any(name in present for name in names)
            for flag, names in _DIRECTORY_PATTERNS.items()
        }
    )

    return StructureAnalysisResult(
        total_files=total_files,
        total_lines=total_lines,
        top_level_directories=top_level,
        patterns=patterns,
    )


def _top_level_directories(root: Path, skip: set[str]) -> list[str]:
    try:
        children = sorted(root.iterdir())
    except OSError:
        return []
    return [
        child.name
        for child in children
        if child.is_dir()
        and child.name not in skip
        and not child.name.startswith(".")
    ]
