"""Detect programming languages in a project via file extensions.

Line counts are estimated from a fixed average-lines-per-file table;
files are never opened. Manifest files that strongly indicate a
language (``tsconfig.json``, ``go.mod``, ...) add a weighted bonus, so
a TypeScript project with a tsconfig outranks a stray Python script
even at equal file counts.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path

from stackprint.analysis.static._files import (
    package_json_dependencies,
    resolve_settings,
    walk_files,
)
from stackprint.analysis.static.schemas import (
    DetectedLanguage,
    LanguageDetectionResult,
)
from stackprint.config import Settings
from stackprint.constants import (
    AVG_LINES_PER_FILE,
    DEFAULT_LINES_PER_FILE,
    LANGUAGE_EXTENSIONS,
    LINE_SCORE_DIVISOR,
    MANIFEST_BONUS_MULTIPLIER,
    MANIFEST_INDICATORS,
    TYPESCRIPT_DEPENDENCY_BONUS,
    Confidence,
)


def detect_languages(
    project_path: Path,
    settings: Settings | None = None,
) -> LanguageDetectionResult:
    """Rank the languages found under ``project_path``.

    score = file_count + estimated_lines / 100 + 10 * manifest_bonus
    """
    cfg = resolve_settings(settings)
    root = Path(project_path)

    file_counts = count_files_by_language(
        root, cfg.skip_directories, cfg.max_walk_depth
    )
    line_counts = estimate_lines(file_counts)
    bonus = manifest_bonus(root)

    scores: dict[str, float] = {}
    for lang in {*file_counts, *bonus}:
        scores[lang] = (
            file_counts.get(lang, 0)
            + line_counts.get(lang, 0) / LINE_SCORE_DIVISOR
            + bonus.get(lang, 0.0) * MANIFEST_BONUS_MULTIPLIER
        )

    if not scores:
        return LanguageDetectionResult()

    # Ties broken by name so the ranking is deterministic
    ranked = sorted(scores, key=lambda lang: (-scores[lang], lang))
    total_lines = sum(line_counts.values())
    languages = [
        DetectedLanguage(
            language=lang,
            file_count=file_counts.get(lang, 0),
            estimated_line_count=line_counts.get(lang, 0),
            percentage_of_total=(
                line_counts.get(lang, 0) / total_lines * 100
                if total_lines > 0
                else 0.0
            ),
        )
        for lang in ranked
    ]

    return LanguageDetectionResult(
        primary=languages[0].language,
        languages=languages,
        confidence=language_confidence(
            languages[0].percentage_of_total, len(languages)
        ),
    )


def count_files_by_language(
    root: Path, skip_dirs: list[str], max_depth: int
) -> dict[str, int]:
    """Count files per language by extension."""
    counts: dict[str, int] = defaultdict(int)
    for path in walk_files(root, skip_dirs, max_depth):
        lang = LANGUAGE_EXTENSIONS.get(path.suffix.lower())
        if lang is not None:
            counts[lang] += 1
    return dict(counts)


def estimate_lines(file_counts: dict[str, int]) -> dict[str, int]:
    """Estimate line counts from the average-lines-per-file table."""
    return {
        lang: count * AVG_LINES_PER_FILE.get(lang, DEFAULT_LINES_PER_FILE)
        for lang, count in file_counts.items()
    }


def manifest_bonus(root: Path) -> dict[str, float]:
    """Weighted bonus per language from manifest files at the root."""
    bonus: dict[str, float] = defaultdict(float)
    for filename, lang, weight in MANIFEST_INDICATORS:
        if (root / filename).is_file():
            bonus[lang] += weight

    deps, dev_deps = package_json_dependencies(root)
    if "typescript" in deps or "typescript" in dev_deps:
        bonus["typescript"] += TYPESCRIPT_DEPENDENCY_BONUS

    return dict(bonus)


def language_confidence(primary_percentage: float, language_count: int) -> float:
    """Confidence from how dominant the leading language is."""
    confidence = primary_percentage / 100
    if language_count > 3:
        confidence *= Confidence.MANY_LANGUAGES_PENALTY
    elif language_count > 1:
        confidence *= Confidence.FEW_LANGUAGES_PENALTY
    return max(0.0, min(1.0, confidence))
