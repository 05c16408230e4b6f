"""Orchestrate all static analysis detectors."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from stackprint.analysis.static._files import resolve_settings
from stackprint.analysis.static.build_tool_detector import detect_build_tools
from stackprint.analysis.static.config_analyzer import analyze_configs
from stackprint.analysis.static.dependency_analyzer import analyze_dependencies
from stackprint.analysis.static.framework_detector import detect_frameworks
from stackprint.analysis.static.language_detector import detect_languages
from stackprint.analysis.static.monorepo_detector import detect_monorepo
from stackprint.analysis.static.schemas import (
    BuildToolResult,
    ConfigAnalysisResult,
    DependencyAnalysisResult,
    FrameworkDetectionResult,
    LanguageDetectionResult,
    MonorepoResult,
    StaticAnalysisResult,
    StructureAnalysisResult,
)
from stackprint.analysis.static.structure_analyzer import analyze_structure
from stackprint.config import Settings
from stackprint.constants import Confidence

logger = logging.getLogger(__name__)


async def run_static_analysis(
    project_path: Path,
    settings: Settings | None = None,
) -> StaticAnalysisResult:
    """Run all seven detectors in parallel.

    Detectors are independent read-only probes, so they are launched
    together via asyncio.gather() with to_thread() wrappers. A detector
    failure propagates to the caller; there is no partial result.
    """
    cfg = resolve_settings(settings)
    root = Path(project_path)
    started = time.monotonic()

    (
        languages,
        dependencies,
        structure,
        frameworks,
        build_tools,
        monorepo,
        configs,
    ) = await asyncio.gather(
        asyncio.to_thread(detect_languages, root, cfg),
        asyncio.to_thread(analyze_dependencies, root),
        asyncio.to_thread(analyze_structure, root, cfg),
        asyncio.to_thread(detect_frameworks, root),
        asyncio.to_thread(detect_build_tools, root),
        asyncio.to_thread(detect_monorepo, root),
        asyncio.to_thread(analyze_configs, root),
    )

    elapsed_ms = (time.monotonic() - started) * 1000
    confidence = calculate_confidence(
        languages,
        dependencies,
        structure,
        frameworks,
        build_tools,
        monorepo,
        configs,
    )
    logger.info(
        "event=static_analysis_complete path=%s primary=%s "
        "confidence=%.2f duration_ms=%.0f",
        root,
        languages.primary,
        confidence,
        elapsed_ms,
    )

    return StaticAnalysisResult(
        languages=languages,
        dependencies=dependencies,
        structure=structure,
        frameworks=frameworks,
        build_tools=build_tools,
        monorepo=monorepo,
        configs=configs,
        execution_time_ms=elapsed_ms,
        confidence=confidence,
    )


def calculate_confidence(
    languages: LanguageDetectionResult,
    dependencies: DependencyAnalysisResult,
    structure: StructureAnalysisResult,
    frameworks: FrameworkDetectionResult,
    build_tools: BuildToolResult,
    monorepo: MonorepoResult,
    configs: ConfigAnalysisResult,
) -> float:
    """Weighted mean of the language confidence and every firing signal.

    Language confidence always counts with weight 1; each other signal
    that fires adds its increment and one unit of weight.
    """
    total = languages.confidence
    weight = 1

    if dependencies.lockfile_present:
        total += Confidence.LOCKFILE_PRESENT
        weight += 1
    elif dependencies.dependencies:
        total += Confidence.DEPENDENCIES_ONLY
        weight += 1

    pattern_count = structure.patterns.count()
    if pattern_count > 0:
        total += min(
            pattern_count / Confidence.STRUCTURE_PATTERN_DIVISOR,
            Confidence.STRUCTURE_CAP,
        )
        weight += 1

    if frameworks.all_frameworks():
        total += Confidence.FRAMEWORKS
        weight += 1

    if build_tools.has_any():
        total += Confidence.BUILD_TOOLS
        weight += 1

    if monorepo.is_monorepo and monorepo.tool:
        total += Confidence.MONOREPO_TOOL
        weight += 1

    if configs.configs:
        total += min(
            len(configs.configs) / Confidence.CONFIG_DIVISOR,
            Confidence.CONFIG_CAP,
        )
        weight += 1

    return max(0.0, min(1.0, total / weight))
