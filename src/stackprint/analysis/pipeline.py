"""Fingerprint a project, reuse a cached analysis, or run a fresh one."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from pydantic import BaseModel

from stackprint.analysis.static.analyzer import run_static_analysis
from stackprint.cache.fingerprint_cache import FingerprintCache
from stackprint.cache.schemas import AnalysisResult
from stackprint.config import Settings
from stackprint.constants import ANALYSIS_SCHEMA_VERSION, AnalysisSource
from stackprint.fingerprint.generator import FingerprintGenerator
from stackprint.fingerprint.schemas import FingerprintResult
from stackprint.logging_config import setup_logging

logger = logging.getLogger(__name__)


class ProjectAnalysis(BaseModel):
    """An analysis result and the fingerprint it is stored under."""

    fingerprint: FingerprintResult
    result: AnalysisResult
    cache_hit: bool = False


async def analyze_project(
    project_path: Path | str,
    *,
    settings: Settings | None = None,
    cache: FingerprintCache | None = None,
    use_cache: bool = True,
) -> ProjectAnalysis:
    """Return the project's analysis, from cache when the tree is unchanged.

    An invalid fingerprint still gets a fresh analysis but is never
    used as a cache key. Detector failures propagate. The first call
    configures logging at ``settings.log_level``.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level)
    root = Path(project_path)

    fingerprint = await FingerprintGenerator(settings).generate(root)
    if not fingerprint.valid:
        logger.warning(
            "event=fingerprint_invalid path=%s reason=%s",
            root,
            fingerprint.invalid_reason,
        )

    cacheable = use_cache and fingerprint.valid
    if cacheable:
        cache = cache or FingerprintCache.from_settings(settings)
        cached = await cache.get(fingerprint.hash)
        if cached is not None:
            logger.info(
                "event=cache_hit path=%s fingerprint=%s",
                root,
                fingerprint.hash[:12],
            )
            return ProjectAnalysis(
                fingerprint=fingerprint, result=cached, cache_hit=True
            )

    static = await run_static_analysis(root, settings)
    manager = static.dependencies.package_manager
    result = AnalysisResult(
        schema_version=ANALYSIS_SCHEMA_VERSION,
        timestamp_ms=int(time.time() * 1000),
        static_analysis=static,
        primary_language=static.languages.primary,
        package_manager=str(manager) if manager else None,
        frameworks=static.frameworks.all_frameworks(),
        confidence=static.confidence,
        source=str(AnalysisSource.STATIC_ONLY),
    )

    if cacheable and cache is not None:
        await cache.set(fingerprint.hash, result)
        logger.info(
            "event=cache_stored path=%s fingerprint=%s",
            root,
            fingerprint.hash[:12],
        )

    return ProjectAnalysis(fingerprint=fingerprint, result=result)
