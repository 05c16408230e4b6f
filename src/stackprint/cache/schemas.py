"""Pydantic models for cached analysis results."""

from pydantic import BaseModel, ConfigDict, Field

from stackprint.analysis.static.schemas import StaticAnalysisResult
from stackprint.constants import ANALYSIS_SCHEMA_VERSION, AnalysisSource


class AnalysisResult(BaseModel):
    """The payload stored per fingerprint.

    Keys written by other consumers of the cache are kept as extras so
    a read-modify-write cycle never drops them.
    """

    model_config = ConfigDict(extra="allow")

    schema_version: str = ANALYSIS_SCHEMA_VERSION
    timestamp_ms: int
    static_analysis: StaticAnalysisResult | None = None
    primary_language: str | None = None
    package_manager: str | None = None
    frameworks: list[str] = Field(default_factory=lambda: list[str]())
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    source: str = AnalysisSource.STATIC_ONLY.value


class CacheStats(BaseModel):
    """Best-effort summary of the cache directory."""

    entry_count: int = 0
    total_bytes: int = 0
    oldest_timestamp: int | None = None
    newest_timestamp: int | None = None
