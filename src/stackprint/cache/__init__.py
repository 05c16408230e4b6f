"""Fingerprint-keyed cache of analysis results."""

from stackprint.cache.fingerprint_cache import FingerprintCache
from stackprint.cache.schemas import AnalysisResult, CacheStats

__all__ = [
    "AnalysisResult",
    "CacheStats",
    "FingerprintCache",
]
