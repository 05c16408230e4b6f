"""Static analysis: seven read-only detectors over a project tree."""

from stackprint.analysis.static.analyzer import (
    calculate_confidence,
    run_static_analysis,
)
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
    DetectedConfig,
    DetectedLanguage,
    DirectoryPatterns,
    FrameworkDetectionResult,
    LanguageDetectionResult,
    MonorepoResult,
    StaticAnalysisResult,
    StructureAnalysisResult,
)
from stackprint.analysis.static.structure_analyzer import analyze_structure

__all__ = [
    "BuildToolResult",
    "ConfigAnalysisResult",
    "DependencyAnalysisResult",
    "DetectedConfig",
    "DetectedLanguage",
    "DirectoryPatterns",
    "FrameworkDetectionResult",
    "LanguageDetectionResult",
    "MonorepoResult",
    "StaticAnalysisResult",
    "StructureAnalysisResult",
    "analyze_configs",
    "analyze_dependencies",
    "analyze_structure",
    "calculate_confidence",
    "detect_build_tools",
    "detect_frameworks",
    "detect_languages",
    "detect_monorepo",
    "run_static_analysis",
]
