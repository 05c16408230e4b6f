"""Pydantic models for static analysis output."""

from pydantic import BaseModel, Field

from stackprint.constants import MonorepoLayout, PackageManager


class DetectedLanguage(BaseModel):
    """Per-language statistics. Line counts are estimates."""

    language: str
    file_count: int = 0
    estimated_line_count: int = 0
    percentage_of_total: float = 0.0


class LanguageDetectionResult(BaseModel):
    """Output of the language detector, ranked by score."""

    primary: str | None = None
    languages: list[DetectedLanguage] = Field(
        default_factory=lambda: list[DetectedLanguage]()
    )
    confidence: float = 0.0


class DependencyAnalysisResult(BaseModel):
    """Direct and development dependencies from the project manifest."""

    dependencies: dict[str, str] = Field(default_factory=lambda: dict[str, str]())
    dev_dependencies: dict[str, str] = Field(
        default_factory=lambda: dict[str, str]()
    )
    package_manager: PackageManager | None = None
    lockfile_present: bool = False
    manifest_path: str | None = None
    lockfile_path: str | None = None


class DirectoryPatterns(BaseModel):
    """Which conventional top-level directories exist."""

    has_src_dir: bool = False
    has_lib_dir: bool = False
    has_app_dir: bool = False
    has_tests_dir: bool = False
    has_docs_dir: bool = False
    has_scripts_dir: bool = False
    has_components_dir: bool = False
    has_config_dir: bool = False
    has_public_dir: bool = False
    has_examples_dir: bool = False

    def count(self) -> int:
        """Number of patterns present."""
        return sum(1 for v in self.model_dump().values() if v)


class StructureAnalysisResult(BaseModel):
    """Size and layout of the project tree."""

    total_files: int = 0
    total_lines: int = 0  # estimated
    top_level_directories: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    patterns: DirectoryPatterns = Field(default_factory=DirectoryPatterns)


class FrameworkDetectionResult(BaseModel):
    """Frameworks and libraries matched per category."""

    frontend: list[str] = Field(default_factory=lambda: list[str]())
    backend: list[str] = Field(default_factory=lambda: list[str]())
    testing: list[str] = Field(default_factory=lambda: list[str]())
    orm: list[str] = Field(default_factory=lambda: list[str]())
    state_management: list[str] = Field(default_factory=lambda: list[str]())
    ui_libraries: list[str] = Field(default_factory=lambda: list[str]())
    bundlers: list[str] = Field(default_factory=lambda: list[str]())

    def all_frameworks(self) -> list[str]:
        """Every matched name, category by category."""
        return [
            *self.frontend,
            *self.backend,
            *self.testing,
            *self.orm,
            *self.state_management,
            *self.ui_libraries,
            *self.bundlers,
        ]


class BuildToolResult(BaseModel):
    """Build, task, container and CI tooling found by marker files."""

    bundler: str | None = None
    monorepo_tool: str | None = None
    task_runner: str | None = None
    containerization: list[str] = Field(default_factory=lambda: list[str]())
    ci: list[str] = Field(default_factory=lambda: list[str]())

    def has_any(self) -> bool:
        return bool(
            self.bundler
            or self.monorepo_tool
            or self.task_runner
            or self.containerization
            or self.ci
        )


class MonorepoResult(BaseModel):
    """Whether the project is a multi-package workspace."""

    is_monorepo: bool = False
    tool: str | None = None
    packages: list[str] = Field(default_factory=lambda: list[str]())
    structure: MonorepoLayout | None = None
    package_count: int = 0


class DetectedConfig(BaseModel):
    """A configuration tool and the files that revealed it."""

    category: str
    name: str
    matched_files: list[str] = Field(default_factory=lambda: list[str]())


class ConfigAnalysisResult(BaseModel):
    """All detected configuration, plus per-category summary flags."""

    configs: list[DetectedConfig] = Field(
        default_factory=lambda: list[DetectedConfig]()
    )
    has_typescript: bool = False
    has_linting: bool = False
    has_docker: bool = False
    has_ci: bool = False
    has_environment_files: bool = False


class StaticAnalysisResult(BaseModel):
    """Combined output of all 7 detectors."""

    languages: LanguageDetectionResult = Field(
        default_factory=LanguageDetectionResult
    )
    dependencies: DependencyAnalysisResult = Field(
        default_factory=DependencyAnalysisResult
    )
    structure: StructureAnalysisResult = Field(
        default_factory=StructureAnalysisResult
    )
    frameworks: FrameworkDetectionResult = Field(
        default_factory=FrameworkDetectionResult
    )
    build_tools: BuildToolResult = Field(default_factory=BuildToolResult)
    monorepo: MonorepoResult = Field(default_factory=MonorepoResult)
    configs: ConfigAnalysisResult = Field(default_factory=ConfigAnalysisResult)
    execution_time_ms: float = 0.0
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
