"""
Base generator interface for all SDK model targets.

Defines the contract that all model generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path
from .config import GeneratorConfig
from .formatting import CodeFormatter, FormatOptions
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class EntityProcessingError(GeneratorError):
    """Raised when a single content type, snippet or taxonomy fails to generate."""

    def __init__(self, kind: str, codename: Optional[str], name: str, cause: Exception):
        self.kind = kind
        self.codename = codename
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to process {kind} '{codename}' ({name}): {cause}")


class CodeGenerator(ABC):
    """Abstract base class for all model generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None, reporter=None):
        """Initialize generator with optional configuration and reporter."""
        from ..reporter import GenerationReporter

        self.config = config or GeneratorConfig()
        self.reporter = reporter or GenerationReporter()
        self.formatter = CodeFormatter(
            FormatOptions.from_dict(self.config.format_options)
            if self.config.format_options
            else None
        )
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def sdk_name(self) -> str:
        """Return the SDK the models are generated for (e.g., 'delivery')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, snapshot) -> "GenerationResult":
        """
        Generate and write model files for a schema snapshot.

        Args:
            snapshot: SchemaSnapshot fetched for this run

        Returns:
            GenerationResult listing written files
        """
        pass


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        content_type_filenames: List[str] = None,
        snippet_filenames: List[str] = None,
        taxonomy_filenames: List[str] = None,
        barrel_filenames: List[str] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        self.content_type_filenames = content_type_filenames or []
        self.snippet_filenames = snippet_filenames or []
        self.taxonomy_filenames = taxonomy_filenames or []
        self.barrel_filenames = barrel_filenames or []
        self.warnings = warnings or []
        self.metadata = metadata or {}

    @property
    def filenames(self) -> List[str]:
        """All model files, for downstream barrel assembly."""
        return (
            self.snippet_filenames
            + self.content_type_filenames
            + self.taxonomy_filenames
        )
