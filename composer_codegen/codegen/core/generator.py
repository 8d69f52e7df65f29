"""
Shared base for the Java source generators.

Holds the result type returned by every generate() call, the header writing
both generators share, and the errors raised during generation.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import GeneratorConfig, load_config
from .file_writer import FileWriter
from .templates import FILE_HEADER, TemplateEngine, get_default_template_engine


class GeneratorError(Exception):
    """Raised when generation cannot complete."""

    pass


class UnrecognizedNodeError(GeneratorError):
    """Raised when the traversal meets a model node it has no rule for."""

    def __init__(self, node: Any):
        self.node = node
        super().__init__(
            f"Unrecognised type: {type(node).__name__}, value: {node!r}"
        )


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: List[Path] = None,
        skipped: List[str] = None,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Files written, in generation order
            skipped: Names of declarations or methods that produced no output
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files or []
        self.skipped = skipped or []
        self.warnings = warnings or []
        self.metadata = metadata or {}

    def merge(self, other: "GenerationResult") -> "GenerationResult":
        """Combine two results, keeping this result's metadata first."""
        return GenerationResult(
            files=self.files + other.files,
            skipped=self.skipped + other.skipped,
            warnings=self.warnings + other.warnings,
            metadata={**other.metadata, **self.metadata},
        )


class CodeGenerator(ABC):
    """Abstract base class for generators that write Java sources."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """Initialize generator with optional configuration."""
        self.config = config or load_config()
        self._template_engine = template_engine

    @property
    def language_name(self) -> str:
        return "java"

    @property
    def file_extension(self) -> str:
        return self.config.file_extension

    @property
    def template_engine(self) -> TemplateEngine:
        if self._template_engine is None:
            if self.config.template_dir:
                self._template_engine = TemplateEngine(self.config.template_dir)
            else:
                self._template_engine = get_default_template_engine()
        return self._template_engine

    def create_file_writer(self, output_dir) -> FileWriter:
        """Create a file sink using the configured indentation."""
        return FileWriter(output_dir, indent=self.config.indent)

    def write_file_header(self, file_writer: FileWriter, package_name: str) -> None:
        """
        Write the license block, generated-code warning and package statement.

        The header goes to the region preceding any content already written,
        followed by one blank line.
        """
        lines = self.template_engine.render_lines(
            FILE_HEADER,
            {
                "license_lines": self.config.license_lines,
                "generated_warning": self.config.generated_warning,
                "package_name": package_name,
            },
        )
        for line in lines:
            file_writer.write_before_line(0, line)
        file_writer.write_before_line(0, "")

    @abstractmethod
    def generate(self, *args, **kwargs) -> GenerationResult:
        """Generate files and describe what was written."""
        pass
