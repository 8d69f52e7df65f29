"""
Core code generation components.

Provides the output buffer, the file sink, configuration, templates and the
base generator used by the Java generators.
"""

from .writer import Writer, BufferContractError
from .file_writer import FileWriter, FileWriterError
from .generator import (
    CodeGenerator,
    GeneratorError,
    GenerationResult,
    UnrecognizedNodeError,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, get_default_template_engine

__all__ = [
    # Output buffering
    "Writer",
    "BufferContractError",
    "FileWriter",
    "FileWriterError",
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "UnrecognizedNodeError",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "get_default_template_engine",
]
