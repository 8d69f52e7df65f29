"""
Composer Code Generation Module

Generates Java sources from business network models.
"""

from pathlib import Path
from typing import Optional, Union

from .core.generator import CodeGenerator, GenerationResult, GeneratorError
from .core.config import GeneratorConfig, ConfigManager, load_config
from .java.visitor import JavaVisitor
from .java.engine_generator import EngineGenerator


def generate_model_sources(
    root,
    output_dir: Union[str, Path],
    config: Optional[GeneratorConfig] = None,
    ignore_system: Optional[bool] = None,
) -> GenerationResult:
    """
    Generate one Java file per declaration reachable from root.

    Args:
        root: A BusinessNetworkDefinition or a ModelManager
        output_dir: Directory receiving the generated tree
        config: Generator configuration (defaults are used when omitted)
        ignore_system: Skip system declarations; defaults to the configuration

    Returns:
        GenerationResult describing the files written
    """
    return JavaVisitor(config).generate(root, output_dir, ignore_system=ignore_system)


def generate_engine_interface(
    engine, output_dir: Union[str, Path], config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """Generate the Java Engine interface for an engine object or class."""
    return EngineGenerator(engine, config).generate(output_dir)


__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "JavaVisitor",
    "EngineGenerator",
    "generate_model_sources",
    "generate_engine_interface",
]
