"""
composer_codegen: Java source generation for business network models.
"""

__version__ = "0.1.0"

from .model import BusinessNetworkDefinition, ModelManager, decode_archive
from .utils import load_archive
from .codegen import (
    EngineGenerator,
    GenerationResult,
    GeneratorConfig,
    JavaVisitor,
    generate_engine_interface,
    generate_model_sources,
    load_config,
)
from .engine import ComposerEngine

__all__ = [
    "__version__",
    "BusinessNetworkDefinition",
    "ModelManager",
    "decode_archive",
    "load_archive",
    "EngineGenerator",
    "GenerationResult",
    "GeneratorConfig",
    "JavaVisitor",
    "generate_engine_interface",
    "generate_model_sources",
    "load_config",
    "ComposerEngine",
]
