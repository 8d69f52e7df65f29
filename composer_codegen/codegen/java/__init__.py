"""
Java code generator module.

Generates annotated Java classes and enums from a model graph, and the
Java Engine interface from the runtime engine's entry points.
"""

from .types import (
    PRIMITIVE_TYPES,
    DataFieldMarker,
    JavaTypeMapper,
    Marker,
    PointerMarker,
)
from .visitor import JavaVisitor, VisitContext
from .engine_generator import (
    EngineGenerator,
    MethodSignature,
    describe_methods,
    extract_parameter_list,
    resolve_runtime_version,
    to_camel_case,
)

__all__ = [
    "PRIMITIVE_TYPES",
    "DataFieldMarker",
    "JavaTypeMapper",
    "Marker",
    "PointerMarker",
    "JavaVisitor",
    "VisitContext",
    "EngineGenerator",
    "MethodSignature",
    "describe_methods",
    "extract_parameter_list",
    "resolve_runtime_version",
    "to_camel_case",
]
