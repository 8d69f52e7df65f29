"""
Model graph consumed by the generators.

Provides the declaration classes, archive decoding and the built-in
system namespace.
"""

from .declarations import (
    SYSTEM_NAMESPACE,
    AssetDeclaration,
    BusinessNetworkDefinition,
    ClassDeclaration,
    ConceptDeclaration,
    EnumDeclaration,
    EnumValueDeclaration,
    EventDeclaration,
    Field,
    ModelError,
    ModelFile,
    ModelManager,
    ParticipantDeclaration,
    Property,
    RelationshipDeclaration,
    TransactionDeclaration,
    get_namespace,
    get_short_name,
)
from .archive import ArchiveDecodeError, decode_archive, decode_model_file
from .system import create_system_model_file

__all__ = [
    "SYSTEM_NAMESPACE",
    "AssetDeclaration",
    "BusinessNetworkDefinition",
    "ClassDeclaration",
    "ConceptDeclaration",
    "EnumDeclaration",
    "EnumValueDeclaration",
    "EventDeclaration",
    "Field",
    "ModelError",
    "ModelFile",
    "ModelManager",
    "ParticipantDeclaration",
    "Property",
    "RelationshipDeclaration",
    "TransactionDeclaration",
    "get_namespace",
    "get_short_name",
    "ArchiveDecodeError",
    "decode_archive",
    "decode_model_file",
    "create_system_model_file",
]
