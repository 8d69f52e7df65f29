"""
Business network archive decoding.

An archive is either a zip file holding ``package.json`` plus one JSON model
document per namespace under ``models/``, or a single JSON document of the
form ``{"name": ..., "version": ..., "models": [...]}``. Decoding produces a
validated BusinessNetworkDefinition or raises ArchiveDecodeError.
"""

import io
import json
import zipfile
from typing import Any, Dict, List, Optional

from ..logging_config import get_logger
from .declarations import (
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
)

logger = get_logger(__name__)

DECLARATION_KINDS = {
    "asset": AssetDeclaration,
    "participant": ParticipantDeclaration,
    "transaction": TransactionDeclaration,
    "event": EventDeclaration,
    "concept": ConceptDeclaration,
    "class": ClassDeclaration,
    "enum": EnumDeclaration,
}

PROPERTY_KINDS = {
    "field": Field,
    "relationship": RelationshipDeclaration,
    "enum_value": EnumValueDeclaration,
}

MODELS_PREFIX = "models/"


class ArchiveDecodeError(Exception):
    """Exception raised when an archive cannot be decoded into a model graph."""

    pass


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ArchiveDecodeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _optional_string(data: Dict[str, Any], key: str, what: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ArchiveDecodeError(
            f"{what}: '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _list_of(data: Dict[str, Any], key: str, what: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ArchiveDecodeError(f"{what}: '{key}' must be a list, got {type(value).__name__}")
    return value


def decode_property(data: Dict[str, Any]) -> Property:
    """Build a property from its JSON description."""
    data = _require_object(data, "Property")
    kind = data.get("kind", "field")
    property_class = PROPERTY_KINDS.get(kind) if isinstance(kind, str) else None
    if property_class is None:
        raise ArchiveDecodeError(f"Unknown property kind: {kind}")

    name = _optional_string(data, "name", "Property")
    if not name:
        raise ArchiveDecodeError(f"Property without a name: {data}")

    if property_class is EnumValueDeclaration:
        return EnumValueDeclaration(name=name)

    type_name = _optional_string(data, "type", f"Property {name}")
    if not type_name:
        raise ArchiveDecodeError(f"Property {name} has no type")

    return property_class(
        name=name,
        type=type_name,
        array=bool(data.get("array", False)),
        optional=bool(data.get("optional", False)),
    )


def decode_declaration(data: Dict[str, Any]) -> ClassDeclaration:
    """Build a class or enum declaration from its JSON description."""
    data = _require_object(data, "Declaration")
    kind = data.get("kind", "class")
    declaration_class = DECLARATION_KINDS.get(kind) if isinstance(kind, str) else None
    if declaration_class is None:
        raise ArchiveDecodeError(f"Unknown declaration kind: {kind}")

    name = _optional_string(data, "name", "Declaration")
    if not name:
        raise ArchiveDecodeError(f"Declaration without a name: {data}")

    what = f"Declaration {name}"
    properties = [decode_property(prop) for prop in _list_of(data, "properties", what)]

    return declaration_class(
        name=name,
        properties=properties,
        abstract=bool(data.get("abstract", False)),
        super_type=_optional_string(data, "extends", what),
        identifier_field_name=_optional_string(data, "identifiedBy", what),
        system=bool(data.get("system", False)),
    )


def decode_model_file(data: Dict[str, Any]) -> ModelFile:
    """Build a model file (one namespace) from its JSON description."""
    data = _require_object(data, "Model document")

    namespace = _optional_string(data, "namespace", "Model document")
    if not namespace:
        raise ArchiveDecodeError("Model document has no namespace")

    what = f"Model document {namespace}"
    imports = _list_of(data, "imports", what)
    for imported in imports:
        if not isinstance(imported, str):
            raise ArchiveDecodeError(f"{what}: imports must be strings, got {imported!r}")

    model_file = ModelFile(namespace=namespace, imports=list(imports))
    try:
        for declaration in _list_of(data, "declarations", what):
            model_file.add_declaration(decode_declaration(declaration))
    except ModelError as e:
        raise ArchiveDecodeError(str(e)) from e

    return model_file


def decode_models(
    metadata: Dict[str, Any], model_documents: List[Dict[str, Any]]
) -> BusinessNetworkDefinition:
    """Assemble and validate a network definition from decoded documents."""
    if not isinstance(metadata, dict):
        raise ArchiveDecodeError("Archive metadata must be a JSON object")

    try:
        name = metadata["name"]
        version = metadata["version"]
    except KeyError as e:
        raise ArchiveDecodeError(f"Archive metadata is missing {e}") from None
    for key, value in (("name", name), ("version", version)):
        if not isinstance(value, str):
            raise ArchiveDecodeError(
                f"Archive metadata: '{key}' must be a string, got {type(value).__name__}"
            )

    manager = ModelManager()
    try:
        for document in model_documents:
            manager.add_model_file(decode_model_file(document))
        manager.validate()
    except ModelError as e:
        raise ArchiveDecodeError(f"Invalid model in archive {name}: {e}") from e

    logger.info(
        "Decoded archive %s@%s with %d namespace(s)", name, version, len(manager)
    )
    return BusinessNetworkDefinition(
        name=name,
        version=version,
        model_manager=manager,
        description=metadata.get("description", ""),
    )


def _decode_zip(data: bytes) -> BusinessNetworkDefinition:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            names = archive.namelist()
            if "package.json" not in names:
                raise ArchiveDecodeError("Archive has no package.json")

            metadata = json.loads(archive.read("package.json").decode("utf-8"))
            documents = [
                json.loads(archive.read(entry).decode("utf-8"))
                for entry in sorted(names)
                if entry.startswith(MODELS_PREFIX) and entry.endswith(".json")
            ]
    except zipfile.BadZipFile as e:
        raise ArchiveDecodeError(f"Corrupt archive: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ArchiveDecodeError(f"Invalid JSON in archive: {e}") from e

    return decode_models(metadata, documents)


def _decode_json(data: bytes) -> BusinessNetworkDefinition:
    try:
        document = json.loads(data.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ArchiveDecodeError(f"Invalid JSON archive: {e}") from e

    if not isinstance(document, dict):
        raise ArchiveDecodeError("Archive document must be a JSON object")

    models = document.get("models", [])
    if not isinstance(models, list):
        raise ArchiveDecodeError("'models' must be a list of model documents")

    return decode_models(document, models)


def decode_archive(data: bytes) -> BusinessNetworkDefinition:
    """
    Decode archive bytes into a BusinessNetworkDefinition.

    Args:
        data: Raw bytes of a zip archive or a JSON archive document

    Returns:
        The decoded and validated network definition

    Raises:
        ArchiveDecodeError: If the bytes do not describe a valid model
    """
    if not isinstance(data, (bytes, bytearray)):
        raise ArchiveDecodeError(f"Archive data must be bytes, got {type(data).__name__}")

    if zipfile.is_zipfile(io.BytesIO(data)):
        return _decode_zip(bytes(data))
    return _decode_json(bytes(data))
