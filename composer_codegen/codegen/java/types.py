"""
Java type and annotation mapping.

Translates model primitive type names to Java types, rewrites reserved
names to a generic placeholder, and builds the annotation markers attached
to generated classes and members.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ...model.declarations import ClassDeclaration, Property, get_short_name
from ..core.config import GeneratorConfig

PRIMITIVE_TYPES: Dict[str, str] = {
    "DateTime": "java.util.Date",
    "Boolean": "boolean",
    "String": "String",
    "Double": "double",
    "Long": "long",
    "Integer": "int",
}

ARRAY_SUFFIX = "[]"


def java_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class Marker:
    """An annotation attached to a generated declaration or member."""

    name: str

    def arguments(self) -> str:
        return ""

    def render(self, prefix: str) -> str:
        args = self.arguments()
        return f"@{prefix}.{self.name}" + (f"({args})" if args else "")


@dataclass(frozen=True)
class DataFieldMarker(Marker):
    """Marker for fields: identifier flag, optionality, always embedded."""

    name: str = "DataField"
    primary: bool = False
    optional: bool = False
    embedded: bool = True

    def arguments(self) -> str:
        return (
            f"primary={java_bool(self.primary)}, "
            f"optional={java_bool(self.optional)}, "
            f"embedded={java_bool(self.embedded)}"
        )


@dataclass(frozen=True)
class PointerMarker(Marker):
    """Marker for relationships. Relationships are never embedded."""

    name: str = "Pointer"
    optional: bool = False

    def arguments(self) -> str:
        return f"optional={java_bool(self.optional)}"


ENUM_MARKER = Marker("Enum")


class JavaTypeMapper:
    """Maps model type names and declarations to Java types and markers."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        config = config or GeneratorConfig()
        self.escape_types = frozenset(config.escape_types)
        self.object_type = config.object_type
        self.annotation_prefix = config.annotation_prefix

    @classmethod
    def with_escape_types(cls, escape_types: Iterable[str]) -> "JavaTypeMapper":
        return cls(GeneratorConfig(escape_types=list(escape_types)))

    def is_escaped(self, type_name: str) -> bool:
        return (
            type_name in self.escape_types
            or get_short_name(type_name) in self.escape_types
        )

    def escape_type(self, type_name: str) -> str:
        """
        Replace reserved names with the generic object type.

        Both the fully-qualified and the short form are checked.
        """
        return self.object_type if self.is_escaped(type_name) else type_name

    def map_type(self, type_name: str) -> str:
        """Convert a model type name to a Java type; non-primitives pass through escaped."""
        primitive = PRIMITIVE_TYPES.get(type_name)
        if primitive is not None:
            return primitive
        return self.escape_type(type_name)

    def map_property_type(self, prop: Property) -> str:
        java_type = self.map_type(prop.type)
        if prop.is_array():
            java_type += ARRAY_SUFFIX
        return java_type

    # Markers

    def class_marker(self, declaration: ClassDeclaration) -> Marker:
        return Marker(declaration.kind)

    def enum_marker(self) -> Marker:
        return ENUM_MARKER

    def field_marker(self, prop: Property, is_primary: bool) -> DataFieldMarker:
        return DataFieldMarker(primary=is_primary, optional=prop.is_optional())

    def relationship_marker(self, prop: Property) -> PointerMarker:
        return PointerMarker(optional=prop.is_optional())

    def render(self, marker: Marker) -> str:
        return marker.render(self.annotation_prefix)
