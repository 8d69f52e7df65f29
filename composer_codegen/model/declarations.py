"""
Read-only model graph consumed by the code generators.

A BusinessNetworkDefinition wraps one ModelManager, which owns one ModelFile
per namespace. Each ModelFile owns its class/enum declarations, and each
declaration owns its properties. Generators only navigate this graph.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

SYSTEM_NAMESPACE = "org.hyperledger.composer.system"


class ModelError(Exception):
    """Exception raised when the model graph violates one of its invariants."""

    pass


def get_short_name(type_name: str) -> str:
    """Return the unqualified part of a (possibly) fully-qualified type name."""
    return type_name.rsplit(".", 1)[-1]


def get_namespace(type_name: str) -> str:
    """Return the namespace part of a fully-qualified type name, or ''."""
    if "." not in type_name:
        return ""
    return type_name.rsplit(".", 1)[0]


# Properties


@dataclass
class Property:
    """A named member of a declaration."""

    name: str
    type: Optional[str] = None
    array: bool = False
    optional: bool = False

    def is_array(self) -> bool:
        return self.array

    def is_optional(self) -> bool:
        return self.optional


@dataclass
class Field(Property):
    """A property holding an embedded value (primitive, enum or concept)."""

    pass


@dataclass
class RelationshipDeclaration(Property):
    """A property pointing at another identified declaration."""

    pass


@dataclass
class EnumValueDeclaration(Property):
    """A single value of an enum declaration. Carries no type."""

    def __post_init__(self):
        self.type = None
        self.array = False
        self.optional = False


# Declarations


@dataclass
class ClassDeclaration:
    """
    A class-like declaration belonging to exactly one model file.

    The concrete subclass carries the declaration kind (asset, participant,
    transaction, event, concept); the generic class is used for plain classes.
    """

    name: str
    properties: List[Property] = field(default_factory=list)
    abstract: bool = False
    super_type: Optional[str] = None
    identifier_field_name: Optional[str] = None
    system: bool = False
    model_file: Optional["ModelFile"] = field(default=None, repr=False, compare=False)

    @property
    def fully_qualified_name(self) -> str:
        if self.model_file is None:
            return self.name
        return f"{self.model_file.namespace}.{self.name}"

    @property
    def kind(self) -> str:
        """Declaration kind tag, e.g. 'Asset' for AssetDeclaration."""
        return type(self).__name__.replace("Declaration", "")

    def is_abstract(self) -> bool:
        return self.abstract

    def is_system_type(self) -> bool:
        if self.system:
            return True
        return self.model_file is not None and self.model_file.namespace == SYSTEM_NAMESPACE

    def get_own_properties(self) -> List[Property]:
        return list(self.properties)

    def get_property(self, name: str) -> Optional[Property]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def validate(self) -> None:
        """Check the declaration's own invariants."""
        names = [prop.name for prop in self.properties]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ModelError(
                f"Declaration {self.name} has duplicate properties: {sorted(duplicates)}"
            )

        if self.identifier_field_name and self.identifier_field_name not in names:
            raise ModelError(
                f"Identifier field '{self.identifier_field_name}' is not a property "
                f"of {self.name}"
            )


@dataclass
class AssetDeclaration(ClassDeclaration):
    pass


@dataclass
class ParticipantDeclaration(ClassDeclaration):
    pass


@dataclass
class TransactionDeclaration(ClassDeclaration):
    pass


@dataclass
class EventDeclaration(ClassDeclaration):
    pass


@dataclass
class ConceptDeclaration(ClassDeclaration):
    pass


@dataclass
class EnumDeclaration(ClassDeclaration):
    """An enumeration; its properties are EnumValueDeclarations."""

    def validate(self) -> None:
        super().validate()
        for prop in self.properties:
            if not isinstance(prop, EnumValueDeclaration):
                raise ModelError(f"Enum {self.name} may only contain enum values")


# Containers


@dataclass
class ModelFile:
    """All declarations and imports of a single namespace."""

    namespace: str
    imports: List[str] = field(default_factory=list)
    declarations: List[ClassDeclaration] = field(default_factory=list)

    def __post_init__(self):
        for declaration in self.declarations:
            declaration.model_file = self

    def add_declaration(self, declaration: ClassDeclaration) -> ClassDeclaration:
        if self.get_declaration(declaration.name) is not None:
            raise ModelError(
                f"Duplicate declaration {declaration.name} in namespace {self.namespace}"
            )
        declaration.model_file = self
        self.declarations.append(declaration)
        return declaration

    def get_declaration(self, name: str) -> Optional[ClassDeclaration]:
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None

    def get_all_declarations(self) -> List[ClassDeclaration]:
        return list(self.declarations)

    def get_imports(self) -> List[str]:
        return list(self.imports)

    def is_system_model_file(self) -> bool:
        return self.namespace == SYSTEM_NAMESPACE


class ModelManager:
    """Ordered collection of model files, one per namespace."""

    def __init__(self, include_system: bool = False):
        self._model_files: Dict[str, ModelFile] = {}
        if include_system:
            from .system import create_system_model_file

            self.add_model_file(create_system_model_file())

    def add_model_file(self, model_file: ModelFile) -> ModelFile:
        if model_file.namespace in self._model_files:
            raise ModelError(f"Namespace {model_file.namespace} is already registered")
        self._model_files[model_file.namespace] = model_file
        return model_file

    def get_model_file(self, namespace: str) -> Optional[ModelFile]:
        return self._model_files.get(namespace)

    def get_model_files(self) -> List[ModelFile]:
        return list(self._model_files.values())

    def get_namespaces(self) -> List[str]:
        return list(self._model_files.keys())

    def get_type(self, qualified_name: str) -> Optional[ClassDeclaration]:
        """Resolve a fully-qualified declaration name."""
        model_file = self._model_files.get(get_namespace(qualified_name))
        if model_file is None:
            return None
        return model_file.get_declaration(get_short_name(qualified_name))

    def validate(self) -> None:
        for model_file in self._model_files.values():
            for declaration in model_file.declarations:
                if declaration.model_file is not model_file:
                    raise ModelError(
                        f"Declaration {declaration.name} does not belong to "
                        f"{model_file.namespace}"
                    )
                declaration.validate()

    def __len__(self) -> int:
        return len(self._model_files)


@dataclass
class BusinessNetworkDefinition:
    """An archive's metadata together with its model manager."""

    name: str
    version: str
    model_manager: ModelManager = field(default_factory=ModelManager)
    description: str = ""

    @property
    def identifier(self) -> str:
        return f"{self.name}@{self.version}"

    def get_model_manager(self) -> ModelManager:
        return self.model_manager
