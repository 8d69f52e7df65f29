"""
Java source generator driven by a model graph visitor.

Walks network definition -> model manager -> model files -> declarations ->
properties and writes one Java source file per class or enum declaration.
"""

from dataclasses import dataclass, replace
from functools import singledispatchmethod
from pathlib import Path
from typing import Optional, Union

from ...logging_config import get_logger
from ...model.declarations import (
    SYSTEM_NAMESPACE,
    BusinessNetworkDefinition,
    ClassDeclaration,
    EnumDeclaration,
    EnumValueDeclaration,
    Field,
    ModelFile,
    ModelManager,
    RelationshipDeclaration,
)
from ..core.config import GeneratorConfig
from ..core.file_writer import FileWriter
from ..core.generator import CodeGenerator, GenerationResult, UnrecognizedNodeError
from ..core.templates import TemplateEngine
from .types import JavaTypeMapper

logger = get_logger(__name__)


@dataclass(frozen=True)
class VisitContext:
    """
    Per-call traversal state.

    ``is_primary`` is only meaningful while visiting a property; the class
    visitor derives a fresh context for each property it visits.
    """

    file_writer: FileWriter
    result: GenerationResult
    ignore_system: bool = False
    is_primary: bool = False


class JavaVisitor(CodeGenerator):
    """Generates Java classes and enums from a model graph."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        super().__init__(config, template_engine)
        self.type_mapper = JavaTypeMapper(self.config)

    def generate(
        self,
        root,
        output_dir: Union[str, Path, None] = None,
        file_writer: Optional[FileWriter] = None,
        ignore_system: Optional[bool] = None,
    ) -> GenerationResult:
        """
        Generate Java sources for every declaration reachable from root.

        Args:
            root: A BusinessNetworkDefinition or a ModelManager
            output_dir: Directory receiving the generated tree
            file_writer: Existing file sink to write through instead of output_dir
            ignore_system: Skip system declarations; defaults to the configuration

        Returns:
            GenerationResult listing written files and skipped declarations

        Raises:
            UnrecognizedNodeError: If the graph holds a node kind with no rule
        """
        if file_writer is None:
            if output_dir is None:
                raise ValueError("Either output_dir or file_writer must be provided")
            file_writer = self.create_file_writer(output_dir)

        if ignore_system is None:
            ignore_system = self.config.ignore_system

        result = GenerationResult(
            metadata={
                "language": self.language_name,
                "file_extension": self.file_extension,
                "output_dir": str(file_writer.output_dir),
                "ignore_system": ignore_system,
            }
        )
        context = VisitContext(
            file_writer=file_writer, result=result, ignore_system=ignore_system
        )

        try:
            self.visit(root, context)
        except Exception:
            file_writer.discard()
            raise

        return result

    @singledispatchmethod
    def visit(self, node, context: VisitContext):
        """Dispatch on the node's type."""
        raise UnrecognizedNodeError(node)

    @visit.register
    def visit_business_network_definition(
        self, network: BusinessNetworkDefinition, context: VisitContext
    ):
        context.result.metadata["network"] = network.identifier
        self.visit(network.get_model_manager(), context)

    @visit.register
    def visit_model_manager(self, model_manager: ModelManager, context: VisitContext):
        for model_file in model_manager.get_model_files():
            self.visit(model_file, context)

    @visit.register
    def visit_model_file(self, model_file: ModelFile, context: VisitContext):
        for declaration in model_file.get_all_declarations():
            self.visit(declaration, context)

    @visit.register
    def visit_enum_declaration(self, declaration: EnumDeclaration, context: VisitContext):
        if self.should_skip(declaration, context):
            return

        writer = context.file_writer
        self.start_class_file(declaration, context)

        writer.write_line(0, self.type_mapper.render(self.type_mapper.enum_marker()))
        writer.write_line(0, f"public enum {declaration.name} {{")

        for prop in declaration.get_own_properties():
            self.visit(prop, context)

        writer.write_line(0, "}")
        self.end_class_file(declaration, context)

    @visit.register
    def visit_class_declaration(self, declaration: ClassDeclaration, context: VisitContext):
        if self.should_skip(declaration, context):
            return

        writer = context.file_writer
        self.start_class_file(declaration, context)

        for imported in declaration.model_file.get_imports():
            if SYSTEM_NAMESPACE not in imported:
                writer.write_line(0, f"import {imported};")

        abstract = "abstract " if declaration.is_abstract() else ""
        super_type = ""
        if declaration.super_type:
            super_type = " extends " + self.type_mapper.escape_type(declaration.super_type)

        writer.write_line(
            0, self.type_mapper.render(self.type_mapper.class_marker(declaration))
        )
        writer.write_line(
            0, f"public {abstract}class {declaration.name}{super_type} {{"
        )

        primary_key_name = declaration.identifier_field_name
        for prop in declaration.get_own_properties():
            is_primary = primary_key_name is not None and prop.name == primary_key_name
            self.visit(prop, replace(context, is_primary=is_primary))

        writer.write_line(0, "}")
        self.end_class_file(declaration, context)

    @visit.register
    def visit_field(self, field: Field, context: VisitContext):
        marker = self.type_mapper.field_marker(field, context.is_primary)
        self._write_member(field, self.type_mapper.render(marker), context)

    @visit.register
    def visit_relationship(self, relationship: RelationshipDeclaration, context: VisitContext):
        marker = self.type_mapper.relationship_marker(relationship)
        self._write_member(relationship, self.type_mapper.render(marker), context)

    @visit.register
    def visit_enum_value_declaration(self, value: EnumValueDeclaration, context: VisitContext):
        context.file_writer.write_line(1, f"{value.name},")

    def _write_member(self, prop, annotation: str, context: VisitContext):
        java_type = self.type_mapper.map_property_type(prop)
        context.file_writer.write_line(1, annotation)
        context.file_writer.write_line(1, f"public {java_type} {prop.name};")

    # File lifecycle

    def should_skip(self, declaration: ClassDeclaration, context: VisitContext) -> bool:
        """System declarations (when suppressed) and escaped names produce no file."""
        if context.ignore_system and declaration.is_system_type():
            logger.debug("Skipping system declaration %s", declaration.name)
        elif self.type_mapper.escape_type(declaration.name) == self.type_mapper.object_type:
            logger.debug("Skipping reserved declaration %s", declaration.name)
        else:
            return False

        context.result.skipped.append(declaration.fully_qualified_name)
        return True

    def file_path_for(self, declaration: ClassDeclaration) -> str:
        """Logical path of a declaration's source file: namespace segments then name."""
        segments = declaration.model_file.namespace.split(".")
        segments.append(declaration.name + self.file_extension)
        return "/".join(segment for segment in segments if segment)

    def start_class_file(self, declaration: ClassDeclaration, context: VisitContext):
        logger.info("generating %s%s", declaration.name, self.file_extension)
        context.file_writer.open_file(self.file_path_for(declaration))
        self.write_file_header(context.file_writer, declaration.model_file.namespace)

    def end_class_file(self, declaration: ClassDeclaration, context: VisitContext):
        path = context.file_writer.close_file()
        context.result.files.append(path)
