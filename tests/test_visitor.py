"""
Tests for Java source generation from a model graph.
"""

import pytest

from composer_codegen.codegen.core.config import GeneratorConfig
from composer_codegen.codegen.core.file_writer import FileWriter
from composer_codegen.codegen.core.generator import UnrecognizedNodeError
from composer_codegen.codegen.java.visitor import JavaVisitor
from composer_codegen.model import (
    ClassDeclaration,
    ConceptDeclaration,
    Field,
    ModelFile,
    ModelManager,
    Property,
    TransactionDeclaration,
)
from tests.conftest import header

A = "@org.hyperledger.composer.annotation"


def data_field(primary=False, optional=False):
    return (
        f"\t{A}.DataField(primary={str(primary).lower()}, "
        f"optional={str(optional).lower()}, embedded=true)\n"
    )


@pytest.fixture
def visitor(config):
    return JavaVisitor(config)


class TestClassGeneration:
    """Test the generated text of classes and enums."""

    def test_single_concept(self, visitor, foo_manager, output_dir):
        result = visitor.generate(foo_manager, output_dir)

        path = output_dir / "ns" / "Foo.java"
        assert result.files == [path]
        assert path.read_text(encoding="utf-8") == (
            header("ns")
            + f"{A}.Concept\n"
            + "public class Foo {\n"
            + data_field()
            + "\tpublic String bar;\n"
            + "}\n"
        )

    def test_asset_with_every_property_variant(self, visitor, vehicle_network, output_dir):
        visitor.generate(vehicle_network, output_dir)

        text = (output_dir / "org" / "acme" / "vehicle" / "Vehicle.java").read_text(
            encoding="utf-8"
        )
        assert text == (
            header("org.acme.vehicle")
            + "import org.acme.base.Address;\n"
            + f"{A}.Asset\n"
            + "public class Vehicle extends Object {\n"
            + data_field()
            + "\tpublic String make;\n"
            + data_field(primary=True)
            + "\tpublic String vin;\n"
            + data_field()
            + "\tpublic int year;\n"
            + data_field()
            + "\tpublic Colour colour;\n"
            + data_field(optional=True)
            + "\tpublic double[] mileage;\n"
            + f"\t{A}.Pointer(optional=false)\n"
            + "\tpublic Owner owner;\n"
            + f"\t{A}.Pointer(optional=true)\n"
            + "\tpublic Owner[] previousOwners;\n"
            + "}\n"
        )

    def test_enum(self, visitor, vehicle_network, output_dir):
        visitor.generate(vehicle_network, output_dir)

        text = (output_dir / "org" / "acme" / "vehicle" / "Colour.java").read_text(
            encoding="utf-8"
        )
        assert text == (
            header("org.acme.vehicle")
            + f"{A}.Enum\n"
            + "public enum Colour {\n"
            + "\tRED,\n"
            + "\tBLUE,\n"
            + "}\n"
        )

    def test_files_in_declaration_order(self, visitor, vehicle_network, output_dir):
        result = visitor.generate(vehicle_network, output_dir)
        assert [path.name for path in result.files] == [
            "Colour.java",
            "Owner.java",
            "Vehicle.java",
        ]

    def test_system_imports_are_filtered(self, visitor, vehicle_network, output_dir):
        visitor.generate(vehicle_network, output_dir)
        text = (output_dir / "org" / "acme" / "vehicle" / "Owner.java").read_text(
            encoding="utf-8"
        )
        assert "import org.acme.base.Address;" in text
        assert "org.hyperledger.composer.system" not in text

    def test_fully_qualified_supertype_is_escaped(self, visitor, vehicle_network, output_dir):
        visitor.generate(vehicle_network, output_dir)
        text = (output_dir / "org" / "acme" / "vehicle" / "Owner.java").read_text(
            encoding="utf-8"
        )
        assert "public class Owner extends Object {\n" in text

    def test_abstract_class_with_supertype(self, visitor, output_dir):
        manager = ModelManager()
        manager.add_model_file(
            ModelFile(
                namespace="org.acme",
                declarations=[
                    ConceptDeclaration(name="Base", abstract=True),
                    ConceptDeclaration(name="Derived", super_type="Base"),
                ],
            )
        )
        visitor.generate(manager, output_dir)

        base = (output_dir / "org" / "acme" / "Base.java").read_text(encoding="utf-8")
        derived = (output_dir / "org" / "acme" / "Derived.java").read_text(encoding="utf-8")
        assert "public abstract class Base {\n}\n" in base
        assert "public class Derived extends Base {\n}\n" in derived

    def test_plain_class_marker(self, visitor, output_dir):
        manager = ModelManager()
        manager.add_model_file(
            ModelFile(namespace="ns", declarations=[ClassDeclaration(name="Plain")])
        )
        visitor.generate(manager, output_dir)
        text = (output_dir / "ns" / "Plain.java").read_text(encoding="utf-8")
        assert f"{A}.Class\npublic class Plain {{\n" in text

    def test_primary_flag_only_on_identifier(self, visitor, output_dir):
        manager = ModelManager()
        manager.add_model_file(
            ModelFile(
                namespace="ns",
                declarations=[
                    ConceptDeclaration(
                        name="Keyed",
                        identifier_field_name="key",
                        properties=[
                            Field(name="key", type="String"),
                            Field(name="other", type="String"),
                        ],
                    ),
                    ConceptDeclaration(
                        name="Next", properties=[Field(name="key", type="String")]
                    ),
                ],
            )
        )
        visitor.generate(manager, output_dir)

        keyed = (output_dir / "ns" / "Keyed.java").read_text(encoding="utf-8")
        following = (output_dir / "ns" / "Next.java").read_text(encoding="utf-8")
        assert data_field(primary=True) + "\tpublic String key;\n" in keyed
        assert data_field() + "\tpublic String other;\n" in keyed
        assert "primary=true" not in following

    def test_custom_indent(self, foo_manager, output_dir):
        visitor = JavaVisitor(GeneratorConfig(indent="    "))
        visitor.generate(foo_manager, output_dir)
        text = (output_dir / "ns" / "Foo.java").read_text(encoding="utf-8")
        assert "\n    public String bar;\n" in text


class TestSkipping:
    """Test which declarations produce no file."""

    def test_escaped_declaration_name(self, visitor, output_dir):
        manager = ModelManager()
        manager.add_model_file(
            ModelFile(
                namespace="org.acme",
                declarations=[
                    TransactionDeclaration(name="Transaction"),
                    ConceptDeclaration(name="Kept"),
                ],
            )
        )
        result = visitor.generate(manager, output_dir)

        assert [path.name for path in result.files] == ["Kept.java"]
        assert result.skipped == ["org.acme.Transaction"]
        assert not (output_dir / "org" / "acme" / "Transaction.java").exists()

    def test_system_declarations_ignored(self, visitor, foo_manager, output_dir):
        manager = ModelManager(include_system=True)
        manager.add_model_file(foo_manager.get_model_file("ns"))

        result = visitor.generate(manager, output_dir, ignore_system=True)

        assert result.files == [output_dir / "ns" / "Foo.java"]
        assert "org.hyperledger.composer.system.Identity" in result.skipped
        assert not (output_dir / "org").exists()

    def test_system_declarations_generated(self, visitor, output_dir):
        result = visitor.generate(ModelManager(include_system=True), output_dir)

        system_dir = output_dir / "org" / "hyperledger" / "composer" / "system"
        names = {path.name for path in result.files}
        assert len(result.files) == 14
        assert "Identity.java" in names
        assert "IdentityState.java" in names
        assert "Asset.java" not in names
        assert "Transaction.java" not in names
        assert "Participant.java" not in names
        assert (system_dir / "Registry.java").exists()

        registry = (system_dir / "Registry.java").read_text(encoding="utf-8")
        assert "public abstract class Registry extends Object {\n" in registry

    def test_ignore_system_defaults_to_config(self, output_dir):
        visitor = JavaVisitor(GeneratorConfig(ignore_system=True))
        result = visitor.generate(ModelManager(include_system=True), output_dir)
        assert result.files == []
        assert result.metadata["ignore_system"] is True

    def test_system_flag_on_user_namespace(self, visitor, output_dir):
        manager = ModelManager()
        manager.add_model_file(
            ModelFile(
                namespace="org.acme",
                declarations=[ConceptDeclaration(name="Internal", system=True)],
            )
        )
        result = visitor.generate(manager, output_dir, ignore_system=True)
        assert result.files == []
        assert result.skipped == ["org.acme.Internal"]


class TestTraversal:
    """Test dispatch, metadata and error handling."""

    def test_network_metadata(self, visitor, vehicle_network, output_dir):
        result = visitor.generate(vehicle_network, output_dir)
        assert result.metadata["network"] == "vehicle-network@0.1.0"
        assert result.metadata["language"] == "java"

    def test_model_file_as_root(self, visitor, foo_manager, output_dir):
        result = visitor.generate(foo_manager.get_model_file("ns"), output_dir)
        assert result.files == [output_dir / "ns" / "Foo.java"]

    def test_unknown_root(self, visitor, output_dir):
        with pytest.raises(UnrecognizedNodeError, match="Unrecognised type: object"):
            visitor.generate(object(), output_dir)

    def test_untyped_property_discards_file(self, visitor, output_dir):
        manager = ModelManager()
        manager.add_model_file(
            ModelFile(
                namespace="ns",
                declarations=[
                    ConceptDeclaration(name="Good"),
                    ConceptDeclaration(
                        name="Bad", properties=[Property(name="x", type="String")]
                    ),
                ],
            )
        )
        file_writer = FileWriter(output_dir)

        with pytest.raises(UnrecognizedNodeError) as exc_info:
            visitor.generate(manager, file_writer=file_writer)

        assert isinstance(exc_info.value.node, Property)
        assert (output_dir / "ns" / "Good.java").exists()
        assert not (output_dir / "ns" / "Bad.java").exists()
        assert not file_writer.is_open

    def test_requires_destination(self, visitor, foo_manager):
        with pytest.raises(ValueError):
            visitor.generate(foo_manager)

    def test_shared_file_writer(self, visitor, foo_manager, vehicle_network, output_dir):
        file_writer = FileWriter(output_dir)
        visitor.generate(foo_manager, file_writer=file_writer)
        visitor.generate(vehicle_network, file_writer=file_writer)
        assert len(file_writer.files_written) == 4

    def test_construction_writes_nothing(self, output_dir):
        JavaVisitor()
        assert not output_dir.exists()
