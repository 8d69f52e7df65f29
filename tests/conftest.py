"""
Pytest configuration and shared fixtures for composer_codegen tests.
"""

import json
import logging
import zipfile

import pytest

from composer_codegen.codegen.core.config import GeneratorConfig
from composer_codegen.logging_config import ROOT_LOGGER_NAME
from composer_codegen.model import (
    AssetDeclaration,
    BusinessNetworkDefinition,
    ConceptDeclaration,
    EnumDeclaration,
    EnumValueDeclaration,
    Field,
    ModelFile,
    ModelManager,
    ParticipantDeclaration,
    RelationshipDeclaration,
)

HEADER_LINES = [
    "/*",
    " * Copyright IBM Corp. 2017 All Rights Reserved.",
    " *",
    " * SPDX-License-Identifier: Apache-2.0",
    " */",
    "",
    "// this code is generated and should not be modified",
]


def header(package_name):
    """Expected header text for a generated file in the given package."""
    return "\n".join(HEADER_LINES + [f"package {package_name};", "", ""])


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by the CLI so later tests do not log to closed streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "out"


@pytest.fixture
def foo_manager():
    """One namespace 'ns' with a concept Foo holding a required String 'bar'."""
    manager = ModelManager()
    manager.add_model_file(
        ModelFile(
            namespace="ns",
            declarations=[
                ConceptDeclaration(name="Foo", properties=[Field(name="bar", type="String")])
            ],
        )
    )
    return manager


@pytest.fixture
def vehicle_model_file():
    """A small model touching every declaration and property variant."""
    return ModelFile(
        namespace="org.acme.vehicle",
        imports=["org.acme.base.Address", "org.hyperledger.composer.system.Identity"],
        declarations=[
            EnumDeclaration(
                name="Colour",
                properties=[EnumValueDeclaration(name="RED"), EnumValueDeclaration(name="BLUE")],
            ),
            ParticipantDeclaration(
                name="Owner",
                super_type="org.hyperledger.composer.system.Participant",
                identifier_field_name="email",
                properties=[
                    Field(name="email", type="String"),
                    Field(name="address", type="org.acme.base.Address", optional=True),
                ],
            ),
            AssetDeclaration(
                name="Vehicle",
                super_type="Asset",
                identifier_field_name="vin",
                properties=[
                    Field(name="make", type="String"),
                    Field(name="vin", type="String"),
                    Field(name="year", type="Integer"),
                    Field(name="colour", type="Colour"),
                    Field(name="mileage", type="Double", array=True, optional=True),
                    RelationshipDeclaration(name="owner", type="Owner"),
                    RelationshipDeclaration(name="previousOwners", type="Owner", array=True, optional=True),
                ],
            ),
        ],
    )


@pytest.fixture
def vehicle_network(vehicle_model_file):
    manager = ModelManager()
    manager.add_model_file(vehicle_model_file)
    return BusinessNetworkDefinition(name="vehicle-network", version="0.1.0", model_manager=manager)


@pytest.fixture
def archive_document():
    """JSON archive document describing a single namespace."""
    return {
        "name": "trade-network",
        "version": "1.2.0",
        "description": "Commodity trading",
        "models": [
            {
                "namespace": "org.acme.trading",
                "imports": [],
                "declarations": [
                    {
                        "kind": "asset",
                        "name": "Commodity",
                        "identifiedBy": "tradingSymbol",
                        "extends": "org.hyperledger.composer.system.Asset",
                        "properties": [
                            {"kind": "field", "name": "tradingSymbol", "type": "String"},
                            {"kind": "field", "name": "quantity", "type": "Double"},
                            {"kind": "relationship", "name": "owner", "type": "Trader"},
                        ],
                    },
                    {
                        "kind": "participant",
                        "name": "Trader",
                        "identifiedBy": "tradeId",
                        "properties": [
                            {"kind": "field", "name": "tradeId", "type": "String"},
                            {"kind": "field", "name": "tags", "type": "String", "array": True, "optional": True},
                        ],
                    },
                    {
                        "kind": "transaction",
                        "name": "Transaction",
                        "properties": [],
                    },
                ],
            }
        ],
    }


@pytest.fixture
def archive_json_file(tmp_path, archive_document):
    path = tmp_path / "trade-network.json"
    path.write_text(json.dumps(archive_document), encoding="utf-8")
    return path


@pytest.fixture
def archive_zip_file(tmp_path, archive_document):
    path = tmp_path / "trade-network.bna"
    metadata = {key: archive_document[key] for key in ("name", "version", "description")}
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("package.json", json.dumps(metadata))
        for index, model in enumerate(archive_document["models"]):
            archive.writestr(f"models/model{index}.json", json.dumps(model))
        archive.writestr("README.md", "# trade network")
    return path
