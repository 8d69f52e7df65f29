"""
The built-in system namespace every model manager can be seeded with.
"""

from .archive import decode_model_file
from .declarations import SYSTEM_NAMESPACE, ModelFile


def _qualified(name: str) -> str:
    return f"{SYSTEM_NAMESPACE}.{name}"


def _field(name, type_, array=False, optional=False):
    return {"kind": "field", "name": name, "type": type_, "array": array, "optional": optional}


def _relationship(name, type_, array=False, optional=False):
    return {
        "kind": "relationship",
        "name": name,
        "type": type_,
        "array": array,
        "optional": optional,
    }


SYSTEM_MODEL = {
    "namespace": SYSTEM_NAMESPACE,
    "imports": [],
    "declarations": [
        {"kind": "asset", "name": "Asset", "abstract": True},
        {"kind": "participant", "name": "Participant", "abstract": True},
        {
            "kind": "transaction",
            "name": "Transaction",
            "abstract": True,
            "identifiedBy": "transactionId",
            "properties": [
                _field("transactionId", "String"),
                _field("timestamp", "DateTime"),
            ],
        },
        {
            "kind": "event",
            "name": "Event",
            "abstract": True,
            "identifiedBy": "eventId",
            "properties": [
                _field("eventId", "String"),
                _field("timestamp", "DateTime"),
            ],
        },
        {
            "kind": "asset",
            "name": "Registry",
            "abstract": True,
            "extends": _qualified("Asset"),
            "identifiedBy": "registryId",
            "properties": [
                _field("registryId", "String"),
                _field("name", "String"),
                _field("type", "String"),
                _field("system", "Boolean"),
            ],
        },
        {
            "kind": "transaction",
            "name": "RegistryTransaction",
            "abstract": True,
            "extends": _qualified("Transaction"),
            "properties": [_relationship("targetRegistry", _qualified("Registry"))],
        },
        {
            "kind": "transaction",
            "name": "AssetTransaction",
            "abstract": True,
            "extends": _qualified("RegistryTransaction"),
            "properties": [_field("resources", _qualified("Asset"), array=True)],
        },
        {
            "kind": "transaction",
            "name": "ParticipantTransaction",
            "abstract": True,
            "extends": _qualified("RegistryTransaction"),
            "properties": [_field("resources", _qualified("Participant"), array=True)],
        },
        {
            "kind": "transaction",
            "name": "RemoveAsset",
            "extends": _qualified("AssetTransaction"),
            "properties": [_field("resourceIds", "String", array=True)],
        },
        {
            "kind": "transaction",
            "name": "RemoveParticipant",
            "extends": _qualified("ParticipantTransaction"),
            "properties": [_field("resourceIds", "String", array=True)],
        },
        {
            "kind": "asset",
            "name": "HistorianRecord",
            "extends": _qualified("Asset"),
            "identifiedBy": "transactionId",
            "properties": [
                _field("transactionId", "String"),
                _field("transactionType", "String"),
                _relationship("transactionInvoked", _qualified("Transaction")),
                _relationship("participantInvoking", _qualified("Participant"), optional=True),
                _relationship("identityUsed", "Identity", optional=True),
                _field("eventsEmitted", "Event", array=True, optional=True),
                _field("transactionTimestamp", "DateTime"),
            ],
        },
        {
            "kind": "asset",
            "name": "Network",
            "extends": _qualified("Asset"),
            "identifiedBy": "networkId",
            "properties": [_field("networkId", "String")],
        },
        {
            "kind": "participant",
            "name": "NetworkAdmin",
            "extends": _qualified("Participant"),
            "identifiedBy": "participantId",
            "properties": [_field("participantId", "String")],
        },
        {
            "kind": "enum",
            "name": "IdentityState",
            "properties": [
                {"kind": "enum_value", "name": value}
                for value in ("ISSUED", "BOUND", "ACTIVATED", "REVOKED")
            ],
        },
        {
            "kind": "asset",
            "name": "Identity",
            "extends": _qualified("Asset"),
            "identifiedBy": "identityId",
            "properties": [
                _field("identityId", "String"),
                _field("name", "String"),
                _field("issuer", "String"),
                _field("certificate", "String"),
                _field("state", "IdentityState"),
                _relationship("participant", _qualified("Participant")),
            ],
        },
        {
            "kind": "transaction",
            "name": "BindIdentity",
            "extends": _qualified("Transaction"),
            "properties": [
                _relationship("participant", _qualified("Participant")),
                _field("certificate", "String"),
            ],
        },
        {
            "kind": "transaction",
            "name": "StartBusinessNetwork",
            "extends": _qualified("Transaction"),
            "properties": [
                _field("businessNetworkArchive", "String"),
                _field("logLevel", "String", optional=True),
                _field(
                    "bootstrapTransactions",
                    _qualified("Transaction"),
                    array=True,
                    optional=True,
                ),
            ],
        },
    ],
}


def create_system_model_file() -> ModelFile:
    """Build a fresh copy of the system namespace."""
    model_file = decode_model_file(SYSTEM_MODEL)
    for declaration in model_file.declarations:
        declaration.validate()
    return model_file
