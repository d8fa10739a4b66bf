"""
TrackSure Provenance Engine — Request Commands
================================================
Typed requests a host adapter builds from its transport (CLI, RPC,
ledger transaction) and hands to ProvenanceService.execute().

Requests carry explicit arguments only. The caller identity is
supplied separately by the host, never inside the request.
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

PARTICIPANT_REGISTER_REQUEST = "custody.participant.register.request"
PARTICIPANT_VERIFY_REQUEST = "custody.participant.verify.request"
PRODUCT_CREATE_REQUEST = "custody.product.create.request"
PRODUCT_TRANSFER_REQUEST = "custody.product.transfer.request"
PRODUCT_DEACTIVATE_REQUEST = "custody.product.deactivate.request"
PRODUCT_CERTIFY_REQUEST = "custody.product.certify.request"

PROVENANCE_COMMAND_TYPES = frozenset({
    PARTICIPANT_REGISTER_REQUEST,
    PARTICIPANT_VERIFY_REQUEST,
    PRODUCT_CREATE_REQUEST,
    PRODUCT_TRANSFER_REQUEST,
    PRODUCT_DEACTIVATE_REQUEST,
    PRODUCT_CERTIFY_REQUEST,
})


def _require(value, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be non-empty.")


def _require_str(value, field_name: str) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RegisterParticipantRequest:
    """Self-registration of the calling identity."""
    name: str
    role: str

    command_type = PARTICIPANT_REGISTER_REQUEST

    def __post_init__(self):
        _require(self.name, "name")
        _require(self.role, "role")


@dataclass(frozen=True)
class VerifyParticipantRequest:
    """Administrator verification of a registered participant."""
    identity: str

    command_type = PARTICIPANT_VERIFY_REQUEST

    def __post_init__(self):
        _require(self.identity, "identity")


@dataclass(frozen=True)
class CreateProductRequest:
    """Register a new product held by the caller."""
    product_id: str
    name: str
    description: str = ""
    origin: str = ""

    command_type = PRODUCT_CREATE_REQUEST

    def __post_init__(self):
        _require(self.product_id, "product_id")
        _require(self.name, "name")
        _require_str(self.description, "description")
        _require_str(self.origin, "origin")


@dataclass(frozen=True)
class TransferProductRequest:
    """Hand custody of a product to another verified participant."""
    product_id: str
    new_custodian: str
    location: str = ""
    notes: str = ""

    command_type = PRODUCT_TRANSFER_REQUEST

    def __post_init__(self):
        _require(self.product_id, "product_id")
        _require(self.new_custodian, "new_custodian")
        _require_str(self.location, "location")
        _require_str(self.notes, "notes")


@dataclass(frozen=True)
class DeactivateProductRequest:
    """End a product's tracked lifecycle."""
    product_id: str

    command_type = PRODUCT_DEACTIVATE_REQUEST

    def __post_init__(self):
        _require(self.product_id, "product_id")


@dataclass(frozen=True)
class CertifyProductRequest:
    """Attach a certification or inspection note."""
    product_id: str
    details: str
    location: str = ""

    command_type = PRODUCT_CERTIFY_REQUEST

    def __post_init__(self):
        _require(self.product_id, "product_id")
        _require(self.details, "details")
        _require_str(self.location, "location")
