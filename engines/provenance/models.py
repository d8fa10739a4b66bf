"""
TrackSure Provenance Engine — Record Types
============================================
Participant, Product and TransferEntry snapshots.

RULES (NON-NEGOTIABLE):
- Records are frozen; a change is a new snapshot via dataclasses.replace
- Participant.verified only goes False → True
- Product.active only goes True → False
- TransferEntry is written once and never replaced

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


# ══════════════════════════════════════════════════════════════
# PARTICIPANT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Participant:
    """
    A supply-chain actor.

    role is a free-form label (manufacturer, distributor, retailer,
    certifier, ...), deliberately not an enum.
    """
    identity: str
    name: str
    role: str
    verified: bool = False

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "name": self.name,
            "role": self.role,
            "verified": self.verified,
        }


# ══════════════════════════════════════════════════════════════
# PRODUCT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Product:
    """A physical item under custody tracking."""
    product_id: str
    name: str
    description: str
    origin: str
    created_at: datetime
    custodian: str
    active: bool = True

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "description": self.description,
            "origin": self.origin,
            "created_at": self.created_at.isoformat(),
            "custodian": self.custodian,
            "active": self.active,
        }


# ══════════════════════════════════════════════════════════════
# TRANSFER ENTRY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TransferEntry:
    """
    One provenance event: creation, custody change, or certification.

    sequence is unique across ALL products, not per product.
    """
    product_id: str
    sequence: int
    entry_type: str
    source: str
    destination: str
    timestamp: datetime
    location: str
    notes: str

    @property
    def key(self) -> tuple:
        return (self.product_id, self.sequence)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "sequence": self.sequence,
            "entry_type": self.entry_type,
            "source": self.source,
            "destination": self.destination,
            "timestamp": self.timestamp.isoformat(),
            "location": self.location,
            "notes": self.notes,
        }
