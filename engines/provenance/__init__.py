"""
TrackSure Provenance Engine
=============================
Chain-of-custody registry: participants, products, and an append-only
transfer ledger, with authorization gating every mutation.
"""

from engines.provenance.models import Participant, Product, TransferEntry
from engines.provenance.services import ProvenanceService
from engines.provenance.store import (
    CustodyStore,
    InMemoryCustodyStore,
    LedgerIntegrityError,
)

__all__ = [
    "CustodyStore",
    "InMemoryCustodyStore",
    "LedgerIntegrityError",
    "Participant",
    "Product",
    "ProvenanceService",
    "TransferEntry",
]
