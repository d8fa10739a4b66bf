"""
TrackSure Provenance Engine — Ledger Entry Types
==================================================
Every TransferEntry records which operation produced it.
"""

from __future__ import annotations


# ══════════════════════════════════════════════════════════════
# ENTRY TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

CUSTODY_PRODUCT_CREATED_V1 = "custody.product.created.v1"
CUSTODY_PRODUCT_TRANSFERRED_V1 = "custody.product.transferred.v1"
CUSTODY_PRODUCT_CERTIFIED_V1 = "custody.product.certified.v1"

CUSTODY_ENTRY_TYPES = frozenset({
    CUSTODY_PRODUCT_CREATED_V1,
    CUSTODY_PRODUCT_TRANSFERRED_V1,
    CUSTODY_PRODUCT_CERTIFIED_V1,
})

# Custody moves only on these; certification leaves the custodian alone.
CUSTODY_CHANGING_TYPES = frozenset({
    CUSTODY_PRODUCT_CREATED_V1,
    CUSTODY_PRODUCT_TRANSFERRED_V1,
})

PRODUCT_CREATED_NOTE = "Product created"


def is_custody_change(entry_type: str) -> bool:
    return entry_type in CUSTODY_CHANGING_TYPES
