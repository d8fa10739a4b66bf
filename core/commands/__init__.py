"""
TrackSure Command Layer — Operation Results
=============================================
Every mutating operation produces exactly one Outcome.
REJECTED outcomes are first-class values, not exceptions.
"""

from core.commands.outcomes import (
    OperationOutcome,
    OperationRejected,
    OperationStatus,
)
from core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    # ── Outcomes ──────────────────────────────────────────────
    "OperationOutcome",
    "OperationRejected",
    "OperationStatus",
    # ── Rejection ─────────────────────────────────────────────
    "RejectionReason",
    "ReasonCode",
]
