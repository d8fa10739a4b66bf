"""
TrackSure Command Layer — Rejection Model
===========================================
Structured rejection reasons for denied registry operations.

A rejection is a returned value, never a raised exception.
Every rejection must be:
- Deterministic (same state + same input → same rejection)
- Auditable (code + message + policy)
- Machine-readable (code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for an operation rejection.

    Fields:
        code:        One of the ReasonCode constants (e.g. 'NOT_AUTHORIZED').
        message:     Human-readable explanation.
        policy_name: Name of the policy or registry check that rejected.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Error kinds surfaced verbatim to callers. None are retryable.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Authorization ─────────────────────────────────────────
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # ── Record lookup ─────────────────────────────────────────
    NOT_FOUND = "NOT_FOUND"

    # ── Record creation ───────────────────────────────────────
    ALREADY_EXISTS = "ALREADY_EXISTS"

    ALL = frozenset({NOT_AUTHORIZED, NOT_FOUND, ALREADY_EXISTS})
