"""
TrackSure Command Layer — Operation Outcome Contract
======================================================
Every registry operation produces exactly one Outcome.

OK       → operation committed; value carries the payload
           (True, or the assigned ledger sequence number).
REJECTED → nothing was written; reason is mandatory.

Rules:
- Outcome is immutable (frozen dataclass)
- REJECTED must contain reason (RejectionReason) and no value
- OK must NOT contain reason
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from core.commands.rejection import RejectionReason


# ══════════════════════════════════════════════════════════════
# OPERATION STATUS
# ══════════════════════════════════════════════════════════════

class OperationStatus(Enum):
    """Two-variant result. No middle ground."""
    OK = "OK"
    REJECTED = "REJECTED"


class OperationRejected(Exception):
    """Raised by OperationOutcome.unwrap() on a REJECTED outcome."""

    def __init__(self, reason: RejectionReason):
        self.reason = reason
        super().__init__(f"[{reason.code}] {reason.message}")

    @property
    def code(self) -> str:
        return self.reason.code


# ══════════════════════════════════════════════════════════════
# OPERATION OUTCOME
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OperationOutcome:
    """
    Result of a mutating registry operation.

    Invariants:
        - REJECTED + reason is None → ValueError
        - OK + reason is not None → ValueError
        - REJECTED + value is not None → ValueError
    """

    status: OperationStatus
    value: Any = None
    reason: Optional[RejectionReason] = None

    def __post_init__(self):
        if not isinstance(self.status, OperationStatus):
            raise ValueError(
                f"status must be OperationStatus, got {type(self.status).__name__}."
            )

        if self.status == OperationStatus.REJECTED:
            if self.reason is None:
                raise ValueError(
                    "REJECTED outcome must include a RejectionReason. "
                    "No silent rejections allowed."
                )
            if self.value is not None:
                raise ValueError("REJECTED outcome must not carry a value.")

        if self.status == OperationStatus.OK and self.reason is not None:
            raise ValueError(
                "OK outcome must NOT include a RejectionReason."
            )

    @classmethod
    def ok(cls, value: Any = True) -> "OperationOutcome":
        return cls(status=OperationStatus.OK, value=value)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "OperationOutcome":
        return cls(status=OperationStatus.REJECTED, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status == OperationStatus.OK

    @property
    def is_rejected(self) -> bool:
        return self.status == OperationStatus.REJECTED

    @property
    def error_code(self) -> Optional[str]:
        return self.reason.code if self.reason is not None else None

    def unwrap(self) -> Any:
        """Return the payload, or raise OperationRejected."""
        if self.reason is not None:
            raise OperationRejected(self.reason)
        return self.value

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "value": self.value,
            "reason": self.reason.to_dict() if self.reason else None,
        }
