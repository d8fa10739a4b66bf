"""
TrackSure Provenance Engine — Authorization Policy
====================================================
Predicates and rejection-returning policies used by every mutating
registry operation.

Predicates are pure functions over current store state. They are
evaluated fresh on every call; nothing here caches.
"""

from __future__ import annotations

from typing import List, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.config import RegistryConfig
from engines.provenance.models import Product
from engines.provenance.store import CustodyStore


# ══════════════════════════════════════════════════════════════
# PREDICATES
# ══════════════════════════════════════════════════════════════

def is_administrator(config: RegistryConfig, identity: str) -> bool:
    return identity == config.administrator


def is_verified(store: CustodyStore, identity: str) -> bool:
    """Unknown identities are not verified."""
    participant = store.get_participant(identity)
    return participant is not None and participant.verified


def is_current_custodian(product: Product, identity: str) -> bool:
    return product.custodian == identity


# ══════════════════════════════════════════════════════════════
# POLICIES
# ══════════════════════════════════════════════════════════════

def _not_authorized(message: str, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.NOT_AUTHORIZED,
        message=message,
        policy_name=policy_name,
    )


def administrator_only_policy(
    config: RegistryConfig,
    caller: str,
) -> Optional[RejectionReason]:
    """Only the configured administrator may verify participants."""
    if is_administrator(config, caller):
        return None
    return _not_authorized(
        f"Caller '{caller}' is not the registry administrator.",
        "administrator_only_policy",
    )


def verified_caller_policy(
    store: CustodyStore,
    caller: str,
) -> Optional[RejectionReason]:
    """Creating and certifying products requires a verified caller."""
    if is_verified(store, caller):
        return None
    return _not_authorized(
        f"Caller '{caller}' is not a verified participant.",
        "verified_caller_policy",
    )


def transfer_policy(
    store: CustodyStore,
    product: Product,
    caller: str,
    new_custodian: str,
) -> Optional[RejectionReason]:
    """
    A transfer needs all four at once: caller is the custodian, the
    product is active, the caller is verified, the recipient is verified.

    Every failed condition is named in the message.
    """
    failures: List[str] = []
    if not is_current_custodian(product, caller):
        failures.append("caller is not the current custodian")
    if not product.active:
        failures.append("product is inactive")
    if not is_verified(store, caller):
        failures.append("caller is not verified")
    if not is_verified(store, new_custodian):
        failures.append(f"recipient '{new_custodian}' is not verified")

    if not failures:
        return None
    return _not_authorized(
        f"Transfer of product '{product.product_id}' denied: "
        + "; ".join(failures) + ".",
        "transfer_policy",
    )


def deactivation_policy(
    store: CustodyStore,
    config: RegistryConfig,
    product: Product,
    caller: str,
) -> Optional[RejectionReason]:
    """
    Only the current custodian may deactivate.

    Verification is NOT required unless config.strict_deactivation is set.
    """
    if not is_current_custodian(product, caller):
        return _not_authorized(
            f"Caller '{caller}' is not the custodian of product "
            f"'{product.product_id}'.",
            "deactivation_policy",
        )
    if config.strict_deactivation and not is_verified(store, caller):
        return _not_authorized(
            f"Caller '{caller}' is not a verified participant "
            f"(strict deactivation).",
            "deactivation_policy",
        )
    return None
