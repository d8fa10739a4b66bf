"""
TrackSure Provenance Engine — Product Registry
================================================
Product records keyed by product_id, each naming a current custodian.

Every mutation checks first, then writes. A rejected call never
touches the store. Each successful create / transfer / certify appends
exactly one ledger entry inside the same atomic block.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from core.commands.outcomes import OperationOutcome
from core.commands.rejection import ReasonCode, RejectionReason
from core.config import RegistryConfig
from core.time.clock import Clock
from engines.provenance.events import (
    CUSTODY_PRODUCT_CERTIFIED_V1,
    CUSTODY_PRODUCT_CREATED_V1,
    CUSTODY_PRODUCT_TRANSFERRED_V1,
    PRODUCT_CREATED_NOTE,
)
from engines.provenance.ledger import TransferLedger
from engines.provenance.models import Product
from engines.provenance.policies import (
    deactivation_policy,
    transfer_policy,
    verified_caller_policy,
)
from engines.provenance.store import CustodyStore

logger = logging.getLogger("tracksure.products")


def _not_found(product_id: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.NOT_FOUND,
        message=f"Product '{product_id}' is not registered.",
        policy_name="product_registry",
    )


def _rejected(operation: str, product_id: str, reason: RejectionReason) -> OperationOutcome:
    logger.info(
        f"{operation} of '{product_id}' rejected: "
        f"[{reason.code}] by '{reason.policy_name}'"
    )
    return OperationOutcome.rejected(reason)


class ProductRegistry:
    def __init__(
        self,
        *,
        store: CustodyStore,
        ledger: TransferLedger,
        clock: Clock,
        config: RegistryConfig,
    ):
        self._store = store
        self._ledger = ledger
        self._clock = clock
        self._config = config

    def create(
        self,
        caller: str,
        product_id: str,
        name: str,
        description: str,
        origin: str,
    ) -> OperationOutcome:
        """Register a product held by the caller. Returns the entry sequence."""
        with self._store.atomic():
            rejection = verified_caller_policy(self._store, caller)
            if rejection is not None:
                return _rejected("Create", product_id, rejection)

            if self._store.get_product(product_id) is not None:
                return _rejected("Create", product_id, RejectionReason(
                    code=ReasonCode.ALREADY_EXISTS,
                    message=f"Product '{product_id}' is already registered.",
                    policy_name="product_registry",
                ))

            self._store.save_product(Product(
                product_id=product_id,
                name=name,
                description=description,
                origin=origin,
                created_at=self._clock.now_utc(),
                custodian=caller,
            ))
            sequence = self._ledger.append(
                product_id,
                self._config.administrator,
                caller,
                origin,
                PRODUCT_CREATED_NOTE,
                CUSTODY_PRODUCT_CREATED_V1,
            )

        logger.info(f"Product '{product_id}' created by '{caller}' (entry #{sequence})")
        return OperationOutcome.ok(sequence)

    def transfer(
        self,
        caller: str,
        product_id: str,
        new_custodian: str,
        location: str,
        notes: str,
    ) -> OperationOutcome:
        with self._store.atomic():
            product = self._store.get_product(product_id)
            if product is None:
                return _rejected("Transfer", product_id, _not_found(product_id))

            rejection = transfer_policy(self._store, product, caller, new_custodian)
            if rejection is not None:
                return _rejected("Transfer", product_id, rejection)

            self._store.save_product(
                dataclasses.replace(product, custodian=new_custodian)
            )
            sequence = self._ledger.append(
                product_id,
                caller,
                new_custodian,
                location,
                notes,
                CUSTODY_PRODUCT_TRANSFERRED_V1,
            )

        logger.info(
            f"Product '{product_id}' transferred {caller} -> {new_custodian} "
            f"(entry #{sequence})"
        )
        return OperationOutcome.ok(sequence)

    def deactivate(self, caller: str, product_id: str) -> OperationOutcome:
        """
        End the product's tracked lifecycle. Irreversible.

        Only custody is checked, not verification, unless the registry
        runs with strict_deactivation.
        """
        with self._store.atomic():
            product = self._store.get_product(product_id)
            if product is None:
                return _rejected("Deactivate", product_id, _not_found(product_id))

            rejection = deactivation_policy(self._store, self._config, product, caller)
            if rejection is not None:
                return _rejected("Deactivate", product_id, rejection)

            if product.active:
                self._store.save_product(dataclasses.replace(product, active=False))

        logger.info(f"Product '{product_id}' deactivated by '{caller}'")
        return OperationOutcome.ok(True)

    def certify(
        self,
        caller: str,
        product_id: str,
        details: str,
        location: str,
    ) -> OperationOutcome:
        """
        Attach a certification/inspection note. Custody is unchanged and
        the product's active flag is not consulted.
        """
        with self._store.atomic():
            rejection = verified_caller_policy(self._store, caller)
            if rejection is not None:
                return _rejected("Certify", product_id, rejection)

            product = self._store.get_product(product_id)
            if product is None:
                return _rejected("Certify", product_id, _not_found(product_id))

            sequence = self._ledger.append(
                product_id,
                caller,
                product.custodian,
                location,
                details,
                CUSTODY_PRODUCT_CERTIFIED_V1,
            )

        logger.info(f"Product '{product_id}' certified by '{caller}' (entry #{sequence})")
        return OperationOutcome.ok(sequence)

    def get(self, product_id: str) -> Optional[Product]:
        return self._store.get_product(product_id)
