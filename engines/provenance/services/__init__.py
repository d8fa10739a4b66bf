"""
TrackSure Provenance Engine — Application Service
===================================================
Composes the Identity Registry, Product Registry and Transfer Ledger
over one custody store, and routes typed host requests to them.

Orchestrates:
1. Caller identity (explicit, supplied by the host)
2. Request → registry operation resolution
3. Authorization + mutation inside the registries
4. Read-only queries (no authorization)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from core.commands.outcomes import OperationOutcome
from core.config import RegistryConfig, load_registry_config
from core.time.clock import Clock, MonotonicClock
from engines.provenance.commands import (
    CertifyProductRequest,
    CreateProductRequest,
    DeactivateProductRequest,
    RegisterParticipantRequest,
    TransferProductRequest,
    VerifyParticipantRequest,
)
from engines.provenance.identity import IdentityRegistry
from engines.provenance.ledger import TransferLedger
from engines.provenance.models import Participant, Product, TransferEntry
from engines.provenance.products import ProductRegistry
from engines.provenance.store import CustodyStore, InMemoryCustodyStore

logger = logging.getLogger("tracksure.service")


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class ProvenanceService:
    """
    Provenance registry application service.

    Defaults: in-memory store, monotonic system clock. The config is
    required; use from_settings() to read it from Django settings.
    """

    def __init__(
        self,
        *,
        config: RegistryConfig,
        store: CustodyStore | None = None,
        clock: Clock | None = None,
    ):
        self._config = config
        self._store = store if store is not None else InMemoryCustodyStore()
        self._clock = clock if clock is not None else MonotonicClock()

        self._identities = IdentityRegistry(store=self._store, config=config)
        self._ledger = TransferLedger(store=self._store, clock=self._clock)
        self._products = ProductRegistry(
            store=self._store,
            ledger=self._ledger,
            clock=self._clock,
            config=config,
        )

        self._handlers: Dict[type, Callable[[str, object], OperationOutcome]] = {
            RegisterParticipantRequest: self._handle_register,
            VerifyParticipantRequest: self._handle_verify,
            CreateProductRequest: self._handle_create,
            TransferProductRequest: self._handle_transfer,
            DeactivateProductRequest: self._handle_deactivate,
            CertifyProductRequest: self._handle_certify,
        }

        if config.strict_deactivation:
            logger.warning(
                "Strict deactivation enabled: custodians must be verified "
                "to deactivate products."
            )

    @classmethod
    def from_settings(
        cls,
        settings=None,
        *,
        store: CustodyStore | None = None,
        clock: Clock | None = None,
    ) -> "ProvenanceService":
        return cls(config=load_registry_config(settings), store=store, clock=clock)

    # ── Host request dispatch ─────────────────────────────────

    def execute(self, request, *, caller: str) -> OperationOutcome:
        handler = self._handlers.get(type(request))
        if handler is None:
            raise TypeError(
                f"Unsupported provenance request: {type(request).__name__}"
            )
        if not isinstance(caller, str) or not caller.strip():
            raise ValueError("caller must be a non-empty identity.")

        outcome = handler(caller, request)
        logger.debug(
            f"{request.command_type} by '{caller}' -> {outcome.status.value}"
        )
        return outcome

    def _handle_register(self, caller, request) -> OperationOutcome:
        return self.register_participant(caller, request.name, request.role)

    def _handle_verify(self, caller, request) -> OperationOutcome:
        return self.verify_participant(caller, request.identity)

    def _handle_create(self, caller, request) -> OperationOutcome:
        return self.create_product(
            caller, request.product_id, request.name,
            request.description, request.origin,
        )

    def _handle_transfer(self, caller, request) -> OperationOutcome:
        return self.transfer_product(
            caller, request.product_id, request.new_custodian,
            request.location, request.notes,
        )

    def _handle_deactivate(self, caller, request) -> OperationOutcome:
        return self.deactivate_product(caller, request.product_id)

    def _handle_certify(self, caller, request) -> OperationOutcome:
        return self.certify_product(
            caller, request.product_id, request.details, request.location,
        )

    # ── Mutating operations ───────────────────────────────────

    def register_participant(self, caller: str, name: str, role: str) -> OperationOutcome:
        return self._identities.register(caller, name, role)

    def verify_participant(self, caller: str, identity: str) -> OperationOutcome:
        return self._identities.verify(caller, identity)

    def create_product(
        self,
        caller: str,
        product_id: str,
        name: str,
        description: str,
        origin: str,
    ) -> OperationOutcome:
        return self._products.create(caller, product_id, name, description, origin)

    def transfer_product(
        self,
        caller: str,
        product_id: str,
        new_custodian: str,
        location: str,
        notes: str,
    ) -> OperationOutcome:
        return self._products.transfer(caller, product_id, new_custodian, location, notes)

    def deactivate_product(self, caller: str, product_id: str) -> OperationOutcome:
        return self._products.deactivate(caller, product_id)

    def certify_product(
        self,
        caller: str,
        product_id: str,
        details: str,
        location: str,
    ) -> OperationOutcome:
        return self._products.certify(caller, product_id, details, location)

    # ── Reads (no authorization) ──────────────────────────────

    def get_participant(self, identity: str) -> Optional[Participant]:
        return self._identities.get(identity)

    def is_verified(self, identity: str) -> bool:
        return self._identities.is_verified(identity)

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def get_transfer(self, product_id: str, sequence: int) -> Optional[TransferEntry]:
        return self._ledger.get(product_id, sequence)

    def history(self, product_id: str) -> Tuple[TransferEntry, ...]:
        return self._ledger.history(product_id)

    def custody_chain(self, product_id: str) -> Tuple[str, ...]:
        return self._ledger.custody_chain(product_id)

    # ── Components ────────────────────────────────────────────

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def identities(self) -> IdentityRegistry:
        return self._identities

    @property
    def products(self) -> ProductRegistry:
        return self._products

    @property
    def ledger(self) -> TransferLedger:
        return self._ledger

    @property
    def store(self) -> CustodyStore:
        return self._store
