"""
TrackSure — Provenance Service Tests
======================================
Typed request dispatch, end-to-end lifecycles, concurrent writers.
"""

import threading
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from core.commands.outcomes import OperationRejected
from core.commands.rejection import ReasonCode
from core.config import RegistryConfig
from core.time.clock import FixedClock
from engines.provenance import InMemoryCustodyStore, ProvenanceService
from engines.provenance.commands import (
    PROVENANCE_COMMAND_TYPES,
    CertifyProductRequest,
    CreateProductRequest,
    DeactivateProductRequest,
    RegisterParticipantRequest,
    TransferProductRequest,
    VerifyParticipantRequest,
)
from engines.provenance.events import (
    CUSTODY_PRODUCT_CERTIFIED_V1,
    CUSTODY_PRODUCT_CREATED_V1,
    CUSTODY_PRODUCT_TRANSFERRED_V1,
    PRODUCT_CREATED_NOTE,
)

ADMIN = "SP1OWNER000000000000000000000000000000000"
MANUFACTURER = "SP2MANUFACTURER0000000000000000000000000"
DISTRIBUTOR = "SP3DISTRIBUTOR00000000000000000000000000"
RETAILER = "SP4RETAILER00000000000000000000000000000"

T0 = datetime(2026, 2, 1, 9, 0, 0, tzinfo=timezone.utc)


def _service(**config_kwargs) -> ProvenanceService:
    return ProvenanceService(
        config=RegistryConfig(administrator=ADMIN, **config_kwargs),
        clock=FixedClock(T0),
    )


def _onboard(service: ProvenanceService, identity: str, name: str, role: str) -> None:
    service.execute(RegisterParticipantRequest(name=name, role=role), caller=identity).unwrap()
    service.execute(VerifyParticipantRequest(identity=identity), caller=ADMIN).unwrap()


# ══════════════════════════════════════════════════════════════
# REQUEST VALIDATION
# ══════════════════════════════════════════════════════════════

class TestRequests:
    def test_command_types_are_distinct(self):
        requests = [
            RegisterParticipantRequest(name="n", role="r"),
            VerifyParticipantRequest(identity="i"),
            CreateProductRequest(product_id="p", name="n"),
            TransferProductRequest(product_id="p", new_custodian="c"),
            DeactivateProductRequest(product_id="p"),
            CertifyProductRequest(product_id="p", details="d"),
        ]
        types = {r.command_type for r in requests}
        assert types == PROVENANCE_COMMAND_TYPES

    @pytest.mark.parametrize("factory,field", [
        (lambda: RegisterParticipantRequest(name="", role="r"), "name"),
        (lambda: VerifyParticipantRequest(identity="  "), "identity"),
        (lambda: CreateProductRequest(product_id="", name="n"), "product_id"),
        (lambda: TransferProductRequest(product_id="p", new_custodian=""), "new_custodian"),
        (lambda: DeactivateProductRequest(product_id=None), "product_id"),
        (lambda: CertifyProductRequest(product_id="p", details=""), "details"),
    ])
    def test_required_fields(self, factory, field):
        with pytest.raises(ValueError, match=field):
            factory()

    def test_optional_text_must_be_string(self):
        with pytest.raises(ValueError, match="location must be a string"):
            TransferProductRequest(product_id="p", new_custodian="c", location=None)

    def test_optional_text_may_be_empty(self):
        request = CreateProductRequest(product_id="p", name="n")
        assert request.description == ""
        assert request.origin == ""


# ══════════════════════════════════════════════════════════════
# DISPATCH
# ══════════════════════════════════════════════════════════════

class TestExecute:
    def test_unknown_request_type(self):
        with pytest.raises(TypeError, match="Unsupported provenance request"):
            _service().execute(SimpleNamespace(command_type="x"), caller=ADMIN)

    @pytest.mark.parametrize("caller", ["", "   ", None])
    def test_caller_required(self, caller):
        with pytest.raises(ValueError, match="caller"):
            _service().execute(
                RegisterParticipantRequest(name="n", role="r"), caller=caller,
            )

    def test_register_uses_caller_identity(self):
        service = _service()
        outcome = service.execute(
            RegisterParticipantRequest(name="Acme", role="manufacturer"),
            caller=MANUFACTURER,
        )
        assert outcome.is_ok
        assert service.get_participant(MANUFACTURER).name == "Acme"

    def test_rejection_is_returned_not_raised(self):
        service = _service()
        outcome = service.execute(
            VerifyParticipantRequest(identity=MANUFACTURER), caller=MANUFACTURER,
        )
        assert outcome.is_rejected
        with pytest.raises(OperationRejected) as exc_info:
            outcome.unwrap()
        assert exc_info.value.code == ReasonCode.NOT_AUTHORIZED

    def test_create_returns_sequence(self):
        service = _service()
        _onboard(service, MANUFACTURER, "Acme", "manufacturer")
        outcome = service.execute(
            CreateProductRequest(product_id="P1", name="Widget", origin="Shenzhen"),
            caller=MANUFACTURER,
        )
        assert outcome.unwrap() == 0


# ══════════════════════════════════════════════════════════════
# END-TO-END
# ══════════════════════════════════════════════════════════════

class TestLifecycle:
    def test_create_certify_transfer_deactivate(self):
        service = _service()
        _onboard(service, MANUFACTURER, "Acme", "manufacturer")

        assert service.create_product(
            MANUFACTURER, "P1", "Widget", "blue widget", "Factory A",
        ).unwrap() == 0
        product = service.get_product("P1")
        assert product.custodian == MANUFACTURER
        assert product.active is True

        assert service.certify_product(
            MANUFACTURER, "P1", "Quality assurance passed", "QA Lab",
        ).unwrap() == 1
        assert service.get_product("P1").custodian == MANUFACTURER

        _onboard(service, DISTRIBUTOR, "Global", "distributor")
        assert service.transfer_product(
            MANUFACTURER, "P1", DISTRIBUTOR, "Port B", "shipped",
        ).unwrap() == 2
        assert service.get_product("P1").custodian == DISTRIBUTOR

        assert service.deactivate_product(DISTRIBUTOR, "P1").is_ok
        assert service.get_product("P1").active is False

        outcome = service.transfer_product(DISTRIBUTOR, "P1", MANUFACTURER, "", "")
        assert outcome.error_code == ReasonCode.NOT_AUTHORIZED

        history = service.history("P1")
        assert [e.sequence for e in history] == [0, 1, 2]
        assert [e.entry_type for e in history] == [
            CUSTODY_PRODUCT_CREATED_V1,
            CUSTODY_PRODUCT_CERTIFIED_V1,
            CUSTODY_PRODUCT_TRANSFERRED_V1,
        ]
        created = history[0]
        assert created.source == ADMIN
        assert created.destination == MANUFACTURER
        assert created.location == "Factory A"
        assert created.notes == PRODUCT_CREATED_NOTE
        assert history[1].source == MANUFACTURER
        assert history[1].destination == MANUFACTURER
        assert service.ledger.next_sequence == 3

    def test_manufacturer_to_retailer(self):
        service = _service()
        _onboard(service, MANUFACTURER, "Acme Manufacturing", "manufacturer")
        _onboard(service, DISTRIBUTOR, "Global Distributors", "distributor")
        _onboard(service, RETAILER, "Main Street Shop", "retailer")

        service.create_product(
            MANUFACTURER, "PROD-001", "Smartphone XYZ",
            "Latest smartphone model with advanced features", "Factory A",
        ).unwrap()
        service.certify_product(
            MANUFACTURER, "PROD-001", "Quality assurance passed", "QA Lab",
        ).unwrap()
        service.transfer_product(
            MANUFACTURER, "PROD-001", DISTRIBUTOR, "Distribution Center", "Bulk shipment",
        ).unwrap()
        service.certify_product(
            DISTRIBUTOR, "PROD-001", "Packaging verification completed",
            "Distribution Center",
        ).unwrap()
        service.transfer_product(
            DISTRIBUTOR, "PROD-001", RETAILER, "Retail Store", "Store inventory",
        ).unwrap()
        assert service.deactivate_product(RETAILER, "PROD-001").is_ok

        product = service.get_product("PROD-001")
        assert product.custodian == RETAILER
        assert product.active is False
        assert len(service.history("PROD-001")) == 5
        assert service.custody_chain("PROD-001") == (MANUFACTURER, DISTRIBUTOR, RETAILER)
        assert service.get_transfer("PROD-001", 3).notes == "Packaging verification completed"

        returned = service.transfer_product(
            RETAILER, "PROD-001", MANUFACTURER, "Return Department", "Product return",
        )
        assert returned.error_code == ReasonCode.NOT_AUTHORIZED
        assert len(service.history("PROD-001")) == 5

    def test_sequences_interleave_across_products(self):
        service = _service()
        _onboard(service, MANUFACTURER, "Acme", "manufacturer")
        _onboard(service, DISTRIBUTOR, "Global", "distributor")

        service.create_product(MANUFACTURER, "A", "a", "", "").unwrap()
        service.create_product(MANUFACTURER, "B", "b", "", "").unwrap()
        service.transfer_product(MANUFACTURER, "A", DISTRIBUTOR, "", "").unwrap()

        assert [e.sequence for e in service.history("A")] == [0, 2]
        assert [e.sequence for e in service.history("B")] == [1]
        assert service.get_transfer("A", 1) is None

    def test_rejected_operations_do_not_consume_sequences(self):
        service = _service()
        _onboard(service, MANUFACTURER, "Acme", "manufacturer")

        service.create_product(MANUFACTURER, "P1", "w", "", "").unwrap()
        assert service.create_product(MANUFACTURER, "P1", "w", "", "").is_rejected
        assert service.transfer_product(MANUFACTURER, "P1", "ghost", "", "").is_rejected
        assert service.certify_product("ghost", "P1", "x", "").is_rejected

        assert service.ledger.next_sequence == 1
        assert service.store.product_count == 1
        assert service.store.entry_count == 1
        assert service.store.participant_count == 1

    def test_strict_mode_through_settings(self):
        settings = SimpleNamespace(
            TRACKSURE_ADMINISTRATOR=ADMIN,
            TRACKSURE_STRICT_DEACTIVATION="yes",
        )
        service = ProvenanceService.from_settings(settings, clock=FixedClock(T0))
        assert service.config.strict_deactivation is True
        assert isinstance(service.store, InMemoryCustodyStore)


# ══════════════════════════════════════════════════════════════
# CONCURRENCY
# ══════════════════════════════════════════════════════════════

class TestConcurrentWriters:
    def test_parallel_creates_get_unique_sequences(self):
        service = _service()
        _onboard(service, MANUFACTURER, "Acme", "manufacturer")
        results = []
        results_lock = threading.Lock()

        def worker(n: int) -> None:
            for i in range(10):
                outcome = service.create_product(
                    MANUFACTURER, f"P-{n}-{i}", "w", "", "",
                )
                with results_lock:
                    results.append(outcome.unwrap())

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results) == list(range(80))
        assert service.ledger.next_sequence == 80

    def test_racing_transfers_only_one_wins(self):
        service = _service()
        _onboard(service, MANUFACTURER, "Acme", "manufacturer")
        _onboard(service, DISTRIBUTOR, "Global", "distributor")
        _onboard(service, RETAILER, "Shop", "retailer")
        service.create_product(MANUFACTURER, "P1", "w", "", "").unwrap()

        barrier = threading.Barrier(2)
        outcomes = []

        def send(recipient: str) -> None:
            barrier.wait()
            outcomes.append(service.transfer_product(MANUFACTURER, "P1", recipient, "", ""))

        threads = [
            threading.Thread(target=send, args=(DISTRIBUTOR,)),
            threading.Thread(target=send, args=(RETAILER,)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(1 for o in outcomes if o.is_ok) == 1
        assert len(service.history("P1")) == 2
