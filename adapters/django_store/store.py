"""
TrackSure Django Store - DB-backed Custody Store
=================================================
CustodyStore implementation over the relational tables in
adapters.django_store.models.

Serialization: atomic() opens a transaction and write-locks the ledger
counter, so mutating operations run one at a time across processes.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from django.db import IntegrityError, transaction
from django.db.models import F

from adapters.django_store.models import (
    LEDGER_COUNTER_NAME,
    ParticipantRecord,
    ProductRecord,
    SequenceCounter,
    TransferEntryRecord,
)
from engines.provenance.models import Participant, Product, TransferEntry
from engines.provenance.store import LedgerIntegrityError

logger = logging.getLogger("tracksure.store")


def _participant_from_row(row: ParticipantRecord) -> Participant:
    return Participant(
        identity=row.identity,
        name=row.name,
        role=row.role,
        verified=row.verified,
    )


def _product_from_row(row: ProductRecord) -> Product:
    return Product(
        product_id=row.product_id,
        name=row.name,
        description=row.description,
        origin=row.origin,
        created_at=row.created_at,
        custodian=row.custodian,
        active=row.active,
    )


def _entry_from_row(row: TransferEntryRecord) -> TransferEntry:
    return TransferEntry(
        product_id=row.product_id,
        sequence=row.sequence,
        entry_type=row.entry_type,
        source=row.source,
        destination=row.destination,
        timestamp=row.timestamp,
        location=row.location,
        notes=row.notes,
    )


class DjangoCustodyStore:
    def __init__(self, using: str = "default"):
        self._using = using

    def _lock_counter(self) -> SequenceCounter:
        counters = SequenceCounter.objects.using(self._using).filter(
            name=LEDGER_COUNTER_NAME
        )
        # Write first: SQLite ignores select_for_update and only waits for a
        # busy writer when the transaction has not read anything yet.
        if not counters.update(next_value=F("next_value")):
            SequenceCounter.objects.using(self._using).get_or_create(
                name=LEDGER_COUNTER_NAME
            )
        return counters.select_for_update().get()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with transaction.atomic(using=self._using):
            self._lock_counter()
            yield

    # ── Participants ──────────────────────────────────────────

    def get_participant(self, identity: str) -> Optional[Participant]:
        row = ParticipantRecord.objects.using(self._using).filter(identity=identity).first()
        return _participant_from_row(row) if row is not None else None

    def save_participant(self, participant: Participant) -> None:
        ParticipantRecord.objects.using(self._using).update_or_create(
            identity=participant.identity,
            defaults={
                "name": participant.name,
                "role": participant.role,
                "verified": participant.verified,
            },
        )

    # ── Products ──────────────────────────────────────────────

    def get_product(self, product_id: str) -> Optional[Product]:
        row = ProductRecord.objects.using(self._using).filter(product_id=product_id).first()
        return _product_from_row(row) if row is not None else None

    def save_product(self, product: Product) -> None:
        ProductRecord.objects.using(self._using).update_or_create(
            product_id=product.product_id,
            defaults={
                "name": product.name,
                "description": product.description,
                "origin": product.origin,
                "created_at": product.created_at,
                "custodian": product.custodian,
                "active": product.active,
            },
        )

    # ── Ledger ────────────────────────────────────────────────

    def reserve_sequence(self) -> int:
        with transaction.atomic(using=self._using):
            counter = self._lock_counter()
            sequence = counter.next_value
            counter.next_value = sequence + 1
            counter.save(using=self._using, update_fields=["next_value"])
            return sequence

    def peek_sequence(self) -> int:
        value = (
            SequenceCounter.objects.using(self._using)
            .filter(name=LEDGER_COUNTER_NAME)
            .values_list("next_value", flat=True)
            .first()
        )
        return value if value is not None else 0

    def add_entry(self, entry: TransferEntry) -> None:
        if TransferEntryRecord.objects.using(self._using).filter(sequence=entry.sequence).exists():
            raise LedgerIntegrityError(entry.product_id, entry.sequence)
        try:
            with transaction.atomic(using=self._using):
                TransferEntryRecord.objects.using(self._using).create(
                    sequence=entry.sequence,
                    product_id=entry.product_id,
                    entry_type=entry.entry_type,
                    source=entry.source,
                    destination=entry.destination,
                    timestamp=entry.timestamp,
                    location=entry.location,
                    notes=entry.notes,
                )
        except IntegrityError as exc:
            logger.error(
                f"Insert of transfer entry #{entry.sequence} for "
                f"'{entry.product_id}' failed: {exc}"
            )
            raise LedgerIntegrityError(entry.product_id, entry.sequence) from exc

    def get_entry(self, product_id: str, sequence: int) -> Optional[TransferEntry]:
        row = (
            TransferEntryRecord.objects.using(self._using)
            .filter(product_id=product_id, sequence=sequence)
            .first()
        )
        return _entry_from_row(row) if row is not None else None

    def entries_for(self, product_id: str) -> Tuple[TransferEntry, ...]:
        rows = (
            TransferEntryRecord.objects.using(self._using)
            .filter(product_id=product_id)
            .order_by("sequence")
        )
        return tuple(_entry_from_row(row) for row in rows)
