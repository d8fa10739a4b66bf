"""
TrackSure Provenance Engine — Transfer Ledger
===============================================
Append-only log of custody and certification events.

RULES (NON-NEGOTIABLE):
- One global counter for all products, starting at 0
- Sequence numbers strictly increase and are never reused
- Entries are never mutated or deleted
- append() is called by the Product Registry only

A product's history is found by enumerating its entries, not by
assuming contiguous per-product numbering.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from core.time.clock import Clock
from engines.provenance.events import CUSTODY_ENTRY_TYPES, is_custody_change
from engines.provenance.models import TransferEntry
from engines.provenance.store import CustodyStore

logger = logging.getLogger("tracksure.ledger")


class TransferLedger:
    def __init__(self, *, store: CustodyStore, clock: Clock):
        self._store = store
        self._clock = clock

    def append(
        self,
        product_id: str,
        source: str,
        destination: str,
        location: str,
        notes: str,
        entry_type: str,
    ) -> int:
        """Write one immutable entry and return its sequence number."""
        if entry_type not in CUSTODY_ENTRY_TYPES:
            raise ValueError(f"Unknown ledger entry type: {entry_type}")

        with self._store.atomic():
            sequence = self._store.reserve_sequence()
            self._store.add_entry(TransferEntry(
                product_id=product_id,
                sequence=sequence,
                entry_type=entry_type,
                source=source,
                destination=destination,
                timestamp=self._clock.now_utc(),
                location=location,
                notes=notes,
            ))

        logger.debug(
            f"Ledger entry #{sequence} [{entry_type}] for '{product_id}': "
            f"{source} -> {destination}"
        )
        return sequence

    def get(self, product_id: str, sequence: int) -> Optional[TransferEntry]:
        return self._store.get_entry(product_id, sequence)

    def history(self, product_id: str) -> Tuple[TransferEntry, ...]:
        """All entries for one product, ordered by sequence."""
        return self._store.entries_for(product_id)

    def custody_chain(self, product_id: str) -> Tuple[str, ...]:
        """Successive custodians of a product, first holder first."""
        return tuple(
            entry.destination
            for entry in self.history(product_id)
            if is_custody_change(entry.entry_type)
        )

    @property
    def next_sequence(self) -> int:
        return self._store.peek_sequence()
