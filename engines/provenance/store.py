"""
TrackSure Provenance Engine — Custody Store
=============================================
Protocol + InMemory implementation of the three keyed collections
and the global sequence counter.

Doctrine:
- Store is a dependency injection point (testable, swappable).
- InMemory store is deterministic and used in tests and bootstrap.
- DB store lives in the adapters layer (adapters.django_store).
- Every mutating registry operation runs inside store.atomic():
  serialized against all other writers, all-or-nothing.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, Optional, Protocol, Tuple

from engines.provenance.models import Participant, Product, TransferEntry

logger = logging.getLogger("tracksure.store")


class LedgerIntegrityError(Exception):
    """A write would overwrite an existing immutable ledger entry."""

    def __init__(self, product_id: str, sequence: int):
        self.product_id = product_id
        self.sequence = sequence
        super().__init__(
            f"Transfer entry ({product_id!r}, {sequence}) already exists. "
            f"Ledger entries are immutable."
        )


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class CustodyStore(Protocol):
    def atomic(self) -> ContextManager[None]:
        """Serialize against other writers; roll back on exception."""
        ...

    def get_participant(self, identity: str) -> Optional[Participant]:
        ...

    def save_participant(self, participant: Participant) -> None:
        ...

    def get_product(self, product_id: str) -> Optional[Product]:
        ...

    def save_product(self, product: Product) -> None:
        ...

    def reserve_sequence(self) -> int:
        """Return the next global sequence number and advance the counter."""
        ...

    def peek_sequence(self) -> int:
        """Return the number the next reserve_sequence() will hand out."""
        ...

    def add_entry(self, entry: TransferEntry) -> None:
        """Insert an entry. Raises LedgerIntegrityError if the key exists."""
        ...

    def get_entry(self, product_id: str, sequence: int) -> Optional[TransferEntry]:
        ...

    def entries_for(self, product_id: str) -> Tuple[TransferEntry, ...]:
        """All entries of one product ordered by sequence."""
        ...


# ---------------------------------------------------------------------------
# InMemory store (deterministic, thread-safe)
# ---------------------------------------------------------------------------

class InMemoryCustodyStore:
    """
    Thread-safe in-memory custody store.

    atomic() holds a re-entrant lock for the whole block. The outermost
    block snapshots all collections and restores them if the block raises,
    so a failed operation leaves nothing behind.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._depth = 0
        self._participants: Dict[str, Participant] = {}
        self._products: Dict[str, Product] = {}
        self._entries: Dict[Tuple[str, int], TransferEntry] = {}
        self._next_sequence = 0

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                snapshot = (
                    dict(self._participants),
                    dict(self._products),
                    dict(self._entries),
                    self._next_sequence,
                )
            self._depth += 1
            try:
                yield
            except BaseException:
                if outermost:
                    (
                        self._participants,
                        self._products,
                        self._entries,
                        self._next_sequence,
                    ) = snapshot
                    logger.warning("Custody store rolled back after failed operation.")
                raise
            finally:
                self._depth -= 1

    # ── Participants ──────────────────────────────────────────

    def get_participant(self, identity: str) -> Optional[Participant]:
        with self._lock:
            return self._participants.get(identity)

    def save_participant(self, participant: Participant) -> None:
        with self._lock:
            self._participants[participant.identity] = participant

    # ── Products ──────────────────────────────────────────────

    def get_product(self, product_id: str) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    def save_product(self, product: Product) -> None:
        with self._lock:
            self._products[product.product_id] = product

    # ── Ledger ────────────────────────────────────────────────

    def reserve_sequence(self) -> int:
        with self._lock:
            sequence = self._next_sequence
            self._next_sequence += 1
            return sequence

    def peek_sequence(self) -> int:
        with self._lock:
            return self._next_sequence

    def add_entry(self, entry: TransferEntry) -> None:
        with self._lock:
            if entry.key in self._entries:
                raise LedgerIntegrityError(entry.product_id, entry.sequence)
            self._entries[entry.key] = entry

    def get_entry(self, product_id: str, sequence: int) -> Optional[TransferEntry]:
        with self._lock:
            return self._entries.get((product_id, sequence))

    def entries_for(self, product_id: str) -> Tuple[TransferEntry, ...]:
        with self._lock:
            return tuple(
                sorted(
                    (e for e in self._entries.values() if e.product_id == product_id),
                    key=lambda e: e.sequence,
                )
            )

    # ── Inspection (test helpers) ─────────────────────────────

    @property
    def participant_count(self) -> int:
        return len(self._participants)

    @property
    def product_count(self) -> int:
        return len(self._products)

    @property
    def entry_count(self) -> int:
        return len(self._entries)
