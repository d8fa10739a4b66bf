"""
TrackSure Django Store — Relational Custody State
===================================================
DB-backed tables for the persisted registry layout:
participants by identity, products by product_id, transfer entries
by (product_id, sequence), and the single global sequence counter.

RULES (NON-NEGOTIABLE):
- Transfer entries are INSERT only: no updates, no deletes
- The counter row is locked (select_for_update) by every writer

This file contains NO authorization logic.
"""

from django.db import models


LEDGER_COUNTER_NAME = "transfer_entries"


class ParticipantRecord(models.Model):
    identity = models.CharField(primary_key=True, max_length=255)
    name = models.TextField()
    role = models.TextField()
    verified = models.BooleanField(default=False)

    class Meta:
        db_table = "tracksure_participants"
        ordering = ["identity"]

    def __str__(self) -> str:
        return f"{self.identity} ({self.role})"


class ProductRecord(models.Model):
    product_id = models.CharField(primary_key=True, max_length=255)
    name = models.TextField()
    description = models.TextField(blank=True, default="")
    origin = models.TextField(blank=True, default="")
    created_at = models.DateTimeField()
    custodian = models.CharField(max_length=255)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = "tracksure_products"
        ordering = ["product_id"]
        indexes = [
            models.Index(fields=["custodian"], name="idx_product_custodian"),
        ]

    def __str__(self) -> str:
        return f"{self.product_id} held by {self.custodian}"


class TransferEntryRecord(models.Model):
    """
    One immutable provenance event. sequence is globally unique, so it is
    the primary key; (product_id, sequence) is the lookup key.
    """

    sequence = models.BigIntegerField(primary_key=True)
    product_id = models.CharField(max_length=255)
    entry_type = models.CharField(max_length=64)
    source = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    timestamp = models.DateTimeField()
    location = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "tracksure_transfer_entries"
        ordering = ["sequence"]
        indexes = [
            models.Index(
                fields=["product_id", "sequence"],
                name="idx_transfer_product_seq",
            ),
        ]

    def save(self, *args, **kwargs):
        """GUARD: INSERT only. Persisted entries are never updated."""
        if not self._state.adding:
            raise PermissionError(
                "Transfer entries are immutable. "
                "Cannot update a persisted entry."
            )
        kwargs["force_insert"] = True
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """GUARD: Transfer entries are NEVER deleted."""
        raise PermissionError("Transfer entries are never deleted.")

    def __str__(self) -> str:
        return f"#{self.sequence} [{self.entry_type}] {self.product_id}"


class SequenceCounter(models.Model):
    name = models.CharField(primary_key=True, max_length=64)
    next_value = models.BigIntegerField(default=0)

    class Meta:
        db_table = "tracksure_sequence_counters"

    def __str__(self) -> str:
        return f"{self.name}={self.next_value}"
