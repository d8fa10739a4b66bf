"""
TrackSure Core Time — Injectable Clock
========================================
Registries never call datetime.now() directly. Timestamps for product
creation and ledger entries come from a Clock supplied by the host.

MonotonicClock guards against a host clock stepping backwards, so
ledger timestamps never decrease along the sequence order.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock — real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock — returns a fixed timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        clock.advance(60)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)

    def set(self, moment: datetime) -> None:
        if moment.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = moment


class MonotonicClock:
    """
    Wraps another clock and never returns a time earlier than the
    last one it handed out.
    """

    def __init__(self, inner: Optional[Clock] = None) -> None:
        self._inner = inner or SystemClock()
        self._last: Optional[datetime] = None
        self._lock = threading.Lock()

    def now_utc(self) -> datetime:
        with self._lock:
            current = self._inner.now_utc()
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current
