"""
TrackSure Core Time — Public API
==================================
Explicit clock protocol. NO datetime.now() in registry logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    MonotonicClock,
    SystemClock,
)

__all__ = [
    "Clock",
    "FixedClock",
    "MonotonicClock",
    "SystemClock",
]
