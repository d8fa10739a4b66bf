"""
TrackSure Core Config — Registry Configuration
================================================
The administrator is configuration, not a constant in registry code.
It is supplied at system initialization so independent registries
(tests, tenants) can run with distinct administrators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


# ══════════════════════════════════════════════════════════════
# REGISTRY CONFIG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RegistryConfig:
    """
    Fields:
        administrator:       Identity allowed to verify participants. Also
                             the source recorded on product-creation entries.
        strict_deactivation: When True, deactivate also requires the
                             custodian to be verified. Off by default.
    """

    administrator: str
    strict_deactivation: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.administrator, str) or not self.administrator.strip():
            raise ValueError("administrator must be a non-empty string.")
        if not isinstance(self.strict_deactivation, bool):
            raise ValueError("strict_deactivation must be a bool.")


def _parse_flag(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def load_registry_config(settings: Optional[Any] = None) -> RegistryConfig:
    """
    Build a RegistryConfig from a settings object.

    Defaults to django.conf.settings, which reads TRACKSURE_* from
    config/settings.py.
    """
    if settings is None:
        from django.conf import settings

    administrator = getattr(settings, "TRACKSURE_ADMINISTRATOR", "")
    strict = getattr(settings, "TRACKSURE_STRICT_DEACTIVATION", False)
    return RegistryConfig(
        administrator=str(administrator).strip(),
        strict_deactivation=_parse_flag("TRACKSURE_STRICT_DEACTIVATION", strict),
    )
