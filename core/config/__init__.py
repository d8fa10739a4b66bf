"""
TrackSure Core Config — Public API
====================================
Registry configuration supplied at system initialization.
"""

from core.config.registry import RegistryConfig, load_registry_config

__all__ = [
    "RegistryConfig",
    "load_registry_config",
]
