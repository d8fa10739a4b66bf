"""
Tests for core.config — registry configuration.
"""

from types import SimpleNamespace

import pytest

from core.config import RegistryConfig, load_registry_config


class TestRegistryConfig:
    def test_defaults(self):
        config = RegistryConfig(administrator="admin-1")
        assert config.administrator == "admin-1"
        assert config.strict_deactivation is False

    @pytest.mark.parametrize("bad", ["", "   ", None, 42])
    def test_rejects_missing_administrator(self, bad):
        with pytest.raises(ValueError, match="administrator"):
            RegistryConfig(administrator=bad)

    def test_rejects_non_bool_strict_flag(self):
        with pytest.raises(ValueError, match="strict_deactivation"):
            RegistryConfig(administrator="admin-1", strict_deactivation="yes")

    def test_independent_administrators(self):
        a = RegistryConfig(administrator="admin-a")
        b = RegistryConfig(administrator="admin-b")
        assert a != b


class TestLoadRegistryConfig:
    def test_reads_explicit_settings_object(self):
        settings = SimpleNamespace(
            TRACKSURE_ADMINISTRATOR=" owner ",
            TRACKSURE_STRICT_DEACTIVATION="1",
        )
        config = load_registry_config(settings)
        assert config.administrator == "owner"
        assert config.strict_deactivation is True

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("on", True), (True, True),
        ("0", False), ("", False), ("no", False), (False, False),
    ])
    def test_parses_strict_flag(self, raw, expected):
        settings = SimpleNamespace(
            TRACKSURE_ADMINISTRATOR="owner",
            TRACKSURE_STRICT_DEACTIVATION=raw,
        )
        assert load_registry_config(settings).strict_deactivation is expected

    def test_rejects_garbage_flag(self):
        settings = SimpleNamespace(
            TRACKSURE_ADMINISTRATOR="owner",
            TRACKSURE_STRICT_DEACTIVATION="maybe",
        )
        with pytest.raises(ValueError, match="TRACKSURE_STRICT_DEACTIVATION"):
            load_registry_config(settings)

    def test_missing_administrator_is_an_error(self):
        with pytest.raises(ValueError, match="administrator"):
            load_registry_config(SimpleNamespace())

    def test_defaults_to_django_settings(self, settings):
        settings.TRACKSURE_ADMINISTRATOR = "django-admin-identity"
        settings.TRACKSURE_STRICT_DEACTIVATION = "0"
        config = load_registry_config()
        assert config.administrator == "django-admin-identity"
        assert config.strict_deactivation is False
