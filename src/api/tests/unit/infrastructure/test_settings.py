"""Unit tests for infrastructure settings."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from infrastructure.settings import AuthSettings, DatabaseSettings, TenancySettings


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_max_connections == 5

    @pytest.mark.parametrize(
        "field,value", [("pool_min_connections", 0), ("pool_max_connections", 101)]
    )
    def test_pool_bounds(self, field, value):
        with pytest.raises(ValidationError):
            DatabaseSettings(**{field: value})

    def test_connection_string_hides_password(self):
        settings = DatabaseSettings(username="app", password="secret", host="db")

        assert settings.connection_string == "postgresql://app@db:5432/shiftboard"
        assert "secret" not in settings.connection_string


class TestAuthSettings:
    def test_requires_a_key_source(self, monkeypatch):
        monkeypatch.delenv("SHIFTBOARD_AUTH_JWT_SECRET", raising=False)
        monkeypatch.delenv("SHIFTBOARD_AUTH_JWKS_URL", raising=False)

        with pytest.raises(ValidationError):
            AuthSettings(_env_file=None)

    def test_shared_secret_from_environment(self, monkeypatch):
        monkeypatch.setenv("SHIFTBOARD_AUTH_JWT_SECRET", "shh")

        settings = AuthSettings(_env_file=None)

        assert settings.jwt_secret.get_secret_value() == "shh"
        assert settings.audience == "authenticated"
        assert settings.access_token_cookie == "access_token"

    def test_jwks_url_alone_is_enough(self):
        settings = AuthSettings(
            _env_file=None, jwks_url="https://auth.example.com/jwks.json"
        )

        assert settings.jwt_secret is None


class TestTenancySettings:
    def test_defaults(self):
        settings = TenancySettings(_env_file=None)

        assert settings.preference_cookie_name == "app-active-company-id"
        assert settings.max_tenants_per_principal == 5
        assert settings.preference_cookie_secure is True
        assert settings.invalidation_channel == "tenant_invalidations"

    def test_preference_max_age(self):
        settings = TenancySettings(_env_file=None, preference_max_age_days=7)

        assert settings.preference_max_age == timedelta(days=7)
        assert settings.preference_max_age_seconds == 7 * 86400

    def test_tenant_cap_must_be_positive(self):
        with pytest.raises(ValidationError):
            TenancySettings(_env_file=None, max_tenants_per_principal=0)

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SHIFTBOARD_TENANCY_MAX_TENANTS_PER_PRINCIPAL", "3")

        assert TenancySettings(_env_file=None).max_tenants_per_principal == 3
