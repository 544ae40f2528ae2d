"""Unit tests for the signed active-tenant preference."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from iam.infrastructure.preference_codec import ActiveTenantPreferenceCodec
from iam.ports.exceptions import InvalidPreferenceError

SECRET = "test-preference-secret"
TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"


@pytest.fixture
def codec():
    return ActiveTenantPreferenceCodec(SECRET)


class TestActiveTenantPreferenceCodec:
    def test_round_trip_returns_tenant(self, codec):
        raw = codec.encode("user-123", TENANT_A)

        assert codec.decode(raw, "user-123") == TENANT_A

    def test_decode_canonicalizes_tenant_id(self, codec):
        raw = codec.encode("user-123", TENANT_A.lower())

        assert codec.decode(raw, "user-123") == TENANT_A

    def test_expired_preference_rejected(self):
        issued = datetime.now(UTC) - timedelta(days=31)
        old_codec = ActiveTenantPreferenceCodec(SECRET, clock=lambda: issued)
        raw = old_codec.encode("user-123", TENANT_A)

        with pytest.raises(InvalidPreferenceError) as exc_info:
            ActiveTenantPreferenceCodec(SECRET).decode(raw, "user-123")

        assert exc_info.value.reason == "expired"

    def test_other_secret_rejected(self, codec):
        raw = ActiveTenantPreferenceCodec("another-secret").encode("user-123", TENANT_A)

        with pytest.raises(InvalidPreferenceError) as exc_info:
            codec.decode(raw, "user-123")

        assert exc_info.value.reason == "invalid_signature"

    def test_garbage_rejected(self, codec):
        with pytest.raises(InvalidPreferenceError) as exc_info:
            codec.decode("not-a-token", "user-123")

        assert exc_info.value.reason == "invalid_signature"

    def test_preference_of_other_principal_rejected(self, codec):
        raw = codec.encode("user-456", TENANT_A)

        with pytest.raises(InvalidPreferenceError) as exc_info:
            codec.decode(raw, "user-123")

        assert exc_info.value.reason == "principal_mismatch"

    def test_malformed_tenant_id_rejected(self, codec):
        now = datetime.now(UTC)
        raw = jwt.encode(
            {
                "sub": "user-123",
                "tid": "acme",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(days=1)).timestamp()),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidPreferenceError) as exc_info:
            codec.decode(raw, "user-123")

        assert exc_info.value.reason == "malformed_tenant_id"

    def test_missing_tenant_claim_rejected(self, codec):
        now = datetime.now(UTC)
        raw = jwt.encode(
            {"sub": "user-123", "exp": int((now + timedelta(days=1)).timestamp())},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidPreferenceError) as exc_info:
            codec.decode(raw, "user-123")

        assert exc_info.value.reason == "malformed_tenant_id"

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            ActiveTenantPreferenceCodec("")
