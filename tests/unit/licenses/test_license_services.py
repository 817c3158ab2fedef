"""
Unit tests for License domain services and key generation.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import DomainException, ValidationError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key, generate_unique_key, is_well_formed
from licenses.domain.services import LicenseStatusPolicy


class TestLicenseStatusPolicy:
    """Tests for LicenseStatusPolicy service."""

    @pytest.mark.parametrize("value", ["pending", "active", "expired", "revoked"])
    def test_parse_known_status(self, value):
        assert LicenseStatusPolicy.parse_status(value) == LicenseStatus(value)

    @pytest.mark.parametrize("value", ["suspended", "", None, "ACTIVE"])
    def test_parse_unknown_status(self, value):
        with pytest.raises(ValidationError, match="Invalid status"):
            LicenseStatusPolicy.parse_status(value)

    def test_describe_messages(self):
        now = datetime.now(timezone.utc)
        base = License.create(product_id=uuid.uuid4(), customer_id=uuid.uuid4(), key="K1")

        assert LicenseStatusPolicy.describe(base, now) == "License is valid"
        assert "expired" in LicenseStatusPolicy.describe(
            base.update(expires_on=now - timedelta(days=1)), now
        )
        assert "revoked" in LicenseStatusPolicy.describe(
            base.with_status(LicenseStatus.REVOKED), now
        )
        assert "pending" in LicenseStatusPolicy.describe(
            base.with_status(LicenseStatus.PENDING), now
        )


class _KeyStore:
    """Existence check that reports the first N candidates as taken."""

    def __init__(self, collisions):
        self.collisions = collisions
        self.checked = []

    async def key_exists(self, key):
        self.checked.append(key)
        return len(self.checked) <= self.collisions


class TestLicenseKeyGeneration:
    """Tests for license key generation."""

    def test_key_format(self):
        key = generate_license_key()
        assert len(key) == 32
        assert key == key.upper()
        int(key, 16)
        assert is_well_formed(key)

    def test_keys_are_distinct(self):
        keys = {generate_license_key() for _ in range(1000)}
        assert len(keys) == 1000

    @pytest.mark.asyncio
    async def test_unique_key_retries_after_collision(self):
        store = _KeyStore(collisions=2)
        key = await generate_unique_key(store)
        assert len(store.checked) == 3
        assert key == store.checked[-1]

    @pytest.mark.asyncio
    async def test_unique_key_gives_up(self):
        store = _KeyStore(collisions=100)
        with pytest.raises(DomainException) as exc_info:
            await generate_unique_key(store, max_attempts=3)
        assert exc_info.value.code == "KEY_GENERATION_FAILED"
        assert len(store.checked) == 3

    @pytest.mark.parametrize("key", ["", "has space", "semi;colon", "x" * 65])
    def test_malformed_keys(self, key):
        assert is_well_formed(key) is False
