"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import (
    DomainName,
    Email,
    IPAddress,
    LicenseStatus,
    SubscriptionStatus,
    WebhookStatus,
)


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        """Test invalid empty email."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("")

    def test_equality_by_value(self):
        assert Email("a@example.com") == Email("a@example.com")
        assert Email("a@example.com") != Email("b@example.com")


class TestDomainName:
    """Tests for DomainName value object."""

    @pytest.mark.parametrize(
        "value",
        ["example.com", "shop.example.com", "my-site.co.uk", "a1.io"],
    )
    def test_valid_domains(self, value):
        assert str(DomainName(value)) == value

    @pytest.mark.parametrize(
        "value",
        ["", "localhost", "-bad.com", "bad-.com", "exa mple.com", "example.c", "http://x.com"],
    )
    def test_invalid_domains(self, value):
        with pytest.raises(ValueError, match="Invalid domain name"):
            DomainName(value)


class TestIPAddress:
    """Tests for IPAddress value object."""

    def test_ipv4(self):
        assert str(IPAddress("192.168.1.10")) == "192.168.1.10"

    def test_ipv6(self):
        assert str(IPAddress("2001:db8::1")) == "2001:db8::1"

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid IP address"):
            IPAddress("999.1.1.1")


class TestStatusEnums:
    """Tests for status enumerations."""

    def test_license_status_values(self):
        assert [s.value for s in LicenseStatus] == ["pending", "active", "expired", "revoked"]
        assert str(LicenseStatus.ACTIVE) == "active"

    def test_webhook_status_values(self):
        assert {s.value for s in WebhookStatus} == {"pending", "processed", "failed"}

    def test_subscription_status_values(self):
        assert {s.value for s in SubscriptionStatus} == {
            "active",
            "expired",
            "cancelled",
            "pending",
        }
