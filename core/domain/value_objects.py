"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import ipaddress
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum

# Labels of alphanumerics with inner hyphens, dot separated, 2-6 letter TLD.
DOMAIN_PATTERN = re.compile(
    r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,6}$"
)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True, eq=False)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def __post_init__(self):
        """Validate email format."""
        if not self.value or "@" not in self.value:
            raise ValueError(f"Invalid email address: {self.value}")

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


@dataclass(frozen=True, eq=False)
class DomainName(ValueObject):
    """Domain name an activation is bound to."""

    value: str

    def __post_init__(self):
        """Validate domain name format."""
        if not self.value or not DOMAIN_PATTERN.match(self.value):
            raise ValueError(f"Invalid domain name: {self.value}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class IPAddress(ValueObject):
    """IPv4 or IPv6 address."""

    value: str

    def __post_init__(self):
        """Validate IP address format."""
        try:
            ipaddress.ip_address(self.value)
        except ValueError:
            raise ValueError(f"Invalid IP address: {self.value}") from None

    def __str__(self) -> str:
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class WebhookStatus(Enum):
    """Processing status of a logged webhook."""

    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class SubscriptionStatus(Enum):
    """Subscription status value object."""

    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    PENDING = "pending"

    def __str__(self) -> str:
        return self.value
