"""
Email domain types.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EmailTemplate(Enum):
    """Template keys known to the notification trigger."""

    PURCHASE = "purchase"
    PAYMENT_FAILED = "payment_failed"
    RENEWAL = "renewal"
    LICENSE_ACTIVATED = "license_activated"
    SUBSCRIPTION_CANCELLED = "subscription_cancelled"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EmailResult:
    """Outcome of one send attempt."""

    success: bool
    template_key: str
    to: str
    error: Optional[str] = None

    @classmethod
    def ok(cls, template_key: str, to: str) -> "EmailResult":
        return cls(success=True, template_key=template_key, to=to)

    @classmethod
    def failed(cls, template_key: str, to: str, error: str) -> "EmailResult":
        return cls(success=False, template_key=template_key, to=to, error=error)
