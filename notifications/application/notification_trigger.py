"""
NotificationTrigger.

Sends transactional emails on behalf of webhook processors and event
handlers. A failed email never fails the operation that caused it.
"""
import logging
from typing import Any, Dict, Optional

from core.metrics import emails_sent_total
from notifications.domain.email import EmailResult, EmailTemplate
from notifications.ports.email_sender import EmailSender

logger = logging.getLogger(__name__)


class NotificationTrigger:
    """Fire-and-forget email facade over an EmailSender."""

    def __init__(self, email_sender: EmailSender):
        """Initialize trigger with an email sender."""
        self.email_sender = email_sender

    async def notify(
        self, template_key: str, to: Optional[str], variables: Dict[str, Any]
    ) -> EmailResult:
        """
        Send one email.

        Args:
            template_key: Template name
            to: Recipient address
            variables: Template context

        Returns:
            EmailResult; failures are reported, never raised
        """
        key = str(template_key)
        if not to:
            logger.warning("No recipient for %s email, skipping", key)
            emails_sent_total.labels(template=key, outcome="skipped").inc()
            return EmailResult.failed(key, "", "No recipient")

        try:
            result = await self.email_sender.send(key, to, variables)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Failed to send %s email to %s: %s", key, to, e,
                exc_info=True,
                extra={"template_key": key},
            )
            emails_sent_total.labels(template=key, outcome="failed").inc()
            return EmailResult.failed(key, to, str(e))

        emails_sent_total.labels(
            template=key, outcome="sent" if result.success else "failed"
        ).inc()
        return result

    async def purchase(
        self, to: str, username: str, product_name: str, amount: Any, license_key: str
    ) -> EmailResult:
        return await self.notify(
            EmailTemplate.PURCHASE,
            to,
            {
                "username": username,
                "product_name": product_name,
                "amount": amount,
                "license_key": license_key,
            },
        )

    async def payment_failed(
        self, to: str, username: str, amount: Any, invoice_number: Optional[str]
    ) -> EmailResult:
        return await self.notify(
            EmailTemplate.PAYMENT_FAILED,
            to,
            {"username": username, "amount": amount, "invoice_number": invoice_number},
        )

    async def renewal(
        self, to: str, username: str, plan_name: str, amount: Any, renewal_date=None
    ) -> EmailResult:
        return await self.notify(
            EmailTemplate.RENEWAL,
            to,
            {
                "username": username,
                "plan_name": plan_name,
                "amount": amount,
                "renewal_date": renewal_date,
            },
        )

    async def license_activated(
        self, to: str, username: str, product_name: str, license_key: str, domain=None
    ) -> EmailResult:
        return await self.notify(
            EmailTemplate.LICENSE_ACTIVATED,
            to,
            {
                "username": username,
                "product_name": product_name,
                "license_key": license_key,
                "domain": domain,
            },
        )

    async def subscription_cancelled(
        self, to: str, username: str, plan_name: str
    ) -> EmailResult:
        return await self.notify(
            EmailTemplate.SUBSCRIPTION_CANCELLED,
            to,
            {"username": username, "plan_name": plan_name},
        )
