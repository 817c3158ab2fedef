"""
Django mail implementation of EmailSender port.

Templates live under notifications/templates/emails/ as
<key>_subject.txt, <key>.txt and <key>.html.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string

from notifications.domain.email import EmailResult
from notifications.ports.email_sender import EmailSender

logger = logging.getLogger(__name__)


class DjangoEmailSender(EmailSender):
    """Sends templated emails through Django's configured email backend."""

    def _default_variables(self) -> Dict[str, Any]:
        config = getattr(settings, "NOTIFICATIONS", {})
        return {
            "site_name": config.get("SITE_NAME", "Store"),
            "support_email": config.get("SUPPORT_EMAIL", settings.DEFAULT_FROM_EMAIL),
            "current_year": datetime.now(timezone.utc).year,
        }

    def _send(self, template_key: str, to: str, variables: Dict[str, Any]) -> EmailResult:
        context = {**self._default_variables(), **variables}
        subject = render_to_string(f"emails/{template_key}_subject.txt", context)
        text_body = render_to_string(f"emails/{template_key}.txt", context)
        html_body = render_to_string(f"emails/{template_key}.html", context)

        connection = get_connection(timeout=getattr(settings, "EMAIL_TIMEOUT", None))
        message = EmailMultiAlternatives(
            subject=" ".join(subject.split()),
            body=text_body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[to],
            connection=connection,
        )
        message.attach_alternative(html_body, "text/html")
        message.send(fail_silently=False)

        logger.debug("Email %s sent to %s", template_key, to)
        return EmailResult.ok(template_key, to)

    async def send(
        self, template_key: str, to: str, variables: Dict[str, Any]
    ) -> EmailResult:
        """
        Render a template and send it.

        Args:
            template_key: Template name, e.g. "purchase"
            to: Recipient address
            variables: Template context, merged over the site defaults

        Returns:
            EmailResult of a successful send
        """
        return await sync_to_async(self._send)(template_key, to, variables)
