"""
Email sender port (interface).

Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

from notifications.domain.email import EmailResult


class EmailSender(ABC):
    """
    Abstract email-send capability.

    This is a port in hexagonal architecture - the transport
    behind it is not part of the licensing core.
    """

    @abstractmethod
    async def send(
        self, template_key: str, to: str, variables: Dict[str, Any]
    ) -> EmailResult:
        """
        Render a template and send it.

        Args:
            template_key: Template name, e.g. "purchase"
            to: Recipient address
            variables: Template context

        Returns:
            EmailResult describing the attempt

        Raises:
            Exception: Transport or rendering errors propagate to the caller
        """
        pass
