"""
Activation Manager handlers.

Handlers for adding, removing and listing the activations of a license.
"""

import logging

from activations.application.commands.add_activation import AddActivationCommand
from activations.application.commands.remove_activation import RemoveActivationCommand
from activations.application.dto.activation_dto import ActivationDTO, ActivationListDTO
from activations.application.queries.list_activations import ListActivationsQuery
from activations.domain.activation import Activation
from activations.domain.events import ActivationRemoved, LicenseActivated
from activations.ports.activation_repository import ActivationRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    ActivationNotFoundError,
    LicenseNotFoundError,
    QuotaExceededError,
    ValidationError,
)
from core.metrics import (
    activation_quota_rejections_total,
    activations_created_total,
    activations_removed_total,
)
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class AddActivationHandler:
    """Handler for AddActivationCommand."""

    def __init__(
        self,
        activation_repository: ActivationRepository,
        event_bus: EventBus,
    ):
        """Initialize handler with repositories."""
        self.activation_repository = activation_repository
        self.event_bus = event_bus

    async def handle(self, command: AddActivationCommand) -> ActivationDTO:
        """
        Handle add activation command.

        Args:
            command: AddActivationCommand

        Returns:
            ActivationDTO of the stored activation

        Raises:
            ValidationError: If the domain or IP address is missing or malformed,
                or the domain is already activated
            LicenseNotFoundError: If the license is missing or not owned
            QuotaExceededError: If the activation limit is reached
        """
        if not command.domain or not str(command.domain).strip():
            raise ValidationError("Domain is required")

        try:
            activation = Activation.create(
                license_id=command.license_id,
                domain=str(command.domain),
                ip_address=command.ip_address,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        try:
            stored = await self.activation_repository.add_within_quota(
                activation, customer_id=command.customer_id
            )
        except QuotaExceededError:
            activation_quota_rejections_total.inc()
            logger.info("Activation limit reached for license %s", command.license_id)
            raise

        activations_created_total.inc()
        logger.info(
            "License %s activated on %s", stored.license_id, stored.domain,
            extra={"license_id": str(stored.license_id), "activation_id": str(stored.id)},
        )

        await self.event_bus.publish(
            LicenseActivated(
                activation_id=stored.id,
                license_id=stored.license_id,
                domain=str(stored.domain),
            )
        )
        return ActivationDTO.from_entity(stored)


class RemoveActivationHandler:
    """Handler for RemoveActivationCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        event_bus: EventBus,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.event_bus = event_bus

    async def handle(self, command: RemoveActivationCommand) -> None:
        """
        Handle remove activation command.

        Raises:
            LicenseNotFoundError: If the license is missing or not owned
            ActivationNotFoundError: If the activation does not belong to the license
        """
        license = await self.license_repository.find_by_id(
            command.license_id, customer_id=command.customer_id
        )
        if not license:
            raise LicenseNotFoundError("License not found or access denied")

        deleted = await self.activation_repository.delete(
            command.activation_id, license.id
        )
        if not deleted:
            raise ActivationNotFoundError("Activation not found for this license")

        activations_removed_total.inc()
        await self.event_bus.publish(
            ActivationRemoved(activation_id=command.activation_id, license_id=license.id)
        )


class ListActivationsHandler:
    """Handler for ListActivationsQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.activation_repository = activation_repository

    async def handle(self, query: ListActivationsQuery) -> ActivationListDTO:
        license = await self.license_repository.find_by_id(
            query.license_id, customer_id=query.customer_id
        )
        if not license:
            raise LicenseNotFoundError("License not found or access denied")

        activations = await self.activation_repository.find_by_license(license.id)
        return ActivationListDTO(
            license_id=license.id,
            max_activations=license.max_activations,
            activations=[ActivationDTO.from_entity(a) for a in activations],
        )
