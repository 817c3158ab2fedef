"""
Admin license handlers.

Handlers for creating, updating, deleting licenses and for the
status overwrite and activation reset operations.
"""
import logging

from activations.ports.activation_repository import ActivationRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    CustomerNotFoundError,
    LicenseNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from core.metrics import license_status_changes_total, licenses_created_total
from customers.ports.customer_repository import CustomerRepository
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.reset_activations import ResetActivationsCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.commands.update_license_status import (
    UpdateLicenseStatusCommand,
)
from licenses.application.dto.license_dto import LicenseDTO, ResetResultDTO
from licenses.domain.events import (
    LicenseCreated,
    LicenseDeleted,
    LicenseReset,
    LicenseStatusChanged,
)
from licenses.domain.license import License
from licenses.domain.license_key import generate_unique_key, is_well_formed
from licenses.domain.services import LicenseStatusPolicy
from licenses.ports.license_repository import LicenseRepository
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


async def _ensure_references(
    product_repository: ProductRepository,
    customer_repository: CustomerRepository,
    product_id=None,
    customer_id=None,
):
    """Load the product and customer a license points to."""
    product = None
    if product_id is not None:
        product = await product_repository.find_by_id(product_id)
        if not product:
            raise ProductNotFoundError(f"Product {product_id} not found")
    if customer_id is not None:
        customer = await customer_repository.find_by_id(customer_id)
        if not customer:
            raise CustomerNotFoundError(f"Customer {customer_id} not found")
    return product


def _ensure_max_activations(value):
    if value is not None and value < 1:
        raise ValidationError("max_activations must be at least 1")


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        product_repository: ProductRepository,
        customer_repository: CustomerRepository,
        event_bus: EventBus,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.product_repository = product_repository
        self.customer_repository = customer_repository
        self.event_bus = event_bus

    async def handle(self, command: CreateLicenseCommand) -> LicenseDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            LicenseDTO of the new license

        Raises:
            ValidationError: If a field is invalid or the key is taken
            ProductNotFoundError: If the product does not exist
            CustomerNotFoundError: If the customer does not exist
        """
        if not command.product_id or not command.customer_id:
            raise ValidationError("Product ID and customer ID are required")
        _ensure_max_activations(command.max_activations)
        status = LicenseStatusPolicy.parse_status(command.status)
        if command.key is not None and not is_well_formed(command.key):
            raise ValidationError("License key may only contain letters, digits, '-' and '_'")

        product = await _ensure_references(
            self.product_repository,
            self.customer_repository,
            product_id=command.product_id,
            customer_id=command.customer_id,
        )

        key = command.key or await generate_unique_key(self.license_repository)
        license = License.create(
            product_id=product.id,
            customer_id=command.customer_id,
            key=key,
            max_activations=command.max_activations or product.max_activations,
            status=status,
            expires_on=command.expires_on,
        )
        saved = await self.license_repository.save(license)

        licenses_created_total.labels(status=saved.status.value).inc()
        logger.info(
            "License %s created for customer %s", saved.id, saved.customer_id,
            extra={"license_id": str(saved.id), "product_id": str(saved.product_id)},
        )
        await self.event_bus.publish(
            LicenseCreated(
                license_id=saved.id,
                customer_id=saved.customer_id,
                product_id=saved.product_id,
            )
        )
        return LicenseDTO.from_entity(saved)


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        activation_repository: ActivationRepository,
        product_repository: ProductRepository,
        customer_repository: CustomerRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.activation_repository = activation_repository
        self.product_repository = product_repository
        self.customer_repository = customer_repository

    async def handle(self, command: UpdateLicenseCommand) -> LicenseDTO:
        """
        Handle update license command.

        Raises:
            LicenseNotFoundError: If license not found
            ProductNotFoundError: If a new product does not exist
            CustomerNotFoundError: If a new customer does not exist
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        _ensure_max_activations(command.max_activations)
        await _ensure_references(
            self.product_repository,
            self.customer_repository,
            product_id=command.product_id,
            customer_id=command.customer_id,
        )

        updated = license.update(
            product_id=command.product_id,
            customer_id=command.customer_id,
            expires_on=command.expires_on,
            max_activations=command.max_activations,
            clear_expiry=command.clear_expiry,
        )
        saved = await self.license_repository.save(updated)
        count = await self.activation_repository.count_by_license(saved.id)
        return LicenseDTO.from_entity(saved, activation_count=count)


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, event_bus: EventBus):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.event_bus = event_bus

    async def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Raises:
            LicenseNotFoundError: If license not found
        """
        deleted = await self.license_repository.delete(command.license_id)
        if not deleted:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        logger.info("License %s deleted", command.license_id)
        await self.event_bus.publish(LicenseDeleted(license_id=command.license_id))


class UpdateLicenseStatusHandler:
    """
    Handler for UpdateLicenseStatusCommand.

    Any status may overwrite any other. Concurrent overwrites are last write wins.
    """

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

    async def handle(self, command: UpdateLicenseStatusCommand) -> LicenseDTO:
        """
        Handle update license status command.

        Raises:
            ValidationError: If the status is not one of the four values
            LicenseNotFoundError: If license not found
        """
        new_status = LicenseStatusPolicy.parse_status(command.status)

        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        old_status = license.status
        saved = await self.license_repository.save(license.with_status(new_status))

        license_status_changes_total.labels(new_status=new_status.value).inc()
        logger.info(
            "License %s status %s -> %s", saved.id, old_status.value, new_status.value
        )
        await self.event_bus.publish(
            LicenseStatusChanged(
                license_id=saved.id,
                old_status=old_status.value,
                new_status=new_status.value,
            )
        )
        count = await self.activation_repository.count_by_license(saved.id)
        return LicenseDTO.from_entity(saved, activation_count=count)


class ResetActivationsHandler:
    """Handler for ResetActivationsCommand."""

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

    async def handle(self, command: ResetActivationsCommand) -> ResetResultDTO:
        """
        Handle reset activations command.

        Deletes every activation and clears activated_on; the status is kept.

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        deleted_count = await self.activation_repository.reset_license(license.id)

        logger.info("License %s reset, %d activation(s) removed", license.id, deleted_count)
        await self.event_bus.publish(
            LicenseReset(license_id=license.id, deleted_count=deleted_count)
        )
        return ResetResultDTO(license_id=license.id, deleted_count=deleted_count)
