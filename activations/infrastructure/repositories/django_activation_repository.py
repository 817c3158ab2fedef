"""
Django implementation of ActivationRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from activations.domain.activation import Activation
from activations.domain.services import ActivationPolicy
from activations.infrastructure.models import Activation as ActivationModel
from activations.ports.activation_repository import ActivationRepository
from core.domain.exceptions import LicenseNotFoundError
from core.domain.value_objects import DomainName, IPAddress
from licenses.infrastructure.models import License as LicenseModel


class DjangoActivationRepository(ActivationRepository):
    """
    Django ORM implementation of ActivationRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: ActivationModel) -> Activation:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Activation model

        Returns:
            Activation domain entity
        """
        return Activation(
            id=model.id,
            license_id=model.license_id,
            domain=DomainName(model.domain),
            ip_address=IPAddress(model.ip_address) if model.ip_address else None,
            activated_at=model.activated_at,
        )

    def _to_model(self, activation: Activation) -> ActivationModel:
        return ActivationModel(
            id=activation.id,
            license_id=activation.license_id,
            domain=str(activation.domain),
            ip_address=str(activation.ip_address) if activation.ip_address else None,
            activated_at=activation.activated_at,
        )

    def _add_within_quota(
        self, activation: Activation, customer_id: Optional[uuid.UUID]
    ) -> Activation:
        with transaction.atomic():
            licenses = LicenseModel.objects.select_for_update().filter(
                id=activation.license_id
            )
            if customer_id is not None:
                licenses = licenses.filter(customer_id=customer_id)
            license_model = licenses.first()
            if license_model is None:
                raise LicenseNotFoundError(
                    f"License {activation.license_id} not found or access denied"
                )

            # pylint: disable=no-member
            existing = ActivationModel.objects.filter(license_id=license_model.id)
            ActivationPolicy.ensure_capacity(
                license_model.max_activations, existing.count()
            )
            domain = str(activation.domain)
            ActivationPolicy.ensure_new_domain(
                domain, existing.filter(domain=domain).exists()
            )

            model = self._to_model(activation)
            try:
                with transaction.atomic():
                    model.save(force_insert=True)
            except IntegrityError:
                ActivationPolicy.ensure_new_domain(domain, True)

            if license_model.activated_on is None:
                license_model.activated_on = model.activated_at
                license_model.save(update_fields=["activated_on", "updated_at"])
            return self._to_domain(model)

    async def add_within_quota(
        self, activation: Activation, customer_id: Optional[uuid.UUID] = None
    ) -> Activation:
        """
        Store an activation if the license has room for it.

        Args:
            activation: Activation entity to store
            customer_id: When given, the license must belong to this customer

        Returns:
            Stored activation entity
        """
        return await sync_to_async(self._add_within_quota)(activation, customer_id)

    async def find_by_id(self, activation_id: uuid.UUID) -> Optional[Activation]:
        """
        Find an activation by ID.

        Args:
            activation_id: Activation UUID

        Returns:
            Activation entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = await sync_to_async(ActivationModel.objects.get)(id=activation_id)
            return self._to_domain(model)
        except ActivationModel.DoesNotExist:  # pylint: disable=no-member
            return None

    async def find_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        models = await sync_to_async(
            lambda: list(
                ActivationModel.objects.filter(  # pylint: disable=no-member
                    license_id=license_id
                ).order_by("-activated_at")
            )
        )()
        return [self._to_domain(model) for model in models]

    async def count_by_license(self, license_id: uuid.UUID) -> int:
        return await sync_to_async(
            lambda: ActivationModel.objects.filter(  # pylint: disable=no-member
                license_id=license_id
            ).count()
        )()

    async def delete(self, activation_id: uuid.UUID, license_id: uuid.UUID) -> bool:
        deleted, _ = await sync_to_async(
            lambda: ActivationModel.objects.filter(  # pylint: disable=no-member
                id=activation_id, license_id=license_id
            ).delete()
        )()
        return deleted > 0

    def _reset_license(self, license_id: uuid.UUID) -> int:
        with transaction.atomic():
            # pylint: disable=no-member
            deleted, _ = ActivationModel.objects.filter(license_id=license_id).delete()
            LicenseModel.objects.filter(id=license_id).update(activated_on=None)
            return deleted

    async def reset_license(self, license_id: uuid.UUID) -> int:
        """
        Delete every activation of a license and clear its activated_on.

        Args:
            license_id: License UUID

        Returns:
            Number of deleted activations
        """
        return await sync_to_async(self._reset_license)(license_id)
