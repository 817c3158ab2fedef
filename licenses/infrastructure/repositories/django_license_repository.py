"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Count

from core.domain.exceptions import ValidationError
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            product_id=model.product_id,
            customer_id=model.customer_id,
            key=model.key,
            status=LicenseStatus(model.status),
            max_activations=model.max_activations,
            activated_on=model.activated_on,
            expires_on=model.expires_on,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to Django model.

        The key is written only when the row is created.

        Args:
            license: License domain entity

        Returns:
            Django License model
        """
        model = LicenseModel.objects.filter(id=license.id).first()
        if model is None:
            return LicenseModel(
                id=license.id,
                product_id=license.product_id,
                customer_id=license.customer_id,
                key=license.key,
                status=license.status.value,
                max_activations=license.max_activations,
                activated_on=license.activated_on,
                expires_on=license.expires_on,
            )
        model.product_id = license.product_id
        model.customer_id = license.customer_id
        model.status = license.status.value
        model.max_activations = license.max_activations
        model.activated_on = license.activated_on
        model.expires_on = license.expires_on
        return model

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity

        Raises:
            ValidationError: If the key is already taken
        """
        model = self._to_model(license)
        try:
            with transaction.atomic():
                model.save()
        except IntegrityError as e:
            if "key" in str(e).lower():
                raise ValidationError("License key already exists") from e
            raise ValidationError("License violates a data constraint") from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(
        self, license_id: uuid.UUID, customer_id: Optional[uuid.UUID] = None
    ) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID
            customer_id: When given, only a license owned by this customer matches

        Returns:
            License entity or None if not found
        """
        queryset = LicenseModel.objects.filter(id=license_id)
        if customer_id is not None:
            queryset = queryset.filter(customer_id=customer_id)
        model = queryset.first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[License]:
        try:
            model = LicenseModel.objects.get(key=key)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def key_exists(self, key: str) -> bool:
        return LicenseModel.objects.filter(key=key).exists()

    @sync_to_async
    def delete(self, license_id: uuid.UUID) -> bool:
        deleted, _ = LicenseModel.objects.filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def list_with_activation_counts(
        self,
        status: Optional[str] = None,
        customer_id: Optional[uuid.UUID] = None,
        product_id: Optional[uuid.UUID] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Tuple[License, int]], int]:
        """
        List licenses newest first, each with its activation count.

        Returns:
            Tuple of ([(license, activation_count)], total matching rows)
        """
        queryset = LicenseModel.objects.all()
        if status:
            queryset = queryset.filter(status=status)
        if customer_id:
            queryset = queryset.filter(customer_id=customer_id)
        if product_id:
            queryset = queryset.filter(product_id=product_id)

        total = queryset.count()
        rows = (
            queryset.annotate(activation_count=Count("activations"))
            .order_by("-created_at")[offset:offset + limit]
        )
        return [(self._to_domain(row), row.activation_count) for row in rows], total

    @sync_to_async
    def find_pending_by_customer(self, customer_id: uuid.UUID) -> List[License]:
        models = LicenseModel.objects.filter(
            customer_id=customer_id, status=LicenseStatus.PENDING.value
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_overdue(self, current_time: datetime) -> List[License]:
        models = LicenseModel.objects.filter(
            status=LicenseStatus.ACTIVE.value,
            expires_on__isnull=False,
            expires_on__lt=current_time,
        )
        return [self._to_domain(model) for model in models]
