"""
Django implementation of CustomerRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from core.domain.value_objects import Email
from customers.domain.customer import Customer
from customers.infrastructure.models import Customer as CustomerModel
from customers.ports.customer_repository import CustomerRepository


class DjangoCustomerRepository(CustomerRepository):
    """Django ORM implementation of CustomerRepository."""

    def _to_domain(self, model: CustomerModel) -> Customer:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Customer model

        Returns:
            Customer domain entity
        """
        return Customer(
            id=model.id,
            username=model.username,
            email=Email(model.email),
            chargebee_customer_id=model.chargebee_customer_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _to_model(self, customer: Customer) -> CustomerModel:
        # pylint: disable=no-member
        model, created = await sync_to_async(CustomerModel.objects.get_or_create)(
            id=customer.id,
            defaults={
                "username": customer.username,
                "email": str(customer.email),
                "chargebee_customer_id": customer.chargebee_customer_id,
            },
        )
        if not created:
            model.username = customer.username
            model.email = str(customer.email)
            model.chargebee_customer_id = customer.chargebee_customer_id
        return model

    async def save(self, customer: Customer) -> Customer:
        """
        Save a customer entity.

        Args:
            customer: Customer entity to save

        Returns:
            Saved customer entity
        """
        model = await self._to_model(customer)
        await sync_to_async(model.save)()
        return self._to_domain(model)

    async def find_by_id(self, customer_id: uuid.UUID) -> Optional[Customer]:
        try:
            # pylint: disable=no-member
            model = await sync_to_async(CustomerModel.objects.get)(id=customer_id)
            return self._to_domain(model)
        except CustomerModel.DoesNotExist:  # pylint: disable=no-member
            return None

    async def find_by_chargebee_customer_id(
        self, chargebee_customer_id: str
    ) -> Optional[Customer]:
        # pylint: disable=no-member
        model = await sync_to_async(
            CustomerModel.objects.filter(
                chargebee_customer_id=chargebee_customer_id
            ).first
        )()
        return self._to_domain(model) if model else None

    async def find_by_email(self, email: str) -> Optional[Customer]:
        # pylint: disable=no-member
        model = await sync_to_async(
            CustomerModel.objects.filter(email__iexact=email).first
        )()
        return self._to_domain(model) if model else None
