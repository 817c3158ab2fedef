"""
Customer repository port (interface).

This defines the contract for customer persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Optional
import uuid

from customers.domain.customer import Customer


class CustomerRepository(ABC):
    """
    Abstract repository for Customer entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, customer: Customer) -> Customer:
        """
        Save a customer entity.

        Args:
            customer: Customer entity to save

        Returns:
            Saved customer entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, customer_id: uuid.UUID) -> Optional[Customer]:
        """
        Find a customer by ID.

        Args:
            customer_id: Customer UUID

        Returns:
            Customer entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_chargebee_customer_id(
        self, chargebee_customer_id: str
    ) -> Optional[Customer]:
        """
        Find a customer by billing provider customer id.

        Args:
            chargebee_customer_id: Chargebee customer id

        Returns:
            Customer entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Customer]:
        """
        Find a customer by email address.

        Args:
            email: Email address

        Returns:
            Customer entity or None if not found
        """
        pass
