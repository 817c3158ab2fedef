"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
import uuid

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity

        Raises:
            ValidationError: If the key is already taken
        """
        pass

    @abstractmethod
    async def find_by_id(
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
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def key_exists(self, key: str) -> bool:
        """
        Check if a key is already assigned.

        Args:
            key: License key string

        Returns:
            True if a license holds this key
        """
        pass

    @abstractmethod
    async def delete(self, license_id: uuid.UUID) -> bool:
        """
        Delete a license and its activations.

        Args:
            license_id: License UUID

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def list_with_activation_counts(
        self,
        status: Optional[str] = None,
        customer_id: Optional[uuid.UUID] = None,
        product_id: Optional[uuid.UUID] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Tuple[License, int]], int]:
        """
        List licenses newest first, each with its activation count.

        Args:
            status: Optional status filter
            customer_id: Optional owner filter
            product_id: Optional product filter
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            Tuple of ([(license, activation_count)], total matching rows)
        """
        pass

    @abstractmethod
    async def find_pending_by_customer(self, customer_id: uuid.UUID) -> List[License]:
        """
        Find a customer's licenses still awaiting payment.

        Args:
            customer_id: Customer UUID

        Returns:
            List of pending License entities
        """
        pass

    @abstractmethod
    async def find_overdue(self, current_time: datetime) -> List[License]:
        """
        Find active licenses whose expiry date has passed.

        Args:
            current_time: Reference time

        Returns:
            List of License entities to be marked expired
        """
        pass
