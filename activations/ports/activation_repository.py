"""
Activation repository port (interface).

This defines the contract for activation persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
import uuid

from activations.domain.activation import Activation


class ActivationRepository(ABC):
    """
    Abstract repository for Activation entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add_within_quota(
        self, activation: Activation, customer_id: Optional[uuid.UUID] = None
    ) -> Activation:
        """
        Store an activation if the license has room for it.

        Counting and inserting happen atomically with the license row
        locked, so concurrent callers cannot exceed the limit. The
        license's activated_on is stamped on its first activation.

        Args:
            activation: Activation entity to store
            customer_id: When given, the license must belong to this customer

        Returns:
            Stored activation entity

        Raises:
            LicenseNotFoundError: If the license is missing or not owned
            QuotaExceededError: If the limit is reached
            ValidationError: If the domain is already activated
        """
        pass

    @abstractmethod
    async def find_by_id(self, activation_id: uuid.UUID) -> Optional[Activation]:
        """
        Find an activation by ID.

        Args:
            activation_id: Activation UUID

        Returns:
            Activation entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_license(self, license_id: uuid.UUID) -> List[Activation]:
        """
        Find all activations for a license, newest first.

        Args:
            license_id: License UUID

        Returns:
            List of Activation entities
        """
        pass

    @abstractmethod
    async def count_by_license(self, license_id: uuid.UUID) -> int:
        """
        Count activations for a license.

        Args:
            license_id: License UUID

        Returns:
            Number of activations
        """
        pass

    @abstractmethod
    async def delete(self, activation_id: uuid.UUID, license_id: uuid.UUID) -> bool:
        """
        Delete one activation of a license.

        Args:
            activation_id: Activation UUID
            license_id: License the activation must belong to

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def reset_license(self, license_id: uuid.UUID) -> int:
        """
        Delete every activation of a license and clear its activated_on.

        Args:
            license_id: License UUID

        Returns:
            Number of deleted activations
        """
        pass
