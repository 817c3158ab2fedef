"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from core.domain.exceptions import QuotaExceededError, ValidationError


class ActivationPolicy:
    """Rules checked before an activation is stored."""

    @staticmethod
    def ensure_capacity(max_activations: int, current_count: int) -> None:
        """
        Check that one more activation fits.

        Args:
            max_activations: License activation limit
            current_count: Activations currently stored

        Raises:
            QuotaExceededError: If the license is full
        """
        if current_count >= max_activations:
            raise QuotaExceededError(
                f"Activation limit reached for this license "
                f"({current_count} of {max_activations} used)"
            )

    @staticmethod
    def ensure_new_domain(domain: str, already_active: bool) -> None:
        """
        Reject a second activation of the same domain.

        Raises:
            ValidationError: If the domain is already activated
        """
        if already_active:
            raise ValidationError(f"Domain {domain} is already activated for this license")
