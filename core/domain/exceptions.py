"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input is malformed (bad domain, missing field, bad status)."""

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(DomainException):
    """Base exception for missing records."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class ActivationNotFoundError(NotFoundError):
    """Raised when an activation is not found."""

    def __init__(self, message: str = "Activation not found"):
        super().__init__(message, code="ACTIVATION_NOT_FOUND")


class WebhookLogNotFoundError(NotFoundError):
    """Raised when a webhook log is not found."""

    def __init__(self, message: str = "Webhook log not found"):
        super().__init__(message, code="WEBHOOK_LOG_NOT_FOUND")


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class CustomerNotFoundError(NotFoundError):
    """Raised when a customer is not found."""

    def __init__(self, message: str = "Customer not found"):
        super().__init__(message, code="CUSTOMER_NOT_FOUND")


class QuotaExceededError(DomainException):
    """Raised when a license has no activation slots left."""

    def __init__(self, message: str = "Activation limit reached for this license"):
        super().__init__(message, code="QUOTA_EXCEEDED")


class InvalidStateError(DomainException):
    """Raised when an operation is not allowed in the record's current state."""

    def __init__(self, message: str = "Invalid state for this operation"):
        super().__init__(message, code="INVALID_STATE")
