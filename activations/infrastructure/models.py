"""
Activation Django ORM model.

This is the infrastructure layer model for activations.
Domain entities are in activations.domain.activation.
"""
import uuid

from django.db import models
from django.utils import timezone


class Activation(models.Model):
    """
    Represents a domain a license is activated on.
    Consumes one slot of the license's activation limit.
    """

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False
    )
    license = models.ForeignKey(
        "licenses.License",
        on_delete=models.CASCADE,
        related_name="activations",
    )
    domain = models.CharField(max_length=253, help_text="Activated domain name")
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    activated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "activations"
        ordering = ["-activated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["license", "domain"],
                name="unique_activation_domain_per_license",
            ),
        ]
        indexes = [
            models.Index(fields=["license", "activated_at"]),
        ]

    def __str__(self):
        return f"{self.license.key} @ {self.domain}"
