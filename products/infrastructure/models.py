"""
Product model.
"""
import uuid

from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    """
    Represents a product that can be licensed.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Product display name")
    max_activations = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        help_text="Default activation limit for new licenses",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(max_activations__gte=1),
                name="product_max_activations_gte_1",
            ),
        ]

    def __str__(self):
        return self.name
