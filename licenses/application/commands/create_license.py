"""
CreateLicenseCommand.

Command to issue a license for a customer and product.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class CreateLicenseCommand:
    """
    Command to create a license.

    max_activations defaults to the product's limit; the key is
    generated when not supplied.
    """

    product_id: uuid.UUID
    customer_id: uuid.UUID
    expires_on: Optional[datetime] = None
    max_activations: Optional[int] = None
    status: str = "active"
    key: Optional[str] = None
