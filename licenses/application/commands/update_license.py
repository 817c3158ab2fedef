"""
UpdateLicenseCommand.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class UpdateLicenseCommand:
    """Partial update of a license; None fields are left unchanged."""

    license_id: uuid.UUID
    product_id: Optional[uuid.UUID] = None
    customer_id: Optional[uuid.UUID] = None
    expires_on: Optional[datetime] = None
    max_activations: Optional[int] = None
    clear_expiry: bool = False
