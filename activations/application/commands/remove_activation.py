"""
RemoveActivationCommand.

Command to free one activation slot of a license.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class RemoveActivationCommand:
    """Command to delete an activation."""

    license_id: uuid.UUID
    activation_id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
