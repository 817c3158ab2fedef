"""
AddActivationCommand.

Command to activate a license on a domain.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class AddActivationCommand:
    """Command to activate a license on a domain."""

    license_id: uuid.UUID
    domain: Optional[str]
    ip_address: Optional[str] = None
    customer_id: Optional[uuid.UUID] = None
