"""
UpdateLicenseStatusCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateLicenseStatusCommand:
    """Admin overwrite of a license status."""

    license_id: uuid.UUID
    status: Optional[str]
