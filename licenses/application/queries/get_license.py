"""
GetLicenseQuery.
"""

import uuid
from dataclasses import dataclass


@dataclass
class GetLicenseQuery:
    """Query for one license with its activations."""

    license_id: uuid.UUID
