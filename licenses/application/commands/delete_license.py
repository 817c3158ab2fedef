"""
DeleteLicenseCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license and its activations."""

    license_id: uuid.UUID
