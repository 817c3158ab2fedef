"""
ResetActivationsCommand.
"""

import uuid
from dataclasses import dataclass


@dataclass
class ResetActivationsCommand:
    """Command to delete every activation of a license."""

    license_id: uuid.UUID
