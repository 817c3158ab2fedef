"""
ListActivationsQuery.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListActivationsQuery:
    """Query for the activations of one license."""

    license_id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
