"""
ListLicensesQuery and ListCustomerLicensesQuery.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListLicensesQuery:
    """Admin listing of licenses."""

    status: Optional[str] = None
    customer_id: Optional[uuid.UUID] = None
    product_id: Optional[uuid.UUID] = None
    page: int = 1
    page_size: int = 50


@dataclass
class ListCustomerLicensesQuery:
    """Owner view of a customer's licenses."""

    customer_id: uuid.UUID
