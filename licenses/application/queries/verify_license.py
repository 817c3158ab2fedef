"""
VerifyLicenseQuery.

Query used by installed products to check a license key.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class VerifyLicenseQuery:
    """Query to verify a license key."""

    key: Optional[str]
