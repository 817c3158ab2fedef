"""
ExpireLicensesCommand.

Command to store the expired status on active licenses past their expiry date.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ExpireLicensesCommand:
    """Command for the expiry reconciliation sweep."""

    current_time: Optional[datetime] = None
    dry_run: bool = False
