"""
License key generation.

Keys are 16 random bytes rendered as 32 uppercase hex characters.
"""

import logging
import re
import secrets

from core.domain.exceptions import DomainException

logger = logging.getLogger(__name__)

KEY_BYTES = 16
MAX_KEY_ATTEMPTS = 10
KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def generate_license_key() -> str:
    """
    Generate a random license key.

    Returns:
        32 character uppercase hex string
    """
    return secrets.token_hex(KEY_BYTES).upper()


async def generate_unique_key(
    repository: "LicenseRepository",  # noqa: F821
    max_attempts: int = MAX_KEY_ATTEMPTS,
) -> str:
    """
    Generate a license key not yet present in the repository.

    The unique constraint on the key column stays authoritative; this
    only makes a collision on insert vanishingly unlikely.

    Args:
        repository: License repository used for the existence check
        max_attempts: Number of candidates to try before giving up

    Returns:
        Unused license key

    Raises:
        DomainException: If every candidate collided
    """
    for attempt in range(1, max_attempts + 1):
        key = generate_license_key()
        if not await repository.key_exists(key):
            return key
        logger.warning("License key collision on attempt %d", attempt)
    raise DomainException(
        "Could not generate a unique license key", code="KEY_GENERATION_FAILED"
    )


def is_well_formed(key: str) -> bool:
    """Check that a key has the characters and length a stored key can have."""
    return bool(key) and KEY_PATTERN.match(key) is not None
