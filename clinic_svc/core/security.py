"""
Password hashing helpers.

Passwords are hashed with bcrypt. The cost factor is taken from settings
(``CLINIC_SVC_BCRYPT_ROUNDS``) unless passed explicitly, which tests use to
keep hashing fast.
"""
import logging
from typing import Optional

import bcrypt

from core.config import BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a plain-text password.

    Args:
        password: The password supplied by the user.
        rounds: bcrypt cost factor. Defaults to the configured value.

    Returns:
        str: The bcrypt hash (salt and cost are embedded in the string).
    """
    salt = bcrypt.gensalt(rounds=rounds or BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a plain-text password against a stored bcrypt hash.

    Returns False for a stored value that is not a valid bcrypt hash.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False
