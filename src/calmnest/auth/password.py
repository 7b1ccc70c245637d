"""
Password hashing using argon2id.

Every hash carries its own random salt, so hashing the same password twice
yields two different digests. Cost parameters are fixed module constants.
"""

from __future__ import annotations

import argon2

from calmnest.errors import CryptoError

_hasher = argon2.PasswordHasher(
    time_cost=3,
    memory_cost=65536,  # 64 MB
    parallelism=1,
    hash_len=32,
    salt_len=16,
    type=argon2.Type.ID,
)


def hash_password(password: str) -> str:
    """Hash a password using argon2id. Returns the full encoded hash string."""
    try:
        return _hasher.hash(password)
    except argon2.exceptions.HashingError as e:
        raise CryptoError(str(e)) from e


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its argon2id hash.

    Returns False on mismatch and never raises for it. A digest that cannot be
    parsed or checked at all raises CryptoError.
    """
    try:
        return _hasher.verify(password_hash, password)
    except argon2.exceptions.VerifyMismatchError:
        return False
    except (argon2.exceptions.InvalidHashError, argon2.exceptions.VerificationError) as e:
        raise CryptoError(str(e)) from e


def check_needs_rehash(password_hash: str) -> bool:
    """Check if the hash was produced with different cost parameters."""
    return _hasher.check_needs_rehash(password_hash)
