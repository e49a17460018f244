"""
Password hashing with bcrypt.

Passwords are SHA-256 pre-hashed before bcrypt so inputs longer than bcrypt's
72-byte limit are accepted without silent truncation.
"""

import bcrypt
import hashlib

from core.config import BCRYPT_ROUNDS


class PasswordService:
    """Service for one-way password hashing and verification."""

    @staticmethod
    def _prehash(password: str) -> bytes:
        return hashlib.sha256(password.encode('utf-8')).hexdigest().encode('ascii')

    @classmethod
    def hash_password(cls, password: str) -> str:
        """Create a salted bcrypt hash of a plaintext password."""
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(cls._prehash(password), salt).decode('utf-8')

    @classmethod
    def verify_password(cls, password: str, hashed_password: str) -> bool:
        """Verify a plaintext password against its stored hash."""
        try:
            return bcrypt.checkpw(cls._prehash(password), hashed_password.encode('utf-8'))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
