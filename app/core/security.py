"""
app/core/security.py

Purpose: Credential and token helpers

- bcrypt password hashing and verification
- Opaque session token generation
- Token digests (only digests are persisted)
"""

import hashlib
import secrets

import bcrypt

from app.core.config import settings


SESSION_TOKEN_BYTES = 32

# bcrypt only reads this many bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hashes a password with bcrypt using the configured cost factor.
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Checks a password against a stored bcrypt hash.
    Malformed hashes never match.
    """
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def new_session_token() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def token_digest(token: str) -> str:
    """SHA-256 hex digest of a session token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
