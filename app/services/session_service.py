"""
app/services/session_service.py

Purpose: Session store

- Issues opaque session tokens at login
- Looks sessions up by token (server-side session read)
- Enforces session expiry
- Revokes sessions at logout or account change

Only the SHA-256 digest of a token is persisted; the raw token lives in
the client's cookie.
"""

from app.db.mongo import get_sessions_collection
from app.core.config import settings
from app.core.logging import get_logger, LogContext
from app.core.security import new_session_token, token_digest
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Tuple

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    # Documents written without tz_aware come back naive; they are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def build_session_document(
    account: Dict[str, Any],
    name: str,
    token: str,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Builds the stored form of a session for an account.

    Args:
        account: User document (must carry _id, role, email, contact_id)
        name: Display name (from the linked contact)
        token: Raw session token
        now: Creation time, defaults to current UTC time

    Returns:
        Session document ready to insert
    """
    now = now or _utcnow()
    contact_id = account.get("contact_id")

    return {
        "token_hash": token_digest(token),
        "user_id": str(account["_id"]),
        "role": account["role"],
        "contact_id": str(contact_id) if contact_id is not None else None,
        "name": name,
        "email": account.get("email"),
        "created_at": now,
        "expires_at": now + timedelta(minutes=settings.SESSION_TTL_MINUTES),
    }


def session_from_document(
    document: Optional[Dict[str, Any]],
    now: Optional[datetime] = None
) -> Optional[Dict[str, Any]]:
    """
    Converts a stored session into the shape handed to callers:

        {"user": {"id", "role", "contactId", "name", "email"}, "expires": datetime}

    Returns:
        Session dict, or None if missing or expired
    """
    if not document:
        return None

    now = now or _utcnow()
    expires_at = document.get("expires_at")
    if expires_at is None or _as_aware(expires_at) <= now:
        return None

    return {
        "user": {
            "id": document.get("user_id"),
            "role": document.get("role"),
            "contactId": document.get("contact_id"),
            "name": document.get("name", ""),
            "email": document.get("email"),
        },
        "expires": _as_aware(expires_at),
    }


async def create_session(account: Dict[str, Any], name: str) -> Tuple[str, datetime]:
    """
    Opens a session for an authenticated account.

    Returns:
        (raw token, expiry time)
    """
    with LogContext(user_id=str(account["_id"]), role=account.get("role")):
        sessions = get_sessions_collection()

        token = new_session_token()
        document = build_session_document(account, name, token)
        await sessions.insert_one(document)

        logger.info("Session created")
        return token, document["expires_at"]


async def get_server_session(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Reads the caller's session.

    Args:
        token: Raw session token from the cookie or bearer header

    Returns:
        Session dict (see session_from_document) or None
    """
    if not token:
        return None

    sessions = get_sessions_collection()
    document = await sessions.find_one({"token_hash": token_digest(token)})
    return session_from_document(document)


async def revoke_session(token: Optional[str]) -> bool:
    """
    Deletes a single session (logout).

    Returns:
        True if a session was removed
    """
    if not token:
        return False

    sessions = get_sessions_collection()
    result = await sessions.delete_one({"token_hash": token_digest(token)})

    success = result.deleted_count > 0
    if success:
        logger.debug("Session revoked")
    return success


async def revoke_user_sessions(user_id: str) -> int:
    """
    Deletes every session belonging to a user.

    Returns:
        Number of sessions removed
    """
    sessions = get_sessions_collection()
    result = await sessions.delete_many({"user_id": user_id})

    if result.deleted_count:
        logger.info(
            f"Revoked {result.deleted_count} session(s)",
            extra={"user_id": user_id}
        )
    return result.deleted_count


async def update_session_profile(user_id: str, name: str, email: str) -> int:
    """
    Keeps the display name and e-mail carried by live sessions in step
    with a profile change.

    Returns:
        Number of sessions updated
    """
    sessions = get_sessions_collection()
    result = await sessions.update_many(
        {"user_id": user_id},
        {"$set": {"name": name, "email": email}}
    )
    return result.modified_count
