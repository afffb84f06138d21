"""
app/services/auth_service.py

Purpose: Session/authorization resolver

- get_current_user: session -> SessionUser or None (never raises)
- require_auth: any authenticated user, else Unauthorized
- require_admin / require_customer: specific role, else ForbiddenRole

Guards escalate strictly (no session -> any role -> specific role), so an
absent session is always Unauthorized, never ForbiddenRole. No caching and
no retries: each call is one session read plus a role comparison.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError

from app.core.exceptions import ForbiddenRole, Unauthorized
from app.core.logging import get_logger
from app.models.user import SessionUser, UserRole, parse_role
from app.services import session_service

logger = get_logger(__name__)


def resolve_session_user(session: Any) -> Optional[SessionUser]:
    """
    Turns a raw session (as returned by the session store) into a SessionUser.

    Returns:
        SessionUser, or None when the session is absent or unusable
        (no user, no id, role outside the known set)
    """
    if not session or not isinstance(session, Mapping):
        return None

    user = session.get("user")
    if not user or not isinstance(user, Mapping):
        return None

    role = parse_role(user.get("role"))
    if role is None or not user.get("id"):
        logger.warning(
            "Ignoring session without a usable user",
            extra={"role": user.get("role")}
        )
        return None

    contact_id = user.get("contactId")
    try:
        return SessionUser(
            id=str(user["id"]),
            role=role,
            contact_id=str(contact_id) if contact_id is not None else None,
            name=user.get("name") or "",
            email=user.get("email"),
        )
    except PydanticValidationError:
        logger.warning("Ignoring malformed session user", extra={"user_id": user.get("id")})
        return None


def authorize(user: Optional[SessionUser], required_role: Optional[UserRole] = None) -> SessionUser:
    """
    Role check shared by every guard.

    Raises:
        Unauthorized: no user
        ForbiddenRole: user present but role differs from required_role
    """
    if user is None:
        raise Unauthorized()

    if required_role is not None and user.role != required_role:
        logger.info(
            f"Rejected {user.role.value} session for {required_role.value}-only operation",
            extra={"user_id": user.id, "role": user.role.value, "required_role": required_role.value}
        )
        raise ForbiddenRole(required_role.value, user.role.value)

    return user


async def get_current_user(token: Optional[str]) -> Optional[SessionUser]:
    """
    Resolves the current user from the session store.

    Absence is a normal outcome: a missing, unknown, expired or malformed
    session gives None, and so does an unreachable store (logged).
    """
    try:
        session = await session_service.get_server_session(token)
    except PyMongoError:
        logger.error("Session store lookup failed", exc_info=True)
        return None
    except RuntimeError:
        # Database not connected yet (or already closed)
        logger.error("Session store unavailable", exc_info=True)
        return None

    return resolve_session_user(session)


async def require_auth(token: Optional[str]) -> SessionUser:
    """
    Raises:
        Unauthorized: no valid session
    """
    return authorize(await get_current_user(token))


async def require_admin(token: Optional[str]) -> SessionUser:
    """
    Raises:
        Unauthorized: no valid session
        ForbiddenRole: session role is not ADMIN
    """
    return authorize(await require_auth(token), UserRole.ADMIN)


async def require_customer(token: Optional[str]) -> SessionUser:
    """
    Raises:
        Unauthorized: no valid session
        ForbiddenRole: session role is not CUSTOMER
    """
    return authorize(await require_auth(token), UserRole.CUSTOMER)
