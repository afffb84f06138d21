"""
app/api/deps.py

Purpose: Shared route dependencies

- Extracts the session token (cookie first, then bearer header)
- Role guards as FastAPI dependencies (any user, admin, customer)
- Turns a ValidationFailure into a 400 response
"""

from fastapi import Depends, Request
from typing import Any, Optional

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.models.user import SessionUser
from app.schemas.validation import FormSchema, ValidationFailure
from app.services import auth_service


def session_token(request: Request) -> Optional[str]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token

    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    return None


async def optional_user(token: Optional[str] = Depends(session_token)) -> Optional[SessionUser]:
    return await auth_service.get_current_user(token)


async def current_user(token: Optional[str] = Depends(session_token)) -> SessionUser:
    return await auth_service.require_auth(token)


async def current_admin(token: Optional[str] = Depends(session_token)) -> SessionUser:
    return await auth_service.require_admin(token)


async def current_customer(token: Optional[str] = Depends(session_token)) -> SessionUser:
    return await auth_service.require_customer(token)


def validated(schema: FormSchema, payload: Any):
    """
    Validates a request payload, raising ValidationError (400) with every
    field error when it fails.
    """
    result = schema.validate(payload)
    if isinstance(result, ValidationFailure):
        raise ValidationError(details=result.to_details())
    return result.value
