"""
app/api/auth.py

Purpose: Account and session endpoints

- POST /auth/signup   customer registration
- POST /auth/login    credential check, session cookie
- POST /auth/logout   session revocation
- GET  /auth/session  current user (null when signed out)
"""

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel
from typing import Any, Optional

from app.api.deps import optional_user, session_token, validated
from app.core.config import settings
from app.core.exceptions import Unauthorized
from app.core.logging import get_logger
from app.models.user import SessionUser, UserRole, home_path_for
from app.schemas.account import LoginResponse, SignupResponse, login_schema, signup_schema
from app.schemas.response import MessageResponse
from app.services import session_service, user_service

logger = get_logger(__name__)
router = APIRouter(prefix="/auth")


class SessionOut(BaseModel):
    user: Optional[SessionUser] = None


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(payload: Any = Body(...)):
    data = validated(signup_schema, payload)
    user = await user_service.register_customer(data)
    return {"message": "User created successfully", "user": user}


@router.post("/login", response_model=LoginResponse)
async def login(response: Response, payload: Any = Body(...)):
    credentials = validated(login_schema, payload)

    result = await user_service.authenticate(credentials.email, credentials.password)
    if result is None:
        raise Unauthorized("Invalid email or password")

    account, name = result
    token, _ = await session_service.create_session(account, name)

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )

    return {
        "user": user_service.account_summary(account, name),
        "redirect_to": home_path_for(UserRole(account["role"])),
    }


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, token: Optional[str] = Depends(session_token)):
    await session_service.revoke_session(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/session", response_model=SessionOut)
async def current_session(user: Optional[SessionUser] = Depends(optional_user)):
    """Never fails for signed-out callers; user is null instead."""
    return {"user": user}
