"""
app/models/user.py

Purpose: User roles and the session-derived user

- Closed role enumeration (ADMIN, CUSTOMER)
- Landing path per role
- SessionUser materialized per request from the session store
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """
    Every authenticated user has exactly one of these roles.
    """
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"


ROLE_HOME_PATHS: Dict[UserRole, str] = {
    UserRole.ADMIN: "/admin",
    UserRole.CUSTOMER: "/shop",
}


def home_path_for(role: UserRole) -> str:
    """Landing page a user of this role is sent to after login."""
    return ROLE_HOME_PATHS[role]


def parse_role(value: object) -> Optional[UserRole]:
    """
    Converts a stored role value to UserRole.

    Returns:
        UserRole, or None when the value is not a known role
    """
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(value)
    except ValueError:
        return None


class SessionUser(BaseModel):
    """
    The current user as carried by a session. Read-only; never written
    back to the session store.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    role: UserRole
    contact_id: Optional[str] = Field(default=None, alias="contactId")
    name: str = ""
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_customer(self) -> bool:
        return self.role == UserRole.CUSTOMER
