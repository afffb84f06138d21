"""
app/schemas/account.py

Purpose: Sign-up, login and profile forms; session user payloads
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field
from pydantic_core import PydanticCustomError

from app.core.security import MAX_PASSWORD_BYTES
from app.models.user import UserRole
from app.schemas.validation import Email, FormModel, FormSchema
from utils import constants as c


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PydanticCustomError("password_too_long", c.PASSWORD_TOO_LONG)
    return value


NewPassword = Annotated[str, Field(min_length=6), AfterValidator(_check_password_bytes)]


class SignupInput(FormModel):
    name: str = Field(min_length=2)
    email: Email
    password: NewPassword
    phone: Optional[str] = ""
    address: Optional[str] = ""
    city: Optional[str] = ""
    state: Optional[str] = ""
    country: Optional[str] = ""
    pincode: Optional[str] = ""


signup_schema = FormSchema(
    SignupInput,
    messages={
        ("name", "string_too_short"): c.NAME_TOO_SHORT,
        ("password", "string_too_short"): c.PASSWORD_TOO_SHORT,
    },
)


class LoginInput(FormModel):
    email: Email
    password: str = Field(min_length=1)


login_schema = FormSchema(LoginInput)


class ProfileInput(FormModel):
    name: str = Field(min_length=2)
    email: Email
    phone: str = Field(min_length=10)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    country: str = Field(min_length=1)
    pincode: str = Field(min_length=4)


profile_schema = FormSchema(
    ProfileInput,
    messages={
        ("name", "string_too_short"): c.NAME_TOO_SHORT,
        ("phone", "string_too_short"): c.PHONE_TOO_SHORT,
        ("address", "string_too_short"): "Address is required",
        ("city", "string_too_short"): "City is required",
        ("state", "string_too_short"): "State is required",
        ("country", "string_too_short"): "Country is required",
        ("pincode", "string_too_short"): c.PINCODE_REQUIRED,
    },
)


class ProfileOut(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    pincode: str = ""


class AccountOut(BaseModel):
    id: str
    email: str
    role: UserRole
    name: str


class LoginResponse(BaseModel):
    user: AccountOut
    redirect_to: str = Field(serialization_alias="redirectTo")


class SignupResponse(BaseModel):
    message: str
    user: AccountOut
