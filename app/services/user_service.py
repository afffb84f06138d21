"""
app/services/user_service.py

Purpose: Account management

- Customer sign-up (contact + login account)
- Credential checks for login
- Customer profile read / update
- Admin account provisioning
"""

from app.db.mongo import (
    get_users_collection,
    get_contacts_collection,
    parse_object_id,
)
from app.core.exceptions import ConflictError, ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from app.core.security import hash_password, verify_password
from app.models.user import UserRole
from app.schemas.account import ProfileInput, SignupInput
from app.services import contact_service, session_service
from utils.constants import ContactType
from datetime import datetime, timezone
from pymongo.errors import DuplicateKeyError
from typing import Optional, Dict, Any, Tuple

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def account_summary(account: Dict[str, Any], name: str) -> Dict[str, Any]:
    return {
        "id": str(account["_id"]),
        "email": account["email"],
        "role": account["role"],
        "name": name,
    }


async def get_account_by_email(email: str) -> Optional[Dict[str, Any]]:
    return await get_users_collection().find_one({"email": normalize_email(email)})


async def get_account_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    object_id = parse_object_id(user_id)
    if object_id is None:
        return None
    return await get_users_collection().find_one({"_id": object_id})


async def get_contact_name(account: Dict[str, Any]) -> str:
    """Display name for an account, taken from its linked contact."""
    contact_id = account.get("contact_id")
    if contact_id is None:
        return ""

    contact = await get_contacts_collection().find_one({"_id": contact_id}, projection={"name": 1})
    return (contact or {}).get("name") or ""


async def _insert_account(email: str, password: str, role: UserRole, contact_id) -> Dict[str, Any]:
    account = {
        "email": email,
        "password_hash": hash_password(password),
        "role": role.value,
        "contact_id": contact_id,
        "created_at": datetime.now(timezone.utc),
    }
    result = await get_users_collection().insert_one(account)
    account["_id"] = result.inserted_id
    return account


async def register_customer(signup: SignupInput) -> Dict[str, Any]:
    """
    Creates a CUSTOMER contact and its login account.

    Raises:
        ConflictError: e-mail already registered
    """
    email = normalize_email(signup.email)

    if await get_account_by_email(email):
        raise ConflictError("User already exists")

    contact = await contact_service.insert_contact({
        "type": ContactType.CUSTOMER,
        "name": signup.name,
        "email": email,
        "phone": signup.phone,
        "address": signup.address,
        "city": signup.city,
        "state": signup.state,
        "country": signup.country,
        "pincode": signup.pincode,
    })

    try:
        account = await _insert_account(email, signup.password, UserRole.CUSTOMER, contact["_id"])
    except DuplicateKeyError:
        # Lost a race with a concurrent sign-up for the same e-mail
        await get_contacts_collection().delete_one({"_id": contact["_id"]})
        raise ConflictError("User already exists")

    with LogContext(user_id=str(account["_id"])):
        logger.info("Customer registered")

    return account_summary(account, signup.name)


async def create_admin(email: str, password: str, name: str) -> Dict[str, Any]:
    """
    Provisions an ADMIN account with its own contact record.

    Raises:
        ConflictError: e-mail already registered
    """
    email = normalize_email(email)
    if await get_account_by_email(email):
        raise ConflictError("User already exists")

    contact = await contact_service.insert_contact({
        "type": ContactType.BOTH,
        "name": name,
        "email": email,
    })
    account = await _insert_account(email, password, UserRole.ADMIN, contact["_id"])

    logger.info("Admin account created", extra={"user_id": str(account["_id"])})
    return account_summary(account, name)


async def authenticate(email: str, password: str) -> Optional[Tuple[Dict[str, Any], str]]:
    """
    Checks credentials.

    Returns:
        (account, display name) on success, None otherwise
    """
    account = await get_account_by_email(email)
    if not account or not verify_password(password, account.get("password_hash", "")):
        logger.info("Login rejected")
        return None

    return account, await get_contact_name(account)


async def get_profile(user_id: str) -> Dict[str, str]:
    """
    Raises:
        ResourceNotFoundError: unknown account
    """
    account = await get_account_by_id(user_id)
    if not account:
        raise ResourceNotFoundError("User not found")

    contact = {}
    if account.get("contact_id") is not None:
        contact = await get_contacts_collection().find_one({"_id": account["contact_id"]}) or {}

    return {
        "name": contact.get("name") or "",
        "email": contact.get("email") or account.get("email") or "",
        "phone": contact.get("phone") or "",
        "address": contact.get("address") or "",
        "city": contact.get("city") or "",
        "state": contact.get("state") or "",
        "country": contact.get("country") or "",
        "pincode": contact.get("pincode") or "",
    }


async def update_profile(user_id: str, profile: ProfileInput) -> Dict[str, str]:
    """
    Updates the account e-mail and the linked contact, creating the
    contact when the account has none.

    Raises:
        ResourceNotFoundError: unknown account
        ConflictError: e-mail belongs to another account
    """
    account = await get_account_by_id(user_id)
    if not account:
        raise ResourceNotFoundError("User not found")

    email = normalize_email(profile.email)
    users = get_users_collection()

    if email != account["email"]:
        if await users.find_one({"email": email, "_id": {"$ne": account["_id"]}}, projection={"_id": 1}):
            raise ConflictError("Email is already in use")
        await users.update_one({"_id": account["_id"]}, {"$set": {"email": email}})

    fields = profile.model_dump()
    fields["email"] = email

    if account.get("contact_id") is not None:
        changes = contact_service.build_contact_document({**fields, "type": ContactType.CUSTOMER})
        # Profile edits never touch the contact type or GST number
        changes.pop("type")
        changes.pop("gst_number")
        changes["updated_at"] = datetime.now(timezone.utc)
        await get_contacts_collection().update_one({"_id": account["contact_id"]}, {"$set": changes})
    else:
        contact = await contact_service.insert_contact({**fields, "type": ContactType.CUSTOMER})
        await users.update_one({"_id": account["_id"]}, {"$set": {"contact_id": contact["_id"]}})

    await session_service.update_session_profile(user_id, profile.name, email)

    logger.info("Profile updated", extra={"user_id": user_id})
    return {key: fields[key] for key in ("name", "email", "phone", "address", "city", "state", "country", "pincode")}
