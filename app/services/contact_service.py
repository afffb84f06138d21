"""
app/services/contact_service.py

Purpose: Contact (customer / vendor) records

- Listing with type filter and free-text search
- Create / update with GST number uniqueness
- Delete (refused while a login account uses the contact)
"""

from app.db.mongo import get_contacts_collection, get_users_collection, parse_object_id, serialize_document
from app.core.exceptions import ConflictError, ResourceNotFoundError, ValidationError
from app.core.logging import get_logger
from app.schemas.contact import ContactInput
from utils.constants import ContactType
from utils.validation_utils import search_pattern
from datetime import datetime, timezone
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError
from typing import Optional, Dict, Any, List

logger = get_logger(__name__)

GST_TAKEN = "Contact with this GST number already exists"

CONTACT_FIELDS = (
    "type", "name", "email", "phone", "address", "city",
    "state", "country", "pincode", "gst_number",
)


def build_contact_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Stored form of contact data. Empty optional strings are stored as None
    so that "no GST number" never collides in the unique index.
    """
    document = {}
    for field in CONTACT_FIELDS:
        value = data.get(field)
        if isinstance(value, ContactType):
            value = value.value
        document[field] = value if value != "" else None
    return document


def build_contact_query(contact_type: Optional[str] = None, search: Optional[str] = None) -> Dict[str, Any]:
    """
    Builds the Mongo filter for the admin contact list.

    CUSTOMER matches CUSTOMER and BOTH; VENDOR matches VENDOR and BOTH;
    ALL (or nothing) applies no type filter.
    """
    query: Dict[str, Any] = {}

    if contact_type and contact_type != "ALL":
        if contact_type == ContactType.CUSTOMER.value:
            query["type"] = {"$in": [ContactType.CUSTOMER.value, ContactType.BOTH.value]}
        else:
            query["type"] = {"$in": [ContactType.VENDOR.value, ContactType.BOTH.value]}

    pattern = search_pattern(search or "")
    if pattern:
        query["$or"] = [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"email": {"$regex": pattern, "$options": "i"}},
            {"phone": {"$regex": pattern, "$options": "i"}},
        ]

    return query


async def list_contacts(contact_type: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
    contacts = get_contacts_collection()
    cursor = contacts.find(build_contact_query(contact_type, search)).sort("created_at", DESCENDING)
    return [serialize_document(doc) async for doc in cursor]


async def get_contact(contact_id: str) -> Dict[str, Any]:
    """
    Raises:
        ResourceNotFoundError: unknown or malformed id
    """
    object_id = parse_object_id(contact_id)
    if object_id is None:
        raise ResourceNotFoundError("Contact not found")

    document = await get_contacts_collection().find_one({"_id": object_id})
    if not document:
        raise ResourceNotFoundError("Contact not found")
    return serialize_document(document)


async def _ensure_gst_number_free(gst_number: Optional[str], exclude_id=None):
    if not gst_number:
        return

    query: Dict[str, Any] = {"gst_number": gst_number}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}

    if await get_contacts_collection().find_one(query, projection={"_id": 1}):
        raise ConflictError(GST_TAKEN)


async def insert_contact(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Inserts contact data (already validated) and returns the stored document.
    """
    now = datetime.now(timezone.utc)
    document = build_contact_document(data)
    document["created_at"] = now
    document["updated_at"] = now

    result = await get_contacts_collection().insert_one(document)
    document["_id"] = result.inserted_id
    return document


async def create_contact(contact: ContactInput) -> Dict[str, Any]:
    """
    Raises:
        ConflictError: GST number already used by another contact
    """
    await _ensure_gst_number_free(contact.gst_number)

    try:
        document = await insert_contact(contact.model_dump())
    except DuplicateKeyError:
        raise ConflictError(GST_TAKEN)

    logger.info("Contact created", extra={"contact_id": str(document["_id"])})
    return serialize_document(document)


async def update_contact(contact_id: str, contact: ContactInput) -> Dict[str, Any]:
    """
    Raises:
        ResourceNotFoundError: unknown contact
        ConflictError: GST number already used by another contact
    """
    object_id = parse_object_id(contact_id)
    contacts = get_contacts_collection()
    if object_id is None or not await contacts.find_one({"_id": object_id}, projection={"_id": 1}):
        raise ResourceNotFoundError("Contact not found")

    await _ensure_gst_number_free(contact.gst_number, exclude_id=object_id)

    changes = build_contact_document(contact.model_dump())
    changes["updated_at"] = datetime.now(timezone.utc)
    try:
        await contacts.update_one({"_id": object_id}, {"$set": changes})
    except DuplicateKeyError:
        raise ConflictError(GST_TAKEN)

    logger.info("Contact updated", extra={"contact_id": contact_id})
    return await get_contact(contact_id)


async def delete_contact(contact_id: str) -> None:
    """
    Raises:
        ResourceNotFoundError: unknown contact
        ValidationError: contact belongs to a login account
    """
    object_id = parse_object_id(contact_id)
    contacts = get_contacts_collection()
    if object_id is None or not await contacts.find_one({"_id": object_id}, projection={"_id": 1}):
        raise ResourceNotFoundError("Contact not found")

    if await get_users_collection().find_one({"contact_id": object_id}, projection={"_id": 1}):
        raise ValidationError("Cannot delete contact with associated user account")

    result = await contacts.delete_one({"_id": object_id})
    if result.deleted_count == 0:
        raise ResourceNotFoundError("Contact not found")

    logger.info("Contact deleted", extra={"contact_id": contact_id})
