"""
app/schemas/contact.py

Purpose: Contact (customer / vendor) form and response models
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.validation import EmailOrBlank, FormModel, FormSchema
from utils.constants import ContactType, NAME_TOO_SHORT


class ContactInput(FormModel):
    """
    Contact form. Only name and email carry constraints; the remaining
    fields accept any string, including empty.
    """
    type: ContactType
    name: str = Field(min_length=2)
    email: EmailOrBlank
    phone: str
    address: str
    city: str
    state: str
    country: str
    pincode: str
    gst_number: str


contact_schema = FormSchema(
    ContactInput,
    messages={
        ("name", "string_too_short"): NAME_TOO_SHORT,
    },
)


class ContactOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    type: ContactType
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    pincode: Optional[str] = None
    gst_number: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
