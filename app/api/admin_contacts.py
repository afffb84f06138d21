"""
app/api/admin_contacts.py

Purpose: Admin contact endpoints (ADMIN role only)
"""

from fastapi import APIRouter, Body, Depends, Query
from typing import Any, List, Optional

from app.api.deps import current_admin, validated
from app.schemas.contact import ContactOut, contact_schema
from app.schemas.response import MessageResponse
from app.services import contact_service

router = APIRouter(prefix="/admin/contacts", dependencies=[Depends(current_admin)])


@router.get("", response_model=List[ContactOut])
async def list_contacts(
    type: Optional[str] = Query(default=None, description="CUSTOMER, VENDOR or ALL"),
    search: Optional[str] = Query(default=None),
):
    return await contact_service.list_contacts(type, search)


@router.post("", response_model=ContactOut, status_code=201)
async def create_contact(payload: Any = Body(...)):
    contact = validated(contact_schema, payload)
    return await contact_service.create_contact(contact)


@router.get("/{contact_id}", response_model=ContactOut)
async def get_contact(contact_id: str):
    return await contact_service.get_contact(contact_id)


@router.put("/{contact_id}", response_model=ContactOut)
async def update_contact(contact_id: str, payload: Any = Body(...)):
    contact = validated(contact_schema, payload)
    return await contact_service.update_contact(contact_id, contact)


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(contact_id: str):
    await contact_service.delete_contact(contact_id)
    return {"message": "Contact deleted successfully"}
