"""
app/api/admin_products.py

Purpose: Admin product catalog endpoints (ADMIN role only)
"""

from fastapi import APIRouter, Body, Depends, Query
from typing import Any, List, Optional

from app.api.deps import current_admin, validated
from app.core.logging import get_logger
from app.models.user import SessionUser
from app.schemas.product import ProductOut, product_schema
from app.schemas.response import MessageResponse
from app.services import product_service

logger = get_logger(__name__)
router = APIRouter(prefix="/admin/products", dependencies=[Depends(current_admin)])


@router.get("", response_model=List[ProductOut])
async def list_products(
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    is_published: Optional[bool] = Query(default=None, alias="isPublished"),
):
    return await product_service.list_admin_products(search, category, is_published)


@router.post("", response_model=ProductOut, status_code=201)
async def create_product(payload: Any = Body(...), admin: SessionUser = Depends(current_admin)):
    product = validated(product_schema, payload)
    logger.debug(f"Admin {admin.id} creating product {product.slug}")
    return await product_service.create_product(product)


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str):
    return await product_service.get_product(product_id)


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(product_id: str, payload: Any = Body(...)):
    product = validated(product_schema, payload)
    return await product_service.update_product(product_id, product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str):
    await product_service.delete_product(product_id)
    return {"message": "Product deleted successfully"}
