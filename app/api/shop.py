"""
app/api/shop.py

Purpose: Customer-facing endpoints

- GET /taxonomy                 categories, types per category, materials
- GET /shop/products            published catalog with filters and facets
- GET /shop/products/{slug}     published product detail
- GET/PUT /shop/profile         customer profile (CUSTOMER role only)
"""

from fastapi import APIRouter, Body, Depends, Query
from typing import Any, List, Optional

from app.api.deps import current_customer, validated
from app.core.config import settings
from app.models.user import SessionUser
from app.schemas.account import ProfileOut, profile_schema
from app.schemas.product import CatalogFilters, CatalogPage, ProductOut, TaxonomyOut
from app.services import product_service, user_service
from utils.constants import CATEGORIES, CATEGORY_TYPES, MATERIALS, ProductSort, StockStatus

router = APIRouter()
profile_router = APIRouter(prefix="/shop", dependencies=[Depends(current_customer)])


@router.get("/taxonomy", response_model=TaxonomyOut)
async def taxonomy():
    return {
        "categories": CATEGORIES,
        "types": {category.value: list(types) for category, types in CATEGORY_TYPES.items()},
        "materials": MATERIALS,
    }


@router.get("/shop/products", response_model=CatalogPage)
async def list_products(
    category: List[str] = Query(default=[]),
    type: List[str] = Query(default=[]),
    material: List[str] = Query(default=[]),
    min_price: Optional[float] = Query(default=None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(default=None, alias="maxPrice", ge=0),
    stock_status: Optional[StockStatus] = Query(default=None, alias="stockStatus"),
    search: Optional[str] = Query(default=None),
    sort_by: ProductSort = Query(default=ProductSort.NEWEST, alias="sortBy"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1),
):
    filters = CatalogFilters(
        categories=category,
        types=type,
        materials=material,
        min_price=min_price,
        max_price=max_price,
        stock_status=stock_status,
        search=search,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )
    return await product_service.list_catalog(filters)


@router.get("/shop/products/{slug}", response_model=ProductOut)
async def product_detail(slug: str):
    return await product_service.get_published_product_by_slug(slug)


@profile_router.get("/profile")
async def get_profile(user: SessionUser = Depends(current_customer)):
    profile = await user_service.get_profile(user.id)
    return {"user": ProfileOut(**profile)}


@profile_router.put("/profile")
async def update_profile(payload: Any = Body(...), user: SessionUser = Depends(current_customer)):
    data = validated(profile_schema, payload)
    profile = await user_service.update_profile(user.id, data)
    return {"message": "Profile updated successfully", "user": ProfileOut(**profile)}
