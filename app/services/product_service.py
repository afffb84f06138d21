"""
app/services/product_service.py

Purpose: Product catalog

- Admin listing, create / update / delete with slug uniqueness
- Public (published-only) catalog with filters, sorting, pagination, facets
- Product lookup by slug for the shop
"""

from app.db.mongo import get_products_collection, parse_object_id, serialize_document
from app.core.config import settings
from app.core.exceptions import ConflictError, ResourceNotFoundError
from app.core.logging import get_logger
from app.schemas.product import CatalogFilters, ProductInput
from utils.constants import ProductSort, StockStatus
from utils.validation_utils import search_pattern
from datetime import datetime, timezone
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError
from typing import Optional, Dict, Any, List, Tuple
import math

logger = get_logger(__name__)

SLUG_TAKEN = "Product with this slug already exists"


def build_product_document(product: ProductInput) -> Dict[str, Any]:
    """Stored form of a validated product; empty optional text becomes None."""
    data = product.model_dump()
    data["description"] = data["description"] or None
    data["material"] = data["material"] or None
    data["images"] = data["images"] or []
    return data


def _search_clause(search: Optional[str]) -> Optional[Dict[str, Any]]:
    pattern = search_pattern(search or "")
    if not pattern:
        return None
    return {
        "$or": [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    }


def build_admin_query(
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_published: Optional[bool] = None
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}

    clause = _search_clause(search)
    if clause:
        query.update(clause)

    if category:
        query["category"] = category

    if is_published is not None:
        query["is_published"] = is_published

    return query


def build_catalog_query(filters: CatalogFilters) -> Dict[str, Any]:
    """
    Mongo filter for the public catalog. Only published products are
    ever visible here.
    """
    query: Dict[str, Any] = {"is_published": True}

    if filters.categories:
        query["category"] = {"$in": filters.categories}
    if filters.types:
        query["type"] = {"$in": filters.types}
    if filters.materials:
        query["material"] = {"$in": filters.materials}

    price: Dict[str, float] = {}
    if filters.min_price is not None:
        price["$gte"] = filters.min_price
    if filters.max_price is not None:
        price["$lte"] = filters.max_price
    if price:
        query["price"] = price

    threshold = settings.LOW_STOCK_THRESHOLD
    if filters.stock_status == StockStatus.IN_STOCK:
        query["stock"] = {"$gt": threshold}
    elif filters.stock_status == StockStatus.LOW_STOCK:
        query["stock"] = {"$gt": 0, "$lte": threshold}
    elif filters.stock_status == StockStatus.OUT_OF_STOCK:
        query["stock"] = 0

    clause = _search_clause(filters.search)
    if clause:
        query.update(clause)

    return query


def catalog_sort(sort_by: ProductSort) -> List[Tuple[str, int]]:
    if sort_by == ProductSort.PRICE_ASC:
        return [("price", ASCENDING)]
    if sort_by == ProductSort.PRICE_DESC:
        return [("price", DESCENDING)]
    if sort_by == ProductSort.NAME:
        return [("name", ASCENDING)]
    return [("created_at", DESCENDING)]


def build_facets(products: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Filter options offered to shoppers, computed from every published
    product (not just the current page).
    """
    categories = sorted({p["category"] for p in products if p.get("category")})
    types = sorted({p["type"] for p in products if p.get("type")})
    materials = sorted({p["material"] for p in products if p.get("material")})
    prices = [p["price"] for p in products if p.get("price") is not None]

    price_range = None
    if prices:
        price_range = {"min": math.floor(min(prices)), "max": math.ceil(max(prices))}

    return {
        "categories": categories,
        "types": types,
        "materials": materials,
        "price_range": price_range,
    }


async def list_admin_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_published: Optional[bool] = None
) -> List[Dict[str, Any]]:
    products = get_products_collection()
    cursor = products.find(build_admin_query(search, category, is_published)).sort("created_at", DESCENDING)
    return [serialize_document(doc) async for doc in cursor]


async def list_catalog(filters: CatalogFilters) -> Dict[str, Any]:
    products = get_products_collection()
    limit = min(filters.limit, settings.MAX_PAGE_SIZE)
    query = build_catalog_query(filters)

    total = await products.count_documents(query)
    cursor = (
        products.find(query)
        .sort(catalog_sort(filters.sort_by))
        .skip((filters.page - 1) * limit)
        .limit(limit)
    )
    page = [serialize_document(doc) async for doc in cursor]

    facet_cursor = products.find(
        {"is_published": True},
        projection={"category": 1, "type": 1, "material": 1, "price": 1}
    )
    facet_source = [doc async for doc in facet_cursor]

    return {
        "products": page,
        "pagination": {
            "page": filters.page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit) if limit else 0,
        },
        "filters": build_facets(facet_source),
    }


async def get_product(product_id: str) -> Dict[str, Any]:
    """
    Raises:
        ResourceNotFoundError: unknown or malformed id
    """
    object_id = parse_object_id(product_id)
    if object_id is None:
        raise ResourceNotFoundError("Product not found")

    document = await get_products_collection().find_one({"_id": object_id})
    if not document:
        raise ResourceNotFoundError("Product not found")
    return serialize_document(document)


async def get_published_product_by_slug(slug: str) -> Dict[str, Any]:
    """
    Raises:
        ResourceNotFoundError: no published product with this slug
    """
    document = await get_products_collection().find_one({"slug": slug, "is_published": True})
    if not document:
        raise ResourceNotFoundError("Product not found")
    return serialize_document(document)


async def create_product(product: ProductInput) -> Dict[str, Any]:
    """
    Raises:
        ConflictError: slug already used
    """
    products = get_products_collection()

    if await products.find_one({"slug": product.slug}, projection={"_id": 1}):
        raise ConflictError(SLUG_TAKEN)

    now = datetime.now(timezone.utc)
    document = build_product_document(product)
    document["created_at"] = now
    document["updated_at"] = now

    try:
        result = await products.insert_one(document)
    except DuplicateKeyError:
        raise ConflictError(SLUG_TAKEN)

    document["_id"] = result.inserted_id
    logger.info(f"Product created: {product.slug}", extra={"product_id": str(result.inserted_id)})
    return serialize_document(document)


async def update_product(product_id: str, product: ProductInput) -> Dict[str, Any]:
    """
    Raises:
        ResourceNotFoundError: unknown product
        ConflictError: slug taken by another product
    """
    object_id = parse_object_id(product_id)
    products = get_products_collection()

    existing = await products.find_one({"_id": object_id}) if object_id is not None else None
    if not existing:
        raise ResourceNotFoundError("Product not found")

    if product.slug != existing["slug"]:
        if await products.find_one({"slug": product.slug, "_id": {"$ne": object_id}}, projection={"_id": 1}):
            raise ConflictError(SLUG_TAKEN)

    changes = build_product_document(product)
    changes["updated_at"] = datetime.now(timezone.utc)

    try:
        await products.update_one({"_id": object_id}, {"$set": changes})
    except DuplicateKeyError:
        raise ConflictError(SLUG_TAKEN)

    logger.info(f"Product updated: {product.slug}", extra={"product_id": product_id})
    return await get_product(product_id)


async def delete_product(product_id: str) -> None:
    """
    Raises:
        ResourceNotFoundError: unknown product
    """
    object_id = parse_object_id(product_id)
    if object_id is None:
        raise ResourceNotFoundError("Product not found")

    result = await get_products_collection().delete_one({"_id": object_id})
    if result.deleted_count == 0:
        raise ResourceNotFoundError("Product not found")

    logger.info("Product deleted", extra={"product_id": product_id})
