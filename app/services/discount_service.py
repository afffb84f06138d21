"""
app/services/discount_service.py

Purpose: Discount offers and coupons (admin side)
"""

from app.db.mongo import (
    get_discount_offers_collection,
    get_coupons_collection,
    parse_object_id,
    serialize_document,
)
from app.core.exceptions import ConflictError, ResourceNotFoundError
from app.core.logging import get_logger
from app.schemas.discount import CouponInput, DiscountOfferInput
from datetime import datetime, timezone
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError
from typing import Dict, Any, List

logger = get_logger(__name__)


async def list_discount_offers() -> List[Dict[str, Any]]:
    cursor = get_discount_offers_collection().find().sort("created_at", DESCENDING)
    return [serialize_document(doc) async for doc in cursor]


async def create_discount_offer(offer: DiscountOfferInput) -> Dict[str, Any]:
    document = offer.model_dump(mode="json")
    document["description"] = document["description"] or None
    document["created_at"] = datetime.now(timezone.utc)

    result = await get_discount_offers_collection().insert_one(document)
    document["_id"] = result.inserted_id

    logger.info(f"Discount offer created: {offer.name}")
    return serialize_document(document)


async def list_coupons() -> List[Dict[str, Any]]:
    cursor = get_coupons_collection().find().sort("created_at", DESCENDING)
    return [serialize_document(doc) async for doc in cursor]


async def create_coupon(coupon: CouponInput) -> Dict[str, Any]:
    """
    Raises:
        ResourceNotFoundError: referenced discount offer does not exist
        ConflictError: coupon code already used
    """
    offer_id = parse_object_id(coupon.discount_offer_id)
    if offer_id is None or not await get_discount_offers_collection().find_one({"_id": offer_id}, projection={"_id": 1}):
        raise ResourceNotFoundError("Discount offer not found")

    coupons = get_coupons_collection()
    if await coupons.find_one({"code": coupon.code}, projection={"_id": 1}):
        raise ConflictError("Coupon with this code already exists")

    document = coupon.model_dump()
    document["description"] = document["description"] or None
    document["discount_offer_id"] = offer_id
    document["usage_count"] = 0
    document["created_at"] = datetime.now(timezone.utc)

    try:
        result = await coupons.insert_one(document)
    except DuplicateKeyError:
        raise ConflictError("Coupon with this code already exists")

    document["_id"] = result.inserted_id
    logger.info(f"Coupon created: {coupon.code}")
    return serialize_document(document)
