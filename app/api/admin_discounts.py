"""
app/api/admin_discounts.py

Purpose: Admin discount offer and coupon endpoints (ADMIN role only)
"""

from fastapi import APIRouter, Body, Depends
from typing import Any, List

from app.api.deps import current_admin, validated
from app.schemas.discount import CouponOut, DiscountOfferOut, coupon_schema, discount_offer_schema
from app.services import discount_service

router = APIRouter(prefix="/admin", dependencies=[Depends(current_admin)])


@router.get("/discount-offers", response_model=List[DiscountOfferOut])
async def list_discount_offers():
    return await discount_service.list_discount_offers()


@router.post("/discount-offers", response_model=DiscountOfferOut, status_code=201)
async def create_discount_offer(payload: Any = Body(...)):
    offer = validated(discount_offer_schema, payload)
    return await discount_service.create_discount_offer(offer)


@router.get("/coupons", response_model=List[CouponOut])
async def list_coupons():
    return await discount_service.list_coupons()


@router.post("/coupons", response_model=CouponOut, status_code=201)
async def create_coupon(payload: Any = Body(...)):
    coupon = validated(coupon_schema, payload)
    return await discount_service.create_coupon(coupon)
