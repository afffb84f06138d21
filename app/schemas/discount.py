"""
app/schemas/discount.py

Purpose: Discount offer and coupon forms
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StringConstraints
from pydantic.alias_generators import to_camel

from app.schemas.validation import BlankAsZero, FormModel, FormSchema
from utils import constants as c


class DiscountOfferInput(FormModel):
    name: str = Field(min_length=2)
    description: str
    discount_type: c.DiscountType
    discount_value: Annotated[float, BlankAsZero] = Field(ge=0, allow_inf_nan=False)
    min_order_amount: Annotated[float, BlankAsZero] = Field(ge=0, allow_inf_nan=False)
    max_discount_amount: Annotated[Optional[float], BlankAsZero] = Field(default=None, ge=0, allow_inf_nan=False)
    start_date: str
    end_date: str
    is_active: StrictBool = True


discount_offer_schema = FormSchema(
    DiscountOfferInput,
    messages={
        ("name", "string_too_short"): c.NAME_TOO_SHORT,
        ("discountValue", "greater_than_equal"): "Discount value must be positive",
        ("minOrderAmount", "greater_than_equal"): "Minimum order amount must be positive",
        ("maxDiscountAmount", "greater_than_equal"): "Maximum discount amount must be positive",
    },
)


class CouponInput(FormModel):
    code: Annotated[str, StringConstraints(min_length=3, to_upper=True)]
    name: str = Field(min_length=2)
    description: str
    discount_offer_id: str = Field(min_length=1)
    max_usage_count: Annotated[int, BlankAsZero] = Field(default=1, ge=1)
    max_usage_per_user: Annotated[int, BlankAsZero] = Field(default=1, ge=1)
    is_active: StrictBool = True
    contact_id: Optional[str] = None


coupon_schema = FormSchema(
    CouponInput,
    messages={
        ("code", "string_too_short"): c.CODE_TOO_SHORT,
        ("name", "string_too_short"): c.NAME_TOO_SHORT,
        ("discountOfferId", "string_too_short"): c.DISCOUNT_OFFER_REQUIRED,
        ("discountOfferId", "missing"): c.DISCOUNT_OFFER_REQUIRED,
        ("maxUsageCount", "greater_than_equal"): "Max usage must be at least 1",
        ("maxUsagePerUser", "greater_than_equal"): "Max usage per user must be at least 1",
    },
)


class DiscountOfferOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    discount_type: c.DiscountType
    discount_value: float
    min_order_amount: float
    max_discount_amount: Optional[float] = None
    start_date: str
    end_date: str
    is_active: bool
    created_at: Optional[datetime] = None


class CouponOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    code: str
    name: str
    description: Optional[str] = None
    discount_offer_id: str
    max_usage_count: int
    max_usage_per_user: int
    usage_count: int = 0
    is_active: bool
    contact_id: Optional[str] = None
    created_at: Optional[datetime] = None
