"""
app/schemas/product.py

Purpose: Product form, catalog query and response models

- ProductInput coerces price/stock from text (blank text counts as 0)
  before range checks
- Category/type are only required to be non-empty here; taxonomy
  membership is checked separately by callers that want it
"""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

from app.schemas.validation import BlankAsZero, FormModel, FormSchema
from utils import constants as c
from utils.validation_utils import SLUG_PATTERN


class ProductInput(FormModel):
    name: str = Field(min_length=2)
    slug: str = Field(min_length=2, pattern=SLUG_PATTERN)
    description: str
    category: str = Field(min_length=1)
    type: str = Field(min_length=1)
    material: str
    price: Annotated[float, BlankAsZero] = Field(ge=0, allow_inf_nan=False)
    stock: Annotated[int, BlankAsZero] = Field(ge=0)
    images: List[str]
    is_published: StrictBool


product_schema = FormSchema(
    ProductInput,
    messages={
        ("name", "string_too_short"): c.NAME_TOO_SHORT,
        ("slug", "string_too_short"): c.SLUG_TOO_SHORT,
        ("slug", "string_pattern_mismatch"): c.SLUG_INVALID,
        ("category", "string_too_short"): c.CATEGORY_REQUIRED,
        ("category", "missing"): c.CATEGORY_REQUIRED,
        ("type", "string_too_short"): c.TYPE_REQUIRED,
        ("type", "missing"): c.TYPE_REQUIRED,
        ("price", "greater_than_equal"): c.PRICE_NEGATIVE,
        ("price", "float_parsing"): c.PRICE_NOT_A_NUMBER,
        ("price", "float_type"): c.PRICE_NOT_A_NUMBER,
        ("price", "finite_number"): c.PRICE_NOT_A_NUMBER,
        ("stock", "greater_than_equal"): c.STOCK_NEGATIVE,
        ("stock", "int_from_float"): c.STOCK_NOT_INTEGER,
        ("stock", "int_parsing"): c.STOCK_NOT_INTEGER,
        ("stock", "int_type"): c.STOCK_NOT_INTEGER,
    },
)


class ProductOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    slug: str
    description: Optional[str] = None
    category: str
    type: str
    material: Optional[str] = None
    price: float
    stock: int
    images: List[str] = []
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CatalogFilters(BaseModel):
    """Query parameters accepted by the public shop listing."""
    categories: List[str] = []
    types: List[str] = []
    materials: List[str] = []
    min_price: Optional[float] = Field(default=None, ge=0)
    max_price: Optional[float] = Field(default=None, ge=0)
    stock_status: Optional[c.StockStatus] = None
    search: Optional[str] = None
    sort_by: c.ProductSort = c.ProductSort.NEWEST
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(serialization_alias="totalPages")


class PriceRange(BaseModel):
    min: int
    max: int


class FilterFacets(BaseModel):
    categories: List[str]
    types: List[str]
    materials: List[str]
    price_range: Optional[PriceRange] = Field(default=None, serialization_alias="priceRange")


class CatalogPage(BaseModel):
    products: List[ProductOut]
    pagination: Pagination
    filters: FilterFacets


class TaxonomyOut(BaseModel):
    categories: List[str]
    types: Dict[str, List[str]]
    materials: List[str]
