"""
utils/constants.py

Purpose: Centralized static reference data

- Product category -> type taxonomy
- Permitted materials
- Contact, discount and stock-status enums
- User-facing validation messages

(Prevents hardcoding across the codebase)
"""

from enum import Enum
from typing import Dict, List, Tuple


# ============================================================
# PRODUCT TAXONOMY
# ============================================================

class Category(str, Enum):
    TOPWEAR = "Topwear"
    BOTTOMWEAR = "Bottomwear"
    OUTERWEAR = "Outerwear"
    WINTERWEAR = "Winterwear"
    SPORTSWEAR = "Sportswear"
    ETHNICWEAR = "Ethnicwear"
    FORMALWEAR = "Formalwear"


class Material(str, Enum):
    COTTON = "Cotton"
    POLYESTER = "Polyester"
    DENIM = "Denim"
    LINEN = "Linen"
    WOOL = "Wool"
    NYLON = "Nylon"
    RAYON = "Rayon"


# Types may appear under more than one category (Kurta, Blazer, Track Pants)
CATEGORY_TYPES: Dict[Category, Tuple[str, ...]] = {
    Category.TOPWEAR: ("T-Shirt", "Shirt", "Polo", "Kurta"),
    Category.BOTTOMWEAR: ("Jeans", "Chinos", "Shorts", "Track Pants", "Cargo"),
    Category.OUTERWEAR: ("Jacket", "Hoodie", "Blazer"),
    Category.WINTERWEAR: ("Sweater", "Coat"),
    Category.SPORTSWEAR: ("Gym T-Shirt", "Sports Shorts", "Track Pants"),
    Category.ETHNICWEAR: ("Kurta", "Kurti", "Sherwani"),
    Category.FORMALWEAR: ("Formal Shirt", "Trousers", "Blazer"),
}

CATEGORIES: List[str] = [category.value for category in Category]
MATERIALS: List[str] = [material.value for material in Material]


def types_for_category(category: str) -> Tuple[str, ...]:
    """
    Returns the permitted product types for a category name.
    Unknown categories have no permitted types.
    """
    try:
        return CATEGORY_TYPES[Category(category)]
    except ValueError:
        return ()


# ============================================================
# CONTACTS
# ============================================================

class ContactType(str, Enum):
    CUSTOMER = "CUSTOMER"
    VENDOR = "VENDOR"
    BOTH = "BOTH"


# ============================================================
# DISCOUNTS
# ============================================================

class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


# ============================================================
# SHOP CATALOG
# ============================================================

class StockStatus(str, Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class ProductSort(str, Enum):
    NEWEST = "createdAt"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME = "name"


# ============================================================
# VALIDATION MESSAGES
# ============================================================

NAME_TOO_SHORT = "Name must be at least 2 characters"
SLUG_TOO_SHORT = "Slug must be at least 2 characters"
SLUG_INVALID = "Slug must be lowercase with hyphens only"
CATEGORY_REQUIRED = "Category is required"
TYPE_REQUIRED = "Type is required"
PRICE_NEGATIVE = "Price must be positive"
PRICE_NOT_A_NUMBER = "Price must be a number"
STOCK_NEGATIVE = "Stock must be non-negative"
STOCK_NOT_INTEGER = "Stock must be a whole number"
EMAIL_INVALID = "Invalid email address"
PASSWORD_TOO_SHORT = "Password must be at least 6 characters"
PASSWORD_TOO_LONG = "Password must be at most 72 bytes"
PHONE_TOO_SHORT = "Phone must be at least 10 digits"
PINCODE_REQUIRED = "Pincode is required"
CODE_TOO_SHORT = "Code must be at least 3 characters"
DISCOUNT_OFFER_REQUIRED = "Discount offer is required"
UNKNOWN_CATEGORY = "Unknown category"
UNKNOWN_TYPE = "Type is not available for this category"
UNKNOWN_MATERIAL = "Unknown material"
