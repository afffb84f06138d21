"""
utils/validation_utils.py

Purpose: Input validation helpers

- Slug pattern used by the product form
- Cross-checking product fields against the static taxonomy
- Search term escaping for regex queries
"""

import re
from typing import List, Optional, Tuple

from utils.constants import (
    CATEGORIES,
    MATERIALS,
    UNKNOWN_CATEGORY,
    UNKNOWN_MATERIAL,
    UNKNOWN_TYPE,
    types_for_category,
)


SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def check_taxonomy(
    category: str,
    product_type: str,
    material: Optional[str] = None
) -> List[Tuple[str, str]]:
    """
    Checks category, type and material against the static taxonomy.

    The product schema only requires category and type to be non-empty;
    callers wanting the stricter check use this.

    Returns:
        List of (field, message) pairs, empty when everything is known
    """
    errors: List[Tuple[str, str]] = []

    if category not in CATEGORIES:
        errors.append(("category", UNKNOWN_CATEGORY))
    elif product_type not in types_for_category(category):
        errors.append(("type", UNKNOWN_TYPE))

    # Material is optional on the product form
    if material and material not in MATERIALS:
        errors.append(("material", UNKNOWN_MATERIAL))

    return errors


def search_pattern(term: str, max_length: int = 100) -> Optional[str]:
    """
    Escapes a user search term for use in a case-insensitive regex query.

    Args:
        term: Raw search input
        max_length: Maximum number of characters kept

    Returns:
        Escaped pattern, or None when the term is blank
    """
    if not term:
        return None

    term = " ".join(term.split())[:max_length]
    if not term:
        return None

    return re.escape(term)
