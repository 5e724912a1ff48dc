"""
Cart data models.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class CartLine:
    """
    Single cart entry owned by the cart store.

    ``attributes`` is the source of truth. ``variant_id`` is only a cache
    and is re-derived against the live product before any total.
    """
    product_id: str
    attributes: Dict[str, str] = field(default_factory=dict)
    quantity: int = 1
    variant_id: Optional[str] = None


@dataclass
class CartValidationResult:
    """Outcome of validating every cart line."""
    valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class AttributeValidationResult:
    """Required attributes the selection does not supply (display names)."""
    valid: bool
    missing: List[str] = field(default_factory=list)
