"""
Product data models.

Pure data classes for the normalized product shape consumed by the
attribute selector, variant matcher, pricing engine and cart validator.
No business logic - only data structure definitions.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class AttributeDef:
    """Backend-declared selectable dimension (e.g. size, color)."""
    id: str = ""
    name: str = ""              # trimmed, lower-cased
    display_name: str = ""
    type: str = "select"        # "select", "text" or "number"
    required: bool = False
    options: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Variant:
    """Concrete purchasable SKU identified by its attribute values."""
    id: str = ""
    sku: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    merchant_price: float = 0.0
    price: float = 0.0          # legacy fallback for merchant_price
    nubian_markup: Optional[float] = None
    dynamic_markup: Optional[float] = None
    final_price: Optional[float] = None
    discount_price: Optional[float] = None
    stock: float = 0.0
    images: Tuple[str, ...] = ()
    is_active: bool = True


@dataclass(frozen=True)
class SimplePricing:
    """Pricing of a variant-less product. All None for variant products."""
    stock: Optional[float] = None
    merchant_price: Optional[float] = None
    final_price: Optional[float] = None
    nubian_markup: Optional[float] = None
    dynamic_markup: Optional[float] = None
    discount_price: Optional[float] = None


@dataclass(frozen=True)
class ProductLevelPricing:
    """Backend rollup ("from") figures. Display fallback only, never used for totals."""
    merchant_price: Optional[float] = None
    final_price: Optional[float] = None
    nubian_markup: Optional[float] = None
    dynamic_markup: Optional[float] = None
    discount_price: Optional[float] = None


@dataclass(frozen=True)
class DisplayPricing:
    """Server-computed display figures that must be shown verbatim."""
    final_price: Optional[float] = None
    original_price: Optional[float] = None
    discount_percentage: Optional[float] = None


@dataclass(frozen=True)
class NormalizedProduct:
    """
    Strict internal product shape, built fresh from every backend payload.

    A product is either simple (``variants`` empty, pricing in ``simple``)
    or variant-based (pricing per variant, every ``simple`` field None).

    Field Groups:
    - Identity: id, name, description, category, merchant
    - Visibility: is_active, deleted_at (soft delete)
    - Selection: attribute_defs (UI hint), variants (purchase truth)
    - Pricing: simple, product_level_pricing, display_pricing
    """

    id: str = ""
    name: str = ""
    description: str = ""
    is_active: bool = True
    deleted_at: Optional[str] = None

    category_id: str = ""
    category_name: Optional[str] = None
    merchant_id: Optional[str] = None
    images: Tuple[str, ...] = ()

    attribute_defs: Tuple[AttributeDef, ...] = ()
    variants: Tuple[Variant, ...] = ()

    simple: SimplePricing = field(default_factory=SimplePricing)
    product_level_pricing: ProductLevelPricing = field(default_factory=ProductLevelPricing)
    display_pricing: DisplayPricing = field(default_factory=DisplayPricing)

    @property
    def has_variants(self) -> bool:
        return len(self.variants) > 0
