"""
Pricing result models.

Raw numeric amounts plus a currency code. Formatting for display is the
caller's job.
"""

from dataclasses import dataclass
from typing import Optional

# ResolvedPrice.source values
SOURCE_VARIANT = "variant"
SOURCE_SIMPLE = "simple"
SOURCE_DEFINITIVE = "definitive"


@dataclass(frozen=True)
class Discount:
    """Amount and whole-number percentage saved against the original price."""
    amount: float
    percentage: int


@dataclass(frozen=True)
class PriceBreakdown:
    """Backend pricing inputs, attached for transparency."""
    merchant_price: float = 0.0
    nubian_markup: float = 0.0
    dynamic_markup: float = 0.0
    final_price: float = 0.0


@dataclass(frozen=True)
class ResolvedPrice:
    """Authoritative price for display and checkout."""
    final: float
    merchant: float
    original: float
    currency: str
    requires_selection: bool
    source: str
    discount: Optional[Discount] = None
    breakdown: Optional[PriceBreakdown] = None


@dataclass(frozen=True)
class DisplayPrice:
    """List/card price. ``is_from`` marks a variant price range."""
    price: float
    is_from: bool
