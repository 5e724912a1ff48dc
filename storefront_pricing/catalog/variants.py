"""
Variant Matcher

Resolves a shopper selection to one purchasable variant, and picks the
display variant used for list/card "from" pricing.

Matching policy:
1. An empty selection never matches (the UI must ask for options)
2. Only selectable variants (active, stock > 0) are considered
3. A variant matches when it agrees with every selected key; extra
   variant attributes the selection does not mention are ignored
4. First match in backend order wins, no scoring among ties
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ..models import NormalizedProduct, Variant
from .attributes import normalize_selected_attributes, variant_matches
from .guards import get_simple_product_stock, get_variant_stock, is_product_active, selectable_variants


def match_variant(product: NormalizedProduct, selection: Mapping[str, Any] | None) -> Variant | None:
    """
    Find the selectable variant matching a selection.

    Args:
        product: Normalized product
        selection: Attribute selection (keys/values are normalized here)

    Returns:
        First matching selectable variant, or None
    """
    selected = normalize_selected_attributes(selection)
    if not selected:
        return None

    for variant in selectable_variants(product):
        if variant_matches(variant, selected):
            return variant
    return None


def find_any_variant(product: NormalizedProduct, selection: Mapping[str, Any] | None) -> Variant | None:
    """Like match_variant() but also returns unselectable variants. For diagnostics only."""
    selected = normalize_selected_attributes(selection)
    if not selected:
        return None
    return next((v for v in product.variants if variant_matches(v, selected)), None)


def _display_score(variant: Variant) -> float:
    """finalPrice, then discountPrice, then merchantPrice, then legacy price."""
    if variant.final_price is not None:
        return variant.final_price
    if variant.discount_price is not None:
        return variant.discount_price
    if variant.merchant_price > 0:
        return variant.merchant_price
    if variant.price > 0:
        return variant.price
    return math.inf


def pick_display_variant(product: NormalizedProduct) -> Variant | None:
    """
    Pick the cheapest selectable variant for list/card display.

    Ties keep the earliest variant in backend order.
    """
    best: Variant | None = None
    best_score = math.inf
    for variant in selectable_variants(product):
        score = _display_score(variant)
        if best is None or score < best_score:
            best, best_score = variant, score
    return best


def get_product_stock(product: NormalizedProduct, selection: Mapping[str, Any] | None) -> float:
    """Stock of the matched variant (0 if none), or simple-product stock."""
    if product.has_variants:
        return get_variant_stock(match_variant(product, selection))
    return get_simple_product_stock(product)


def is_product_available(product: NormalizedProduct | None, selection: Mapping[str, Any] | None) -> bool:
    """Active product whose selection resolves to something in stock."""
    if not is_product_active(product):
        return False
    if product.has_variants:
        return match_variant(product, selection) is not None
    return get_simple_product_stock(product) > 0
