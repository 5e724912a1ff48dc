"""
Product and variant predicates shared by selection, matching and cart code.
"""

from __future__ import annotations

import math

from ..models import NormalizedProduct, Variant


def is_variant_selectable(variant: Variant | None) -> bool:
    """A variant is selectable iff it is active and in stock."""
    return variant is not None and variant.is_active and get_variant_stock(variant) > 0


def selectable_variants(product: NormalizedProduct) -> list[Variant]:
    """Selectable variants in backend order."""
    return [v for v in product.variants if is_variant_selectable(v)]


def is_product_active(product: NormalizedProduct | None) -> bool:
    """Product exists, is active and is not soft-deleted."""
    return product is not None and product.is_active and not product.deleted_at


def has_backend_variants(product: NormalizedProduct | None) -> bool:
    return product is not None and product.has_variants


def _finite_or_zero(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


def get_variant_stock(variant: Variant | None) -> float:
    if variant is None:
        return 0
    return _finite_or_zero(variant.stock)


def get_simple_product_stock(product: NormalizedProduct) -> float:
    return _finite_or_zero(product.simple.stock)
