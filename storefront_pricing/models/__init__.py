"""
Data models for the pricing engine.

This module contains pure data classes with no business logic.
"""

from .cart import AttributeValidationResult, CartLine, CartValidationResult
from .pricing import (
    SOURCE_DEFINITIVE,
    SOURCE_SIMPLE,
    SOURCE_VARIANT,
    Discount,
    DisplayPrice,
    PriceBreakdown,
    ResolvedPrice,
)
from .product import (
    AttributeDef,
    DisplayPricing,
    NormalizedProduct,
    ProductLevelPricing,
    SimplePricing,
    Variant,
)

__all__ = [
    'AttributeDef',
    'Variant',
    'SimplePricing',
    'ProductLevelPricing',
    'DisplayPricing',
    'NormalizedProduct',
    'Discount',
    'PriceBreakdown',
    'ResolvedPrice',
    'DisplayPrice',
    'SOURCE_VARIANT',
    'SOURCE_SIMPLE',
    'SOURCE_DEFINITIVE',
    'CartLine',
    'CartValidationResult',
    'AttributeValidationResult',
]
