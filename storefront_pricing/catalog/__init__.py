"""
Catalog logic: payload normalization, attribute selection and variant matching.
"""

from .attributes import (
    get_attribute_options,
    is_option_available,
    normalize_selected_attributes,
    validate_required_attributes,
)
from .guards import (
    get_simple_product_stock,
    get_variant_stock,
    has_backend_variants,
    is_product_active,
    is_variant_selectable,
)
from .normalizer import as_num, normalize_product, normalize_variant_attributes, to_payload
from .variants import get_product_stock, is_product_available, match_variant, pick_display_variant

__all__ = [
    'normalize_product',
    'normalize_variant_attributes',
    'to_payload',
    'as_num',
    'normalize_selected_attributes',
    'get_attribute_options',
    'is_option_available',
    'validate_required_attributes',
    'is_variant_selectable',
    'is_product_active',
    'has_backend_variants',
    'get_variant_stock',
    'get_simple_product_stock',
    'match_variant',
    'pick_display_variant',
    'get_product_stock',
    'is_product_available',
]
