"""
Cart validation and totals.
"""

from .lines import (
    attributes_display_text,
    attributes_equal,
    cart_item_key,
    cart_line_from_raw,
    merge_size_into_attributes,
)
from .validator import CartValidator, get_cart_total, validate_cart

__all__ = [
    'CartValidator',
    'validate_cart',
    'get_cart_total',
    'cart_line_from_raw',
    'cart_item_key',
    'attributes_equal',
    'attributes_display_text',
    'merge_size_into_attributes',
]
