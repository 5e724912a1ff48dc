"""
Price resolution for list cards, the detail screen and checkout.
"""

from .engine import calculate_discount, get_display_price, get_final_price, resolve_price

__all__ = ['resolve_price', 'get_display_price', 'get_final_price', 'calculate_discount']
