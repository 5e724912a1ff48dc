"""
Storefront Pricing Engine

Turns raw backend product documents into normalized products, resolves
attribute selections to variants, prices them and validates carts.

Modules:
    models   - Data models (NormalizedProduct, Variant, ResolvedPrice, CartLine)
    common   - Shared utilities (config loader, logging, constants)
    catalog  - Payload normalization, attribute selection, variant matching
    pricing  - Price resolution for cards, detail screen and checkout
    cart     - Cart line helpers, validation and totals
"""

__version__ = "0.1.0"
