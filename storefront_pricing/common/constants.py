"""
Shared constants for the pricing engine.

This module contains engine-wide constants that should have a single source of truth.
"""

# Markup percentage assumed when the backend omits nubianMarkup.
# Used to derive the pre-discount "original" price from the merchant price.
DEFAULT_MARKUP_PERCENT = 10.0

# Currency code passed through when the caller does not choose one.
DEFAULT_CURRENCY = "USD"

# Attribute definition types the backend declares
ATTRIBUTE_TYPES = frozenset({"select", "text", "number"})
DEFAULT_ATTRIBUTE_TYPE = "select"

# Selection values the client stores for "nothing chosen"
EMPTY_SELECTION_VALUES = frozenset({"", "null", "undefined"})
