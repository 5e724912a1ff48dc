"""
Cart line helpers.

Builds CartLine objects from stored cart entries and compares, keys and
labels their attribute selections. Handles the legacy ``size`` field that
older cart entries carry instead of an attributes map.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from ..catalog.attributes import normalize_selected_attributes
from ..catalog.normalizer import as_num, as_str, normalize_value
from ..models import CartLine


def merge_size_into_attributes(size: Optional[str], attributes: Optional[Mapping]) -> Dict[str, str]:
    """
    Fold a legacy ``size`` value into an attribute selection.

    The explicit ``size`` attribute wins if both are present.
    """
    merged = normalize_selected_attributes(attributes)
    legacy = normalize_selected_attributes({"size": size})
    if legacy and "size" not in merged:
        merged["size"] = legacy["size"]
    return merged


def cart_item_key(product_id: str, attributes: Optional[Mapping]) -> str:
    """
    Stable identity of a cart entry: product id plus sorted attributes.

    Example:
        cart_item_key("p1", {"Size": "M", "color": "Red"}) -> "p1|color:Red|size:M"

    Raises:
        ValueError: If product_id is empty
    """
    if not product_id:
        raise ValueError("Product ID is required")

    normalized = normalize_selected_attributes(attributes)
    attr_string = "|".join(f"{key}:{normalized[key]}" for key in sorted(normalized))
    return f"{product_id}|{attr_string}" if attr_string else product_id


def attributes_equal(first: Optional[Mapping], second: Optional[Mapping]) -> bool:
    """True if both selections describe the same variant."""
    return normalize_selected_attributes(first) == normalize_selected_attributes(second)


def attributes_display_text(attributes: Optional[Mapping]) -> str:
    """Human-readable selection, e.g. "Size: M, Color: Red"."""
    normalized = normalize_selected_attributes(attributes)
    return ", ".join(f"{key[:1].upper()}{key[1:]}: {val}" for key, val in normalized.items())


def _product_id(raw: Mapping) -> str:
    product = raw.get("productId")
    if product is None:
        product = raw.get("product")
    if isinstance(product, Mapping):
        product = product.get("_id")
    return normalize_value(product)


def cart_line_from_raw(raw: Any) -> CartLine:
    """
    Build a CartLine from a stored cart entry.

    Accepts ``productId`` or ``product`` (id string or product document),
    an ``attributes`` mapping, a legacy ``size`` and a ``quantity`` that is
    coerced to an integer of at least 1.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    quantity = as_num(raw.get("quantity"))
    variant_id = as_str(raw.get("variantId")).strip()

    return CartLine(
        product_id=_product_id(raw),
        attributes=merge_size_into_attributes(raw.get("size"), raw.get("attributes")),
        quantity=max(1, int(quantity)) if quantity is not None else 1,
        variant_id=variant_id or None,
    )
