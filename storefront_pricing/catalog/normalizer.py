"""
Product Normalizer

Converts a loosely-typed backend product document into a NormalizedProduct.
This is the only place that reads the raw payload shape; everything
downstream works on the normalized dataclasses.

Normalization never raises. Every field degrades to a safe fallback
("", False, empty tuple, None or 0) so a malformed payload still yields an
inert, renderable product.

Variant attributes arrive in several shapes and are decoded by shape:
  - sequence: [{"name": "Size", "value": "XL"}, ...] entries (also key/attr
    and val/option/label), or bare strings when exactly one attribute
    definition exists
  - mapping:  {"Size": "XL"} (any Mapping, including already-normalized dicts)
  - scalar:   "XL" when exactly one attribute definition exists
Anything else decodes to an empty mapping.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Callable

from ..common.constants import ATTRIBUTE_TYPES, DEFAULT_ATTRIBUTE_TYPE
from ..models import (
    AttributeDef,
    DisplayPricing,
    NormalizedProduct,
    ProductLevelPricing,
    SimplePricing,
    Variant,
)

logger = logging.getLogger(__name__)

_ENTRY_KEY_FIELDS = ("name", "key", "attr")
_ENTRY_VALUE_FIELDS = ("value", "val", "option", "label")


# ── Scalar coercion ──────────────────────────────────────────────────────────

def as_str(value: Any) -> str:
    """Coerce to string; None becomes ""."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def as_bool(value: Any, fallback: bool = False) -> bool:
    """Return value if it is a real bool, else the fallback."""
    return value if isinstance(value, bool) else fallback


def as_num(value: Any) -> float | None:
    """
    Coerce to a finite float.

    Returns None (not 0) for missing, non-numeric or non-finite input so
    callers can tell "absent" from "explicitly zero".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def as_str_tuple(value: Any) -> tuple[str, ...]:
    """Coerce a list of values to a tuple of non-empty strings."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(s for s in (as_str(item) for item in value) if s)


def normalize_key(key: Any) -> str:
    """Attribute keys are compared as trimmed lower-case strings."""
    return as_str(key).strip().lower()


def normalize_value(value: Any) -> str:
    return as_str(value).strip()


def _first_present(entry: Mapping, fields: tuple[str, ...]) -> Any:
    for name in fields:
        if entry.get(name) is not None:
            return entry[name]
    return None


def _is_active(value: Any) -> bool:
    # Only an explicit False deactivates
    return value is not False


# ── Attribute shape decoding ─────────────────────────────────────────────────

def _single_def_key(attr_defs: tuple[AttributeDef, ...]) -> str:
    """Name of the lone attribute definition, or "" when ambiguous."""
    if len(attr_defs) != 1:
        return ""
    return normalize_key(attr_defs[0].name)


def _decode_sequence(attrs: Any, attr_defs: tuple[AttributeDef, ...]) -> dict[str, str]:
    out: dict[str, str] = {}
    lone_key = _single_def_key(attr_defs)
    for entry in attrs:
        if isinstance(entry, Mapping):
            key = normalize_key(_first_present(entry, _ENTRY_KEY_FIELDS))
            val = normalize_value(_first_present(entry, _ENTRY_VALUE_FIELDS))
        elif isinstance(entry, str):
            if not lone_key:
                logger.debug("Dropping bare attribute value %r: %d attribute definitions", entry, len(attr_defs))
                continue
            key, val = lone_key, normalize_value(entry)
        else:
            continue
        if key and val:
            out[key] = val
    return out


def _decode_mapping(attrs: Any, attr_defs: tuple[AttributeDef, ...]) -> dict[str, str]:
    out: dict[str, str] = {}
    for raw_key, raw_val in attrs.items():
        key = normalize_key(raw_key)
        val = normalize_value(raw_val)
        if key and val:
            out[key] = val
    return out


def _decode_scalar(attrs: Any, attr_defs: tuple[AttributeDef, ...]) -> dict[str, str]:
    lone_key = _single_def_key(attr_defs)
    val = normalize_value(attrs)
    if not lone_key:
        logger.debug("Dropping bare attribute value %r: %d attribute definitions", attrs, len(attr_defs))
        return {}
    return {lone_key: val} if val else {}


_DECODERS: dict[str, Callable[[Any, tuple[AttributeDef, ...]], dict[str, str]]] = {
    "sequence": _decode_sequence,
    "mapping": _decode_mapping,
    "scalar": _decode_scalar,
}


def attribute_shape(attrs: Any) -> str | None:
    """Classify a raw attribute payload: "sequence", "mapping", "scalar" or None."""
    if isinstance(attrs, (list, tuple)):
        return "sequence"
    if isinstance(attrs, Mapping):
        return "mapping"
    if isinstance(attrs, str):
        return "scalar"
    return None


def normalize_variant_attributes(
    attrs: Any,
    attr_defs: tuple[AttributeDef, ...] = (),
) -> dict[str, str]:
    """
    Decode raw variant attributes into {lower-case key: trimmed value}.

    Args:
        attrs: Raw attributes in any supported shape
        attr_defs: Normalized attribute definitions of the product; used
            only to name bare string values when exactly one exists

    Returns:
        Attribute mapping (empty for unsupported shapes)
    """
    if not attrs:
        return {}
    shape = attribute_shape(attrs)
    if shape is None:
        logger.debug("Unsupported attribute payload type %s", type(attrs).__name__)
        return {}
    return _DECODERS[shape](attrs, attr_defs)


# ── Records ──────────────────────────────────────────────────────────────────

def _get(raw: Any, key: str) -> Any:
    return raw.get(key) if isinstance(raw, Mapping) else None


def normalize_attribute_def(raw: Any) -> AttributeDef:
    attr_type = as_str(_get(raw, "type")).strip().lower()
    options: list[str] = []
    for opt in as_str_tuple(_get(raw, "options")):
        opt = opt.strip()
        if opt and opt not in options:
            options.append(opt)
    return AttributeDef(
        id=as_str(_get(raw, "_id")),
        name=normalize_key(_get(raw, "name")),
        display_name=normalize_value(_get(raw, "displayName")),
        type=attr_type if attr_type in ATTRIBUTE_TYPES else DEFAULT_ATTRIBUTE_TYPE,
        required=as_bool(_get(raw, "required"), False),
        options=tuple(options),
    )


def normalize_variant(raw: Any, attr_defs: tuple[AttributeDef, ...] = ()) -> Variant:
    merchant_price = as_num(_get(raw, "merchantPrice"))
    legacy_price = as_num(_get(raw, "price"))
    stock = as_num(_get(raw, "stock"))
    return Variant(
        id=as_str(_get(raw, "_id")),
        sku=as_str(_get(raw, "sku")),
        attributes=normalize_variant_attributes(_get(raw, "attributes"), attr_defs),
        merchant_price=merchant_price if merchant_price is not None else 0.0,
        price=next((p for p in (legacy_price, merchant_price) if p is not None), 0.0),
        nubian_markup=as_num(_get(raw, "nubianMarkup")),
        dynamic_markup=as_num(_get(raw, "dynamicMarkup")),
        final_price=as_num(_get(raw, "finalPrice")),
        discount_price=as_num(_get(raw, "discountPrice")),
        stock=stock if stock is not None else 0.0,
        images=as_str_tuple(_get(raw, "images")),
        is_active=_is_active(_get(raw, "isActive")),
    )


def _category(raw: Any) -> tuple[str, str | None]:
    category = _get(raw, "category")
    if isinstance(category, str):
        return category, None
    if isinstance(category, Mapping):
        return as_str(category.get("_id")), as_str(category.get("name")) or None
    return "", None


def normalize_product(raw: Any) -> NormalizedProduct:
    """
    Normalize a raw backend product document.

    Whether the product "has variants" is decided once, by a non-empty raw
    ``variants`` array. Variant products get all-None ``simple`` pricing.

    Args:
        raw: Backend product document (dict). An already-normalized
            NormalizedProduct is returned unchanged.

    Returns:
        NormalizedProduct
    """
    if isinstance(raw, NormalizedProduct):
        return raw
    if not isinstance(raw, Mapping):
        logger.debug("Product payload is %s, not a mapping", type(raw).__name__)
        raw = {}

    raw_defs = raw.get("attributes")
    attribute_defs = tuple(
        normalize_attribute_def(d) for d in raw_defs
    ) if isinstance(raw_defs, (list, tuple)) else ()

    raw_variants = raw.get("variants")
    variants = tuple(
        normalize_variant(v, attribute_defs) for v in raw_variants
    ) if isinstance(raw_variants, (list, tuple)) else ()

    merchant_price = as_num(raw.get("merchantPrice"))
    if merchant_price is None:
        merchant_price = as_num(raw.get("price"))
    final_price = as_num(raw.get("finalPrice"))
    nubian_markup = as_num(raw.get("nubianMarkup"))
    dynamic_markup = as_num(raw.get("dynamicMarkup"))
    discount_price = as_num(raw.get("discountPrice"))

    if variants:
        simple = SimplePricing()
    else:
        simple = SimplePricing(
            stock=as_num(raw.get("stock")),
            merchant_price=merchant_price,
            final_price=final_price,
            nubian_markup=nubian_markup,
            dynamic_markup=dynamic_markup,
            discount_price=discount_price,
        )

    category_id, category_name = _category(raw)
    merchant = raw.get("merchant")
    if isinstance(merchant, Mapping):
        merchant = merchant.get("_id")
    deleted_at = raw.get("deletedAt")

    return NormalizedProduct(
        id=as_str(raw.get("_id")),
        name=as_str(raw.get("name")),
        description=as_str(raw.get("description")),
        is_active=_is_active(raw.get("isActive")),
        deleted_at=as_str(deleted_at) if deleted_at else None,
        category_id=category_id,
        category_name=category_name,
        merchant_id=None if merchant is None else as_str(merchant),
        images=as_str_tuple(raw.get("images")),
        attribute_defs=attribute_defs,
        variants=variants,
        simple=simple,
        product_level_pricing=ProductLevelPricing(
            merchant_price=merchant_price,
            final_price=final_price,
            nubian_markup=nubian_markup,
            dynamic_markup=dynamic_markup,
            discount_price=discount_price,
        ),
        display_pricing=DisplayPricing(
            final_price=as_num(raw.get("displayFinalPrice")),
            original_price=as_num(raw.get("displayOriginalPrice")),
            discount_percentage=as_num(raw.get("displayDiscountPercentage")),
        ),
    )


def to_payload(product: NormalizedProduct) -> dict[str, Any]:
    """
    Render a NormalizedProduct back into the backend document shape.

    Used to persist product snapshots next to the cart. Feeding the result
    to normalize_product() yields an equal product.
    """
    pricing = product.product_level_pricing
    payload: dict[str, Any] = {
        "_id": product.id,
        "name": product.name,
        "description": product.description,
        "isActive": product.is_active,
        "deletedAt": product.deleted_at,
        "category": (
            {"_id": product.category_id, "name": product.category_name}
            if product.category_name else product.category_id
        ),
        "merchant": product.merchant_id,
        "images": list(product.images),
        "attributes": [
            {
                "_id": d.id,
                "name": d.name,
                "displayName": d.display_name,
                "type": d.type,
                "required": d.required,
                "options": list(d.options),
            }
            for d in product.attribute_defs
        ],
        "variants": [
            {
                "_id": v.id,
                "sku": v.sku,
                "attributes": dict(v.attributes),
                "merchantPrice": v.merchant_price,
                "price": v.price,
                "nubianMarkup": v.nubian_markup,
                "dynamicMarkup": v.dynamic_markup,
                "finalPrice": v.final_price,
                "discountPrice": v.discount_price,
                "stock": v.stock,
                "images": list(v.images),
                "isActive": v.is_active,
            }
            for v in product.variants
        ],
        "merchantPrice": pricing.merchant_price,
        "finalPrice": pricing.final_price,
        "nubianMarkup": pricing.nubian_markup,
        "dynamicMarkup": pricing.dynamic_markup,
        "discountPrice": pricing.discount_price,
        "displayFinalPrice": product.display_pricing.final_price,
        "displayOriginalPrice": product.display_pricing.original_price,
        "displayDiscountPercentage": product.display_pricing.discount_percentage,
    }
    if not product.variants:
        payload["stock"] = product.simple.stock
    return payload
