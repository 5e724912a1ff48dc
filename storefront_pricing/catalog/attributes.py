"""
Attribute Selector

Derives the selectable attribute options of a product and answers whether
a given option is still choosable under the shopper's other selections
("grey out incompatible combinations").

Selectable variants are the ground truth for purchasability. Attribute
definitions only name the dimensions and order their options.

Attribute values keep their backend spelling but compare case-insensitively,
so a selection of {"size": "xl"} agrees with a variant carrying "XL".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..common.constants import EMPTY_SELECTION_VALUES
from ..models import AttributeValidationResult, NormalizedProduct, Variant
from .guards import selectable_variants
from .normalizer import normalize_key, normalize_value


def normalize_selected_attributes(selection: Any) -> dict[str, str]:
    """
    Normalize a shopper selection to {lower-case key: trimmed value}.

    Empty values and the placeholder strings "null"/"undefined" count as
    "not chosen" and are dropped. Non-mapping input gives {}.
    """
    if not isinstance(selection, Mapping):
        return {}
    out: dict[str, str] = {}
    for raw_key, raw_val in selection.items():
        key = normalize_key(raw_key)
        val = "" if raw_val is None else normalize_value(raw_val)
        if key and val.lower() not in EMPTY_SELECTION_VALUES:
            out[key] = val
    return out


def same_value(a: str | None, b: str | None) -> bool:
    """Case-insensitive equality of two non-empty attribute values."""
    if not a or not b:
        return False
    return a.strip().casefold() == b.strip().casefold()


def variant_matches(variant: Variant, selection: Mapping[str, str], skip_key: str = "") -> bool:
    """True if the variant agrees with every selected attribute except ``skip_key``."""
    attrs = variant.attributes
    for key, val in selection.items():
        if key == skip_key:
            continue
        if not same_value(attrs.get(key), val):
            return False
    return True


def _add_option(bucket: list[str], value: str) -> None:
    if value and not any(same_value(value, existing) for existing in bucket):
        bucket.append(value)


def get_attribute_options(product: NormalizedProduct) -> dict[str, list[str]]:
    """
    Map each attribute name to its choosable option values.

    Definitions come first and fix option order. For variant products a
    defined option is kept only if some selectable variant carries it, and
    values seen on selectable variants are appended. Variant-less products
    have nothing to cross-check, so their defined options are kept as-is.
    """
    live = selectable_variants(product)
    options: dict[str, list[str]] = {}

    for attr_def in product.attribute_defs:
        key = normalize_key(attr_def.name)
        if not key:
            continue
        bucket = options.setdefault(key, [])
        for opt in attr_def.options:
            value = normalize_value(opt)
            if product.has_variants and not any(same_value(v.attributes.get(key), value) for v in live):
                continue
            _add_option(bucket, value)

    for variant in live:
        for raw_key, raw_val in variant.attributes.items():
            key = normalize_key(raw_key)
            if key:
                _add_option(options.setdefault(key, []), normalize_value(raw_val))

    return options


def is_option_available(
    product: NormalizedProduct,
    attr_name: str,
    option_value: str,
    current_selection: Mapping[str, Any] | None = None,
) -> bool:
    """
    Check whether an attribute option can still be chosen.

    An option is available if at least one selectable variant carries
    ``attr_name=option_value`` AND matches every other current selection.
    Simple (variant-less) products always return True.
    """
    if not product.has_variants:
        return True

    key = normalize_key(attr_name)
    value = normalize_value(option_value)
    if not key or not value:
        return False

    selection = normalize_selected_attributes(current_selection)
    return any(
        same_value(v.attributes.get(key), value) and variant_matches(v, selection, skip_key=key)
        for v in selectable_variants(product)
    )


def validate_required_attributes(
    product: NormalizedProduct,
    selection: Mapping[str, Any] | None,
) -> AttributeValidationResult:
    """List required attribute definitions that the selection leaves empty."""
    chosen = normalize_selected_attributes(selection)
    missing = [
        d.display_name or d.name
        for d in product.attribute_defs
        if d.required and d.name and d.name not in chosen
    ]
    return AttributeValidationResult(valid=not missing, missing=missing)
