"""
Cart Validator

Re-validates cart lines against a fresh product snapshot and computes the
authoritative cart total.

Line rules (all lines are checked, errors accumulate):
  - the product must exist, be active and not soft-deleted
  - the product must have backend variants (simple products are not
    purchasable through the cart unless settings allow it)
  - the line's attributes must resolve to a variant, and that variant
    must be selectable (active, stock > 0)
  - quantity must be at least 1

A line's cached variant id is never trusted; the variant is always
re-derived from the attributes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..catalog.guards import get_simple_product_stock, has_backend_variants, is_product_active
from ..catalog.normalizer import as_num
from ..catalog.variants import find_any_variant, match_variant
from ..common.config_loader import PricingSettings
from ..models import CartLine, CartValidationResult, NormalizedProduct
from ..pricing.engine import get_final_price

logger = logging.getLogger(__name__)

_DEFAULT_SETTINGS = PricingSettings()


class CartValidator:
    """
    Validates cart lines against the latest product snapshot.

    Usage:
        validator = CartValidator(lines, products_by_id)
        result = validator.validate()
        if not result.valid:
            show(result.errors)
        validator.resolved_variant_ids  # {line index: variant id}
    """

    def __init__(
        self,
        lines: Iterable[CartLine],
        products_by_id: Mapping[str, NormalizedProduct],
        settings: PricingSettings | None = None,
    ) -> None:
        self.lines = list(lines)
        self.products_by_id = products_by_id
        self.settings = settings or _DEFAULT_SETTINGS
        self.resolved_variant_ids: dict[int, str] = {}

    def validate(self) -> CartValidationResult:
        """Check every line. Returns valid=False with all error messages if any fail."""
        errors: list[str] = []
        self.resolved_variant_ids = {}

        for index, line in enumerate(self.lines):
            error = self._check_line(index, line)
            if error:
                logger.debug("Cart line %d rejected: %s", index, error)
                errors.append(error)

        return CartValidationResult(valid=not errors, errors=errors)

    def _check_line(self, index: int, line: CartLine) -> str | None:
        product_id = line.product_id
        product = self.products_by_id.get(product_id)

        if not is_product_active(product):
            return f"Product unavailable: {product_id}"

        if not has_backend_variants(product):
            if self.settings.require_variants_for_cart:
                return f"Product has no variants (not purchasable): {product_id}"
            if get_simple_product_stock(product) <= 0:
                return f"Product out of stock: {product_id}"
            return self._check_quantity(line)

        variant = match_variant(product, line.attributes)
        if variant is None:
            if find_any_variant(product, line.attributes) is not None:
                return f"Variant out of stock/inactive: {product_id}"
            return f"Variant not found: {product_id}"

        if line.variant_id and line.variant_id != variant.id:
            logger.debug(
                "Cart line %d cached variant %s re-derived as %s", index, line.variant_id, variant.id
            )
        self.resolved_variant_ids[index] = variant.id
        return self._check_quantity(line)

    @staticmethod
    def _check_quantity(line: CartLine) -> str | None:
        if isinstance(line.quantity, bool) or not isinstance(line.quantity, int) or line.quantity < 1:
            return f"Invalid quantity {line.quantity!r}: {line.product_id}"
        return None


def validate_cart(
    lines: Iterable[CartLine],
    products_by_id: Mapping[str, NormalizedProduct],
    settings: PricingSettings | None = None,
) -> CartValidationResult:
    """Validate cart lines; see CartValidator."""
    return CartValidator(lines, products_by_id, settings).validate()


def _line_quantity(line: CartLine) -> int:
    quantity = as_num(line.quantity)
    if quantity is None:
        return 1
    return max(1, int(quantity))


def get_cart_total(
    lines: Iterable[CartLine],
    products_by_id: Mapping[str, NormalizedProduct],
    settings: PricingSettings | None = None,
) -> float:
    """
    Sum authoritative line totals.

    Lines whose product is missing from the snapshot, or whose selection no
    longer resolves to a selectable variant, contribute 0.
    """
    total = 0.0
    for line in lines:
        product = products_by_id.get(line.product_id)
        if product is None:
            logger.debug("Cart total skips missing product %s", line.product_id)
            continue

        variant = None
        if product.has_variants:
            variant = match_variant(product, line.attributes)
            if variant is None:
                logger.debug("Cart total skips unresolved selection for %s", line.product_id)
                continue

        total += get_final_price(product, variant, settings) * _line_quantity(line)

    return round(total, 2)
