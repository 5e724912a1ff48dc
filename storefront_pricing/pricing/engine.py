"""
Pricing Engine

Authoritative price resolution shared by list cards, the detail screen and
checkout.

Decision order (first applicable branch wins):
1. Definitive: no variant selected and the backend sent displayFinalPrice.
   Shown verbatim; still requires selection on variant products.
2. Variant product, nothing selected: "from" pricing off the product-level
   rollup. Display only, never used for totals.
3. Variant product, variant selected: the variant's own figures.
4. Simple product: the ``simple`` figures.

Backend figures always take precedence over client-side derivation. The
only derived number is the pre-discount "original" price,
merchant * (1 + markup / 100), and it only surfaces as a discount when the
backend flagged a discountPrice or the derived price exceeds the final one.

Every function here is total: absent numbers resolve to 0, nothing raises.
"""

from __future__ import annotations

import math

from ..common.config_loader import PricingSettings
from ..models import (
    SOURCE_DEFINITIVE,
    SOURCE_SIMPLE,
    SOURCE_VARIANT,
    Discount,
    DisplayPrice,
    NormalizedProduct,
    PriceBreakdown,
    ResolvedPrice,
    Variant,
)

_DEFAULT_SETTINGS = PricingSettings()


def _money(value: float) -> float:
    """Round to cents; keeps float noise out of discount comparisons."""
    return round(value, 2)


def _non_negative(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return max(0.0, _money(value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_discount(original: float, final: float) -> Discount | None:
    """
    Discount of ``final`` against ``original``.

    Returns:
        Discount, or None when nothing is saved
    """
    amount = _money(max(0.0, original - final))
    if not math.isfinite(amount) or amount <= 0:
        return None
    ratio = amount / original * 100 if original > 0 else 0.0
    if not math.isfinite(ratio):
        return None
    return Discount(amount=amount, percentage=_round_half_up(ratio))


def _original_price(
    merchant: float,
    markup: float | None,
    final: float,
    discount_price: float | None,
    settings: PricingSettings,
) -> float:
    """
    Pre-discount price; falls back to ``final`` so no discount is invented.

    Unlike the bare merchant * (1 + markup / 100) formula, an unknown final
    price (<= 0) or an overflowing derived price returns ``final`` itself.
    """
    if final <= 0:
        return final
    if markup is None:
        markup = settings.default_markup_percent
    normal = _money(merchant * (1 + markup / 100))
    if not math.isfinite(normal):
        return final
    if (discount_price is not None and discount_price > 0) or normal > final:
        return normal
    return final


def _definitive_price(product: NormalizedProduct, currency: str) -> ResolvedPrice:
    display = product.display_pricing
    final = _non_negative(display.final_price)
    original = final
    if display.original_price is not None and display.original_price >= final:
        original = _non_negative(display.original_price)

    discount = calculate_discount(original, final)
    if discount is not None and display.discount_percentage is not None:
        discount = Discount(amount=discount.amount, percentage=_round_half_up(display.discount_percentage))

    return ResolvedPrice(
        final=final,
        merchant=_non_negative(product.product_level_pricing.merchant_price),
        original=original,
        currency=currency,
        requires_selection=product.has_variants,
        source=SOURCE_DEFINITIVE,
        discount=discount,
    )


def _from_price(product: NormalizedProduct, currency: str, settings: PricingSettings) -> ResolvedPrice:
    rollup = product.product_level_pricing
    final = _non_negative(rollup.final_price)
    merchant = _non_negative(rollup.merchant_price)
    original = _original_price(merchant, rollup.nubian_markup, final, rollup.discount_price, settings)

    return ResolvedPrice(
        final=final,
        merchant=merchant,
        original=original,
        currency=currency,
        requires_selection=True,
        source=SOURCE_VARIANT,
        discount=calculate_discount(original, final),
    )


def _variant_price(variant: Variant, currency: str, settings: PricingSettings) -> ResolvedPrice:
    final = variant.final_price if variant.final_price is not None else variant.merchant_price
    if final is None or final <= 0:
        final = variant.price
    final = _non_negative(final)
    merchant = _non_negative(variant.merchant_price if variant.merchant_price > 0 else variant.price)
    original = _original_price(merchant, variant.nubian_markup, final, variant.discount_price, settings)

    return ResolvedPrice(
        final=final,
        merchant=merchant,
        original=original,
        currency=currency,
        requires_selection=False,
        source=SOURCE_VARIANT,
        discount=calculate_discount(original, final),
        breakdown=PriceBreakdown(
            merchant_price=_non_negative(variant.merchant_price),
            nubian_markup=variant.nubian_markup or 0.0,
            dynamic_markup=variant.dynamic_markup or 0.0,
            final_price=_non_negative(variant.final_price),
        ),
    )


def _simple_price(product: NormalizedProduct, currency: str, settings: PricingSettings) -> ResolvedPrice:
    simple = product.simple
    final = _non_negative(simple.final_price if simple.final_price is not None else simple.merchant_price)
    merchant = _non_negative(simple.merchant_price)
    original = _original_price(merchant, simple.nubian_markup, final, simple.discount_price, settings)

    breakdown = None
    if simple.final_price is not None:
        breakdown = PriceBreakdown(
            merchant_price=merchant,
            nubian_markup=simple.nubian_markup or 0.0,
            dynamic_markup=simple.dynamic_markup or 0.0,
            final_price=_non_negative(simple.final_price),
        )

    return ResolvedPrice(
        final=final,
        merchant=merchant,
        original=original,
        currency=currency,
        requires_selection=False,
        source=SOURCE_SIMPLE,
        discount=calculate_discount(original, final),
        breakdown=breakdown,
    )


def resolve_price(
    product: NormalizedProduct,
    selected_variant: Variant | None = None,
    currency: str | None = None,
    settings: PricingSettings | None = None,
) -> ResolvedPrice:
    """
    Resolve the price to display and charge.

    Args:
        product: Normalized product
        selected_variant: Variant chosen by the shopper (from match_variant)
        currency: Currency code passed through untouched
        settings: Pricing policy (built-in defaults if None)

    Returns:
        ResolvedPrice
    """
    settings = settings or _DEFAULT_SETTINGS
    currency = currency or settings.default_currency

    if selected_variant is None and product.display_pricing.final_price is not None:
        return _definitive_price(product, currency)
    if product.has_variants:
        if selected_variant is None:
            return _from_price(product, currency, settings)
        return _variant_price(selected_variant, currency, settings)
    return _simple_price(product, currency, settings)


def get_final_price(
    product: NormalizedProduct,
    variant: Variant | None = None,
    settings: PricingSettings | None = None,
) -> float:
    """Final unit price of the product (or chosen variant)."""
    return resolve_price(product, selected_variant=variant, settings=settings).final


def _positive(value: float | None) -> float:
    return value if value is not None and math.isfinite(value) and value > 0 else 0.0


def get_display_price(product: NormalizedProduct) -> DisplayPrice:
    """
    Cheap list-view price.

    Variant products show a "from" price: the rollup finalPrice, then the
    rollup merchantPrice, then the minimum positive price across variants.
    """
    if product.has_variants:
        price = _positive(product.product_level_pricing.final_price)
        if price <= 0:
            price = _positive(product.product_level_pricing.merchant_price)
        if price <= 0:
            candidates = [
                _positive(v.final_price if v.final_price is not None else v.merchant_price)
                for v in product.variants
            ]
            candidates = [p for p in candidates if p > 0]
            if candidates:
                price = min(candidates)
        return DisplayPrice(price=_money(price), is_from=True)

    price = _positive(product.simple.final_price)
    if price <= 0:
        price = _positive(product.simple.merchant_price)
    return DisplayPrice(price=_money(price), is_from=False)
