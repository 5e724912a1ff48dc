"""
Tests for storefront_pricing/pricing/engine.py

Covers the four resolution branches in order of precedence:
1. Definitive server display price
2. Variant product without a selection ("from" pricing)
3. Variant product with a selected variant
4. Simple product
"""

import math

import pytest

from storefront_pricing.catalog.normalizer import normalize_product
from storefront_pricing.catalog.variants import match_variant
from storefront_pricing.common.config_loader import PricingSettings
from storefront_pricing.models import Discount, PriceBreakdown, Variant
from storefront_pricing.pricing.engine import (
    calculate_discount,
    get_display_price,
    get_final_price,
    resolve_price,
)


class TestCalculateDiscount:
    def test_discount(self):
        assert calculate_discount(1000, 800) == Discount(amount=200, percentage=20)

    def test_no_discount(self):
        assert calculate_discount(100, 100) is None
        assert calculate_discount(90, 100) is None

    def test_percentage_rounds_half_up(self):
        assert calculate_discount(200, 199).percentage == 1  # 0.5%

    def test_float_noise_is_not_a_discount(self):
        assert calculate_discount(2750.0000000000005, 2750) is None

    @pytest.mark.parametrize("original,final", [(math.inf, 1), (math.inf, math.inf), (1.7e308, -1.7e308)])
    def test_non_finite_is_not_a_discount(self, original, final):
        assert calculate_discount(original, final) is None


class TestSimpleProduct:
    def test_resolves_simple_pricing(self, simple_product):
        result = resolve_price(simple_product)
        assert result.final == 1100
        assert result.merchant == 1000
        assert result.original == 1100
        assert result.requires_selection is False
        assert result.source == "simple"
        assert result.discount is None
        assert result.breakdown == PriceBreakdown(merchant_price=1000, nubian_markup=10, dynamic_markup=0,
                                                  final_price=1100)

    def test_default_currency(self, simple_product):
        assert resolve_price(simple_product).currency == "USD"
        assert resolve_price(simple_product, currency="SDG").currency == "SDG"

    def test_discount_price_exposes_markup_original(self):
        product = normalize_product({"merchantPrice": 1000, "finalPrice": 900, "discountPrice": 900})
        result = resolve_price(product)
        assert result.original == 1100
        assert result.discount == Discount(amount=200, percentage=18)

    def test_negative_dynamic_markup_shows_discount(self):
        product = normalize_product({"merchantPrice": 100, "finalPrice": 105, "nubianMarkup": 20})
        result = resolve_price(product)
        assert result.original == 120
        assert result.discount == Discount(amount=15, percentage=13)

    def test_no_final_price_falls_back_to_merchant(self):
        product = normalize_product({"merchantPrice": 500})
        result = resolve_price(product)
        assert result.final == 500
        assert result.original == 550
        assert result.breakdown is None

    def test_empty_product_is_zero(self):
        result = resolve_price(normalize_product({}))
        assert result.final == 0
        assert result.merchant == 0
        assert result.original == 0
        assert result.discount is None

    def test_markup_setting_replaces_default(self):
        product = normalize_product({"merchantPrice": 100, "finalPrice": 100})
        result = resolve_price(product, settings=PricingSettings(default_markup_percent=25))
        assert result.original == 125
        assert result.discount.percentage == 20


class TestVariantProduct:
    def test_requires_selection_without_variant(self, variant_product):
        result = resolve_price(variant_product)
        assert result.source == "variant"
        assert result.requires_selection is True
        assert result.breakdown is None

    def test_selected_variant(self, variant_product):
        result = resolve_price(variant_product, selected_variant=variant_product.variants[1])
        assert result.final == 2750
        assert result.merchant == 2500
        assert result.original == 2750
        assert result.requires_selection is False
        assert result.source == "variant"
        assert result.discount is None
        assert result.breakdown == PriceBreakdown(merchant_price=2500, nubian_markup=0, dynamic_markup=0,
                                                  final_price=2750)

    def test_from_price_uses_product_rollup(self, matrix_product):
        result = resolve_price(matrix_product)
        assert result.final == 110
        assert result.merchant == 90
        assert result.original == 110  # 90 * 1.1 = 99, below final
        assert result.requires_selection is True

    def test_from_price_without_rollup_is_zero(self, variant_product):
        result = resolve_price(variant_product)
        assert result.final == 0
        assert result.discount is None

    def test_from_price_missing_final_invents_no_discount(self):
        product = normalize_product({"merchantPrice": 100, "variants": [{"stock": 1}]})
        result = resolve_price(product)
        assert result.final == 0
        assert result.discount is None

    def test_variant_legacy_price_fallback(self):
        product = normalize_product({"variants": [{"_id": "v", "price": 40, "stock": 1}]})
        result = resolve_price(product, selected_variant=product.variants[0])
        assert result.final == 40
        assert result.merchant == 40

    def test_variant_discount(self):
        product = normalize_product({"variants": [
            {"_id": "v", "merchantPrice": 200, "finalPrice": 180, "discountPrice": 180, "nubianMarkup": 15,
             "stock": 1},
        ]})
        result = resolve_price(product, selected_variant=product.variants[0])
        assert result.original == 230
        assert result.discount == Discount(amount=50, percentage=22)
        assert result.breakdown.nubian_markup == 15

    def test_selected_variant_on_simple_product_is_ignored(self, simple_product):
        result = resolve_price(simple_product, selected_variant=Variant(final_price=1, stock=1))
        assert result.source == "simple"
        assert result.final == 1100

    def test_matched_variant_feeds_pricing(self, matrix_product):
        variant = match_variant(matrix_product, {"size": "S", "color": "Red"})
        assert resolve_price(matrix_product, selected_variant=variant).final == 120


class TestDefinitivePrice:
    @pytest.fixture
    def definitive_product(self, raw_matrix_product):
        raw = dict(raw_matrix_product, displayFinalPrice=95, displayOriginalPrice=125, displayDiscountPercentage=24)
        return normalize_product(raw)

    def test_used_verbatim(self, definitive_product):
        result = resolve_price(definitive_product)
        assert result.source == "definitive"
        assert result.final == 95
        assert result.original == 125
        assert result.discount == Discount(amount=30, percentage=24)
        assert result.requires_selection is True

    def test_selected_variant_overrides_display_price(self, definitive_product):
        variant = match_variant(definitive_product, {"size": "M", "color": "Blue"})
        result = resolve_price(definitive_product, selected_variant=variant)
        assert result.source == "variant"
        assert result.final == 110

    def test_simple_product_does_not_require_selection(self):
        product = normalize_product({"finalPrice": 10, "displayFinalPrice": 9})
        result = resolve_price(product)
        assert result.source == "definitive"
        assert result.requires_selection is False
        assert result.original == 9
        assert result.discount is None

    def test_original_below_final_ignored(self):
        product = normalize_product({"displayFinalPrice": 50, "displayOriginalPrice": 40})
        result = resolve_price(product)
        assert result.original == 50
        assert result.discount is None


class TestTotality:
    @pytest.mark.parametrize("raw", [
        {"finalPrice": -50},
        {"merchantPrice": -10, "finalPrice": -1},
        {"displayFinalPrice": -3},
        {"variants": [{"finalPrice": -5, "stock": 1}], "finalPrice": -7},
    ])
    def test_never_negative(self, raw):
        product = normalize_product(raw)
        for variant in (None, *product.variants):
            result = resolve_price(product, selected_variant=variant)
            assert result.final >= 0
            assert result.discount is None or result.discount.amount > 0

    def test_overflowing_markup_keeps_final(self):
        product = normalize_product({"merchantPrice": 1.7e308, "finalPrice": 1})
        result = resolve_price(product)
        assert result.final == 1
        assert result.original == 1
        assert result.discount is None

    def test_overflowing_rollup_markup(self):
        product = normalize_product({"merchantPrice": 1.7e308, "finalPrice": 1,
                                     "variants": [{"finalPrice": 5, "stock": 1}]})
        result = resolve_price(product)
        assert result.original == 1
        assert result.discount is None

    def test_get_final_price(self, matrix_product, simple_product):
        assert get_final_price(simple_product) == 1100
        assert get_final_price(matrix_product, matrix_product.variants[1]) == 115


class TestGetDisplayPrice:
    def test_simple_product(self, simple_product):
        display = get_display_price(simple_product)
        assert display.price == 1100
        assert display.is_from is False

    def test_variant_rollup(self, matrix_product):
        display = get_display_price(matrix_product)
        assert display.price == 110
        assert display.is_from is True

    def test_variant_minimum_when_no_rollup(self, variant_product):
        # Minimum over all variants, including out-of-stock M
        assert get_display_price(variant_product).price == 2200

    def test_rollup_merchant_fallback(self):
        product = normalize_product({"merchantPrice": 70, "variants": [{"finalPrice": 60, "stock": 1}]})
        assert get_display_price(product).price == 70

    def test_rollup_final_ignores_server_display_price(self, raw_matrix_product):
        product = normalize_product(dict(raw_matrix_product, displayFinalPrice=95))
        assert get_display_price(product).price == 110

    def test_simple_ignores_server_display_price(self):
        product = normalize_product({"finalPrice": 40, "displayFinalPrice": 35})
        assert get_display_price(product).price == 40

    def test_zero_priced_variants_skipped(self):
        product = normalize_product({"variants": [{"finalPrice": 0, "stock": 1}, {"merchantPrice": 30}]})
        assert get_display_price(product).price == 30

    def test_nothing_priced(self):
        assert get_display_price(normalize_product({"variants": [{}]})).price == 0
        assert get_display_price(normalize_product({})).price == 0
