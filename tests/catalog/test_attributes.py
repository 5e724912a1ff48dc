"""Tests for storefront_pricing/catalog/attributes.py"""

import pytest

from storefront_pricing.catalog.attributes import (
    get_attribute_options,
    is_option_available,
    normalize_selected_attributes,
    same_value,
    validate_required_attributes,
)
from storefront_pricing.catalog.normalizer import normalize_product


class TestNormalizeSelectedAttributes:
    def test_keys_lowercased_values_trimmed(self):
        assert normalize_selected_attributes({" Size ": " M ", "COLOR": "Red"}) == {"size": "M", "color": "Red"}

    @pytest.mark.parametrize("value", ["", "  ", None, "null", "undefined", "NULL"])
    def test_placeholder_values_dropped(self, value):
        assert normalize_selected_attributes({"size": value}) == {}

    @pytest.mark.parametrize("value", [None, "size=M", ["size", "M"], 3])
    def test_non_mapping_is_empty(self, value):
        assert normalize_selected_attributes(value) == {}


class TestSameValue:
    def test_case_insensitive(self):
        assert same_value("XL", "xl")
        assert same_value(" Red", "red ")

    def test_empty_never_equal(self):
        assert not same_value("", "")
        assert not same_value(None, "M")


class TestGetAttributeOptions:
    def test_only_selectable_variants_contribute(self, variant_product):
        # M is out of stock, so it is not offered even though the definition lists it
        assert get_attribute_options(variant_product) == {"size": ["L"]}

    def test_matrix_options(self, matrix_product):
        options = get_attribute_options(matrix_product)
        assert options["size"] == ["S", "M"]
        assert options["color"] == ["Red", "Blue"]

    def test_definition_order_kept(self):
        product = normalize_product({
            "attributes": [{"name": "size", "options": ["L", "M"]}],
            "variants": [
                {"attributes": {"size": "m"}, "stock": 1},
                {"attributes": {"size": "L"}, "stock": 1},
            ],
        })
        assert get_attribute_options(product) == {"size": ["L", "M"]}

    def test_undeclared_variant_attribute_supplements(self):
        product = normalize_product({
            "attributes": [{"name": "size", "options": ["M"]}],
            "variants": [{"attributes": {"size": "M", "material": "Cotton"}, "stock": 1}],
        })
        assert get_attribute_options(product) == {"size": ["M"], "material": ["Cotton"]}

    def test_simple_product_keeps_defined_options(self):
        product = normalize_product({"attributes": [{"name": "Engraving", "type": "text", "options": ["Yes", "No"]}]})
        assert get_attribute_options(product) == {"engraving": ["Yes", "No"]}

    def test_no_selectable_variants_keeps_keys(self):
        product = normalize_product({
            "attributes": [{"name": "size", "options": ["M"]}],
            "variants": [{"attributes": {"size": "M"}, "stock": 0}],
        })
        assert get_attribute_options(product) == {"size": []}


class TestIsOptionAvailable:
    def test_simple_product_always_available(self, simple_product):
        assert is_option_available(simple_product, "size", "anything", {}) is True

    def test_out_of_stock_option(self, variant_product):
        assert is_option_available(variant_product, "size", "M", {}) is False
        assert is_option_available(variant_product, "Size", "l", {}) is True

    def test_narrowing_by_other_selection(self, matrix_product):
        # Only v3 (M/Blue) sells Blue
        assert is_option_available(matrix_product, "color", "Blue", {"size": "M"}) is True
        assert is_option_available(matrix_product, "color", "Blue", {"size": "S"}) is False

    def test_widening_when_conflict_cleared(self, matrix_product):
        assert is_option_available(matrix_product, "size", "S", {"color": "Blue"}) is False
        assert is_option_available(matrix_product, "size", "S", {}) is True
        assert is_option_available(matrix_product, "size", "S", {"color": ""}) is True

    def test_own_key_in_selection_is_ignored(self, matrix_product):
        assert is_option_available(matrix_product, "size", "S", {"size": "M", "color": "Red"}) is True

    def test_inactive_variant_excluded(self, matrix_product):
        # L/Red exists but is inactive; L/Blue exists but has no stock
        assert is_option_available(matrix_product, "size", "L", {}) is False

    def test_empty_option_value(self, matrix_product):
        assert is_option_available(matrix_product, "size", "", {}) is False


class TestValidateRequiredAttributes:
    def test_missing_reported_by_display_name(self, matrix_product):
        result = validate_required_attributes(matrix_product, {"size": "M"})
        assert result.valid is False
        assert result.missing == ["Colour"]

    def test_complete_selection(self, matrix_product):
        result = validate_required_attributes(matrix_product, {"Size": "M", "color": "Red"})
        assert result.valid is True
        assert result.missing == []

    def test_no_definitions(self, simple_product):
        assert validate_required_attributes(simple_product, None).valid is True
