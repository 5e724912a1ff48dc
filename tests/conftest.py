"""Shared test fixtures."""

import pytest

from storefront_pricing.catalog import normalize_product


@pytest.fixture
def raw_simple_product():
    """Backend document for a variant-less product."""
    return {
        "_id": "p-simple",
        "name": "Simple Item",
        "description": "desc",
        "isActive": True,
        "category": {"_id": "cat1", "name": "Home"},
        "merchant": "merch1",
        "images": ["https://cdn.example.com/a.jpg", ""],
        "attributes": [],
        "variants": [],
        "stock": 10,
        "merchantPrice": 1000,
        "finalPrice": 1100,
        "nubianMarkup": 10,
        "dynamicMarkup": 0,
    }


@pytest.fixture
def raw_variant_product():
    """Backend document with a size dimension; M is out of stock."""
    return {
        "_id": "p-variant",
        "name": "Variant Item",
        "description": "desc",
        "category": "cat1",
        "merchant": "merch1",
        "attributes": [
            {"_id": "a1", "name": " Size ", "displayName": "Size", "type": "select",
             "required": True, "options": ["M", "L"]},
        ],
        "variants": [
            {"_id": "v-m", "sku": "SKU-M", "attributes": {"size": "M"},
             "merchantPrice": 2000, "finalPrice": 2200, "stock": 0, "isActive": True},
            {"_id": "v-l", "sku": "SKU-L", "attributes": {"size": "L"},
             "merchantPrice": 2500, "finalPrice": 2750, "stock": 5, "isActive": True},
        ],
    }


@pytest.fixture
def raw_matrix_product():
    """Backend document with size x color variants delivered in mixed shapes."""
    return {
        "_id": "p-matrix",
        "name": "Matrix Tee",
        "attributes": [
            {"_id": "a1", "name": "size", "displayName": "Size", "required": True, "options": ["S", "M", "L"]},
            {"_id": "a2", "name": "Color", "displayName": "Colour", "required": True,
             "options": ["Red", "Blue", "Green"]},
        ],
        "variants": [
            {"_id": "v1", "attributes": [{"name": "Size", "value": "S"}, {"name": "Color", "value": "Red"}],
             "merchantPrice": 100, "finalPrice": 120, "stock": 3},
            {"_id": "v2", "attributes": {"SIZE": "M", "color": "Red"},
             "merchantPrice": 100, "finalPrice": 115, "stock": 2},
            {"_id": "v3", "attributes": [{"key": "size", "val": "M"}, {"attr": "color", "option": "Blue"}],
             "merchantPrice": 90, "finalPrice": 110, "stock": 4},
            {"_id": "v4", "attributes": {"size": "L", "color": "Blue"},
             "merchantPrice": 80, "finalPrice": 95, "stock": 0},
            {"_id": "v5", "attributes": {"size": "L", "color": "Red"},
             "merchantPrice": 80, "finalPrice": 99, "stock": 7, "isActive": False},
        ],
        "merchantPrice": 90,
        "finalPrice": 110,
    }


@pytest.fixture
def simple_product(raw_simple_product):
    return normalize_product(raw_simple_product)


@pytest.fixture
def variant_product(raw_variant_product):
    return normalize_product(raw_variant_product)


@pytest.fixture
def matrix_product(raw_matrix_product):
    return normalize_product(raw_matrix_product)
