#!/usr/bin/env python3
"""
Price Report: Price a product snapshot and check a cart against it.

Reads raw backend product documents from a JSON file, prints the list
price of each product and, if a cart file is given, validates the cart
and prints its authoritative total.

Usage:
    # List prices
    python3 scripts/price_report.py --products data/products.json

    # Validate a cart and compute its total
    python3 scripts/price_report.py --products data/products.json --cart data/cart.json

    # Custom currency, debug logging
    python3 scripts/price_report.py --products data/products.json --currency SDG -v

Exit codes:
    0 = cart valid (or no cart given)
    1 = cart invalid or input files missing/unreadable
"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

# Add project root to path for proper package imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from storefront_pricing.cart import cart_line_from_raw, get_cart_total, validate_cart
from storefront_pricing.catalog import normalize_product
from storefront_pricing.common.config_loader import load_pricing_settings
from storefront_pricing.common.log_config import setup_logging
from storefront_pricing.pricing import get_display_price, resolve_price

logger = logging.getLogger("storefront_pricing.scripts.price_report")


def read_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_products(path: str) -> list:
    """Load raw product documents: a JSON array or {"products": [...]}."""
    data = read_json(path)
    if isinstance(data, dict):
        data = data.get("products", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of products in {path}")
    return [normalize_product(raw) for raw in data]


def print_price_list(products, currency: str, settings) -> None:
    print(f"\n{'=' * 60}")
    print("PRICE LIST")
    print(f"{'=' * 60}")
    for product in products:
        display = get_display_price(product)
        resolved = resolve_price(product, currency=currency, settings=settings)
        label = "from " if display.is_from else ""
        line = f"  {product.id:<24} {label}{display.price:>10.2f} {resolved.currency}"
        if resolved.discount:
            line += f"  (-{resolved.discount.percentage}%)"
        print(f"{line}  {product.name}")


def main():
    parser = argparse.ArgumentParser(
        description="Price a product snapshot and validate a cart against it"
    )
    parser.add_argument("--products", required=True, help="JSON file with raw product documents")
    parser.add_argument("--cart", help="JSON file with cart lines")
    parser.add_argument("--currency", help="Currency code (default from config/pricing.yaml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Warnings only")
    args = parser.parse_args()

    load_dotenv()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        settings = load_pricing_settings()
    except (OSError, ValueError) as exc:
        logger.error("Cannot load pricing config: %s", exc)
        sys.exit(1)
    currency = args.currency or settings.default_currency

    try:
        products = load_products(args.products)
    except (OSError, ValueError) as exc:
        logger.error("Cannot load products: %s", exc)
        sys.exit(1)
    logger.info("Loaded %d products from %s", len(products), args.products)

    print_price_list(products, currency, settings)

    if not args.cart:
        return

    try:
        raw_lines = read_json(args.cart)
    except (OSError, ValueError) as exc:
        logger.error("Cannot load cart: %s", exc)
        sys.exit(1)
    if isinstance(raw_lines, dict):
        raw_lines = raw_lines.get("products", [])

    lines = [cart_line_from_raw(raw) for raw in raw_lines]
    products_by_id = {p.id: p for p in products}

    result = validate_cart(lines, products_by_id, settings)
    total = get_cart_total(lines, products_by_id, settings)

    print(f"\n{'=' * 60}")
    print(f"CART ({len(lines)} lines)")
    print(f"{'=' * 60}")
    for error in result.errors:
        print(f"  ERROR  {error}")
    print(f"  Total: {total:.2f} {currency}")
    print(f"  Valid: {'yes' if result.valid else 'no'}")

    if not result.valid:
        sys.exit(1)


if __name__ == "__main__":
    main()
