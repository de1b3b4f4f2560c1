#!/usr/bin/env python3
"""
Add a product to the catalog slot configured via env (STORAGE_BACKEND etc.).

Usage:
  python scripts/add_product.py --name "Pen" --price "100" [--description "Blue ink"] [--image https://...]
"""
from __future__ import annotations

import argparse
import sys

from catalog.core.config import get_settings
from catalog.core.logging import configure_logging
from catalog.repositories.document_store import build_document_store
from catalog.services.catalog_service import CatalogService, ProductValidationError


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a product to the catalog")
    ap.add_argument("--name", required=True, help="Product name")
    ap.add_argument("--price", required=True, help="Free-form price (e.g. 'Rs 1200')")
    ap.add_argument("--description", default="", help="Optional description")
    ap.add_argument("--image", default="", help="Optional image URL")
    args = ap.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)
    svc = CatalogService(build_document_store(settings))
    try:
        product = svc.create_product(args.name, args.price, args.description, args.image)
    except ProductValidationError as exc:
        raise SystemExit(exc.message)
    print("OK: product added")
    print(f"  ID: {product.id}")
    print(f"  Name: {product.name}")
    print(f"  Price: {product.price}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI use
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
