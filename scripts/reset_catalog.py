#!/usr/bin/env python3
"""
Reset the catalog: restore the default users and remove every product.

Usage:
  python scripts/reset_catalog.py [--clear] [--yes]

--clear removes the stored value instead; the next load falls back to the
default document without writing it.
"""
from __future__ import annotations

import argparse
import sys

from catalog.core.config import get_settings
from catalog.core.logging import configure_logging
from catalog.repositories.document_store import build_document_store
from catalog.services.catalog_service import CatalogService


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset the catalog to its default document")
    ap.add_argument("--clear", action="store_true", help="Remove the stored value instead of writing defaults")
    ap.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    args = ap.parse_args()

    if not args.yes:
        answer = input("This removes every product. Continue? [y/N] ").strip().lower()
        if answer not in {"y", "yes"}:
            raise SystemExit("Aborted")

    settings = get_settings()
    configure_logging(settings.log_level)
    store = build_document_store(settings)
    if args.clear:
        store.clear()
        print("OK: catalog slot cleared")
        return
    svc = CatalogService(store)
    removed = len(svc.search(""))
    svc.reset_all()
    print(f"OK: catalog reset ({removed} product(s) removed)")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI use
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
