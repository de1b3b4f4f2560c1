#!/usr/bin/env python3
"""
Dump the catalog document as JSON.

Usage:
  python scripts/export_catalog.py [--output catalog.json]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from catalog.core.config import get_settings
from catalog.repositories.document_store import build_document_store
from catalog.services.catalog_service import CatalogService


def main() -> None:
    ap = argparse.ArgumentParser(description="Export the catalog document")
    ap.add_argument("--output", help="Destination file (default: stdout)")
    args = ap.parse_args()

    doc = CatalogService(build_document_store(get_settings())).document()
    text = json.dumps(doc.to_dict(), ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        print(f"OK: {len(doc.products)} product(s) written to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI use
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
