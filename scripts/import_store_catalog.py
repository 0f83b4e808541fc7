"""Convert the Tienda Nube product export (CSV) into data/catalog.json.

Usage:
    python scripts/import_store_catalog.py tiendanube-export.csv
    python scripts/import_store_catalog.py export.csv --output data/catalog.json --dry-run

Export format: ';' separated, latin-1, one row per variant. Only the first
row of a product carries the name; variant rows share the URL identifier
and add "Valor de propiedad N" values, which are appended to the name.
Products hidden from the store are skipped. Blank stock means the store
does not track stock for that product (treated as unlimited).
"""
import argparse
import json
import os
import re
import sys

import pandas as pd

# Allow imports from backend/ when running as a script
_backend_dir = os.path.join(os.path.dirname(__file__), "..")
sys.path.insert(0, _backend_dir)

from utils.text_utils import normalize_text

DEFAULT_OUTPUT = os.path.join(_backend_dir, "data", "catalog.json")
UNLIMITED_STOCK = 999

COL_SLUG = "Identificador de URL"
COL_NAME = "Nombre"
COL_PRICE = "Precio"
COL_PROMO_PRICE = "Precio promocional"
COL_STOCK = "Stock"
COL_SKU = "SKU"
COL_VISIBLE = "Mostrar en tienda"
VARIANT_VALUE_COLUMNS = ["Valor de propiedad 1", "Valor de propiedad 2", "Valor de propiedad 3"]


def read_store_export(path):
    """Read the CSV; exports are latin-1 but newer ones are UTF-8."""
    try:
        return pd.read_csv(path, sep=";", dtype=str, encoding="utf-8-sig", keep_default_na=False)
    except UnicodeDecodeError:
        return pd.read_csv(path, sep=";", dtype=str, encoding="latin-1", keep_default_na=False)


def parse_price(raw):
    """'1.234,50' / '1234.50' / '1234' → float, None if blank."""
    value = str(raw or "").strip().replace("$", "").replace(" ", "")
    if not value:
        return None
    if "," in value:
        value = value.replace(".", "").replace(",", ".")
    try:
        return float(value)
    except ValueError:
        return None


def parse_stock(raw):
    value = str(raw or "").strip()
    if not value:
        return UNLIMITED_STOCK
    try:
        return max(int(float(value)), 0)
    except ValueError:
        return 0


def slugify(text):
    return re.sub(r"\s+", "-", normalize_text(text))


def rows_to_products(df):
    """
    Turn export rows into catalog product dicts.

    Returns:
        Tuple of (products, skipped rows count)
    """
    products = []
    skipped = 0
    seen_skus = set()
    current_name = ""
    current_slug = ""

    for _, row in df.iterrows():
        slug = row.get(COL_SLUG, "").strip()
        name = row.get(COL_NAME, "").strip()

        # Variant rows repeat the slug and leave the name blank
        if name:
            current_name, current_slug = name, slug
        elif slug and slug == current_slug:
            name = current_name
        else:
            skipped += 1
            continue

        if row.get(COL_VISIBLE, "SI").strip().upper() in ("NO", "FALSE", "0"):
            skipped += 1
            continue

        variant = " ".join(
            row.get(col, "").strip() for col in VARIANT_VALUE_COLUMNS if row.get(col, "").strip()
        )
        full_name = f"{name} {variant}".strip()

        price = parse_price(row.get(COL_PROMO_PRICE)) or parse_price(row.get(COL_PRICE))
        if price is None:
            skipped += 1
            continue

        sku = row.get(COL_SKU, "").strip() or None
        if sku and sku in seen_skus:
            print(f"  Duplicate SKU {sku} ({full_name}), dropping SKU")
            sku = None
        if sku:
            seen_skus.add(sku)

        products.append({
            "id": len(products) + 1,
            "sku": sku,
            "name": full_name,
            "price": price,
            "stock": parse_stock(row.get(COL_STOCK)),
            "slug": slugify(full_name) if variant else (slug or slugify(full_name)),
        })

    return products, skipped


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Convert a Tienda Nube CSV export into the catalog JSON file."
    )
    parser.add_argument("csv_path", help="Path to the exported CSV")
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT,
        help="Where to write the catalog JSON (default: data/catalog.json)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and report without writing",
    )
    args = parser.parse_args(argv)

    print("=" * 60)
    print("STORE CATALOG IMPORT")
    print("=" * 60)

    df = read_store_export(args.csv_path)
    print(f"CSV rows: {len(df)}")
    print(f"Columns: {list(df.columns)}")

    products, skipped = rows_to_products(df)
    in_stock = sum(1 for p in products if p["stock"] > 0)
    print(f"\nProducts: {len(products)} ({in_stock} in stock)")
    print(f"Skipped rows: {skipped}")

    if args.dry_run:
        print("\nDry run, nothing written.")
        return 0

    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(products, f, ensure_ascii=False, indent=2)
    print(f"\nWrote {args.output}")
    print("Restart the API (or call reset_catalog()) to load it.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
