"""
Quick validator: checks the catalog document shape, reports duplicate ids,
and points products that have no image at the placeholder.
"""
from pathlib import Path
from typing import List, Optional
import json, sys

from skincare_advisor.config import DEFAULT_CATALOG_SOURCE
from skincare_advisor.errors import LoadFailure
from skincare_advisor.schemas import PLACEHOLDER_IMAGE
from skincare_advisor.services.catalog_loader import fetch_catalog_text, find_duplicate_ids, parse_catalog

def validate(path: Path) -> int:
    try:
        raw = fetch_catalog_text(str(path))
        products = parse_catalog(raw)
    except LoadFailure as e:
        print(f"Invalid catalog {path}: {e}")
        return 1

    data = json.loads(raw)
    fixed = 0
    for it in data["products"]:
        if not str(it.get("image") or "").strip():
            it["image"] = PLACEHOLDER_IMAGE
            fixed += 1
    if fixed:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    dupes = find_duplicate_ids(products)
    print(f"Validated {len(products)} items. Fixed images: {fixed}. Duplicate ids: {dupes or 'none'}")
    return 1 if dupes else 0

def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    return validate(Path(args[0] if args else DEFAULT_CATALOG_SOURCE))

if __name__ == "__main__":
    sys.exit(main())
