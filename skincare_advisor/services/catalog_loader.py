from __future__ import annotations
from pathlib import Path
from typing import List
from urllib.parse import urlparse
import json, logging

import requests
from pydantic import ValidationError

from skincare_advisor.errors import LoadFailure
from skincare_advisor.schemas import CatalogDocument, Product

logger = logging.getLogger(__name__)


def is_http(source: str) -> bool:
    try:
        return urlparse(source).scheme in ("http", "https")
    except ValueError:
        return False


def fetch_catalog_text(source: str, timeout: float = 30.0) -> str:
    """Read the raw catalog document from a file path or an http(s) URL."""
    if is_http(source):
        try:
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise LoadFailure(f"Failed to load products: {e}") from e
        return resp.text
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadFailure(f"Failed to load products: {e}") from e


def parse_catalog(raw: str) -> List[Product]:
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise LoadFailure(f"Catalog is not valid JSON: {e}") from e
    try:
        doc = CatalogDocument.model_validate(data)
    except ValidationError as e:
        raise LoadFailure(f"Catalog does not match the expected shape ({e.error_count()} errors)") from e
    return doc.products


def find_duplicate_ids(products: List[Product]) -> List[int]:
    seen, dupes = set(), []
    for p in products:
        if p.id in seen and p.id not in dupes:
            dupes.append(p.id)
        seen.add(p.id)
    return dupes


def load_catalog(source: str, timeout: float = 30.0) -> List[Product]:
    """
    Fetch, decode and validate the catalog at `source`.
    Raises LoadFailure on any transport, decoding or validation problem,
    including duplicate product ids.
    """
    products = parse_catalog(fetch_catalog_text(source, timeout=timeout))
    dupes = find_duplicate_ids(products)
    if dupes:
        raise LoadFailure(f"Duplicate product ids in catalog: {dupes}")
    logger.info("Loaded %d products from %s", len(products), source)
    return products
