from __future__ import annotations
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional
import json

import requests
from pydantic import ValidationError

from schemas import Product
from services.logger import get_logger

logger = get_logger(__name__)


def _to_products(records: Any, source: str) -> List[Product]:
    if not isinstance(records, list):
        logger.error(f"Catalog from {source} is not a JSON array; no products available")
        return []
    out: List[Product] = []
    for rec in records:
        try:
            out.append(Product.model_validate(rec))
        except ValidationError as e:
            rid = rec.get("id") if isinstance(rec, dict) else None
            logger.warning(f"Skipping invalid catalog record {rid!r}: {e.error_count()} error(s)")
    return out


def load_catalog(path: Path) -> List[Product]:
    """
    Read data/catalog.json: a JSON array of
      id, name, category, style, price, description, image
    Prices are parsed as Decimal. Missing/broken file -> [].
    """
    path = Path(path)
    try:
        records = json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)
    except FileNotFoundError:
        logger.error(f"Catalog file {path} not found; no products available")
        return []
    except (OSError, ValueError) as e:
        logger.error(f"Could not read catalog {path}: {e}")
        return []
    return _to_products(records, str(path))


def fetch_catalog(url: str, timeout: float = 5.0) -> List[Product]:
    """GET a catalog API that returns the same JSON array. Any failure -> []."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        records = resp.json(parse_float=Decimal)
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Catalog fetch from {url} failed: {e}")
        return []
    return _to_products(records, url)


def ensure_catalog(path: Path, url: Optional[str] = None, timeout: float = 5.0) -> List[Product]:
    """Prefer the remote catalog when configured, else the local file."""
    if url:
        products = fetch_catalog(url, timeout=timeout)
        if products:
            logger.info(f"Loaded {len(products)} products from {url}")
            return products
        logger.warning(f"Remote catalog empty or unavailable, falling back to {path}")
    products = load_catalog(path)
    logger.info(f"Loaded {len(products)} products from {path}")
    return products
