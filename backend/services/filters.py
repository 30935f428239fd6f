from __future__ import annotations
from typing import Iterable, List, Optional

from schemas import FilterSpec, Product


def _matches_search(p: Product, needle: str) -> bool:
    return needle in p.name.lower() or needle in p.description.lower()


def filter_products(products: Iterable[Product], spec: Optional[FilterSpec] = None) -> List[Product]:
    """
    Narrow the catalog to what the shopper asked for.
      - category / style: exact match, empty means "any"
      - search: case-insensitive substring of name or description
    Filters are ANDed and input order is kept. No match -> [].
    """
    spec = spec or FilterSpec()
    out = list(products)
    if spec.category:
        out = [p for p in out if p.category == spec.category]
    if spec.style:
        out = [p for p in out if p.style == spec.style]
    if spec.search:
        needle = spec.search.lower()
        out = [p for p in out if _matches_search(p, needle)]
    return out


def list_categories(products: Iterable[Product]) -> List[str]:
    return sorted({p.category for p in products if p.category})
