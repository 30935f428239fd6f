from __future__ import annotations
from typing import Dict, Iterable, List

from schemas import Product

RECOMMENDATION_LIMIT = 6
STYLE_ADVICE_LIMIT = 3


def resolve(candidate_ids: Iterable[int], catalog: Iterable[Product], limit: int = RECOMMENDATION_LIMIT) -> List[Product]:
    """
    Map model-suggested ids onto real catalog products.
    Output follows the candidate ranking; unknown and repeated ids are dropped.
    """
    if limit <= 0:
        return []
    by_id: Dict[int, Product] = {p.id: p for p in catalog}
    out: List[Product] = []
    seen = set()
    for pid in candidate_ids:
        p = by_id.get(pid)
        if p is None or pid in seen:
            continue
        seen.add(pid)
        out.append(p)
        if len(out) >= limit:
            break
    return out
