"""
Quick validator for data/catalog.json.
Every item needs an http(s) image, a known style, a non-negative price and a
unique integer id. Non-http images are replaced with a neutral Unsplash
image; other problems are reported and left for a human to fix.
"""
from pathlib import Path
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Tuple
from urllib.parse import urlparse
import json
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from schemas import Style  # noqa: E402

CAT = ROOT / "data" / "catalog.json"

FALLBACK = "https://images.unsplash.com/photo-1512436991641-6745cdb1723f?auto=format&fit=crop&w=800&h=800&q=80"

STYLES = {s.value for s in Style}
REQUIRED = ("id", "name", "category", "style", "price", "description", "image")


def is_http(u: Any) -> bool:
    try:
        p = urlparse(u)
        return p.scheme in ("http", "https")
    except Exception:
        return False


def validate(items: List[Dict[str, Any]]) -> Tuple[int, List[str]]:
    """Fix images in place; return (fixed_images, problems)."""
    fixed = 0
    problems: List[str] = []
    seen_ids = set()
    for n, it in enumerate(items):
        label = f"item #{n} (id={it.get('id')!r})"
        missing = [k for k in REQUIRED if k not in it]
        if missing:
            problems.append(f"{label}: missing {', '.join(missing)}")
        pid = it.get("id")
        if not isinstance(pid, int) or isinstance(pid, bool):
            problems.append(f"{label}: id must be an integer")
        elif pid in seen_ids:
            problems.append(f"{label}: duplicate id")
        else:
            seen_ids.add(pid)
        if "style" in it and it["style"] not in STYLES:
            problems.append(f"{label}: unknown style {it['style']!r}")
        if "price" in it:
            try:
                if Decimal(str(it["price"])) < 0:
                    problems.append(f"{label}: negative price")
            except InvalidOperation:
                problems.append(f"{label}: price is not a number")
        if not is_http(it.get("image", "")):
            it["image"] = FALLBACK
            fixed += 1
    return fixed, problems


def main():
    data = json.loads(CAT.read_text(encoding="utf-8"))
    fixed, problems = validate(data)
    CAT.write_text(json.dumps(data, indent=2), encoding="utf-8")
    print(f"Validated {len(data)} items. Fixed images: {fixed}")
    for p in problems:
        print(f"  ! {p}")
    return 1 if problems else 0


if __name__ == "__main__":
    sys.exit(main())
