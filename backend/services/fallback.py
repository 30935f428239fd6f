from __future__ import annotations
import re
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from config import STORE_NAME
from schemas import Product

# Deterministic answers used when Gemini is not configured or its reply is unusable.


def _norm(s: str) -> str:
    s = (s or "").lower()
    s = s.replace("’", "'")
    s = re.sub(r"[^a-z0-9\s']", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def fallback_chat_reply(message: str) -> str:
    m = _norm(message)
    words = set(m.split())

    if m in {"hi", "hey", "hello", "hi there", "hello there"} or any(w in m for w in ["good morning", "good evening", "good afternoon"]):
        return f"Hi! Welcome to {STORE_NAME}. Tell me what you're shopping for and I'll point you to a few pieces."

    if words & {"size", "sizes", "sizing", "fit", "fits", "measurements"}:
        return "Most of our pieces run true to size. If you're between sizes, size up for a relaxed fit or down for a tailored look."

    if words & {"return", "returns", "refund", "exchange"}:
        return "You can return unworn items within 30 days of delivery for a full refund or exchange."

    if words & {"shipping", "delivery", "deliver", "ship"}:
        return "Shipping is free on every order. Standard delivery takes 3-5 business days."

    if any(kw in m for kw in ["recommend", "suggest", "looking for", "outfit", "wear"]):
        return "Try the Recommendations tab: pick a style, an occasion and a budget and I'll pull matching pieces from the catalog."

    return "I can help with product picks, sizing, returns and shipping. What are you looking for today?"


def fallback_recommendations(products: Sequence[Product], budget: Optional[Decimal] = None,
                             style: Optional[str] = None, limit: int = 6) -> List[Product]:
    out = [p for p in products if not style or p.style == style]
    if budget is not None:
        out = [p for p in out if p.price <= Decimal(budget)]
    return out[:limit]


BODY_TYPE_TIPS: Dict[str, List[str]] = {
    "petite": [
        "Choose high-waisted bottoms to lengthen your legs.",
        "Monochrome outfits create a long, unbroken line.",
    ],
    "tall": [
        "Layer pieces to break up your frame.",
        "Wide-leg trousers and midi lengths balance your height.",
    ],
    "curvy": [
        "Wrap silhouettes and defined waists highlight your shape.",
        "Structured fabrics hold their line better than clingy knits.",
    ],
    "athletic": [
        "Soft drapes and ruffles add movement to a straight frame.",
        "Belts create waist definition.",
    ],
    "regular": [
        "Balance a fitted top with a relaxed bottom, or the reverse.",
        "Build around one statement piece and keep the rest simple.",
    ],
}


def fallback_style_advice(body_type: Optional[str], occasion: Optional[str],
                          products: Sequence[Product], limit: int = 3) -> Dict[str, object]:
    bt = (body_type or "regular").strip().lower()
    tips = list(BODY_TYPE_TIPS.get(bt, BODY_TYPE_TIPS["regular"]))
    if occasion:
        tips.append(f"For {occasion.strip()}, pick one neutral base and add a single accent color.")
    return {
        "body_type": body_type or "regular",
        "recommendations": list(products[:limit]),
        "tips": tips[:3],
    }
