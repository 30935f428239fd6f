from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from config import HISTORY_TURNS, STORE_NAME
from schemas import ChatTurn, Product


def _price(p: Product) -> str:
    return f"${p.price}"


def product_context(products: Sequence[Product], limit: int = 20) -> str:
    return "\n".join(
        f"- {p.name} ({p.category}, {p.style.value}): {_price(p)} - {p.description}"
        for p in products[:limit]
    )


def history_to_gemini(history: Sequence[ChatTurn], turns: int = HISTORY_TURNS) -> List[Dict[str, Any]]:
    """Last `turns` chat turns as Gemini history entries (user / model roles)."""
    recent = list(history)[-turns:] if turns > 0 else []
    return [
        {"role": "user" if t.type == "user" else "model", "parts": [t.text]}
        for t in recent
    ]


def chat_prompt(message: str, context: str) -> str:
    system = f"""You are a helpful AI fashion assistant for {STORE_NAME} clothing store. You help customers with:
- Product recommendations based on preferences, budget, and occasions
- Size and fit advice
- Styling tips
- Information about returns and shipping
- General fashion advice

Available products context:
{context}

Be friendly, helpful, and concise. If asked about specific products, refer to the product context provided."""
    return f"{system}\n\nUser: {message}"


def recommendation_prompt(preferences: Optional[Sequence[str]], budget: Optional[Decimal],
                          occasion: Optional[str], style: Optional[str],
                          products: Sequence[Product]) -> str:
    product_list = "\n".join(
        f"- {p.name} (ID: {p.id}, {p.category}, {p.style.value}): {_price(p)} - {p.description}"
        for p in products[:20]
    )
    return f"""You are a fashion recommendation assistant. Based on the following criteria, recommend the best products:

Preferences: {', '.join(preferences) if preferences else 'None specified'}
Budget: {f'${budget}' if budget else 'No limit'}
Occasion: {occasion or 'General'}
Style: {style or 'Any'}

Available products:
{product_list}

Provide a JSON array of product IDs (max 6) that best match the criteria. Return ONLY a JSON array like: [1, 3, 5]
Focus on relevance, quality, and matching the user's needs."""


def style_advice_prompt(body_type: Optional[str], preferences: Optional[Sequence[str]],
                        occasion: Optional[str], products: Sequence[Product]) -> str:
    product_list = "\n".join(
        f"- {p.name} (ID: {p.id}, {p.category}, {p.style.value}): {_price(p)}"
        for p in products[:10]
    )
    return f"""You are a professional fashion stylist. Provide personalized style advice:

Body Type: {body_type or 'regular'}
Preferences: {', '.join(preferences) if preferences else 'None'}
Occasion: {occasion or 'General'}

Available products:
{product_list}

Provide:
1. 2-3 styling tips tailored to the body type and occasion
2. Recommendations for 3 products from the list that would work well

Format your response as JSON:
{{
  "tips": ["tip1", "tip2", "tip3"],
  "recommendedProductIds": [1, 2, 3]
}}"""
