from __future__ import annotations
import asyncio
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from agent.gemini_client import get_gemini
from agent.prompts import (
    chat_prompt,
    history_to_gemini,
    product_context,
    recommendation_prompt,
    style_advice_prompt,
)
from config import HISTORY_TURNS
from schemas import ChatTurn, Product
from services.logger import get_logger
from services.normalizer import extract_advice_object, extract_id_list
from services.resolver import RECOMMENDATION_LIMIT, STYLE_ADVICE_LIMIT, resolve

logger = get_logger(__name__)


def _text_of(resp: Any) -> str:
    # resp.text raises ValueError on blocked/empty candidates
    try:
        text = getattr(resp, "text", None)
    except ValueError as e:
        logger.warning(f"Gemini returned no text: {e}")
        return ""
    return (text or "").strip()


class Stylist:
    """
    Gemini-backed fashion assistant.
    Every public method returns None when the model is unavailable, errors,
    or answers with something we can't parse; the caller then falls back to
    the rule-based answers in services.fallback.
    """
    def __init__(self, model: Any = None, model_factory: Callable[[], Any] = get_gemini,
                 history_turns: int = HISTORY_TURNS):
        self.model = model  # lazy init
        self._model_factory = model_factory
        self.history_turns = history_turns

    def _ensure_model(self):
        if self.model is None:
            self.model = self._model_factory()
        return self.model

    @property
    def available(self) -> bool:
        return self._ensure_model() is not None

    async def _generate(self, prompt: str) -> Optional[str]:
        model = self._ensure_model()
        if model is None:
            return None
        resp = await asyncio.to_thread(model.generate_content, prompt)
        return _text_of(resp)

    async def chat(self, message: str, history: Sequence[ChatTurn] = (),
                   products: Sequence[Product] = ()) -> Optional[str]:
        model = self._ensure_model()
        if model is None:
            return None
        try:
            session = model.start_chat(history=history_to_gemini(history, self.history_turns))
            prompt = chat_prompt(message, product_context(products))
            resp = await asyncio.to_thread(session.send_message, prompt)
            text = _text_of(resp)
        except Exception as e:
            logger.error(f"Gemini chat error: {e}")
            return None
        return text or None

    async def recommend(self, preferences: Optional[Sequence[str]], budget: Optional[Decimal],
                        occasion: Optional[str], style: Optional[str],
                        products: Sequence[Product]) -> Optional[List[Product]]:
        if not products:
            return None
        try:
            text = await self._generate(recommendation_prompt(preferences, budget, occasion, style, products))
        except Exception as e:
            logger.error(f"Gemini recommendations error: {e}")
            return None
        if text is None:
            return None
        ids = extract_id_list(text)
        if ids is None:
            logger.warning("Gemini recommendations: no id list in response")
            return None
        return resolve(ids, products, RECOMMENDATION_LIMIT)

    async def style_advice(self, body_type: Optional[str], preferences: Optional[Sequence[str]],
                           occasion: Optional[str], products: Sequence[Product]) -> Optional[Dict[str, Any]]:
        try:
            text = await self._generate(style_advice_prompt(body_type, preferences, occasion, products))
        except Exception as e:
            logger.error(f"Gemini style advice error: {e}")
            return None
        if text is None:
            return None
        advice = extract_advice_object(text)
        if advice is None:
            logger.warning("Gemini style advice: no JSON object in response")
            return None
        return {
            "body_type": body_type or "regular",
            "recommendations": resolve(advice.recommended_product_ids, products, STYLE_ADVICE_LIMIT),
            "tips": advice.tips,
        }
