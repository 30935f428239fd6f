from __future__ import annotations
from typing import Optional

import google.generativeai as genai

from config import GEMINI_API_KEY, GEMINI_MODEL
from services.logger import get_logger

logger = get_logger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.7,
    "top_k": 40,
    "top_p": 0.95,
    "max_output_tokens": 1024,
}

_warned_missing_key = False


def get_gemini(model_name: Optional[str] = None, api_key: Optional[str] = None):
    """
    Build the Gemini model used by every AI flow.
    Returns None when no key is configured or the SDK refuses to initialise;
    callers then answer with the rule-based fallback.
    """
    global _warned_missing_key
    api_key = api_key if api_key is not None else GEMINI_API_KEY
    if not api_key:
        if not _warned_missing_key:
            logger.warning("GEMINI_API_KEY not found. AI features will use fallback responses.")
            _warned_missing_key = True
        return None

    model_name = model_name or GEMINI_MODEL
    try:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(
            model_name=model_name,
            generation_config=GENERATION_CONFIG,
        )
    except Exception as e:
        logger.error(f"Error initializing Gemini model {model_name}: {e}")
        return None
    logger.info(f"Gemini model {model_name} initialized")
    return model
