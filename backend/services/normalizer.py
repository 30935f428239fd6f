"""
Pull structured data out of free-form model output.

Gemini is asked for JSON but often wraps it in prose or markdown fences, so
we scan for the first bracket/brace span and parse only that. Every failure
returns None; callers treat None as "use the rule-based path".
"""
from __future__ import annotations
import json
import re
from typing import Any, List, Optional

from pydantic import ValidationError

from schemas import AIAdvice

_ID_LIST = re.compile(r"\[[\d,\s]+\]")
_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_id_list(raw_text: Any) -> Optional[List[int]]:
    if not isinstance(raw_text, str):
        return None
    m = _ID_LIST.search(raw_text)
    if not m:
        return None
    try:
        ids = json.loads(m.group(0))
    except (ValueError, RecursionError):
        return None
    if not isinstance(ids, list) or not all(isinstance(i, int) for i in ids):
        return None
    return ids


def _list_field(data: dict, key: str) -> Any:
    # absent or null -> []; any other non-list fails validation
    value = data.get(key)
    return [] if value is None else value


def extract_advice_object(raw_text: Any) -> Optional[AIAdvice]:
    if not isinstance(raw_text, str):
        return None
    m = _OBJECT.search(raw_text)
    if not m:
        return None
    try:
        data = json.loads(m.group(0))
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    try:
        return AIAdvice.model_validate({
            "tips": _list_field(data, "tips"),
            "recommendedProductIds": _list_field(data, "recommendedProductIds"),
        })
    except ValidationError:
        return None
