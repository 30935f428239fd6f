from __future__ import annotations
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

MAX_TIPS = 3
MAX_ADVICE_IDS = 6


class Style(str, Enum):
    CASUAL = "Casual"
    PROFESSIONAL = "Professional"
    EDGY = "Edgy"
    FEMININE = "Feminine"
    SPORTY = "Sporty"


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    category: str
    style: Style
    price: Decimal
    description: str = ""
    image: str  # absolute URL


class CartLineItem(BaseModel):
    product_id: int
    size: str
    color: str
    quantity: int = Field(ge=1)
    price: Decimal  # snapshot taken when the line was added
    name: str = ""
    image: str = ""

    @property
    def key(self) -> tuple:
        return (self.product_id, self.size, self.color)


class FilterSpec(BaseModel):
    category: Optional[str] = None
    style: Optional[str] = None
    search: Optional[str] = None


class AIAdvice(BaseModel):
    """Structured part of a styling answer. Ids keep the model's ranking."""
    model_config = ConfigDict(populate_by_name=True)

    tips: List[StrictStr] = Field(default_factory=list)
    recommended_product_ids: List[StrictInt] = Field(default_factory=list, alias="recommendedProductIds")

    @field_validator("tips")
    @classmethod
    def _cap_tips(cls, v: List[str]) -> List[str]:
        return v[:MAX_TIPS]

    @field_validator("recommended_product_ids")
    @classmethod
    def _unique_ids(cls, v: List[int]) -> List[int]:
        seen, out = set(), []
        for pid in v:
            if pid not in seen:
                seen.add(pid)
                out.append(pid)
        return out[:MAX_ADVICE_IDS]


# ---- HTTP request / response models ----

class ChatTurn(BaseModel):
    type: str = "user"  # "user" or "bot"
    text: str


class ChatRequest(BaseModel):
    message: str
    history: List[ChatTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    reply: str
    source: Literal["gemini", "rule-based"]


class RecommendationRequest(BaseModel):
    preferences: List[str] = Field(default_factory=list)
    budget: Optional[Decimal] = None
    occasion: Optional[str] = None
    style: Optional[str] = None


class RecommendationResponse(BaseModel):
    items: List[Product]
    source: Literal["gemini", "rule-based"]


class StyleAdviceRequest(BaseModel):
    body_type: Optional[str] = None
    preferences: List[str] = Field(default_factory=list)
    occasion: Optional[str] = None


class StyleAdviceResponse(BaseModel):
    body_type: str
    recommendations: List[Product]
    tips: List[str]
    source: Literal["gemini", "rule-based"]


class AddCartItemRequest(BaseModel):
    product_id: int
    size: str
    color: str
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    product_id: int
    size: str
    color: str
    quantity: int


class CartResponse(BaseModel):
    session_id: str
    items: List[CartLineItem]
    total: Decimal
    total_display: str
    item_count: int
