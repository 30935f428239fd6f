from __future__ import annotations
from decimal import Decimal
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from config import CATALOG_PATH, CATALOG_TIMEOUT, CATALOG_URL, STORE_NAME
from schemas import (
    AddCartItemRequest,
    CartLineItem,
    CartResponse,
    ChatRequest,
    ChatResponse,
    FilterSpec,
    Product,
    RecommendationRequest,
    RecommendationResponse,
    StyleAdviceRequest,
    StyleAdviceResponse,
    UpdateCartItemRequest,
)
from services.cart import CartRegistry, format_price
from services.catalog_loader import ensure_catalog
from services.fallback import fallback_chat_reply, fallback_recommendations, fallback_style_advice
from services.filters import filter_products, list_categories
from services.logger import get_logger
from agent.stylist import Stylist

logger = get_logger("app")

app = FastAPI(title=f"{STORE_NAME} Storefront")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"]
)

# Bootstrap
catalog: List[Product] = ensure_catalog(CATALOG_PATH, CATALOG_URL, timeout=CATALOG_TIMEOUT)
carts = CartRegistry()
stylist = Stylist()


def _product_or_404(product_id: int) -> Product:
    for p in catalog:
        if p.id == product_id:
            return p
    raise HTTPException(status_code=404, detail="Product not found")


def _cart_view(session_id: str) -> CartResponse:
    cart = carts.find(session_id)
    items = list(cart.items) if cart is not None else []
    total = cart.get_total_price() if cart is not None else Decimal("0")
    return CartResponse(
        session_id=session_id,
        items=items,
        total=total,
        total_display=format_price(total),
        item_count=cart.get_item_count() if cart is not None else 0,
    )


@app.get("/api/health")
def health():
    return {"status": "ok", "products": len(catalog), "ai": stylist.available}


@app.post("/api/reload")
def reload_catalog():
    global catalog
    catalog = ensure_catalog(CATALOG_PATH, CATALOG_URL, timeout=CATALOG_TIMEOUT)
    logger.info(f"Catalog reloaded: {len(catalog)} products")
    return {"ok": True, "products": len(catalog)}

# -------- Catalog ----------

@app.get("/api/products", response_model=List[Product])
def get_products(category: Optional[str] = None, style: Optional[str] = None, search: Optional[str] = None):
    return filter_products(catalog, FilterSpec(category=category, style=style, search=search))


@app.get("/api/products/{product_id}", response_model=Product)
def get_product(product_id: int):
    return _product_or_404(product_id)


@app.get("/api/categories", response_model=List[str])
def get_categories():
    return list_categories(catalog)

# -------- Cart ----------

@app.get("/api/cart/{session_id}", response_model=CartResponse)
def get_cart(session_id: str):
    return _cart_view(session_id)


@app.post("/api/cart/{session_id}/items", response_model=CartResponse, status_code=201)
def add_to_cart(session_id: str, body: AddCartItemRequest):
    p = _product_or_404(body.product_id)
    carts.get(session_id).add_item(CartLineItem(
        product_id=p.id, size=body.size, color=body.color, quantity=body.quantity,
        price=p.price, name=p.name, image=p.image,
    ))
    return _cart_view(session_id)


@app.patch("/api/cart/{session_id}/items", response_model=CartResponse)
def update_cart_item(session_id: str, body: UpdateCartItemRequest):
    cart = carts.find(session_id)
    if cart is not None:
        cart.update_quantity(body.product_id, body.size, body.color, body.quantity)
    return _cart_view(session_id)


@app.delete("/api/cart/{session_id}/items", response_model=CartResponse)
def remove_from_cart(session_id: str, product_id: int = Query(...), size: str = Query(...), color: str = Query(...)):
    cart = carts.find(session_id)
    if cart is not None:
        cart.remove_item(product_id, size, color)
    return _cart_view(session_id)


@app.delete("/api/cart/{session_id}", response_model=CartResponse)
def clear_cart(session_id: str):
    cart = carts.find(session_id)
    if cart is not None:
        cart.clear()
    return _cart_view(session_id)


@app.delete("/api/sessions/{session_id}", status_code=204)
def end_session(session_id: str):
    # cart state is lost when the session ends
    carts.drop(session_id)

# -------- AI assistant ----------

@app.post("/api/ai/chat", response_model=ChatResponse)
async def ai_chat(body: ChatRequest):
    message = body.message.strip()
    reply = await stylist.chat(message, body.history, catalog)
    if reply:
        return ChatResponse(reply=reply, source="gemini")
    logger.info("Chat answered by rule-based fallback")
    return ChatResponse(reply=fallback_chat_reply(message), source="rule-based")


@app.post("/api/ai/recommendations", response_model=RecommendationResponse)
async def ai_recommendations(body: RecommendationRequest):
    items = await stylist.recommend(body.preferences, body.budget, body.occasion, body.style, catalog)
    if items is not None:
        return RecommendationResponse(items=items, source="gemini")
    logger.info("Recommendations served by rule-based fallback")
    items = fallback_recommendations(catalog, budget=body.budget, style=body.style)
    return RecommendationResponse(items=items, source="rule-based")


@app.post("/api/ai/style-advice", response_model=StyleAdviceResponse)
async def ai_style_advice(body: StyleAdviceRequest):
    advice: Optional[Dict] = await stylist.style_advice(body.body_type, body.preferences, body.occasion, catalog)
    if advice is not None:
        return StyleAdviceResponse(**advice, source="gemini")
    logger.info("Style advice served by rule-based fallback")
    advice = fallback_style_advice(body.body_type, body.occasion, catalog)
    return StyleAdviceResponse(**advice, source="rule-based")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
