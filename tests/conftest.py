import os

# Tests never talk to Gemini or a remote catalog
os.environ["GEMINI_API_KEY"] = ""
os.environ["CATALOG_URL"] = ""

from decimal import Decimal

import pytest

from schemas import Product


def make_product(pid, name="Item", category="Tops", style="Casual", price="10.00", description=""):
    return Product(
        id=pid, name=name, category=category, style=style,
        price=Decimal(price), description=description,
        image=f"https://img.example.com/{pid}.jpg",
    )


@pytest.fixture
def catalog():
    return [
        make_product(1, "Classic White Tee", "Tops", "Casual", "19.99", "Soft cotton crew-neck tee"),
        make_product(2, "Tailored Blazer", "Outerwear", "Professional", "129.00", "Wool blend blazer"),
        make_product(3, "Leather Moto Jacket", "Outerwear", "Edgy", "189.00", "Black biker jacket"),
        make_product(4, "Floral Wrap Dress", "Dresses", "Feminine", "79.00", "Midi dress with a floral print"),
        make_product(5, "Running Tee", "Tops", "Sporty", "34.00", "Breathable quick-dry TEE for training"),
    ]


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeChatSession:
    def __init__(self, model, history):
        self.model = model
        self.history = history

    def send_message(self, message):
        self.model.sent.append(message)
        if self.model.error:
            raise self.model.error
        return FakeResponse(self.model.text)


class FakeModel:
    """Stands in for genai.GenerativeModel."""
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.prompts = []
        self.sent = []
        self.histories = []

    def generate_content(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return FakeResponse(self.text)

    def start_chat(self, history=None):
        self.histories.append(history)
        return FakeChatSession(self, history)
