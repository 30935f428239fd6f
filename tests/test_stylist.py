"""
Tests for the Gemini-backed stylist, using an in-process fake model.
"""
import asyncio
from decimal import Decimal

from agent.stylist import Stylist, _text_of
from conftest import FakeModel
from schemas import ChatTurn


def run(coro):
    return asyncio.run(coro)


def no_model():
    return None


class TestWithoutModel:

    def test_everything_returns_none(self, catalog):
        stylist = Stylist(model_factory=no_model)
        assert not stylist.available
        assert run(stylist.chat("hi", [], catalog)) is None
        assert run(stylist.recommend([], None, None, None, catalog)) is None
        assert run(stylist.style_advice(None, [], None, catalog)) is None

    def test_factory_is_called_lazily(self):
        calls = []

        def factory():
            calls.append(1)
            return FakeModel("ok")

        stylist = Stylist(model_factory=factory)
        assert calls == []
        assert stylist.available
        assert stylist.available
        assert calls == [1]


class TestChat:

    def test_reply_and_truncated_history(self, catalog):
        model = FakeModel("Try the wrap dress!")
        stylist = Stylist(model=model)
        history = [ChatTurn(type="user", text=f"q{i}") for i in range(7)]
        assert run(stylist.chat("Something for a date?", history, catalog)) == "Try the wrap dress!"
        assert len(model.histories[0]) == 5
        assert "Floral Wrap Dress" in model.sent[0]
        assert model.sent[0].endswith("User: Something for a date?")

    def test_error_returns_none(self, catalog):
        stylist = Stylist(model=FakeModel(error=RuntimeError("quota")))
        assert run(stylist.chat("hi", [], catalog)) is None

    def test_blank_reply_returns_none(self, catalog):
        stylist = Stylist(model=FakeModel("   "))
        assert run(stylist.chat("hi", [], catalog)) is None


class TestRecommend:

    def test_resolves_ids_in_model_order(self, catalog):
        stylist = Stylist(model=FakeModel("Best picks: [4, 99, 1] - enjoy"))
        items = run(stylist.recommend(["floral"], Decimal("100"), "brunch", "Feminine", catalog))
        assert [p.id for p in items] == [4, 1]

    def test_caps_at_six(self):
        from conftest import make_product
        products = [make_product(i) for i in range(1, 11)]
        stylist = Stylist(model=FakeModel("[1,2,3,4,5,6,7,8]"))
        assert len(run(stylist.recommend([], None, None, None, products))) == 6

    def test_empty_catalog_returns_none_without_calling_model(self):
        model = FakeModel("[1]")
        assert run(Stylist(model=model).recommend([], None, None, None, [])) is None
        assert model.prompts == []

    def test_unparseable_reply_returns_none(self, catalog):
        stylist = Stylist(model=FakeModel("I would go with the blazer."))
        assert run(stylist.recommend([], None, None, None, catalog)) is None

    def test_error_returns_none(self, catalog):
        stylist = Stylist(model=FakeModel(error=ValueError("blocked")))
        assert run(stylist.recommend([], None, None, None, catalog)) is None


class TestStyleAdvice:

    def test_advice(self, catalog):
        text = 'Here you go: {"tips": ["Belt it", "Go midi"], "recommendedProductIds": [4, 2, 9, 1, 3]}'
        stylist = Stylist(model=FakeModel(text))
        advice = run(stylist.style_advice("petite", ["floral"], "wedding", catalog))
        assert advice["body_type"] == "petite"
        assert advice["tips"] == ["Belt it", "Go midi"]
        assert [p.id for p in advice["recommendations"]] == [4, 2, 1]

    def test_default_body_type(self, catalog):
        stylist = Stylist(model=FakeModel("{}"))
        advice = run(stylist.style_advice(None, [], None, catalog))
        assert advice == {"body_type": "regular", "recommendations": [], "tips": []}

    def test_malformed_returns_none(self, catalog):
        stylist = Stylist(model=FakeModel('{"tips": ["a"'))
        assert run(stylist.style_advice(None, [], None, catalog)) is None

    def test_deeply_nested_reply_returns_none(self, catalog):
        text = '{"tips": ' + "[" * 100000 + "]" * 100000 + "}"
        stylist = Stylist(model=FakeModel(text))
        assert run(stylist.style_advice(None, [], None, catalog)) is None


class BlockedResponse:
    @property
    def text(self):
        raise ValueError("response was blocked")


class BlockedModel(FakeModel):
    def generate_content(self, prompt):
        self.prompts.append(prompt)
        return BlockedResponse()


class TestBlockedResponse:

    def test_text_of_blocked_response_is_empty(self):
        assert _text_of(BlockedResponse()) == ""

    def test_blocked_recommendation_returns_none(self, catalog):
        stylist = Stylist(model=BlockedModel())
        assert run(stylist.recommend([], None, None, None, catalog)) is None
