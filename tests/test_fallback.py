"""
Unit tests for the rule-based answers used when Gemini is unavailable.
"""
from decimal import Decimal

from services.fallback import fallback_chat_reply, fallback_recommendations, fallback_style_advice


class TestFallbackChat:

    def test_greeting(self):
        assert "Welcome" in fallback_chat_reply("Hello!")

    def test_sizing(self):
        assert "true to size" in fallback_chat_reply("How does the blazer fit?")

    def test_outfit_is_not_sizing(self):
        assert "Recommendations" in fallback_chat_reply("I need an outfit for a wedding")

    def test_returns(self):
        assert "30 days" in fallback_chat_reply("What is your return policy?")

    def test_shipping(self):
        assert "free" in fallback_chat_reply("How much is shipping?")

    def test_default(self):
        assert fallback_chat_reply("blah") == fallback_chat_reply("")


class TestFallbackRecommendations:

    def test_style_and_budget(self, catalog):
        out = fallback_recommendations(catalog, budget=Decimal("50"), style="Casual")
        assert [p.id for p in out] == [1]

    def test_budget_only_keeps_catalog_order(self, catalog):
        out = fallback_recommendations(catalog, budget=Decimal("80"))
        assert [p.id for p in out] == [1, 4, 5]

    def test_limit(self, catalog):
        assert len(fallback_recommendations(catalog, limit=2)) == 2

    def test_empty_catalog(self):
        assert fallback_recommendations([], budget=Decimal("10")) == []


class TestFallbackStyleAdvice:

    def test_known_body_type(self, catalog):
        advice = fallback_style_advice("Petite", None, catalog)
        assert advice["body_type"] == "Petite"
        assert advice["tips"][0].startswith("Choose high-waisted")
        assert [p.id for p in advice["recommendations"]] == [1, 2, 3]

    def test_defaults_and_occasion_tip(self, catalog):
        advice = fallback_style_advice(None, "a wedding", catalog)
        assert advice["body_type"] == "regular"
        assert len(advice["tips"]) == 3
        assert "a wedding" in advice["tips"][-1]

    def test_unknown_body_type_uses_regular_tips(self):
        advice = fallback_style_advice("hourglass", None, [])
        assert advice["recommendations"] == []
        assert advice["tips"] == fallback_style_advice(None, None, [])["tips"]
