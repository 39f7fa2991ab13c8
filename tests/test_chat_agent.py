#!/usr/bin/env python3
"""
Test Suite for FlexBot

TEST COVERAGE:
    - Gemini request shape and JSON reply handling (requests.post mocked)
    - Recommendation id mapping, unknown ids dropped
    - Provider failure message
    - Rule-based fallback: store answers, fuzzy product picks, greeting
    - Intent rules

USAGE:
    Run from project root: python -m pytest tests/test_chat_agent.py -v
"""

import json
import unittest
from unittest.mock import MagicMock, patch

import requests

from storefront.agents.chat_agent import (
    GREETING,
    PROVIDER_FAILURE,
    RESPONSE_SCHEMA,
    FlexBotAgent,
    keyword_matches,
    resolve_recommendations,
)
from storefront.app.generate import GenerationClient
from storefront.app.state import AppState
from storefront.nlu.rules import rule_based_intents
from storefront.utils.errors import InvalidArgumentError, ProviderError


def gemini_response(payload, status=200):
    response = MagicMock()
    response.status_code = status
    response.text = json.dumps(payload)
    response.json.return_value = {
        "candidates": [{"content": {"parts": [{"text": json.dumps(payload)}]}}]
    }
    if status != 200:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} error")
    return response


class TestGenerationClient(unittest.TestCase):

    def test_requires_key(self):
        with patch("storefront.app.generate.Config.GEMINI_API_KEY", None):
            with self.assertRaises(ValueError):
                GenerationClient()

    @patch("storefront.app.generate.requests.post")
    def test_request_payload(self, mock_post):
        mock_post.return_value = gemini_response({"textResponse": "hi", "recommendations": []})
        client = GenerationClient(api_key="k", model="gemini-2.5-flash", timeout=5)
        reply = client.generate_json("User Query: \"hi\"", "be nice", RESPONSE_SCHEMA)

        self.assertEqual(reply, {"textResponse": "hi", "recommendations": []})
        args, kwargs = mock_post.call_args
        self.assertIn("gemini-2.5-flash:generateContent", args[0])
        self.assertEqual(kwargs["params"], {"key": "k"})
        self.assertEqual(kwargs["timeout"], 5)
        config = kwargs["json"]["generationConfig"]
        self.assertEqual(config["responseMimeType"], "application/json")
        self.assertEqual(config["responseSchema"], RESPONSE_SCHEMA)
        self.assertEqual(kwargs["json"]["systemInstruction"]["parts"][0]["text"], "be nice")

    @patch("storefront.app.generate.requests.post")
    def test_http_error_becomes_provider_error(self, mock_post):
        mock_post.return_value = gemini_response({}, status=500)
        with self.assertRaises(ProviderError):
            GenerationClient(api_key="k").generate_json("q", "s", RESPONSE_SCHEMA)

    @patch("storefront.app.generate.requests.post")
    def test_timeout_becomes_provider_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout("slow")
        with self.assertRaises(ProviderError):
            GenerationClient(api_key="k").generate_json("q", "s", RESPONSE_SCHEMA)

    @patch("storefront.app.generate.requests.post")
    def test_non_json_text_becomes_provider_error(self, mock_post):
        response = gemini_response({})
        response.json.return_value = {"candidates": [{"content": {"parts": [{"text": "not json"}]}}]}
        mock_post.return_value = response
        with self.assertRaises(ProviderError):
            GenerationClient(api_key="k").generate_json("q", "s", RESPONSE_SCHEMA)


class TestFlexBotWithModel(unittest.TestCase):

    def setUp(self):
        self.state = AppState.from_fixtures()
        self.client = MagicMock(spec=GenerationClient)
        self.agent = FlexBotAgent(self.state, client=self.client, use_llm=True)

    def test_recommendations_mapped_to_products(self):
        self.client.generate_json.return_value = {
            "textResponse": "Try these!",
            "recommendations": [{"id": 4, "reason": "Loud"}, {"id": 999, "reason": "Ghost"}],
        }
        result = self.agent.handle("something for the beach")
        self.assertEqual(result.text_response, "Try these!")
        self.assertEqual([r.product.id for r in result.recommendations], [4])
        self.assertEqual(result.recommendations[0].reason, "Loud")

        contents = self.client.generate_json.call_args[0][0]
        self.assertIn('User Query: "something for the beach"', contents)
        self.assertIn('"name": "BoomBass Speaker"', contents)

    def test_provider_failure(self):
        self.client.generate_json.side_effect = ProviderError("boom")
        result = self.agent.handle("earbuds?")
        self.assertEqual(result.text_response, PROVIDER_FAILURE)
        self.assertEqual(result.recommendations, [])

    def test_malformed_reply(self):
        self.client.generate_json.return_value = {"recommendations": []}
        self.assertEqual(self.agent.handle("earbuds?").text_response, PROVIDER_FAILURE)

    def test_empty_message(self):
        with self.assertRaises(InvalidArgumentError):
            self.agent.handle("   ")
        self.client.generate_json.assert_not_called()

    def test_resolve_skips_garbage_ids(self):
        recs = resolve_recommendations([{"id": "2", "reason": "x"}, {"id": None}, "junk"], self.state.products)
        self.assertEqual([r.product.id for r in recs], [2])


class TestFlexBotRules(unittest.TestCase):

    def setUp(self):
        self.state = AppState.from_fixtures()
        self.agent = FlexBotAgent(self.state, use_llm=False)

    def test_shipping_question(self):
        result = self.agent.handle("Do you offer free shipping?")
        self.assertIn("free standard shipping on all orders over $50", result.text_response)
        self.assertEqual(result.recommendations, [])

    def test_returns_question(self):
        result = self.agent.handle("What is your return policy?")
        self.assertIn("14-day return policy", result.text_response)

    def test_product_recommendation(self):
        result = self.agent.handle("Can you recommend a car mount for my phone?")
        self.assertEqual(result.intent, "recommend")
        self.assertEqual(result.recommendations[0].product.id, 8)
        self.assertLessEqual(len(result.recommendations), 3)

    def test_typo_still_matches(self):
        picks = keyword_matches("speeker with bass", self.state.products)
        self.assertEqual(picks[0].id, 4)

    def test_price_cap(self):
        picks = keyword_matches("earbuds under $50", self.state.products)
        self.assertNotIn(1, [p.id for p in picks])
        self.assertTrue(all(p.price <= 50 for p in picks))

    def test_greeting(self):
        self.assertEqual(self.agent.handle("hello!").text_response, GREETING)

    def test_unknown(self):
        result = self.agent.handle("what's the weather on mars")
        self.assertIn("contact form", result.text_response)
        self.assertEqual(result.recommendations, [])


class TestIntentRules(unittest.TestCase):

    def test_intents(self):
        self.assertEqual(rule_based_intents("how much is shipping"), ["shipping"])
        self.assertIn("returns", rule_based_intents("can I get a refund"))
        self.assertIn("contact", rule_based_intents("I want to talk to customer service"))
        self.assertIn("recommend", rule_based_intents("recomend me something"))
        self.assertEqual(rule_based_intents("hi"), ["greeting"])

    def test_shopping_is_not_shipping(self):
        self.assertNotIn("shipping", rule_based_intents("shopping"))


if __name__ == "__main__":
    unittest.main()
