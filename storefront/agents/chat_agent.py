"""FlexBot: the storefront's shopping assistant.

With a Gemini key the agent asks the model for a JSON reply and maps the
recommended ids back onto the live catalog. Without one it answers from the
store policy rules and recommends products by fuzzy keyword match.
"""
import json
import re
from typing import Any, Dict, List, Optional

from rapidfuzz import fuzz, process

from .base_agent import BaseAgent
from ..app.config import Config
from ..app.generate import GenerationClient
from ..data.models import Product
from ..nlu.rules import rule_based_intents
from ..schemas.io_models import AgentResult, Recommendation
from ..utils.errors import InvalidArgumentError, ProviderError
from ..utils.logger import get_logger

logger = get_logger()

GREETING = "Hello! I'm FlexBot, your shopping assistant. How can I help you find the perfect tech accessory today?"
PROVIDER_FAILURE = "I'm sorry, I encountered an issue trying to find recommendations. Please try again."

MAX_RECOMMENDATIONS = 3

SYSTEM_INSTRUCTION = """You are "FlexBot", a friendly and highly intelligent shopping assistant for Buyflex, an electronics store.
Your goal is to help users with their shopping and answer their questions about the store and its products.

**Store Information:**
- **Shipping:** We offer free standard shipping on all orders over $50. For orders under $50, standard shipping is a flat rate of $5.
- **Returns:** We have a 14-day return policy for unopened and unused products.
- **Contact:** For issues I can't resolve, please use the contact form on our website to reach our support team.
- **Features:** You can add items to your cart, save them to a wishlist, and filter products by category, price, and rating.

**Your Task:**
You will be given a user's query and a list of available products in JSON format. Analyze the user's request carefully.

1.  **If the user asks for product recommendations:**
    - Provide a short, conversational, and helpful text response that addresses the user's query.
    - Identify the top 1-3 products from the list that best match the user's needs.
    - For each recommended product, provide a brief, compelling reason why it's a good fit.
    - If no products match, return an empty recommendations array and explain why in the `textResponse`.

2.  **If the user asks a question about the store (shipping, returns, etc.):**
    - Use the "Store Information" provided above to answer their question clearly and concisely.
    - Do not recommend products unless they specifically ask for them in the same query. Return an empty `recommendations` array.

3.  **If you cannot answer the question:**
    - Politely explain that you cannot help with that specific query.
    - Guide them to use the website's contact form for further assistance.
    - Return an empty `recommendations` array.

**Output Format:**
- You MUST return your response in a valid JSON format that adheres to the provided schema. Do not return markdown or any other format."""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "textResponse": {
            "type": "STRING",
            "description": "A friendly, conversational text response to the user's query.",
        },
        "recommendations": {
            "type": "ARRAY",
            "description": "A list of recommended product objects.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": {"type": "INTEGER", "description": "The ID of the recommended product."},
                    "reason": {"type": "STRING", "description": "A brief reason why this product is recommended."},
                },
                "required": ["id", "reason"],
            },
        },
    },
    "required": ["textResponse", "recommendations"],
}

# Canned answers for the rule-based path
SHIPPING_ANSWER = (
    "We offer free standard shipping on all orders over $50. "
    "Orders under $50 ship for a flat rate of $5."
)
RETURNS_ANSWER = "We have a 14-day return policy for unopened and unused products."
CONTACT_ANSWER = "For anything I can't resolve, please use the contact form on our website to reach our support team."
FALLBACK_ANSWER = (
    "I'm not sure I can help with that one. Try asking me for a product recommendation, "
    "or use the contact form on our website to reach our support team."
)

STOPWORDS = {
    "the", "and", "for", "with", "that", "this", "you", "your", "have", "any", "are", "can",
    "what", "which", "something", "some", "need", "want", "looking", "recommend", "suggest",
    "show", "please", "good", "best", "buy", "get", "under", "over", "cheap", "budget", "gift",
    "from", "about", "would", "like", "really", "hello", "thanks",
}

_PRICE_CAP = re.compile(r"(?:under|below|less than|cheaper than)\s*\$?\s*(\d+(?:\.\d+)?)", re.IGNORECASE)


def product_snippets(products: List[Product]) -> List[Dict[str, Any]]:
    return [
        {"id": p.id, "name": p.name, "category": p.category, "description": p.description, "price": p.price}
        for p in products
    ]


def resolve_recommendations(raw: List[Dict[str, Any]], products: List[Product]) -> List[Recommendation]:
    """Map model-recommended ids onto catalog products; unknown ids are dropped."""
    by_id = {p.id: p for p in products}
    recs = []
    for entry in raw or []:
        try:
            pid = int(entry.get("id"))
        except (AttributeError, TypeError, ValueError):
            continue
        product = by_id.get(pid)
        if product is None:
            logger.debug(f"[CHAT] dropping recommendation for unknown product id {pid}")
            continue
        recs.append(Recommendation(product=product, reason=str(entry.get("reason", ""))))
    return recs


def keyword_matches(query: str, products: List[Product], limit: int = MAX_RECOMMENDATIONS) -> List[Product]:
    """Products whose name, category or description fuzzily contain the query's keywords."""
    cap = _PRICE_CAP.search(query)
    max_price = float(cap.group(1)) if cap else None

    keywords = [t for t in re.findall(r"[a-z0-9]+", query.lower()) if len(t) >= 3 and t not in STOPWORDS]
    if not keywords:
        return []

    scored = []
    for index, p in enumerate(products):
        if max_price is not None and p.price > max_price:
            continue
        words = set(re.findall(r"[a-z0-9]+", f"{p.name} {p.category} {p.description}".lower()))
        score = 0.0
        for kw in keywords:
            hit = process.extractOne(kw, words, scorer=fuzz.ratio, score_cutoff=80)
            if hit:
                score += hit[1]
        if score > 0:
            scored.append((score, index, p))

    # Best score first, catalog order among equals
    scored.sort(key=lambda s: (-s[0], s[1]))
    return [p for _, _, p in scored[:limit]]


class FlexBotAgent(BaseAgent):
    name = "flexbot"

    def __init__(self, catalog, client: Optional[GenerationClient] = None, use_llm: Optional[bool] = None):
        """
        Args:
            catalog: object exposing the live ``products`` list
            client: Gemini client; built from Config when needed
            use_llm: force the provider on or off; defaults to Config.has_gemini()
        """
        self.catalog = catalog
        self.use_llm = Config.has_gemini() if use_llm is None else use_llm
        self._client = client

    @property
    def client(self) -> GenerationClient:
        if self._client is None:
            self._client = GenerationClient()
        return self._client

    def handle(self, query: str, session: Dict[str, Any] = None) -> AgentResult:
        query = (query or "").strip()
        if not query:
            raise InvalidArgumentError("Please type a message.")
        logger.info(f"[CHAT] message: {query!r} (llm={self.use_llm})")
        if self.use_llm:
            return self._ask_model(query)
        return self._answer_from_rules(query)

    def _ask_model(self, query: str) -> AgentResult:
        products = list(self.catalog.products)
        contents = f'User Query: "{query}"\n\nAvailable Products: {json.dumps(product_snippets(products))}'
        try:
            reply = self.client.generate_json(contents, SYSTEM_INSTRUCTION, RESPONSE_SCHEMA)
            text = reply["textResponse"]
            recs = resolve_recommendations(reply.get("recommendations", []), products)
        except (ProviderError, KeyError, TypeError) as e:
            logger.error(f"[CHAT] Gemini call failed: {e}")
            return self._ok("provider_error", PROVIDER_FAILURE)
        return self._ok("llm", str(text), recs)

    def _answer_from_rules(self, query: str) -> AgentResult:
        intents = rule_based_intents(query)
        logger.debug(f"[CHAT] rule intents: {intents}")

        answers = []
        if "shipping" in intents:
            answers.append(SHIPPING_ANSWER)
        if "returns" in intents:
            answers.append(RETURNS_ANSWER)
        if "contact" in intents:
            answers.append(CONTACT_ANSWER)

        matches = []
        if not answers or "recommend" in intents:
            matches = keyword_matches(query, self.catalog.products)

        if matches:
            names = ", ".join(p.name for p in matches)
            answers.append(f"Here {'is' if len(matches) == 1 else 'are'} my top pick{'s' if len(matches) > 1 else ''}: {names}.")
            recs = [Recommendation(product=p, reason=f"{p.name} ({p.category}, ${p.price:.2f}): {p.description}")
                    for p in matches]
            return self._ok("recommend", " ".join(answers), recs)

        if answers:
            return self._ok(intents[0], " ".join(answers))
        if "recommend" in intents:
            return self._ok("recommend", "I couldn't find a product matching that. Could you tell me a bit more about what you need?")
        if "greeting" in intents:
            return self._ok("greeting", GREETING)
        return self._ok("unknown", FALLBACK_ANSWER)
