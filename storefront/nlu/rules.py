"""Rule-based intent detection with tiny fuzzy matching."""
import re
from difflib import SequenceMatcher
from typing import List

SHIPPING  = ["shipping", "ship", "delivery", "deliver", "postage", "free shipping", "how long"]
RETURNS   = ["return", "returns", "refund", "exchange", "send back", "money back"]
CONTACT   = ["contact", "support", "customer service", "talk to", "human", "complaint", "reach you"]
RECOMMEND = ["recommend", "suggest", "best", "looking for", "need", "want", "buy", "gift",
             "cheap", "budget", "good", "which", "show me"]
GREETING  = ["hi", "hello", "hey", "good morning", "good evening", "thanks", "thank you"]

INTENTS = {
    "shipping": SHIPPING,
    "returns": RETURNS,
    "contact": CONTACT,
    "recommend": RECOMMEND,
    "greeting": GREETING,
}


def _contains_any(q: str, vocab: List[str]) -> bool:
    ql = q.lower()
    tokens = re.findall(r"[a-z]+", ql)

    # Multi-word phrases match as substrings, single words as whole tokens
    for phrase in vocab:
        if " " in phrase and phrase in ql:
            return True
        if phrase in tokens:
            return True

    # Short words are too easy to fuzz into each other
    for t in tokens:
        if len(t) < 4:
            continue
        for w in vocab:
            if " " not in w and len(w) >= 4 and SequenceMatcher(None, t, w).ratio() >= 0.88:
                return True
    return False


def rule_based_intents(query: str) -> List[str]:
    """Intents found in ``query``, in a fixed priority order."""
    return [name for name, vocab in INTENTS.items() if _contains_any(query, vocab)]
