# core/greetings.py
from __future__ import annotations

from typing import Dict, Tuple

GREETINGS: Dict[str, str] = {
    "arabic": "السلام عليكم",
    "hindi": "नमस्ते",
    "urdu": "آداب",
    "chinese": "你好",
    "japanese": "こんにちは",
    "korean": "안녕하세요",
    "spanish": "Hola",
    "french": "Bonjour",
    "german": "Hallo",
    "italian": "Ciao",
    "portuguese": "Olá",
    "russian": "Привет",
    "default": "Hello",
}

# (greeting, religion keywords, country keywords). Order matters: first match wins.
GREETING_RULES: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...]], ...] = (
    ("arabic", ("islam", "muslim"), ()),
    ("hindi", ("hindu",), ("india",)),
    ("urdu", (), ("pakistan", "bangladesh")),
    ("chinese", (), ("china",)),
    ("japanese", (), ("japan",)),
    ("korean", (), ("korea",)),
    ("spanish", (), ("spain", "mexico")),
    ("french", (), ("france",)),
    ("german", (), ("germany",)),
    ("italian", (), ("italy",)),
    ("portuguese", (), ("brazil", "portugal")),
    ("russian", (), ("russia",)),
)


def resolve_greeting(country: str | None, cultural_background: str | None) -> str:
    """
    Pick a localized greeting from free-text country + religion/culture.
    Religion keywords win over country keywords. Never fails.
    """
    country_low = (country or "").lower()
    religion_low = (cultural_background or "").lower()

    for key, religion_words, country_words in GREETING_RULES:
        if any(w in religion_low for w in religion_words):
            return GREETINGS[key]
        if any(w in country_low for w in country_words):
            return GREETINGS[key]

    return GREETINGS["default"]
