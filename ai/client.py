# ai/client.py
from typing import Optional

from openai import AsyncOpenAI

import settings

_client: Optional[AsyncOpenAI] = None


def get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        if not settings.OPENAI_API_KEY:
            raise RuntimeError("Missing OPENAI_API_KEY")
        _client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
    return _client
