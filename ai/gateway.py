# ai/gateway.py
from __future__ import annotations

from typing import Optional, Protocol

import httpx

from ai.generation import generate_career_path
from core.errors import GenerationGatewayError
from settings import GENERATION_GATEWAY_URL, GENERATION_TIMEOUT


class GenerationGateway(Protocol):
    async def generate(self, prompt: str) -> str:
        ...


class OpenAIGenerationGateway:
    """In-process generation: talks to OpenAI directly."""

    async def generate(self, prompt: str) -> str:
        try:
            return await generate_career_path(prompt)
        except Exception as e:
            print(f"[DEBUG] OpenAIGenerationGateway failed: {e!r}")
            raise GenerationGatewayError(str(e)) from e


class HttpGenerationGateway:
    """
    Remote generation: POST {"prompt"} and expect {"response"}.
    Any non-2xx status, transport error or unparseable body is one failure kind.
    """

    def __init__(
        self,
        url: str,
        timeout: float = GENERATION_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def generate(self, prompt: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client_http:
                resp = await client_http.post(self.url, json={"prompt": prompt})
        except httpx.HTTPError as e:
            print(f"[DEBUG] HttpGenerationGateway transport error: {e!r}")
            raise GenerationGatewayError(f"transport error: {e}") from e

        if not resp.is_success:
            print(f"[DEBUG] HttpGenerationGateway status={resp.status_code} body={resp.text[:200]!r}")
            raise GenerationGatewayError(f"status {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise GenerationGatewayError("response is not JSON") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise GenerationGatewayError("response field missing")
        return text


def build_gateway() -> GenerationGateway:
    if GENERATION_GATEWAY_URL:
        return HttpGenerationGateway(GENERATION_GATEWAY_URL)
    return OpenAIGenerationGateway()
