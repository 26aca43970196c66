# tests/test_gateway.py
import json

import httpx
import pytest

import ai.gateway
from ai.gateway import HttpGenerationGateway, OpenAIGenerationGateway, build_gateway
from ai.generation import build_career_prompt
from core.errors import GenerationGatewayError
from memory.models import Profile

URL = "http://generator.test/api/generate-career-path"


def _gateway(handler):
    return HttpGenerationGateway(URL, transport=httpx.MockTransport(handler))


async def test_http_gateway_success():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"response": "<p>Plan</p>"})

    assert await _gateway(handler).generate("profile prompt") == "<p>Plan</p>"
    assert seen["body"] == {"prompt": "profile prompt"}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "Failed to generate career path"}),
        httpx.Response(404, text="not here"),
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"error": "nope"}),
        httpx.Response(200, json=["response"]),
    ],
)
async def test_http_gateway_failures_are_uniform(response):
    with pytest.raises(GenerationGatewayError):
        await _gateway(lambda request: response).generate("p")


async def test_http_gateway_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(GenerationGatewayError):
        await _gateway(handler).generate("p")


async def test_openai_gateway_wraps_errors(monkeypatch):
    async def boom(prompt):
        raise RuntimeError("Missing OPENAI_API_KEY")

    monkeypatch.setattr(ai.gateway, "generate_career_path", boom)
    with pytest.raises(GenerationGatewayError):
        await OpenAIGenerationGateway().generate("p")


async def test_openai_gateway_returns_text(monkeypatch):
    async def fake(prompt):
        return f"analysis for {len(prompt)} chars"

    monkeypatch.setattr(ai.gateway, "generate_career_path", fake)
    assert await OpenAIGenerationGateway().generate("abc") == "analysis for 3 chars"


def test_build_gateway_picks_transport(monkeypatch):
    monkeypatch.setattr(ai.gateway, "GENERATION_GATEWAY_URL", "")
    assert isinstance(build_gateway(), OpenAIGenerationGateway)
    monkeypatch.setattr(ai.gateway, "GENERATION_GATEWAY_URL", URL)
    gw = build_gateway()
    assert isinstance(gw, HttpGenerationGateway) and gw.url == URL


def test_career_prompt_lists_every_answer():
    profile = Profile(
        name="Aisha",
        country="Pakistan",
        religion="Islam",
        current_role="Student",
        experience_level="Entry Level (0-2 years)",
        skills="Python",
        interests="Data",
        work_environment="Remote Work",
        industry="Technology",
        career_goals="Lead a data team",
    )
    prompt = build_career_prompt(profile)
    for line in [
        "- Name: Aisha",
        "- Religion/Culture: Islam",
        "- Experience Level: Entry Level (0-2 years)",
        "- Work Environment: Remote Work",
        "- Career Goals: Lead a data team",
    ]:
        assert line in prompt
    assert "No markdown." in prompt
