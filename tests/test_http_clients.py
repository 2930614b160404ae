"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from nutrition_engine.adapters.fdc_client import HttpxFdcClient
from nutrition_engine.adapters.openai_analysis_client import OpenAIAnalysisClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = json.dumps({"foods": []})) -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_analysis_client_parses_output() -> None:
    fake = _FakeOpenAI()
    client = OpenAIAnalysisClient(client=fake)

    result = asyncio.run(
        client.analyze(
            model="gpt-5.2",
            reasoning_effort="high",
            store=False,
            prompt="Detect foods",
            schema={"type": "object"},
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
        )
    )

    assert result == {"foods": []}
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["reasoning"] == {"effort": "high"}
    assert payload["text"]["format"]["name"] == "food_analysis"
    content = payload["input"][0]["content"]
    assert [part["type"] for part in content] == ["input_text", "input_image"]


def test_openai_analysis_client_text_only_without_reasoning() -> None:
    fake = _FakeOpenAI()
    client = OpenAIAnalysisClient(client=fake)

    asyncio.run(
        client.analyze(
            model="gpt-5.2",
            reasoning_effort=None,
            store=True,
            prompt="Food: Dal",
            schema={"type": "object"},
        )
    )

    payload = fake.responses.last_payload
    assert payload is not None
    assert "reasoning" not in payload
    assert payload["store"] is True
    assert len(payload["input"][0]["content"]) == 1


def test_openai_analysis_client_rejects_empty_output() -> None:
    client = OpenAIAnalysisClient(client=_FakeOpenAI(output_text=""))

    with pytest.raises(RuntimeError, match="empty"):
        asyncio.run(
            client.analyze(
                model="gpt-5.2",
                reasoning_effort=None,
                store=False,
                prompt="Food: Dal",
                schema={"type": "object"},
            )
        )


def test_fdc_client_search_and_get() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/foods/search"):
            return httpx.Response(200, json={"foods": []})
        return httpx.Response(200, json={"fdcId": 1, "foodNutrients": []})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxFdcClient(
        api_key="key",
        base_url="https://api.test",
        http_client=async_client,
    )

    search = asyncio.run(client.search_foods("rice", page_size=3))
    food = asyncio.run(client.get_food(1))

    assert search == {"foods": []}
    assert food["fdcId"] == 1
    search_request, food_request = seen
    assert search_request.method == "POST"
    assert search_request.url.params["api_key"] == "key"
    body = json.loads(search_request.content.decode())
    assert body["query"] == "rice"
    assert body["pageSize"] == 3
    assert "Branded" not in body["dataType"]
    assert food_request.url.path == "/food/1"
    assert food_request.url.params["nutrients"] == "208,203,204,205"


def test_fdc_client_raises_on_error_status() -> None:
    transport = httpx.MockTransport(lambda _request: httpx.Response(404, json={}))
    client = HttpxFdcClient(
        api_key="key",
        base_url="https://api.test",
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        asyncio.run(client.get_food(999))

    assert exc_info.value.response.status_code == 404


def test_fdc_client_create_strips_trailing_slash() -> None:
    client = HttpxFdcClient.create(api_key="key", base_url="https://api.test/fdc/v1/")
    assert client.base_url == "https://api.test/fdc/v1"
    asyncio.run(client.close())
