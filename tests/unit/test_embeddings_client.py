"""Unit tests for embeddings client behavior."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from campaign_copy.config import settings
from campaign_copy.core.exceptions import APIKeyMissingError, ExternalAPIError
from campaign_copy.integrations.embeddings import EmbeddingsClient


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: dict[str, Any] | None = None) -> None:
        self.status_code = status_code
        self._payload = payload or {}
        self.text = "upstream failure"

    def json(self) -> dict[str, Any]:
        return self._payload


@pytest.mark.asyncio
async def test_embeddings_client_posts_model_and_sorts_by_index(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Embeddings come back in input order regardless of response order."""
    captured: dict[str, Any] = {}

    class FakeAsyncClient:
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            captured["init"] = {"args": args, "kwargs": kwargs}

        async def post(self, url: str, json: dict[str, Any]) -> FakeResponse:
            captured["post"] = {"url": url, "json": json}
            # Out-of-order indices to verify client sorting behavior.
            return FakeResponse(
                payload={
                    "data": [
                        {"index": 1, "embedding": [0.2, 0.3]},
                        {"index": 0, "embedding": [0.1, 0.2]},
                    ]
                }
            )

        async def aclose(self) -> None:
            return None

    monkeypatch.setattr("campaign_copy.integrations.embeddings.httpx.AsyncClient", FakeAsyncClient)

    async with EmbeddingsClient(api_key="sk-test-key") as client:
        vectors = await client.embed(["alpha", "beta"])

    assert captured["post"]["url"] == settings.embeddings_url
    assert captured["post"]["json"] == {"model": settings.embeddings_model, "input": ["alpha", "beta"]}
    assert captured["init"]["kwargs"]["headers"]["Authorization"] == "Bearer sk-test-key"
    assert vectors == [[0.1, 0.2], [0.2, 0.3]]


@pytest.mark.asyncio
async def test_embeddings_client_skips_request_for_empty_input(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class FakeAsyncClient:
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            pass

        async def post(self, url: str, json: dict[str, Any]) -> FakeResponse:
            raise AssertionError("no request expected")

        async def aclose(self) -> None:
            return None

    monkeypatch.setattr("campaign_copy.integrations.embeddings.httpx.AsyncClient", FakeAsyncClient)

    async with EmbeddingsClient(api_key="sk-test-key") as client:
        assert await client.embed([]) == []


@pytest.mark.asyncio
async def test_embeddings_client_maps_failures_to_external_api_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    responses: list[Any] = [
        FakeResponse(status_code=500),
        httpx.ConnectError("connection refused"),
    ]

    class FakeAsyncClient:
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            pass

        async def post(self, url: str, json: dict[str, Any]) -> FakeResponse:
            outcome = responses.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        async def aclose(self) -> None:
            return None

    monkeypatch.setattr("campaign_copy.integrations.embeddings.httpx.AsyncClient", FakeAsyncClient)

    async with EmbeddingsClient(api_key="sk-test-key") as client:
        with pytest.raises(ExternalAPIError) as status_error:
            await client.embed(["alpha"])
        with pytest.raises(ExternalAPIError) as transport_error:
            await client.embed(["alpha"])

    assert "API error: 500 - upstream failure" in status_error.value.message
    assert "connection refused" in transport_error.value.message


def test_embeddings_client_requires_api_key_from_settings() -> None:
    """Missing key raises API key error at client construction time."""
    original_key = settings.openai_api_key
    try:
        settings.openai_api_key = None
        with pytest.raises(APIKeyMissingError):
            EmbeddingsClient()
    finally:
        settings.openai_api_key = original_key


def test_embeddings_client_requires_context_manager() -> None:
    client = EmbeddingsClient(api_key="sk-test-key")

    with pytest.raises(RuntimeError):
        _ = client.client
