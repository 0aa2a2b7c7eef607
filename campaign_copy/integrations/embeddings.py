"""Embeddings integration for retrieval query vectors."""

import logging
from typing import Any

import httpx

from campaign_copy.config import settings
from campaign_copy.core.exceptions import APIKeyMissingError, ExternalAPIError

logger = logging.getLogger(__name__)


class EmbeddingsClient:
    """Client for embedding retrieval queries.

    Vectors are opaque to the rest of the system; they are only handed to
    the vector search RPC.
    """

    MAX_BATCH_SIZE = 100

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key or settings.openai_api_key
        self.timeout = timeout
        self.model = settings.embeddings_model
        self.url = settings.embeddings_url
        self._client: httpx.AsyncClient | None = None

        if not self.api_key:
            raise APIKeyMissingError("OpenAI (for embeddings)")

    async def __aenter__(self) -> "EmbeddingsClient":
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Client must be used as async context manager")
        return self._client

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: Query strings to embed

        Returns:
            One embedding vector per input text, in input order
        """
        logger.info("Generating embeddings", extra={"text_count": len(texts), "model": self.model})
        if not texts:
            return []

        all_embeddings: list[list[float]] = []

        for i in range(0, len(texts), self.MAX_BATCH_SIZE):
            batch = texts[i:i + self.MAX_BATCH_SIZE]

            try:
                response = await self.client.post(
                    self.url,
                    json={
                        "model": self.model,
                        "input": batch,
                    },
                )
            except httpx.HTTPError as e:
                logger.warning("Embeddings HTTP error", extra={"error": str(e)})
                raise ExternalAPIError("OpenAI Embeddings", str(e)) from e

            if response.status_code != 200:
                logger.warning("Embeddings API error", extra={"status": response.status_code})
                raise ExternalAPIError(
                    "OpenAI Embeddings",
                    f"API error: {response.status_code} - {response.text}",
                )

            data = response.json().get("data", [])

            # Sort by index to maintain order
            sorted_data = sorted(data, key=lambda x: x.get("index", 0))
            all_embeddings.extend(item["embedding"] for item in sorted_data)

        return all_embeddings
