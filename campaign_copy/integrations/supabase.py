"""Supabase PostgREST client for vector search and intake lookups."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from campaign_copy.config import settings
from campaign_copy.core.exceptions import APIKeyMissingError, ExternalAPIError
from campaign_copy.schemas.intake import ClientIntake

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Thin async client over the Supabase REST API.

    Usage:
        async with SupabaseClient() as supabase:
            rows = await supabase.match_chunks(client_id, embedding)
    """

    API_NAME = "Supabase"

    def __init__(
        self,
        url: str | None = None,
        service_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.url = (url or settings.supabase_url or "").rstrip("/")
        self.service_key = service_key or settings.supabase_service_key
        self.timeout = timeout or settings.supabase_timeout_seconds
        self._client: httpx.AsyncClient | None = None

        if not self.service_key:
            raise APIKeyMissingError(self.API_NAME)
        if not self.url:
            raise ExternalAPIError(self.API_NAME, "SUPABASE_URL is not configured")

    async def __aenter__(self) -> "SupabaseClient":
        self._client = httpx.AsyncClient(
            base_url=self.url,
            timeout=self.timeout,
            headers={
                "apikey": self.service_key or "",
                "Authorization": f"Bearer {self.service_key}",
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

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.warning("Supabase HTTP error", extra={"path": path, "error": str(e)})
            raise ExternalAPIError(self.API_NAME, str(e)) from e

        if response.status_code >= 400:
            logger.warning(
                "Supabase API error",
                extra={"path": path, "status": response.status_code},
            )
            raise ExternalAPIError(
                self.API_NAME,
                f"API error: {response.status_code} - {response.text}",
            )
        return response.json()

    async def match_fragments(
        self,
        client_id: str,
        embedding: list[float],
        threshold: float | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Run the `match_chunks` RPC and return `{content, similarity}` rows."""
        rows = await self._request(
            "POST",
            "/rest/v1/rpc/match_chunks",
            json={
                "client_id_filter": client_id,
                "query_embedding": embedding,
                "match_threshold": settings.retrieval_match_threshold if threshold is None else threshold,
                "match_count": limit or settings.retrieval_match_count,
            },
        )
        if not isinstance(rows, list):
            raise ExternalAPIError(self.API_NAME, "match_chunks returned a non-list payload")

        matches = [
            {
                "content": str(row.get("content") or ""),
                "similarity": float(row.get("similarity") or 0.0),
            }
            for row in rows
            if isinstance(row, dict)
        ]
        logger.info(
            "Vector search complete",
            extra={"client_id": client_id, "match_count": len(matches)},
        )
        return matches

    # The RPC is named after chunks in the database schema
    match_chunks = match_fragments

    async def get_client_intake(self, client_id: str) -> ClientIntake | None:
        """Fetch the completed intake record for a client, if any."""
        rows = await self._request(
            "GET",
            "/rest/v1/client_intake",
            params={
                "select": "*",
                "client_id": f"eq.{client_id}",
                "intake_completed": "eq.true",
                "limit": "1",
            },
        )
        if not rows:
            return None
        try:
            return ClientIntake.model_validate(rows[0])
        except ValidationError as e:
            raise ExternalAPIError(self.API_NAME, f"Malformed client_intake row: {e}") from e

    async def get_client_name(self, client_id: str) -> str | None:
        rows = await self._request(
            "GET",
            "/rest/v1/clients",
            params={"select": "name", "id": f"eq.{client_id}", "limit": "1"},
        )
        if not rows:
            return None
        name = rows[0].get("name")
        return str(name) if name else None
