from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError

from obgynrx_gateway.errors import (
    NotConfigured,
    UpstreamError,
    UpstreamMalformedResponse,
    UpstreamUnavailable,
)
from obgynrx_gateway.models import ProviderResponse
from obgynrx_gateway.query_builder import ProviderQuery

logger = logging.getLogger(__name__)


class GoogleSearchClient:
    """Single-shot client for the Google Custom Search JSON API.

    Uses the shared httpx.AsyncClient from the app. Each call makes exactly one
    request; failures are raised as gateway errors and never retried.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        engine_id: str | None,
        http_client: httpx.AsyncClient,
        base_url: str,
        timeout_seconds: float,
        max_response_bytes: int,
    ) -> None:
        self._api_key = api_key
        self._engine_id = engine_id
        self._http_client = http_client
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._max_response_bytes = max_response_bytes

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._engine_id)

    async def fetch(self, provider_query: ProviderQuery) -> ProviderResponse:
        if not self._api_key or not self._engine_id:
            raise NotConfigured(
                "Search provider is not configured.",
                detail="missing GOOGLE_API_KEY or GOOGLE_CSE_ID",
            )

        params = {
            "key": self._api_key,
            "cx": self._engine_id,
            "q": provider_query.raw_query_string,
            "start": str(provider_query.start_index),
            "num": str(provider_query.num),
        }

        try:
            async with self._http_client.stream(
                "GET",
                self._base_url,
                params=params,
                timeout=self._timeout_seconds,
            ) as response:
                status_code = response.status_code
                body = await self._read_limited(response)
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable(
                "Search provider timed out.", detail=exc.__class__.__name__
            ) from exc
        except httpx.TransportError as exc:
            raise UpstreamUnavailable(
                "Search provider is unreachable.", detail=exc.__class__.__name__
            ) from exc

        logger.info(
            "provider_response status=%d bytes=%d start=%d num=%d",
            status_code,
            len(body),
            provider_query.start_index,
            provider_query.num,
        )
        return self._parse(body, status_code)

    async def _read_limited(self, response: httpx.Response) -> bytes:
        chunks: list[bytes] = []
        received = 0
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > self._max_response_bytes:
                raise UpstreamMalformedResponse(
                    "Search provider returned an oversized response.",
                    detail=f"body exceeded {self._max_response_bytes} bytes",
                )
            chunks.append(chunk)
        return b"".join(chunks)

    def _parse(self, body: bytes, status_code: int) -> ProviderResponse:
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise UpstreamMalformedResponse(
                "Search provider returned invalid JSON.",
                detail=f"status={status_code}",
            ) from exc

        if not isinstance(payload, dict):
            raise UpstreamMalformedResponse(
                "Search provider returned an unexpected payload.",
                detail=f"status={status_code} type={type(payload).__name__}",
            )

        try:
            parsed = ProviderResponse.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamMalformedResponse(
                "Search provider returned an unexpected payload.",
                detail=f"status={status_code} errors={exc.error_count()}",
            ) from exc

        if parsed.error is not None:
            message = self._redact(parsed.error.message or "Unknown provider error.")
            raise UpstreamError(
                message,
                detail=f"status={status_code} code={parsed.error.code}",
                status_code=status_code,
            )

        if status_code >= 400:
            raise UpstreamError(
                f"Search provider returned HTTP {status_code}.",
                detail=f"status={status_code}",
                status_code=status_code,
            )

        return parsed

    def _redact(self, text: str) -> str:
        if self._api_key and self._api_key in text:
            return text.replace(self._api_key, "[redacted]")
        return text
