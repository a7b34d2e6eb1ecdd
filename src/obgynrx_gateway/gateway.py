from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Protocol

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request
from fastapi.responses import JSONResponse

from obgynrx_gateway.auth import API_KEY_HEADER, check_credential, check_hostname
from obgynrx_gateway.config import Settings
from obgynrx_gateway.errors import GatewayError
from obgynrx_gateway.models import HealthResponse, ProviderResponse, SearchResponse
from obgynrx_gateway.normalizer import normalize
from obgynrx_gateway.query_builder import (
    ProviderQuery,
    build_provider_query,
    build_search_request,
)

logger = logging.getLogger(__name__)


class SearchClientLike(Protocol):
    @property
    def configured(self) -> bool: ...

    async def fetch(self, provider_query: ProviderQuery) -> ProviderResponse: ...


class SearchGateway:
    def __init__(self, *, settings: Settings, search_client: SearchClientLike) -> None:
        self._settings = settings
        self._search_client = search_client

    @property
    def allowed_domains(self) -> tuple[str, ...]:
        return self._settings.allowed_domains

    async def search(
        self,
        q: str | None,
        limit: str | int | None = None,
        offset: str | int | None = None,
    ) -> SearchResponse:
        request = build_search_request(q, limit, offset)
        provider_query = build_provider_query(request, self._settings.allowed_domains)
        logger.info(
            "search_request query_chars=%d limit=%d offset=%d",
            len(request.query),
            request.limit,
            request.offset,
        )

        raw = await self._search_client.fetch(provider_query)
        response = normalize(
            raw,
            query=request.query,
            allowed_domains=self._settings.allowed_domains,
            offset=request.offset,
            limit=request.limit,
        )
        logger.info(
            "search_completed total=%d returned=%d",
            response.total,
            len(response.results),
        )
        return response

    def health(self) -> HealthResponse:
        return HealthResponse(
            status="OK",
            timestamp=_utc_timestamp(),
            allowed_domains=list(self._settings.allowed_domains),
            api_key_configured=self._settings.api_key_configured,
            google_configured=self._search_client.configured,
        )


def build_router(gateway: SearchGateway, settings: Settings) -> APIRouter:
    router = APIRouter()

    async def require_allowed_host(request: Request) -> None:
        check_hostname(request.url.hostname, settings.allowed_hostnames)

    async def require_credential(
        api_key: str | None = Header(default=None, alias=API_KEY_HEADER),
    ) -> None:
        check_credential(api_key, settings.proxy_key)

    @router.get(
        "/search",
        response_model=SearchResponse,
        dependencies=[Depends(require_allowed_host), Depends(require_credential)],
    )
    async def search(
        q: str | None = Query(default=None),
        limit: str | None = Query(default=None),
        offset: str | None = Query(default=None),
    ) -> SearchResponse:
        return await gateway.search(q, limit, offset)

    @router.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return gateway.health()

    return router


def install_error_handlers(app: FastAPI, allowed_domains: tuple[str, ...]) -> None:
    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        logger.warning(
            "request_rejected path=%s status=%d error_type=%s detail=%s",
            request.url.path,
            exc.status_code,
            exc.__class__.__name__,
            exc.detail or "-",
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_body(allowed_domains),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception method=%s path=%s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "allowedDomains": list(allowed_domains),
            },
        )


def _utc_timestamp() -> str:
    now = datetime.now(UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
