from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from obgynrx_gateway.auth import API_KEY_HEADER
from obgynrx_gateway.config import Settings
from obgynrx_gateway.gateway import SearchGateway, build_router, install_error_handlers
from obgynrx_gateway.search_client import GoogleSearchClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings, *, http_client: httpx.AsyncClient | None = None
) -> FastAPI:
    shared_client = http_client or httpx.AsyncClient()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        await shared_client.aclose()

    app = FastAPI(title="obgynrx-gateway", version="1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    gateway = build_gateway(settings, shared_client)
    app.include_router(build_router(gateway, settings))
    install_error_handlers(app, settings.allowed_domains)

    log_startup_summary(settings)
    return app


def build_gateway(settings: Settings, http_client: httpx.AsyncClient) -> SearchGateway:
    search_client = GoogleSearchClient(
        api_key=settings.google_api_key,
        engine_id=settings.google_cse_id,
        http_client=http_client,
        base_url=settings.google_search_base_url,
        timeout_seconds=settings.google_search_timeout_seconds,
        max_response_bytes=settings.google_search_max_response_bytes,
    )
    return SearchGateway(settings=settings, search_client=search_client)


def log_startup_summary(settings: Settings) -> None:
    logger.info("allowed_domains %s", ", ".join(settings.allowed_domains))
    if settings.allowed_hostnames:
        logger.info(
            "allowed_hostnames %s", ", ".join(sorted(settings.allowed_hostnames))
        )
    if settings.api_key_configured:
        logger.info("api_key_protection enabled header=%s", API_KEY_HEADER)
    else:
        logger.warning(
            "API key protection: DISABLED (set OBGYNRX_PROXY_KEY). "
            "/search will reject every request with a configuration error."
        )
    if not settings.google_configured:
        logger.warning(
            "Search provider not configured (set GOOGLE_API_KEY and GOOGLE_CSE_ID)."
        )


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app = create_app(settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
