"""Pydantic models for the provider payload and the public search response."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProviderItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    snippet: str | None = None
    link: str | None = None


class ProviderSearchInformation(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    # Google reports this as a string; anything unparsable counts as zero.
    total_results: Any = Field(default=None, alias="totalResults")


class ProviderErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: int | None = None
    message: str | None = None
    status: str | None = None


class ProviderResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    search_information: ProviderSearchInformation | None = Field(
        default=None, alias="searchInformation"
    )
    items: list[ProviderItem] = Field(default_factory=list)
    error: ProviderErrorDetail | None = None


class SearchResult(BaseModel):
    id: int
    title: str
    description: str
    url: str
    domain: str


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str
    total: int
    limit: int
    offset: int
    allowed_domains: list[str] = Field(alias="allowedDomains")
    results: list[SearchResult] = Field(default_factory=list)


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "OK"
    timestamp: str
    allowed_domains: list[str] = Field(alias="allowedDomains")
    api_key_configured: bool = Field(alias="apiKeyConfigured")
    google_configured: bool = Field(alias="googleConfigured")
