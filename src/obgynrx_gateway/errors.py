from __future__ import annotations


class GatewayError(Exception):
    """Base error converted into a JSON error body at the HTTP boundary.

    ``error`` is the stable top-level string callers can match on, ``message``
    is an optional caller-safe explanation, and ``detail`` is only logged.
    """

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str | None = None, *, detail: str | None = None) -> None:
        super().__init__(message or self.error)
        self.message = message
        self.detail = detail

    def to_body(self, allowed_domains: tuple[str, ...]) -> dict[str, object]:
        body: dict[str, object] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        body["allowedDomains"] = list(allowed_domains)
        return body


class ConfigurationError(GatewayError):
    status_code = 500
    error = "Server configuration error"


class MissingCredential(GatewayError):
    status_code = 401
    error = "Unauthorized: Missing API key header"


class InvalidCredential(GatewayError):
    status_code = 401
    error = "Unauthorized: Invalid API key"


class HostnameNotAllowed(GatewayError):
    status_code = 403
    error = "Forbidden: Hostname not allowed"


class BadRequest(GatewayError):
    status_code = 400
    error = "Missing required query parameter: q"


class UpstreamFailure(GatewayError):
    status_code = 500
    error = "Search service error"


class NotConfigured(UpstreamFailure):
    pass


class UpstreamUnavailable(UpstreamFailure):
    pass


class UpstreamMalformedResponse(UpstreamFailure):
    pass


class UpstreamError(UpstreamFailure):
    def __init__(
        self,
        message: str | None = None,
        *,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, detail=detail)
        self.upstream_status_code = status_code


class MalformedResultItem(UpstreamFailure):
    pass
