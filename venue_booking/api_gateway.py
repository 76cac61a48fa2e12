"""
API Gateway
Version: 1.0

HTTP client for the scheduling API (catalog, conflict check, submission).
DEPENDS ON: config.py

Never raises for HTTP or transport errors: callers get an APIResponse
with success=False and translate it into their own error taxonomy.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional
from urllib.parse import quote

import httpx

from config import get_settings

logger = logging.getLogger(__name__)


class HttpMethod(Enum):
    """HTTP methods."""
    GET = "GET"
    POST = "POST"


@dataclass
class APIResponse:
    """Structured API response."""
    success: bool
    status_code: int
    data: Any
    error_message: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def is_transport_error(self) -> bool:
        """No HTTP status at all: timeout, DNS, refused connection."""
        return self.status_code == 0


class APIGateway:
    """
    Scheduling API gateway.

    Features:
    - Optional bearer authentication per call
    - Retry with exponential backoff
    - Connection pooling
    - HTML response guard
    """

    DEFAULT_MAX_RETRIES = 2
    DEFAULT_TIMEOUT = 15.0
    RETRY_STATUS_CODES = {408, 429, 500, 502, 503, 504}

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        max_retries: Optional[int] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize API Gateway.

        Args:
            base_url: Base URL (defaults to settings)
            token: Bearer token for authenticated calls (defaults to settings)
            max_retries: Retry count (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            client: Preconfigured httpx client (tests inject a mock transport)
        """
        if base_url is None or max_retries is None or timeout is None:
            settings = get_settings()
            base_url = base_url or settings.SCHEDULING_API_URL
            token = token if token is not None else settings.SCHEDULING_API_TOKEN
            max_retries = max_retries if max_retries is not None else settings.API_MAX_RETRIES
            timeout = timeout or settings.API_TIMEOUT_SECONDS

        self.base_url = base_url.rstrip("/")
        self.token = token
        self.max_retries = max_retries

        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=5.0),
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=50),
            follow_redirects=True
        )

        logger.info(f"APIGateway initialized: {self.base_url}")

    async def execute(
        self,
        method: HttpMethod,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
        auth: bool = False,
        max_retries: Optional[int] = None
    ) -> APIResponse:
        """
        Execute HTTP request.

        Args:
            method: HTTP method
            path: API path
            params: Query parameters (None values dropped)
            body: JSON body
            auth: Send the bearer token
            max_retries: Override retry count

        Returns:
            APIResponse
        """
        url = self._build_url(path, params)
        retries = max_retries if max_retries is not None else self.max_retries

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        last_error = None

        for attempt in range(retries + 1):
            try:
                logger.debug(f"API Request: {method.value} {path}")

                response = await self._do_request(method, url, headers, body)

                if response.status_code in self.RETRY_STATUS_CODES and attempt < retries:
                    delay = self._calculate_backoff(attempt)
                    logger.warning(f"Retryable error {response.status_code}, delay={delay}s")
                    await asyncio.sleep(delay)
                    continue

                return self._parse_response(response)

            except httpx.TimeoutException as e:
                last_error = f"Timeout: {e}"
            except httpx.RequestError as e:
                last_error = f"Network error: {e}"

            if attempt < retries:
                await asyncio.sleep(self._calculate_backoff(attempt))

        logger.error(f"All retries exhausted: {last_error}")
        return APIResponse(
            success=False,
            status_code=0,
            data=None,
            error_message=last_error or "Request failed",
            error_code="RETRY_EXHAUSTED"
        )

    async def _do_request(
        self,
        method: HttpMethod,
        url: str,
        headers: Dict[str, str],
        body: Optional[Dict[str, Any]]
    ) -> httpx.Response:
        """Execute raw HTTP request."""
        if method == HttpMethod.GET:
            return await self.client.get(url, headers=headers)
        elif method == HttpMethod.POST:
            return await self.client.post(url, headers=headers, json=body)
        else:
            raise ValueError(f"Unsupported method: {method}")

    def _build_url(self, path: str, params: Optional[Dict[str, Any]]) -> str:
        """Join base URL, path and percent-encoded query string."""
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{path}"

        if params:
            clean = {k: v for k, v in params.items() if v is not None}
            if clean:
                query = "&".join(f"{k}={quote(str(v), safe='')}" for k, v in clean.items())
                url = f"{url}?{query}"
        return url

    def _parse_response(self, response: httpx.Response) -> APIResponse:
        """
        Parse HTTP response.

        HTML bodies (proxy error pages, login redirects) are never passed
        through as data, even with a 200 status.
        """
        content_type = response.headers.get("content-type", "").lower()
        text = response.text.strip()

        is_html = (
            "text/html" in content_type or
            text.startswith("<!DOCTYPE") or
            text.startswith("<html")
        )

        if is_html:
            logger.error(
                f"HTML response blocked: Status={response.status_code}, "
                f"Content-Type={content_type}"
            )
            return APIResponse(
                success=False,
                status_code=response.status_code,
                data=None,
                error_message="The booking service returned an unexpected response.",
                error_code="HTML_RESPONSE_ERROR"
            )

        if response.status_code >= 400:
            error_msg = self._extract_error_message(response)
            error_code = self._map_status_code(response.status_code)

            logger.warning(f"API error: {response.status_code} - {error_msg[:200]}")

            return APIResponse(
                success=False,
                status_code=response.status_code,
                data=None,
                error_message=error_msg,
                error_code=error_code
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"JSON parsing failed: {e}")
            data = response.text if response.text else None

        return APIResponse(
            success=True,
            status_code=response.status_code,
            data=data
        )

    def _extract_error_message(self, response: httpx.Response) -> str:
        """Extract error message from response."""
        try:
            data = response.json()
        except ValueError:
            return f"HTTP {response.status_code}: {response.text[:500]}"

        if isinstance(data, dict):
            for field in ["message", "error", "detail"]:
                if data.get(field):
                    return str(data[field])
            return str(data)[:500]
        return response.text[:500]

    def _map_status_code(self, status: int) -> str:
        """Map status code to error code."""
        mapping = {
            400: "BAD_REQUEST",
            401: "UNAUTHORIZED",
            403: "FORBIDDEN",
            404: "NOT_FOUND",
            409: "CONFLICT",
            422: "VALIDATION_ERROR",
            429: "RATE_LIMITED",
            500: "SERVER_ERROR",
            502: "BAD_GATEWAY",
            503: "SERVICE_UNAVAILABLE"
        }
        return mapping.get(status, f"HTTP_{status}")

    def _calculate_backoff(self, attempt: int) -> float:
        """Calculate exponential backoff."""
        base = 2 ** attempt
        jitter = random.uniform(0, 0.5)
        return min(base + jitter, 30)

    # === CONVENIENCE METHODS ===

    async def get(self, path: str, params: Optional[Dict] = None, **kwargs) -> APIResponse:
        """GET request."""
        return await self.execute(HttpMethod.GET, path, params=params, **kwargs)

    async def post(self, path: str, body: Optional[Dict] = None, **kwargs) -> APIResponse:
        """POST request."""
        return await self.execute(HttpMethod.POST, path, body=body, **kwargs)

    async def close(self) -> None:
        """Close HTTP client."""
        if self.client:
            await self.client.aclose()
            logger.info("APIGateway closed")
