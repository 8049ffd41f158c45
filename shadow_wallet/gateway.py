"""Request gateway for the shadow backend API."""

import asyncio
import json
from typing import Any

import aiohttp
from loguru import logger

from shadow_wallet.exceptions import (
    GatewayError,
    GatewayResponseError,
    GatewayTransportError,
)
from shadow_wallet.models import GatewayResult

GENERATE_ADDRESS_PATH = "/address/generate"


def faucet_path(address: str) -> str:
    """Faucet endpoint for a transparent address."""
    return f"/faucet/{address}"


class RequestGateway:
    """Async HTTP gateway for the shadow backend.

    Issues GET and POST requests against a configured base URL and
    reports every outcome as a `GatewayResult`:
    - 2xx with a JSON object body -> `GatewayResult.success(body)`
    - transport error, timeout, non-2xx, or unparsable body -> `GatewayResult.failed()`

    Business-level success is left to the response body. There is no
    retry, caching, or queuing.

    Usage:
        async with RequestGateway("http://localhost:8080/api") as gateway:
            result = await gateway.get(GENERATE_ADDRESS_PATH)
            if result.ok:
                process(result.data)
    """

    DEFAULT_TIMEOUT: float = 30.0

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the gateway.

        Args:
            base_url: Backend base URL; endpoint paths are appended to it.
            timeout: Total request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def base_url(self) -> str:
        """Backend base URL without trailing slash."""
        return self._base_url

    async def __aenter__(self) -> "RequestGateway":
        """Async context manager entry."""
        self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the underlying session if open."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session exists, creating if needed."""
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    def url_for(self, path: str) -> str:
        """Resolve an endpoint path against the base URL."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self._base_url}{path}"

    async def fetch(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a single HTTP request and parse its JSON body.

        Unlike `get`/`post`, failures are raised rather than folded into
        a `GatewayResult`, for callers that need the reason.

        Args:
            method: "GET" or "POST".
            path: Endpoint path relative to the base URL.
            payload: JSON body for POST requests.

        Returns:
            Parsed JSON object.

        Raises:
            GatewayTransportError: On connection errors and timeouts.
            GatewayResponseError: On non-2xx status or a body that is not a JSON object.
        """
        session = await self._ensure_session()
        url = self.url_for(path)

        kwargs: dict[str, Any] = {}
        if method == "POST":
            kwargs["json"] = payload or {}

        try:
            async with session.request(method, url, **kwargs) as response:
                if not 200 <= response.status < 300:
                    text = await response.text()
                    raise GatewayResponseError(
                        f"API error {response.status}: {text[:200]}",
                        status_code=response.status,
                    )

                try:
                    body = await response.json(content_type=None)
                except (json.JSONDecodeError, aiohttp.ContentTypeError, ValueError) as e:
                    raise GatewayResponseError(
                        f"Invalid JSON body: {e}",
                        status_code=response.status,
                    ) from e

        except aiohttp.ClientError as e:
            raise GatewayTransportError(f"Connection error: {e}") from e
        except asyncio.TimeoutError as e:
            raise GatewayTransportError("Request timeout") from e

        if not isinstance(body, dict):
            raise GatewayResponseError(
                f"Expected JSON object, got {type(body).__name__}",
                status_code=response.status,
            )
        return body

    async def _dispatch(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> GatewayResult:
        """Run a request and fold any failure into the failed sentinel."""
        logger.debug("{} {}", method, path)
        try:
            body = await self.fetch(method, path, payload)
        except GatewayError as e:
            logger.warning("{} {} failed: {}", method, path, str(e))
            return GatewayResult.failed()

        return GatewayResult.success(body)

    async def get(self, path: str) -> GatewayResult:
        """Issue a GET request.

        Args:
            path: Endpoint path (e.g. "/address/generate").

        Returns:
            Parsed body on success, the failed sentinel otherwise.
        """
        return await self._dispatch("GET", path)

    async def post(self, path: str, payload: dict[str, Any]) -> GatewayResult:
        """Issue a POST request with a JSON body.

        Args:
            path: Endpoint path (e.g. "/shadow/shield").
            payload: JSON-serializable request body.

        Returns:
            Parsed body on success, the failed sentinel otherwise.
        """
        return await self._dispatch("POST", path, payload)
