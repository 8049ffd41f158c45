"""Tests for the request gateway."""

import asyncio
import json
from typing import Any
from unittest.mock import patch

import aiohttp
import pytest

from shadow_wallet.exceptions import GatewayResponseError, GatewayTransportError
from shadow_wallet.gateway import GENERATE_ADDRESS_PATH, RequestGateway, faucet_path

BASE_URL = "http://backend.test/api"


class MockResponse:
    """Mock aiohttp response for testing."""

    def __init__(
        self,
        status: int,
        json_data: Any = None,
        text_data: str | None = None,
    ) -> None:
        self.status = status
        self._json_data = json_data
        self._text_data = text_data

    async def json(self, content_type: str | None = "application/json") -> Any:
        if self._text_data is not None:
            return json.loads(self._text_data)
        return self._json_data

    async def text(self) -> str:
        if self._text_data is not None:
            return self._text_data
        return str(self._json_data)

    async def __aenter__(self) -> "MockResponse":
        return self

    async def __aexit__(self, *args: object) -> None:
        pass


# =============================================================================
# Path helpers
# =============================================================================


class TestPaths:
    """Tests for endpoint path helpers."""

    def test_faucet_path(self) -> None:
        assert faucet_path("sol1abc") == "/faucet/sol1abc"

    def test_url_for_joins_base(self) -> None:
        gateway = RequestGateway(BASE_URL + "/")
        assert gateway.base_url == BASE_URL
        assert gateway.url_for(GENERATE_ADDRESS_PATH) == f"{BASE_URL}/address/generate"
        assert gateway.url_for("shadow/tx") == f"{BASE_URL}/shadow/tx"


# =============================================================================
# Session lifecycle
# =============================================================================


class TestGatewaySession:
    """Tests for session management."""

    @pytest.mark.asyncio
    async def test_context_manager_creates_session(self) -> None:
        """Test context manager creates and closes session."""
        async with RequestGateway(BASE_URL) as gateway:
            assert gateway._session is not None
        assert gateway._session is None

    @pytest.mark.asyncio
    async def test_session_created_lazily(self) -> None:
        gateway = RequestGateway(BASE_URL)
        assert gateway._session is None
        session = await gateway._ensure_session()
        assert session is gateway._session
        await gateway.close()
        assert gateway._session is None


# =============================================================================
# Requests with mocked HTTP
# =============================================================================


class TestGatewayRequests:
    """Tests for get()/post() outcomes."""

    @pytest.mark.asyncio
    async def test_get_success(self) -> None:
        mock_response = MockResponse(
            status=200,
            json_data={"address": "shadow1abc", "spending_key": "sk", "viewing_key": "vk"},
        )

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response) as mock_request:
                result = await gateway.get(GENERATE_ADDRESS_PATH)

        assert result.ok is True
        assert result.data == {"address": "shadow1abc", "spending_key": "sk", "viewing_key": "vk"}
        mock_request.assert_called_once_with("GET", f"{BASE_URL}/address/generate")

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self) -> None:
        mock_response = MockResponse(status=200, json_data={"type": "shield", "signature": "5Kx9"})
        payload = {"from": "sol1abc", "to": "shadow1abc", "amount": 400.0}

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response) as mock_request:
                result = await gateway.post("/shadow/shield", payload)

        assert result.ok is True
        assert result.data == {"type": "shield", "signature": "5Kx9"}
        mock_request.assert_called_once_with("POST", f"{BASE_URL}/shadow/shield", json=payload)

    @pytest.mark.asyncio
    async def test_empty_object_is_success(self) -> None:
        mock_response = MockResponse(status=200, json_data={})

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response):
                result = await gateway.post("/shadow/tx", {})

        assert result.ok is True
        assert result.data == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    async def test_non_2xx_is_failure(self, status: int) -> None:
        mock_response = MockResponse(status=status, json_data={"error": "nope"})

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response):
                result = await gateway.get(GENERATE_ADDRESS_PATH)

        assert result.ok is False
        assert result.data is None

    @pytest.mark.asyncio
    async def test_invalid_json_is_failure(self) -> None:
        mock_response = MockResponse(status=200, text_data="<html>oops</html>")

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response):
                result = await gateway.get(faucet_path("sol1abc"))

        assert result.ok is False

    @pytest.mark.asyncio
    async def test_non_object_body_is_failure(self) -> None:
        mock_response = MockResponse(status=200, json_data=["not", "an", "object"])

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response):
                result = await gateway.get(faucet_path("sol1abc"))

        assert result.ok is False

    @pytest.mark.asyncio
    async def test_connection_error_is_failure(self) -> None:
        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(
                gateway._session,
                "request",
                side_effect=aiohttp.ClientConnectionError("refused"),
            ):
                result = await gateway.post("/shadow/unshield", {"amount": 1.0})

        assert result.ok is False
        assert result.data is None

    @pytest.mark.asyncio
    async def test_timeout_is_failure(self) -> None:
        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", side_effect=asyncio.TimeoutError()):
                result = await gateway.get(GENERATE_ADDRESS_PATH)

        assert result.ok is False


class TestGatewayErrors:
    """Tests for fetch(), which raises instead of folding failures."""

    @pytest.mark.asyncio
    async def test_fetch_returns_body(self) -> None:
        mock_response = MockResponse(status=200, json_data={"success": True, "amount_shol": 1000})

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response):
                body = await gateway.fetch("GET", faucet_path("sol1abc"))

        assert body == {"success": True, "amount_shol": 1000}

    @pytest.mark.asyncio
    async def test_status_error_carries_code(self) -> None:
        mock_response = MockResponse(status=502, json_data={"error": "bad gateway"})

        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(gateway._session, "request", return_value=mock_response):
                with pytest.raises(GatewayResponseError) as exc_info:
                    await gateway.fetch("GET", GENERATE_ADDRESS_PATH)

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        async with RequestGateway(BASE_URL) as gateway:
            with patch.object(
                gateway._session,
                "request",
                side_effect=aiohttp.ClientConnectionError("refused"),
            ):
                with pytest.raises(GatewayTransportError):
                    await gateway.fetch("GET", GENERATE_ADDRESS_PATH)
