"""Tests for the faucet flow."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from shadow_wallet.faucet import FAUCET_FAILED_MESSAGE, FaucetFlow
from shadow_wallet.messages import MessageBoard
from shadow_wallet.models import GatewayResult, MessageChannel
from shadow_wallet.session import WalletSession

ADDRESS = "sol1" + "ab" * 16


@pytest.fixture
def gateway() -> AsyncMock:
    """Create a mock gateway with a successful faucet response."""
    gateway = AsyncMock()
    gateway.get = AsyncMock(
        return_value=GatewayResult.success({"success": True, "amount_shol": 1000})
    )
    return gateway


@pytest.fixture
async def board() -> MessageBoard:
    board = MessageBoard()
    yield board
    await board.aclose()


def make_flow(gateway: AsyncMock, board: MessageBoard, **kwargs) -> tuple[FaucetFlow, WalletSession]:
    session = WalletSession.empty()
    session.addresses._transparent = ADDRESS
    flow = FaucetFlow(gateway=gateway, session=session, messages=board, message_seconds=0.01, **kwargs)
    return flow, session


class TestFaucetFlow:
    """Tests for FaucetFlow.request()."""

    @pytest.mark.asyncio
    async def test_success_credits_transparent(self, gateway: AsyncMock, board: MessageBoard) -> None:
        flow, session = make_flow(gateway, board)

        assert await flow.request(ADDRESS) is True

        gateway.get.assert_awaited_once_with(f"/faucet/{ADDRESS}")
        assert session.ledger.balance.transparent == 1000.0
        assert session.ledger.balance.shielded == 0.0
        assert board.get(MessageChannel.FAUCET) == "✓ Success! Received 1000 SHOL"
        assert flow.loading is False

    @pytest.mark.asyncio
    async def test_message_clears_after_delay(self, gateway: AsyncMock, board: MessageBoard) -> None:
        flow, _ = make_flow(gateway, board)
        await flow.request(ADDRESS)
        await asyncio.sleep(0.05)
        assert board.get(MessageChannel.FAUCET) == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "result",
        [
            GatewayResult.success({"success": False}),
            GatewayResult.success({}),
            GatewayResult.success({"success": True, "amount_shol": "lots"}),
            GatewayResult.failed(),
        ],
    )
    async def test_failure_leaves_ledger(
        self, gateway: AsyncMock, board: MessageBoard, result: GatewayResult
    ) -> None:
        gateway.get.return_value = result
        flow, session = make_flow(gateway, board)

        assert await flow.request(ADDRESS) is False

        assert session.ledger.balance.transparent == 0.0
        assert board.get(MessageChannel.FAUCET) == FAUCET_FAILED_MESSAGE
        assert flow.loading is False

    @pytest.mark.asyncio
    async def test_loading_released_when_gateway_raises(self, gateway: AsyncMock, board: MessageBoard) -> None:
        gateway.get.side_effect = RuntimeError("unexpected")
        flow, _ = make_flow(gateway, board)

        with pytest.raises(RuntimeError):
            await flow.request(ADDRESS)
        assert flow.loading is False

    @pytest.mark.asyncio
    async def test_single_flight(self, board: MessageBoard) -> None:
        """A second request while one is in flight is ignored."""
        release = asyncio.Event()

        async def slow_get(path: str) -> GatewayResult:
            await release.wait()
            return GatewayResult.success({"success": True, "amount_shol": 1000})

        gateway = AsyncMock()
        gateway.get = AsyncMock(side_effect=slow_get)
        flow, session = make_flow(gateway, board)

        first = asyncio.create_task(flow.request(ADDRESS))
        await asyncio.sleep(0)
        assert flow.loading is True
        assert await flow.request(ADDRESS) is False

        release.set()
        assert await first is True
        assert gateway.get.await_count == 1
        assert session.ledger.balance.transparent == 1000.0

    @pytest.mark.asyncio
    async def test_callbacks_notified(self, gateway: AsyncMock, board: MessageBoard) -> None:
        on_loading = AsyncMock()
        on_balance = AsyncMock()
        flow, _ = make_flow(gateway, board, on_loading_changed=on_loading, on_balance_updated=on_balance)

        await flow.request(ADDRESS)

        assert [c.args for c in on_loading.await_args_list] == [(True,), (False,)]
        on_balance.assert_awaited_once()
        assert on_balance.await_args.args[0].transparent == 1000.0

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_break_flow(self, gateway: AsyncMock, board: MessageBoard) -> None:
        flow, session = make_flow(gateway, board, on_loading_changed=AsyncMock(side_effect=RuntimeError("boom")))
        assert await flow.request(ADDRESS) is True
        assert session.ledger.balance.transparent == 1000.0


class TestFaucetStaleResponses:
    """Responses landing after the session moved on must not apply."""

    @pytest.fixture
    def release(self) -> asyncio.Event:
        return asyncio.Event()

    @pytest.fixture
    def slow_gateway(self, release: asyncio.Event) -> AsyncMock:
        async def slow_get(path: str) -> GatewayResult:
            await release.wait()
            return GatewayResult.success({"success": True, "amount_shol": 1000})

        gateway = AsyncMock()
        gateway.get = AsyncMock(side_effect=slow_get)
        return gateway

    @pytest.mark.asyncio
    async def test_reset_during_flight_drops_credit(
        self, slow_gateway: AsyncMock, board: MessageBoard, release: asyncio.Event
    ) -> None:
        flow, session = make_flow(slow_gateway, board)
        task = asyncio.create_task(flow.request(ADDRESS))
        await asyncio.sleep(0)

        session.reset()
        release.set()

        assert await task is False
        assert session.ledger.balance.transparent == 0.0
        assert board.get(MessageChannel.FAUCET) == ""
        assert flow.loading is False

    @pytest.mark.asyncio
    async def test_reset_and_regenerate_drops_credit(
        self, slow_gateway: AsyncMock, board: MessageBoard, release: asyncio.Event
    ) -> None:
        """The new session's address must not receive the old request's funds."""
        flow, session = make_flow(slow_gateway, board)
        task = asyncio.create_task(flow.request(ADDRESS))
        await asyncio.sleep(0)

        session.reset()
        session.addresses.generate_transparent()
        release.set()

        assert await task is False
        assert session.ledger.balance.transparent == 0.0

    @pytest.mark.asyncio
    async def test_changed_address_drops_credit(
        self, slow_gateway: AsyncMock, board: MessageBoard, release: asyncio.Event
    ) -> None:
        flow, session = make_flow(slow_gateway, board)
        task = asyncio.create_task(flow.request(ADDRESS))
        await asyncio.sleep(0)

        session.addresses._transparent = "sol1" + "cd" * 16
        release.set()

        assert await task is False
        assert session.ledger.balance.transparent == 0.0
