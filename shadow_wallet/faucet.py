"""Faucet flow: request test funds for the transparent address."""

from collections.abc import Awaitable, Callable

from loguru import logger
from pydantic import ValidationError

from shadow_wallet.gateway import RequestGateway, faucet_path
from shadow_wallet.messages import MessageBoard
from shadow_wallet.models import (
    Balance,
    BalanceKind,
    FaucetResponse,
    MessageChannel,
    format_amount,
)
from shadow_wallet.session import WalletSession

FAUCET_FAILED_MESSAGE = "✗ Faucet request failed"


class FaucetFlow:
    """Single-flight faucet requests that credit the transparent balance.

    The caller is responsible for only invoking the flow once a
    transparent address exists. A response that arrives after the
    session was reset, or after the funded address changed, is dropped.
    """

    def __init__(
        self,
        gateway: RequestGateway,
        session: WalletSession,
        messages: MessageBoard,
        message_seconds: float = 5.0,
        currency: str = "SHOL",
        on_loading_changed: Callable[[bool], Awaitable[None]] | None = None,
        on_balance_updated: Callable[[Balance], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the faucet flow.

        Args:
            gateway: Gateway for the faucet request.
            session: Session whose ledger is credited on success.
            messages: Board holding the faucet message slot.
            message_seconds: Delay before the result message clears.
            currency: Unit shown in the success message.
            on_loading_changed: Awaited when the loading flag changes.
            on_balance_updated: Awaited after a successful credit.
        """
        self._gateway = gateway
        self._session = session
        self._messages = messages
        self._message_seconds = message_seconds
        self._currency = currency
        self._on_loading_changed = on_loading_changed
        self._on_balance_updated = on_balance_updated
        self._loading = False

    @property
    def loading(self) -> bool:
        """True while a faucet request is in flight."""
        return self._loading

    async def request(self, address: str) -> bool:
        """Request test funds for `address`.

        A call made while another request is in flight is ignored.

        Args:
            address: Transparent address to fund.

        Returns:
            True if the ledger was credited.
        """
        if self._loading:
            logger.warning("Faucet request already in flight, ignoring")
            return False

        await self._set_loading(True)
        await self._messages.clear(MessageChannel.FAUCET)

        credited = False
        generation = self._session.generation
        try:
            result = await self._gateway.get(faucet_path(address))
            if not self._is_current(generation, address):
                logger.info("Discarding faucet response for {} from a reset session", address)
                return False

            response = self._parse(result.data) if result.ok else None

            if response is not None and response.success:
                balance = self._session.ledger.credit(BalanceKind.TRANSPARENT, response.amount_shol)
                credited = True
                amount = format_amount(response.amount_shol)
                logger.info("Faucet credited {} {} to {}", amount, self._currency, address)
                await self._emit_balance(balance)
                await self._messages.show(
                    MessageChannel.FAUCET,
                    f"✓ Success! Received {amount} {self._currency}",
                    self._message_seconds,
                )
            else:
                logger.warning("Faucet request failed for {}", address)
                await self._messages.show(
                    MessageChannel.FAUCET,
                    FAUCET_FAILED_MESSAGE,
                    self._message_seconds,
                )
        finally:
            await self._set_loading(False)

        return credited

    def _is_current(self, generation: int, address: str) -> bool:
        return (
            self._session.generation == generation
            and self._session.addresses.transparent == address
        )

    @staticmethod
    def _parse(data: dict | None) -> FaucetResponse | None:
        """Parse a faucet body, treating malformed bodies as failures."""
        if data is None:
            return None
        try:
            return FaucetResponse.model_validate(data)
        except ValidationError as e:
            logger.warning("Malformed faucet response: {}", str(e))
            return None

    async def _set_loading(self, loading: bool) -> None:
        self._loading = loading
        if self._on_loading_changed is not None:
            try:
                await self._on_loading_changed(loading)
            except Exception as e:
                logger.debug("Callback error in on_loading_changed: {}", str(e))

    async def _emit_balance(self, balance: Balance) -> None:
        if self._on_balance_updated is not None:
            try:
                await self._on_balance_updated(balance)
            except Exception as e:
                logger.debug("Callback error in on_balance_updated: {}", str(e))
