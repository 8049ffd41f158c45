"""Wallet orchestrator connecting address state, modal, gateway, and ledger."""

from __future__ import annotations

from loguru import logger
from pydantic import ValidationError

from shadow_wallet.callbacks import WalletCallback
from shadow_wallet.config import WalletConfig
from shadow_wallet.exceptions import AmountValidationError, PreconditionError
from shadow_wallet.faucet import FaucetFlow
from shadow_wallet.gateway import RequestGateway
from shadow_wallet.ledger import ledger_deltas
from shadow_wallet.messages import MessageBoard
from shadow_wallet.modal import ADVISORY_NEED_TRANSPARENT, ActionModal
from shadow_wallet.models import (
    ActionKind,
    ActionReceipt,
    Balance,
    FlowKind,
    GatewayResult,
    MessageChannel,
    ModalState,
    ShieldedAddress,
)
from shadow_wallet.session import WalletSession

ACTION_FAILED_MESSAGE = "✗ Action failed"
ADDRESS_FAILED_MESSAGE = "✗ Failed to generate shielded address"


class WalletOrchestrator:
    """Central coordinator for the wallet view.

    Turns user intents (generate an address, request the faucet, open,
    edit, submit, or cancel an action) into state transitions, gateway
    requests, and ledger updates.

    Nothing raised inside a flow escapes it: every flow resolves to a
    success/failure outcome plus an ephemeral message. Observers register
    a `WalletCallback` to follow state changes.

    Example:
        async with RequestGateway(base_url) as gateway:
            wallet = WalletOrchestrator(gateway)
            await wallet.generate_transparent()
            await wallet.request_faucet()
            if await wallet.open_action(ActionKind.SEND_PUBLIC):
                wallet.set_recipient("sol1...")
                wallet.set_amount("25")
                await wallet.submit_action()
    """

    def __init__(
        self,
        gateway: RequestGateway,
        session: WalletSession | None = None,
        config: WalletConfig | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            gateway: Backend request gateway.
            session: Session state to drive (defaults to an empty session).
            config: Wallet settings (defaults to environment-loaded settings).
        """
        self._gateway = gateway
        self._session = session or WalletSession.empty()
        self._config = config or WalletConfig()

        self._callbacks: list[WalletCallback] = []
        self._messages = MessageBoard(listener=self._emit_message)
        self._modal = ActionModal(default_amount=self._config.default_amount)
        self._faucet = FaucetFlow(
            gateway=gateway,
            session=self._session,
            messages=self._messages,
            message_seconds=self._config.faucet_message_seconds,
            currency=self._config.currency,
            on_loading_changed=self._emit_faucet_loading,
            on_balance_updated=self._emit_balance_updated,
        )

    def register_callback(self, callback: WalletCallback) -> None:
        """Register a callback for wallet events.

        Failing callbacks are caught and logged - they never break a flow.

        Args:
            callback: An object implementing the WalletCallback protocol.
        """
        self._callbacks.append(callback)

    # =========================================================================
    # State accessors
    # =========================================================================

    @property
    def session(self) -> WalletSession:
        return self._session

    @property
    def transparent_address(self) -> str | None:
        return self._session.addresses.transparent

    @property
    def shielded_address(self) -> ShieldedAddress | None:
        return self._session.addresses.shielded

    @property
    def balance(self) -> Balance:
        return self._session.ledger.balance

    @property
    def modal(self) -> ModalState:
        return self._modal.state

    @property
    def action_loading(self) -> bool:
        return self._modal.loading

    @property
    def faucet_loading(self) -> bool:
        return self._faucet.loading

    def message(self, channel: MessageChannel) -> str:
        """Current ephemeral message for a channel."""
        return self._messages.get(channel)

    def is_action_enabled(self, kind: ActionKind) -> bool:
        """Whether the quick-action button for `kind` is enabled."""
        return self._modal.is_enabled(kind, self._session.addresses)

    # =========================================================================
    # Address generation
    # =========================================================================

    async def generate_transparent(self) -> str:
        """Generate the local placeholder transparent address."""
        address = self._session.addresses.generate_transparent()
        await self._emit_addresses_changed()
        return address

    async def generate_shielded(self) -> ShieldedAddress | None:
        """Request a shielded address from the backend.

        A failure leaves the address state unchanged and shows an
        advisory on the action channel. A response that lands after
        `reset()` is dropped silently.
        """
        generation = self._session.generation
        record = await self._session.addresses.generate_shielded(self._gateway)
        if generation != self._session.generation:
            return None
        if record is None:
            await self._messages.show(
                MessageChannel.ACTION,
                ADDRESS_FAILED_MESSAGE,
                self._config.advisory_message_seconds,
            )
            return None

        await self._emit_addresses_changed()
        return record

    # =========================================================================
    # Faucet
    # =========================================================================

    async def request_faucet(self) -> bool:
        """Request test funds for the transparent address.

        Returns:
            True if the ledger was credited.
        """
        address = self._session.addresses.transparent
        if address is None:
            await self._advise(ADVISORY_NEED_TRANSPARENT)
            return False
        return await self._faucet.request(address)

    # =========================================================================
    # Action modal
    # =========================================================================

    async def open_action(self, kind: ActionKind) -> bool:
        """Open the action modal for `kind`.

        Returns:
            True if the modal opened; False if a required address is
            missing (an advisory is shown instead).
        """
        try:
            state = self._modal.open(kind, self._session.addresses)
        except PreconditionError as e:
            logger.info("Cannot open {}: {}", kind.value, e.advisory)
            await self._advise(e.advisory)
            return False

        await self._emit_modal_changed(state)
        return True

    def set_recipient(self, recipient: str) -> None:
        """Edit the open modal's recipient field."""
        self._modal.set_recipient(recipient)

    def set_amount(self, amount: str) -> None:
        """Edit the open modal's raw amount text."""
        self._modal.set_amount(amount)

    async def cancel_action(self) -> None:
        """Close the modal, discarding its fields.

        An in-flight submission keeps running but its outcome is ignored.
        """
        state = self._modal.close()
        await self._emit_modal_changed(state)

    async def submit_action(self) -> bool:
        """Validate and dispatch the open modal's action.

        Returns:
            True if the backend accepted the action and the ledger was
            updated; False on validation failure, gateway failure, or a
            response that arrived after the modal was cancelled/replaced.
        """
        if not self._modal.is_open:
            logger.warning("Submit with no open action modal, ignoring")
            return False

        if self._modal.loading:
            logger.warning("Action already in flight, ignoring submit")
            return False

        try:
            request = self._modal.validate()
        except AmountValidationError:
            await self._emit_modal_changed(self._modal.state)
            return False

        try:
            path, payload = self._modal.build_route(request, self._session.addresses)
        except PreconditionError as e:
            await self._advise(e.advisory)
            return False

        token = self._modal.begin_submit()
        await self._emit_loading_changed(FlowKind.ACTION, True)
        await self._messages.clear(MessageChannel.ACTION)

        logger.info(
            "Submitting {} | to={} amount={}",
            request.kind.value,
            request.recipient,
            request.amount,
        )

        try:
            result = await self._gateway.post(path, payload)
        finally:
            self._modal.end_submit()
            await self._emit_loading_changed(FlowKind.ACTION, False)

        if not self._modal.is_current(token):
            logger.info("Discarding {} response for a closed modal", request.kind.value)
            return False

        receipt = self._parse_receipt(result)
        if receipt is None:
            logger.warning("{} failed", request.kind.value)
            await self._messages.show(
                MessageChannel.ACTION,
                ACTION_FAILED_MESSAGE,
                self._config.action_message_seconds,
            )
            return False

        balance = self._session.ledger.apply(ledger_deltas(request.kind, request.amount))
        await self._emit_balance_updated(balance)

        logger.info("{} succeeded | {}", request.kind.value, receipt.summary())
        await self._messages.show(
            MessageChannel.ACTION,
            f"✓ {receipt.summary()}",
            self._config.action_message_seconds,
        )

        state = self._modal.close()
        await self._emit_modal_changed(state)
        return True

    @staticmethod
    def _parse_receipt(result: GatewayResult) -> ActionReceipt | None:
        """Interpret an action response; None means the action failed."""
        if not result.ok or result.data is None:
            return None
        try:
            receipt = ActionReceipt.model_validate(result.data)
        except ValidationError as e:
            logger.warning("Malformed action response: {}", str(e))
            return None
        if not receipt.accepted:
            logger.warning("Action rejected by backend: {}", receipt.error or "success=false")
            return None
        return receipt

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def reset(self) -> None:
        """End the session: close the modal, drop addresses, zero balances."""
        await self.cancel_action()
        self._session.reset()
        await self._emit_addresses_changed()
        await self._emit_balance_updated(self._session.ledger.balance)

    async def aclose(self) -> None:
        """Cancel pending message timers."""
        await self._messages.aclose()

    async def _advise(self, text: str) -> None:
        """Show a precondition advisory on the action channel."""
        await self._messages.show(
            MessageChannel.ACTION,
            text,
            self._config.advisory_message_seconds,
        )

    # =========================================================================
    # Callback emission (fail-safe)
    # =========================================================================

    async def _emit_addresses_changed(self) -> None:
        """Emit addresses_changed to all callbacks (fail-safe)."""
        addresses = self._session.addresses
        for callback in self._callbacks:
            try:
                await callback.on_addresses_changed(addresses.transparent, addresses.shielded)
            except Exception as e:
                logger.debug("Callback error in on_addresses_changed: {}", str(e))

    async def _emit_balance_updated(self, balance: Balance) -> None:
        """Emit balance_updated to all callbacks (fail-safe)."""
        for callback in self._callbacks:
            try:
                await callback.on_balance_updated(balance)
            except Exception as e:
                logger.debug("Callback error in on_balance_updated: {}", str(e))

    async def _emit_modal_changed(self, state: ModalState) -> None:
        """Emit modal_changed to all callbacks (fail-safe)."""
        for callback in self._callbacks:
            try:
                await callback.on_modal_changed(state)
            except Exception as e:
                logger.debug("Callback error in on_modal_changed: {}", str(e))

    async def _emit_loading_changed(self, flow: FlowKind, loading: bool) -> None:
        """Emit loading_changed to all callbacks (fail-safe)."""
        for callback in self._callbacks:
            try:
                await callback.on_loading_changed(flow, loading)
            except Exception as e:
                logger.debug("Callback error in on_loading_changed: {}", str(e))

    async def _emit_faucet_loading(self, loading: bool) -> None:
        await self._emit_loading_changed(FlowKind.FAUCET, loading)

    async def _emit_message(self, channel: MessageChannel, text: str) -> None:
        """Emit message to all callbacks (fail-safe)."""
        for callback in self._callbacks:
            try:
                await callback.on_message(channel, text)
            except Exception as e:
                logger.debug("Callback error in on_message: {}", str(e))
