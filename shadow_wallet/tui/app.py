"""Main Textual application for the shadow wallet."""

from __future__ import annotations

from loguru import logger
from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Footer

from shadow_wallet.callbacks import WalletCallback
from shadow_wallet.config import Settings, get_settings
from shadow_wallet.gateway import RequestGateway
from shadow_wallet.models import (
    ActionKind,
    Balance,
    FlowKind,
    MessageChannel,
    ModalState,
    ShieldedAddress,
)
from shadow_wallet.orchestrator import WalletOrchestrator
from shadow_wallet.tui.log_sink import TuiLogSink
from shadow_wallet.tui.widgets.action_modal import ActionModalScreen
from shadow_wallet.tui.widgets.actions import QuickActionsPanel
from shadow_wallet.tui.widgets.address_panel import ShieldedPanel, TransparentPanel
from shadow_wallet.tui.widgets.header import WalletHeader
from shadow_wallet.tui.widgets.log_panel import LiveLogPanel
from shadow_wallet.tui.widgets.wallet_info import WalletInfoPanel


class TuiCallback(WalletCallback):
    """Callback implementation that updates TUI widgets."""

    def __init__(self, app: ShadowWalletApp) -> None:
        self._app = app

    async def on_addresses_changed(
        self,
        transparent: str | None,
        shielded: ShieldedAddress | None,
    ) -> None:
        self._app.update_addresses(transparent, shielded)

    async def on_balance_updated(self, balance: Balance) -> None:
        self._app.update_balance(balance)

    async def on_modal_changed(self, modal: ModalState) -> None:
        self._app.sync_modal(modal)

    async def on_loading_changed(self, flow: FlowKind, loading: bool) -> None:
        self._app.update_loading(flow, loading)

    async def on_message(self, channel: MessageChannel, text: str) -> None:
        self._app.update_message(channel, text)


class ShadowWalletApp(App[None]):
    """Shadow Wallet TUI.

    Features:
    - Transparent and shielded address cards
    - Faucet requests for the transparent address
    - Quick actions (shield, unshield, send private, send public) via a modal
    - Live log panel
    """

    TITLE = "Shadow Wallet"
    SUB_TITLE = "Transparent & shielded addresses"

    CSS = """
    /* Catppuccin Mocha palette */
    Screen {
        background: #1e1e2e;
    }

    #main {
        layout: horizontal;
        height: 1fr;
    }

    #wallet-column {
        width: 2fr;
        height: 100%;
    }

    #wallet-column > Static {
        border: round #313244;
        padding: 1;
        margin: 0 1 1 0;
        background: #1e1e2e;
    }

    #log-panel {
        width: 1fr;
        min-width: 30%;
        border: round #313244;
        background: #1e1e2e;
    }

    .section-title {
        text-style: bold;
        color: #f9e2af;
        margin-bottom: 1;
    }

    .label-value {
        color: #cdd6f4;
    }

    .label-muted {
        color: #6c7086;
        margin-bottom: 1;
    }

    RichLog {
        background: #1e1e2e;
        color: #cdd6f4;
        scrollbar-color: #cba6f7;
        scrollbar-background: #313244;
    }

    Footer {
        background: #181825;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("t", "generate_transparent", "Transparent"),
        ("z", "generate_shielded", "Shielded"),
        ("f", "request_faucet", "Faucet"),
        ("c", "clear_logs", "Clear"),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        gateway: RequestGateway | None = None,
    ) -> None:
        """Initialize the app.

        Args:
            settings: Configuration (defaults to environment-loaded settings).
            gateway: Backend gateway (defaults to one built from settings).
        """
        super().__init__()
        self._settings = settings or get_settings()
        backend = self._settings.backend
        self._gateway = gateway or RequestGateway(backend.base_url, backend.timeout_seconds)
        self._wallet = WalletOrchestrator(self._gateway, config=self._settings.wallet)
        self._log_sink = TuiLogSink(self, level=self._settings.log.level)
        self._modal_screen: ActionModalScreen | None = None

    @property
    def wallet(self) -> WalletOrchestrator:
        return self._wallet

    def compose(self) -> ComposeResult:
        wallet_config = self._settings.wallet
        yield WalletHeader(id="wallet-header")

        with Horizontal(id="main"):
            with VerticalScroll(id="wallet-column"):
                yield TransparentPanel(
                    currency=wallet_config.currency,
                    faucet_hint=wallet_config.faucet_amount_hint,
                    id="transparent-panel",
                )
                yield ShieldedPanel(currency=wallet_config.currency, id="shielded-panel")
                yield QuickActionsPanel(id="actions-panel")
                yield WalletInfoPanel(currency=wallet_config.currency, id="info-panel")

            yield LiveLogPanel(id="log-panel")

        yield Footer()

    async def on_mount(self) -> None:
        """Initialize on mount."""
        self._log_sink.install()
        self._wallet.register_callback(TuiCallback(self))

        header = self.query_one("#wallet-header", WalletHeader)
        header.set_backend(self._gateway.base_url)

        self.update_addresses(self._wallet.transparent_address, self._wallet.shielded_address)
        self.update_balance(self._wallet.balance)

        logger.info("Shadow wallet ready | backend={}", self._gateway.base_url)
        logger.info("Press 't' for a transparent address, 'z' for a shielded address")

    async def on_unmount(self) -> None:
        """Release timers, the HTTP session, and the log sink."""
        await self._wallet.aclose()
        await self._gateway.close()
        self._log_sink.uninstall()

    # =========================================================================
    # View updates (called from TuiCallback)
    # =========================================================================

    def update_addresses(self, transparent: str | None, shielded: ShieldedAddress | None) -> None:
        """Refresh address cards and action enablement."""
        self.query_one("#transparent-panel", TransparentPanel).set_address(transparent)
        self.query_one("#shielded-panel", ShieldedPanel).set_address(shielded)
        self._refresh_actions()

    def update_balance(self, balance: Balance) -> None:
        """Refresh every balance display."""
        self.query_one("#transparent-panel", TransparentPanel).set_balance(balance.transparent)
        self.query_one("#shielded-panel", ShieldedPanel).set_balance(balance.shielded)
        self.query_one("#info-panel", WalletInfoPanel).set_balance(balance)

    def update_loading(self, flow: FlowKind, loading: bool) -> None:
        """Reflect single-flight loading flags."""
        if flow == FlowKind.FAUCET:
            self.query_one("#transparent-panel", TransparentPanel).set_faucet_loading(loading)
        else:
            self._refresh_actions()
            if self._modal_screen is not None:
                self._modal_screen.set_loading(loading)

        header = self.query_one("#wallet-header", WalletHeader)
        header.set_busy(self._wallet.faucet_loading or self._wallet.action_loading)

    def update_message(self, channel: MessageChannel, text: str) -> None:
        """Show or clear an ephemeral message."""
        if channel == MessageChannel.FAUCET:
            self.query_one("#transparent-panel", TransparentPanel).set_faucet_message(text)
        else:
            self.query_one("#actions-panel", QuickActionsPanel).set_message(text)

    def sync_modal(self, state: ModalState) -> None:
        """Push, update, or dismiss the modal screen to match `state`."""
        screen = self._modal_screen

        if not state.is_open:
            if screen is not None:
                self._modal_screen = None
                if self.screen is screen:
                    self.pop_screen()
            return

        if screen is not None and screen.token == state.token:
            screen.show_error(state.error)
            return

        if screen is not None and self.screen is screen:
            self.pop_screen()

        self._modal_screen = ActionModalScreen(state, currency=self._settings.wallet.currency)
        self.push_screen(self._modal_screen)

    def _refresh_actions(self) -> None:
        enabled = {kind: self._wallet.is_action_enabled(kind) for kind in ActionKind}
        self.query_one("#actions-panel", QuickActionsPanel).refresh_buttons(
            enabled, self._wallet.action_loading
        )

    # =========================================================================
    # User intents
    # =========================================================================

    def on_transparent_panel_generate_requested(self, event: TransparentPanel.GenerateRequested) -> None:
        self.action_generate_transparent()

    def on_transparent_panel_faucet_requested(self, event: TransparentPanel.FaucetRequested) -> None:
        self.action_request_faucet()

    def on_shielded_panel_generate_requested(self, event: ShieldedPanel.GenerateRequested) -> None:
        self.action_generate_shielded()

    def on_quick_actions_panel_action_requested(self, event: QuickActionsPanel.ActionRequested) -> None:
        self.run_worker(self._wallet.open_action(event.kind), group="modal")

    def on_action_modal_screen_recipient_changed(self, event: ActionModalScreen.RecipientChanged) -> None:
        self._wallet.set_recipient(event.value)

    def on_action_modal_screen_amount_changed(self, event: ActionModalScreen.AmountChanged) -> None:
        self._wallet.set_amount(event.value)

    def on_action_modal_screen_confirmed(self, event: ActionModalScreen.Confirmed) -> None:
        self.run_worker(self._wallet.submit_action(), group="action")

    def on_action_modal_screen_cancelled(self, event: ActionModalScreen.Cancelled) -> None:
        self.action_cancel_action()

    def action_generate_transparent(self) -> None:
        """Generate the transparent address."""
        self.run_worker(self._wallet.generate_transparent(), group="address")

    def action_generate_shielded(self) -> None:
        """Request a shielded address from the backend."""
        self.run_worker(self._wallet.generate_shielded(), group="address")

    def action_request_faucet(self) -> None:
        """Request test funds for the transparent address."""
        self.run_worker(self._wallet.request_faucet(), group="faucet")

    def action_cancel_action(self) -> None:
        """Cancel the open action modal."""
        self.run_worker(self._wallet.cancel_action(), group="modal")

    def action_clear_logs(self) -> None:
        """Clear logs."""
        self.query_one("#log-panel", LiveLogPanel).clear()
