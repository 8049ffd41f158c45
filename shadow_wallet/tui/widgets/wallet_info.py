"""Wallet information panel with transparent, shielded, and total balances."""

from textual.app import ComposeResult
from textual.reactive import reactive
from textual.widgets import Label, Static

from shadow_wallet.models import Balance, format_amount


class WalletInfoPanel(Static):
    """Panel summarizing balances.

    Attributes:
        transparent: Transparent balance (visible on-chain).
        shielded: Shielded balance (requires viewing key).
    """

    transparent: reactive[float] = reactive(0.0)
    shielded: reactive[float] = reactive(0.0)

    def __init__(self, currency: str = "SHOL", **kwargs) -> None:
        super().__init__(**kwargs)
        self._currency = currency

    def compose(self) -> ComposeResult:
        yield Label("WALLET INFORMATION", classes="section-title")
        yield Label("", id="info-transparent", classes="label-value")
        yield Label("Visible on-chain", classes="label-muted")
        yield Label("", id="info-shielded", classes="label-value")
        yield Label("Private, requires viewing key", classes="label-muted")
        yield Label("", id="info-total", classes="label-value")
        yield Label("Combined holdings", classes="label-muted")

    def on_mount(self) -> None:
        self._update_all()

    def watch_transparent(self, amount: float) -> None:
        if self.is_mounted:
            self._update_all()

    def watch_shielded(self, amount: float) -> None:
        if self.is_mounted:
            self._update_all()

    def set_balance(self, balance: Balance) -> None:
        self.transparent = balance.transparent
        self.shielded = balance.shielded

    def _update_all(self) -> None:
        total = self.transparent + self.shielded
        self.query_one("#info-transparent", Label).update(
            f"Transparent Balance: {format_amount(self.transparent)} {self._currency}"
        )
        self.query_one("#info-shielded", Label).update(
            f"Shielded Balance: {format_amount(self.shielded)} {self._currency}"
        )
        self.query_one("#info-total", Label).update(
            f"Total Balance: {format_amount(total)} {self._currency}"
        )
