"""Address panels: transparent (with faucet) and shielded (with keys)."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Button, Label, Static

from shadow_wallet.models import ShieldedAddress, format_amount
from shadow_wallet.tui.widgets.qr_display import QRDisplay

PANEL_CSS = """
.address-card {
    height: auto;
    width: 100%;
}

.address-label {
    color: #6c7086;
}

.address-value {
    width: 100%;
    height: 3;
    background: #313244;
    color: #a6e3a1;
    border: tall #45475a;
}

.address-value:hover {
    background: #45475a;
}

.address-hint {
    color: #6c7086;
    margin-bottom: 1;
}

.balance-value {
    color: #f9e2af;
    text-style: bold;
}

.balance-note {
    color: #6c7086;
}

.key-row {
    color: #cdd6f4;
}

.wallet-action {
    min-width: 8;
    height: 3;
    background: #313244;
    color: #cdd6f4;
    border: tall #45475a;
    margin: 1 1 0 0;
}

.wallet-action:hover {
    background: #45475a;
}

.wallet-action:focus {
    background: #cba6f7;
    color: #1e1e2e;
}

.message-success {
    color: #a6e3a1;
}

.message-error {
    color: #f38ba8;
}
"""


def key_preview(key: str) -> str:
    """Truncated key for display (0x + first 32 chars), or N/A."""
    if not key:
        return "N/A"
    return f"0x{key[:32]}..."


def message_classes(text: str) -> str:
    """CSS class for a result message based on its marker."""
    return "message-success" if text.startswith("✓") else "message-error"


class TransparentPanel(Static):
    """Transparent address card.

    States:
    - No address: description + [Generate] button
    - Address: address (click to copy) + QR + balance + [Faucet] button
    """

    DEFAULT_CSS = (
        """
    TransparentPanel {
        height: auto;
        padding: 0;
        width: 100%;
    }
    """
        + PANEL_CSS
    )

    class GenerateRequested(Message):
        """Emitted when the user asks for a transparent address."""

    class FaucetRequested(Message):
        """Emitted when the user asks the faucet for funds."""

    def __init__(self, currency: str = "SHOL", faucet_hint: float = 1000.0, **kwargs) -> None:
        super().__init__(**kwargs)
        self._currency = currency
        self._faucet_hint = faucet_hint
        self._address = ""

    def compose(self) -> ComposeResult:
        yield Label("TRANSPARENT ADDRESS", classes="section-title")
        with Vertical(id="transparent-generate", classes="address-card"):
            yield Label("Generate a transparent address (like normal Solana)", classes="address-hint")
            yield Button(
                "Generate Transparent Address",
                id="btn-generate-transparent",
                classes="wallet-action",
            )
        with Vertical(id="transparent-display", classes="address-card"):
            yield Label("Address", classes="address-label")
            yield Button("", id="btn-copy-transparent", classes="address-value")
            yield Label("Click to copy", classes="address-hint")
            yield QRDisplay(id="transparent-qr")
            yield Label("Balance", classes="address-label")
            yield Label("", id="transparent-balance", classes="balance-value")
            yield Button(self._faucet_label(False), id="btn-faucet", classes="wallet-action")
            yield Label("", id="faucet-message")

    def on_mount(self) -> None:
        self.set_address(None)

    def _faucet_label(self, loading: bool) -> str:
        if loading:
            return "Requesting..."
        return f"Request from Faucet ({format_amount(self._faucet_hint)} {self._currency})"

    @property
    def address(self) -> str:
        return self._address

    def set_address(self, address: str | None) -> None:
        """Switch between the generate and display states."""
        self._address = address or ""
        self.query_one("#transparent-generate").display = not address
        self.query_one("#transparent-display").display = bool(address)
        if address:
            self.query_one("#btn-copy-transparent", Button).label = address
            self.query_one("#transparent-qr", QRDisplay).update_address(address)

    def set_balance(self, amount: float) -> None:
        self.query_one("#transparent-balance", Label).update(
            f"{format_amount(amount)} {self._currency}"
        )

    def set_faucet_loading(self, loading: bool) -> None:
        button = self.query_one("#btn-faucet", Button)
        button.label = self._faucet_label(loading)
        button.disabled = loading

    def set_faucet_message(self, text: str) -> None:
        label = self.query_one("#faucet-message", Label)
        label.update(text)
        label.set_classes(message_classes(text) if text else "")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn-generate-transparent":
            event.stop()
            self.post_message(self.GenerateRequested())
        elif button_id == "btn-faucet":
            event.stop()
            self.post_message(self.FaucetRequested())
        elif button_id == "btn-copy-transparent" and self._address:
            event.stop()
            self.app.copy_to_clipboard(self._address)
            self.notify("Address copied!")


class ShieldedPanel(Static):
    """Shielded address card.

    States:
    - No address: description + [Generate] button
    - Address: address (click to copy) + key previews + shielded balance
    """

    DEFAULT_CSS = (
        """
    ShieldedPanel {
        height: auto;
        padding: 0;
        width: 100%;
    }
    """
        + PANEL_CSS
    )

    class GenerateRequested(Message):
        """Emitted when the user asks for a shielded address."""

    def __init__(self, currency: str = "SHOL", **kwargs) -> None:
        super().__init__(**kwargs)
        self._currency = currency
        self._record: ShieldedAddress | None = None

    def compose(self) -> ComposeResult:
        yield Label("SHIELDED ADDRESS", classes="section-title")
        with Vertical(id="shielded-generate", classes="address-card"):
            yield Label(
                "Generate a shielded address with spending and viewing keys",
                classes="address-hint",
            )
            yield Button(
                "Generate Shielded Address",
                id="btn-generate-shielded",
                classes="wallet-action",
            )
        with Vertical(id="shielded-display", classes="address-card"):
            yield Label("Address", classes="address-label")
            yield Button("", id="btn-copy-shielded", classes="address-value")
            yield Label("Click to copy", classes="address-hint")
            yield Label("", id="spending-key", classes="key-row")
            yield Label("", id="viewing-key", classes="key-row")
            yield Label("Shielded Balance", classes="address-label")
            yield Label("", id="shielded-balance", classes="balance-value")
            yield Label("Requires viewing key to see", classes="balance-note")

    def on_mount(self) -> None:
        self.set_address(None)

    @property
    def record(self) -> ShieldedAddress | None:
        return self._record

    def set_address(self, record: ShieldedAddress | None) -> None:
        """Switch between the generate and display states."""
        self._record = record
        self.query_one("#shielded-generate").display = record is None
        self.query_one("#shielded-display").display = record is not None
        if record is not None:
            self.query_one("#btn-copy-shielded", Button).label = record.address
            self.query_one("#spending-key", Label).update(
                f"Spending Key  {key_preview(record.spending_key)}"
            )
            self.query_one("#viewing-key", Label).update(
                f"Viewing Key   {key_preview(record.viewing_key)}"
            )

    def set_balance(self, amount: float) -> None:
        self.query_one("#shielded-balance", Label).update(
            f"{format_amount(amount)} {self._currency}"
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn-generate-shielded":
            event.stop()
            self.post_message(self.GenerateRequested())
        elif button_id == "btn-copy-shielded" and self._record is not None:
            event.stop()
            self.app.copy_to_clipboard(self._record.address)
            self.notify("Address copied!")
