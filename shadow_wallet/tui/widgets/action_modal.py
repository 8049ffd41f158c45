"""Action modal screen for composing shield/unshield/transfer requests."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from shadow_wallet.models import ActionKind, ModalState

RECIPIENT_PLACEHOLDERS = {
    ActionKind.SEND_PRIVATE: "shadow1...",
    ActionKind.SEND_PUBLIC: "sol1...",
}


class ActionModalScreen(ModalScreen[None]):
    """Dialog over a dimmed background rendering one `ModalState`.

    The screen holds no wallet logic: field edits, confirm, and cancel
    are posted as messages and the app forwards them to the
    orchestrator. The app dismisses the screen when the orchestrator
    reports the modal closed.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    DEFAULT_CSS = """
    ActionModalScreen {
        align: center middle;
    }

    ActionModalScreen > Vertical {
        width: 64;
        height: auto;
        max-height: 90%;
        background: #1e1e2e;
        border: thick #cba6f7;
        padding: 1 2;
    }

    ActionModalScreen .modal-title {
        text-style: bold;
        color: #f9e2af;
        text-align: center;
        width: 100%;
        margin-bottom: 1;
    }

    ActionModalScreen .field-label {
        color: #6c7086;
    }

    ActionModalScreen Input {
        width: 100%;
        margin-bottom: 1;
    }

    ActionModalScreen .button-row {
        width: 100%;
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    ActionModalScreen Button {
        margin: 0 1;
    }

    ActionModalScreen .btn-primary {
        background: #cba6f7;
        color: #1e1e2e;
    }

    ActionModalScreen .btn-primary:hover {
        background: #b4befe;
    }

    ActionModalScreen .btn-secondary {
        background: #313244;
        color: #cdd6f4;
    }

    ActionModalScreen .btn-secondary:hover {
        background: #45475a;
    }

    ActionModalScreen #modal-error {
        color: #f38ba8;
        text-align: center;
        width: 100%;
    }
    """

    class RecipientChanged(Message):
        """Emitted when the recipient input changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class AmountChanged(Message):
        """Emitted when the amount input changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Confirmed(Message):
        """Emitted when the user confirms the action."""

    class Cancelled(Message):
        """Emitted when the user cancels the modal."""

    def __init__(self, state: ModalState, currency: str = "SHOL") -> None:
        """Initialize the modal screen.

        Args:
            state: Open modal state to render.
            currency: Unit shown next to the amount field.
        """
        super().__init__()
        self._state = state
        self._currency = currency
        self._loading = False

    @property
    def token(self) -> int:
        """Token of the modal state this screen renders."""
        return self._state.token

    def compose(self) -> ComposeResult:
        kind = self._state.kind
        title = kind.title if kind is not None else "Action"

        with Vertical():
            yield Label(title, classes="modal-title")
            yield Static(self._state.error or "", id="modal-error")
            yield Label("Recipient Address", classes="field-label")
            yield Input(
                value=self._state.recipient,
                placeholder=RECIPIENT_PLACEHOLDERS.get(kind, "") if kind else "",
                id="recipient-input",
            )
            yield Label(f"Amount ({self._currency})", classes="field-label")
            yield Input(value=self._state.amount, id="amount-input")
            with Center(classes="button-row"):
                yield Button("Confirm", id="btn-confirm", classes="btn-primary")
                yield Button("Cancel", id="btn-cancel", classes="btn-secondary")

    def on_mount(self) -> None:
        """Focus the amount field when the recipient is prefilled."""
        target = "#amount-input" if self._state.recipient else "#recipient-input"
        self.query_one(target, Input).focus()

    def show_error(self, error: str | None) -> None:
        """Display or clear the inline validation error."""
        self.query_one("#modal-error", Static).update(error or "")

    def set_loading(self, loading: bool) -> None:
        """Freeze the confirm button while a submission is in flight."""
        self._loading = loading
        button = self.query_one("#btn-confirm", Button)
        button.label = "Working..." if loading else "Confirm"
        button.disabled = loading

    def on_input_changed(self, event: Input.Changed) -> None:
        """Forward field edits."""
        event.stop()
        if event.input.id == "recipient-input":
            self.post_message(self.RecipientChanged(event.value))
        elif event.input.id == "amount-input":
            self.post_message(self.AmountChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the recipient field moves on; in the amount field confirms."""
        event.stop()
        if event.input.id == "recipient-input":
            self.query_one("#amount-input", Input).focus()
        elif not self._loading:
            self.post_message(self.Confirmed())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        event.stop()
        if event.button.id == "btn-confirm":
            self.post_message(self.Confirmed())
        elif event.button.id == "btn-cancel":
            self.post_message(self.Cancelled())

    def action_cancel(self) -> None:
        """Cancel and close modal."""
        self.post_message(self.Cancelled())
