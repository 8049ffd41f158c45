"""Quick actions panel: shield, unshield, send private, send public."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Label, Static

from shadow_wallet.models import ActionKind
from shadow_wallet.tui.widgets.address_panel import message_classes


class QuickActionsPanel(Static):
    """Four action buttons plus the action message line.

    Buttons are enabled from the address state and read "Working..."
    while an action is in flight.
    """

    DEFAULT_CSS = """
    QuickActionsPanel {
        height: auto;
        width: 100%;
    }

    QuickActionsPanel .actions-grid {
        height: auto;
        width: 100%;
    }

    QuickActionsPanel .action-btn {
        width: 1fr;
        height: 3;
        background: #313244;
        color: #cdd6f4;
        border: tall #45475a;
        margin: 0 1 0 0;
    }

    QuickActionsPanel .action-btn:hover {
        background: #45475a;
    }

    QuickActionsPanel .message-success {
        color: #a6e3a1;
    }

    QuickActionsPanel .message-error {
        color: #f38ba8;
    }
    """

    class ActionRequested(Message):
        """Emitted when an action button is pressed."""

        def __init__(self, kind: ActionKind) -> None:
            super().__init__()
            self.kind = kind

    def compose(self) -> ComposeResult:
        yield Label("QUICK ACTIONS", classes="section-title")
        with Horizontal(classes="actions-grid"):
            for kind in ActionKind:
                yield Button(
                    kind.button_label,
                    id=f"btn-action-{kind.value}",
                    classes="action-btn",
                    disabled=True,
                )
        yield Label("", id="action-message")

    def refresh_buttons(self, enabled: dict[ActionKind, bool], loading: bool) -> None:
        """Update enablement and labels of all action buttons.

        Args:
            enabled: Per-action enablement.
            loading: Whether an action is in flight.
        """
        for kind in ActionKind:
            button = self.query_one(f"#btn-action-{kind.value}", Button)
            button.disabled = not enabled.get(kind, False)
            button.label = "Working..." if loading else kind.button_label

    def set_message(self, text: str) -> None:
        label = self.query_one("#action-message", Label)
        label.update(text)
        label.set_classes(message_classes(text) if text else "")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Translate button presses into ActionRequested messages."""
        button_id = event.button.id or ""
        prefix = "btn-action-"
        if button_id.startswith(prefix):
            event.stop()
            self.post_message(self.ActionRequested(ActionKind(button_id[len(prefix):])))
