"""Global header bar for the shadow wallet TUI.

Full-width header containing:
- Left: App title + activity status
- Right: Backend URL
"""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Label, Static


class WalletHeader(Static):
    """Global header bar with title, activity status, and backend.

    Layout:
    ┌──────────────────────────────────────────────────────────────────────┐
    │ SHADOW WALLET  ■ IDLE              │  Backend: http://localhost:8080 │
    └──────────────────────────────────────────────────────────────────────┘

    Activity states:
    - IDLE (yellow): No request in flight
    - BUSY (green): A faucet request or action submission is in flight
    """

    DEFAULT_CSS = """
    WalletHeader {
        dock: top;
        height: 3;
        background: #181825;
        border-bottom: solid #313244;
    }

    WalletHeader > Horizontal {
        width: 100%;
        height: 100%;
    }

    WalletHeader .header-left {
        width: 1fr;
        height: 100%;
        padding: 1 2;
    }

    WalletHeader .header-left > Horizontal {
        height: 1;
        width: auto;
    }

    WalletHeader .header-right {
        width: auto;
        height: 100%;
        padding: 1 2;
        content-align: right middle;
    }

    WalletHeader #app-title {
        text-style: bold;
        color: #f9e2af;
        margin-right: 2;
    }

    WalletHeader #status-indicator {
        margin-right: 1;
    }

    WalletHeader #status-text {
        text-style: bold;
    }

    WalletHeader .status-idle {
        color: #f9e2af;
    }

    WalletHeader .status-busy {
        color: #a6e3a1;
    }

    WalletHeader .separator {
        color: #313244;
        margin: 0 1;
    }

    WalletHeader #backend-label {
        color: #6c7086;
        margin-right: 1;
    }

    WalletHeader #backend-url {
        color: #89b4fa;
    }
    """

    busy: reactive[bool] = reactive(False)
    backend_url: reactive[str] = reactive("")

    def compose(self) -> ComposeResult:
        with Horizontal():
            with Static(classes="header-left"):
                with Horizontal():
                    yield Label("SHADOW WALLET", id="app-title")
                    yield Label("■", id="status-indicator", classes="status-idle")
                    yield Label("IDLE", id="status-text", classes="status-idle")

            with Static(classes="header-right"):
                with Horizontal():
                    yield Label("|", classes="separator")
                    yield Label("Backend:", id="backend-label")
                    yield Label("", id="backend-url")

    def watch_busy(self, busy: bool) -> None:
        """Update activity indicator."""
        if not self.is_mounted:
            return
        indicator = self.query_one("#status-indicator", Label)
        text = self.query_one("#status-text", Label)

        if busy:
            indicator.update("▶")
            indicator.set_classes("status-busy")
            text.update("BUSY")
            text.set_classes("status-busy")
        else:
            indicator.update("■")
            indicator.set_classes("status-idle")
            text.update("IDLE")
            text.set_classes("status-idle")

    def watch_backend_url(self, url: str) -> None:
        if self.is_mounted:
            self.query_one("#backend-url", Label).update(url)

    def on_mount(self) -> None:
        self.watch_busy(self.busy)
        self.watch_backend_url(self.backend_url)

    def set_busy(self, busy: bool) -> None:
        self.busy = busy

    def set_backend(self, url: str) -> None:
        self.backend_url = url
