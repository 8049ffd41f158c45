"""QR code display widget for terminal."""

import io

import segno
from textual.widgets import Static


def render_qr(address: str) -> str:
    """Render an address as a compact terminal QR code.

    Args:
        address: Address to encode.

    Returns:
        Unicode block-character representation of the QR code.
    """
    qr = segno.make(address)

    # Capture terminal output to string
    buffer = io.StringIO()
    qr.terminal(out=buffer, compact=True)
    return buffer.getvalue()


class QRDisplay(Static):
    """Display an address as a QR code in the terminal.

    Best used for the transparent address so a mobile faucet or wallet
    can scan it.
    """

    DEFAULT_CSS = """
    QRDisplay {
        width: auto;
        height: auto;
        text-align: center;
        padding: 1;
    }
    """

    def __init__(self, address: str = "", **kwargs) -> None:
        """Initialize QR display.

        Args:
            address: Address to encode; empty renders nothing.
        """
        super().__init__(**kwargs)
        self._address = address

    @property
    def address(self) -> str:
        return self._address

    def on_mount(self) -> None:
        """Generate and display QR code on mount."""
        self._refresh_qr()

    def update_address(self, address: str) -> None:
        """Update the displayed address."""
        self._address = address
        self._refresh_qr()

    def _refresh_qr(self) -> None:
        self.update(render_qr(self._address) if self._address else "")
