"""TUI widgets for the shadow wallet."""

from shadow_wallet.tui.widgets.action_modal import ActionModalScreen
from shadow_wallet.tui.widgets.actions import QuickActionsPanel
from shadow_wallet.tui.widgets.address_panel import ShieldedPanel, TransparentPanel
from shadow_wallet.tui.widgets.header import WalletHeader
from shadow_wallet.tui.widgets.log_panel import LiveLogPanel
from shadow_wallet.tui.widgets.qr_display import QRDisplay
from shadow_wallet.tui.widgets.wallet_info import WalletInfoPanel

__all__ = [
    "ActionModalScreen",
    "LiveLogPanel",
    "QRDisplay",
    "QuickActionsPanel",
    "ShieldedPanel",
    "TransparentPanel",
    "WalletHeader",
    "WalletInfoPanel",
]
