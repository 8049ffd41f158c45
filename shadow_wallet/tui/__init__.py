"""Terminal User Interface for the shadow wallet."""

from shadow_wallet.tui.app import ShadowWalletApp
from shadow_wallet.tui.log_sink import TuiLogSink

__all__ = ["ShadowWalletApp", "TuiLogSink"]
