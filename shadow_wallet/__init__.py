"""Shadow wallet client: transparent/shielded addresses, faucet, and actions."""

from shadow_wallet.addresses import AddressBook
from shadow_wallet.gateway import RequestGateway
from shadow_wallet.ledger import BalanceLedger
from shadow_wallet.modal import ActionModal
from shadow_wallet.models import ActionKind, Balance, ShieldedAddress
from shadow_wallet.orchestrator import WalletOrchestrator
from shadow_wallet.session import WalletSession

__all__ = [
    "ActionKind",
    "ActionModal",
    "AddressBook",
    "Balance",
    "BalanceLedger",
    "RequestGateway",
    "ShieldedAddress",
    "WalletOrchestrator",
    "WalletSession",
]
