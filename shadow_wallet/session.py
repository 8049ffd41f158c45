"""Session context owning the wallet's address and balance state."""

from loguru import logger

from shadow_wallet.addresses import AddressBook
from shadow_wallet.ledger import BalanceLedger


class WalletSession:
    """Explicit per-session state: address records and the balance ledger.

    Nothing is persisted. A session starts empty and `reset()` returns
    it to that state at session end.
    """

    def __init__(
        self,
        addresses: AddressBook | None = None,
        ledger: BalanceLedger | None = None,
    ) -> None:
        self.addresses = addresses or AddressBook()
        self.ledger = ledger or BalanceLedger()

    @property
    def generation(self) -> int:
        """Session generation; changes on every `reset()`."""
        return self.addresses.generation

    @classmethod
    def empty(cls) -> "WalletSession":
        """Create a session with no addresses and zero balances."""
        return cls()

    def reset(self) -> None:
        """Drop addresses and zero balances."""
        self.addresses.reset()
        self.ledger.reset()
        logger.info("Wallet session reset")
