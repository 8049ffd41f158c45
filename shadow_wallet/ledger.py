"""Local balance ledger for transparent and shielded funds."""

import math

from loguru import logger

from shadow_wallet.exceptions import LedgerError
from shadow_wallet.models import ActionKind, Balance, BalanceKind


def ledger_deltas(kind: ActionKind, amount: float) -> dict[BalanceKind, float]:
    """Map a successful action to its balance deltas.

    Args:
        kind: The action that succeeded.
        amount: The submitted amount (positive).

    Returns:
        Signed delta per balance. Balances absent from the dict are unchanged.
    """
    if kind == ActionKind.SHIELD:
        return {BalanceKind.TRANSPARENT: -amount, BalanceKind.SHIELDED: amount}
    if kind == ActionKind.UNSHIELD:
        return {BalanceKind.SHIELDED: -amount, BalanceKind.TRANSPARENT: amount}
    if kind == ActionKind.SEND_PRIVATE:
        return {BalanceKind.SHIELDED: -amount}
    if kind == ActionKind.SEND_PUBLIC:
        return {BalanceKind.TRANSPARENT: -amount}
    raise ValueError(f"Unknown action kind: {kind}")


class BalanceLedger:
    """Optimistic local cache of the two wallet balances.

    Updates are applied as soon as the backend acknowledges a faucet
    request or an action; nothing is reconciled against on-chain state.
    Treat the figures as a best-effort view, not as authoritative data.

    Every update is a single synchronous step, so completions of
    interleaved flows on the event loop never observe a half-applied
    change. Debits floor at zero.

    Example:
        ledger = BalanceLedger()
        ledger.credit(BalanceKind.TRANSPARENT, 1000)
        ledger.apply(ledger_deltas(ActionKind.SHIELD, 400))
        ledger.balance  # Balance(transparent=600.0, shielded=400.0)
    """

    def __init__(self) -> None:
        self._balances: dict[BalanceKind, float] = {
            BalanceKind.TRANSPARENT: 0.0,
            BalanceKind.SHIELDED: 0.0,
        }

    @property
    def balance(self) -> Balance:
        """Current balances as an immutable snapshot."""
        return Balance(
            transparent=self._balances[BalanceKind.TRANSPARENT],
            shielded=self._balances[BalanceKind.SHIELDED],
        )

    @staticmethod
    def _check_amount(amount: float) -> float:
        """Reject amounts that would corrupt the ledger."""
        if not math.isfinite(amount) or amount < 0:
            raise LedgerError(f"Invalid ledger amount: {amount}")
        return float(amount)

    def credit(self, kind: BalanceKind, amount: float) -> Balance:
        """Increase one balance.

        Args:
            kind: Which balance to credit.
            amount: Non-negative amount.

        Returns:
            The updated snapshot.

        Raises:
            LedgerError: If amount is negative or non-finite.
        """
        amount = self._check_amount(amount)
        self._balances[kind] += amount
        logger.debug("Ledger credit | {} +{}", kind.value, amount)
        return self.balance

    def debit(self, kind: BalanceKind, amount: float) -> Balance:
        """Decrease one balance, flooring at zero.

        Args:
            kind: Which balance to debit.
            amount: Non-negative amount.

        Returns:
            The updated snapshot.

        Raises:
            LedgerError: If amount is negative or non-finite.
        """
        amount = self._check_amount(amount)
        self._balances[kind] = max(0.0, self._balances[kind] - amount)
        logger.debug("Ledger debit | {} -{}", kind.value, amount)
        return self.balance

    def apply(self, deltas: dict[BalanceKind, float]) -> Balance:
        """Apply signed deltas to both balances in one step.

        Args:
            deltas: Output of `ledger_deltas`.

        Returns:
            The updated snapshot.
        """
        updated = dict(self._balances)
        for kind, delta in deltas.items():
            if not math.isfinite(delta):
                raise LedgerError(f"Invalid ledger delta: {delta}")
            updated[kind] = max(0.0, updated[kind] + delta)
        self._balances = updated

        balance = self.balance
        logger.info(
            "Ledger updated | transparent={} shielded={}",
            balance.transparent,
            balance.shielded,
        )
        return balance

    def reset(self) -> None:
        """Zero both balances (session teardown)."""
        self._balances = {
            BalanceKind.TRANSPARENT: 0.0,
            BalanceKind.SHIELDED: 0.0,
        }
