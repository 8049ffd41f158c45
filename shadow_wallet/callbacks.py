"""Callback protocols for wallet orchestrator notifications."""

from typing import Protocol, runtime_checkable

from shadow_wallet.models import (
    Balance,
    FlowKind,
    MessageChannel,
    ModalState,
    ShieldedAddress,
)


@runtime_checkable
class WalletCallback(Protocol):
    """Protocol defining the callback interface for WalletOrchestrator events.

    All methods are async and are awaited from the orchestrator's flows.
    Implementations MUST NOT block.

    Callbacks are wrapped in try/except by the orchestrator - a failing
    callback never breaks a wallet flow.
    """

    async def on_addresses_changed(
        self,
        transparent: str | None,
        shielded: ShieldedAddress | None,
    ) -> None:
        """Called when an address record is generated or the session resets.

        Args:
            transparent: Current transparent address, if any.
            shielded: Current shielded address record, if any.
        """
        ...

    async def on_balance_updated(self, balance: Balance) -> None:
        """Called after every ledger update.

        Args:
            balance: The new balance snapshot.
        """
        ...

    async def on_modal_changed(self, modal: ModalState) -> None:
        """Called when the action modal opens, closes, or its error changes.

        Args:
            modal: Snapshot of the modal state.
        """
        ...

    async def on_loading_changed(self, flow: FlowKind, loading: bool) -> None:
        """Called when a single-flight loading flag is set or released.

        Args:
            flow: Which flow changed.
            loading: New flag value.
        """
        ...

    async def on_message(self, channel: MessageChannel, text: str) -> None:
        """Called when an ephemeral message is shown or cleared.

        Args:
            channel: Message slot.
            text: New text ('' when cleared).
        """
        ...
