"""Action modal state machine for shield/unshield/transfer requests."""

import math
import re
from typing import Any

from loguru import logger

from shadow_wallet.addresses import AddressBook
from shadow_wallet.exceptions import (
    AmountValidationError,
    PreconditionError,
    WalletError,
)
from shadow_wallet.models import ActionKind, ActionRequest, ModalState

INVALID_AMOUNT_ERROR = "Please enter a valid amount"

ADVISORY_NEED_BOTH = "✗ Generate both transparent and shielded addresses first"
ADVISORY_NEED_SHIELDED = "✗ Generate a shielded address first"
ADVISORY_NEED_TRANSPARENT = "✗ Generate a transparent address first"

# Leading decimal number; trailing text is ignored ("5abc" -> 5)
_AMOUNT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

ACTION_ENDPOINTS: dict[ActionKind, str] = {
    ActionKind.SHIELD: "/shadow/shield",
    ActionKind.UNSHIELD: "/shadow/unshield",
    ActionKind.SEND_PRIVATE: "/shadow/transfer/shielded",
    ActionKind.SEND_PUBLIC: "/shadow/tx",
}


def parse_amount(text: str) -> float:
    """Parse the leading decimal number of the modal amount text.

    Leading whitespace is skipped and anything after the number is
    ignored, so "5abc" parses as 5 and "1,5" as 1.

    Raises:
        AmountValidationError: If no number leads the text or it is not
            a finite number > 0.
    """
    match = _AMOUNT_PREFIX.match(text.lstrip())
    if match is None:
        raise AmountValidationError(INVALID_AMOUNT_ERROR)

    amount = float(match.group())

    if not math.isfinite(amount) or amount <= 0:
        raise AmountValidationError(INVALID_AMOUNT_ERROR)
    return amount


def check_precondition(kind: ActionKind, addresses: AddressBook) -> None:
    """Verify the addresses an action needs exist.

    Raises:
        PreconditionError: With the advisory to show the user.
    """
    if kind in (ActionKind.SHIELD, ActionKind.UNSHIELD):
        if not (addresses.has_transparent and addresses.has_shielded):
            raise PreconditionError(ADVISORY_NEED_BOTH)
    elif kind == ActionKind.SEND_PRIVATE:
        if not addresses.has_shielded:
            raise PreconditionError(ADVISORY_NEED_SHIELDED)
    elif kind == ActionKind.SEND_PUBLIC:
        if not addresses.has_transparent:
            raise PreconditionError(ADVISORY_NEED_TRANSPARENT)


class ActionModal:
    """State machine behind the quick-action dialog.

    States:
        Closed -> Open(kind, recipient, amount, error) -> Submitting -> Closed
                                                                  \\-> Open (failure)

    Submitting is still logically Open: the fields stay visible while
    the `loading` flag is set. The flag belongs to the action flow rather
    than to one modal instance, so it survives a cancel until the
    in-flight request resolves.

    Each open/close bumps `token`. A submission captures the token before
    dispatch; if the token changed by the time the response arrives, the
    modal was cancelled or replaced and the response must be ignored.
    """

    def __init__(self, default_amount: str = "1") -> None:
        """Initialize a closed modal.

        Args:
            default_amount: Amount text prefilled on open.
        """
        self._default_amount = default_amount
        self._is_open = False
        self._kind: ActionKind | None = None
        self._recipient = ""
        self._amount = default_amount
        self._error: str | None = None
        self._token = 0
        self._loading = False

    @property
    def state(self) -> ModalState:
        """Snapshot of the modal fields."""
        return ModalState(
            is_open=self._is_open,
            kind=self._kind,
            recipient=self._recipient,
            amount=self._amount,
            error=self._error,
            token=self._token,
        )

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def kind(self) -> ActionKind | None:
        return self._kind

    @property
    def token(self) -> int:
        return self._token

    @property
    def loading(self) -> bool:
        """True while an action submission is in flight."""
        return self._loading

    def is_enabled(self, kind: ActionKind, addresses: AddressBook) -> bool:
        """Whether the quick-action button for `kind` should be enabled.

        Unshield's button only needs the shielded address; the
        transparent address is checked when the modal is opened.
        """
        if self._loading:
            return False
        if kind == ActionKind.SHIELD:
            return addresses.has_transparent and addresses.has_shielded
        if kind in (ActionKind.UNSHIELD, ActionKind.SEND_PRIVATE):
            return addresses.has_shielded
        return addresses.has_transparent

    def open(self, kind: ActionKind, addresses: AddressBook) -> ModalState:
        """Open the modal for an action, discarding any prior modal state.

        Args:
            kind: Action to compose.
            addresses: Current address records.

        Returns:
            The opened modal state.

        Raises:
            PreconditionError: If a required address is missing. The
                modal is left untouched.
        """
        check_precondition(kind, addresses)

        if kind == ActionKind.SHIELD:
            recipient = addresses.shielded.address if addresses.shielded else ""
        elif kind == ActionKind.UNSHIELD:
            recipient = addresses.transparent or ""
        else:
            recipient = ""

        self._token += 1
        self._is_open = True
        self._kind = kind
        self._recipient = recipient
        self._amount = self._default_amount
        self._error = None

        logger.debug("Modal opened | kind={} token={}", kind.value, self._token)
        return self.state

    def close(self) -> ModalState:
        """Close the modal and discard all transient fields."""
        if self._is_open:
            logger.debug("Modal closed | kind={} token={}", self._kind, self._token)
        self._token += 1
        self._is_open = False
        self._kind = None
        self._recipient = ""
        self._amount = self._default_amount
        self._error = None
        return self.state

    def set_recipient(self, recipient: str) -> None:
        """Edit the recipient field (ignored while closed or submitting)."""
        if self._is_open and not self._loading:
            self._recipient = recipient

    def set_amount(self, amount: str) -> None:
        """Edit the raw amount text (ignored while closed or submitting)."""
        if self._is_open and not self._loading:
            self._amount = amount

    def validate(self) -> ActionRequest:
        """Validate the form and build the request to dispatch.

        Clears any previous inline error first. On an invalid amount the
        modal stays open with the inline error set.

        Raises:
            WalletError: If the modal is not open.
            AmountValidationError: If the amount is not a positive number.
        """
        if not self._is_open or self._kind is None:
            raise WalletError("No action modal is open")

        self._error = None
        try:
            amount = parse_amount(self._amount)
        except AmountValidationError as e:
            self._error = str(e)
            logger.debug("Modal validation failed | amount={!r}", self._amount)
            raise

        return ActionRequest(kind=self._kind, recipient=self._recipient, amount=amount)

    @staticmethod
    def build_route(
        request: ActionRequest,
        addresses: AddressBook,
    ) -> tuple[str, dict[str, Any]]:
        """Endpoint path and JSON payload for a validated request.

        Raises:
            PreconditionError: If the source address for the action is gone.
        """
        check_precondition(request.kind, addresses)
        path = ACTION_ENDPOINTS[request.kind]
        shielded = addresses.shielded.address if addresses.shielded else None

        if request.kind == ActionKind.SHIELD:
            payload = {"from": addresses.transparent, "to": request.recipient, "amount": request.amount}
        elif request.kind == ActionKind.UNSHIELD:
            payload = {"from_shielded": shielded, "to": request.recipient, "amount": request.amount}
        elif request.kind == ActionKind.SEND_PRIVATE:
            payload = {"from": shielded, "to": request.recipient, "amount": request.amount}
        else:
            payload = {"from": addresses.transparent, "to": request.recipient, "amount": request.amount}

        return path, payload

    def begin_submit(self) -> int:
        """Set the loading flag and return the token to match on completion.

        Raises:
            WalletError: If a submission is already in flight.
        """
        if self._loading:
            raise WalletError("An action is already in flight")
        self._loading = True
        return self._token

    def end_submit(self) -> None:
        """Release the loading flag."""
        self._loading = False

    def is_current(self, token: int) -> bool:
        """True if the modal that dispatched `token` is still the open one."""
        return self._is_open and token == self._token
