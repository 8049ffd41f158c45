"""Domain models for the shadow-wallet client."""

from enum import Enum
from time import time
from typing import Any

from pydantic import BaseModel, Field


class ActionKind(str, Enum):
    """Transaction type composed in the action modal."""

    SHIELD = "shield"
    UNSHIELD = "unshield"
    SEND_PRIVATE = "send_private"
    SEND_PUBLIC = "send_public"

    @property
    def title(self) -> str:
        """Modal title for this action."""
        return _ACTION_TITLES[self]

    @property
    def button_label(self) -> str:
        """Quick-action button label, including the address direction."""
        return _ACTION_BUTTON_LABELS[self]


_ACTION_TITLES = {
    ActionKind.SHIELD: "Shield Funds",
    ActionKind.UNSHIELD: "Unshield Funds",
    ActionKind.SEND_PRIVATE: "Send Private",
    ActionKind.SEND_PUBLIC: "Send Public",
}

_ACTION_BUTTON_LABELS = {
    ActionKind.SHIELD: "Shield Funds (t→z)",
    ActionKind.UNSHIELD: "Unshield Funds (z→t)",
    ActionKind.SEND_PRIVATE: "Send Private (z→z)",
    ActionKind.SEND_PUBLIC: "Send Public (t→t)",
}


class BalanceKind(str, Enum):
    """Which of the two ledger balances an update applies to."""

    TRANSPARENT = "transparent"
    SHIELDED = "shielded"


class MessageChannel(str, Enum):
    """Ephemeral message slots shown to the user.

    Precondition advisories share the ACTION slot with submission results.
    """

    ACTION = "action"
    FAUCET = "faucet"


class FlowKind(str, Enum):
    """Single-flight request flows tracked by a loading flag."""

    ACTION = "action"
    FAUCET = "faucet"


# =============================================================================
# Address Models
# =============================================================================


class ShieldedAddress(BaseModel):
    """Shielded address record returned by the backend.

    Immutable once received. The keys are opaque strings; no
    cryptographic meaning is attached to them client-side.
    """

    model_config = {"frozen": True}

    address: str = Field(..., min_length=1, description="Shielded address (shadow1...)")
    spending_key: str = Field(default="", description="Key authorizing spends")
    viewing_key: str = Field(default="", description="Key authorizing balance/history view")

    @property
    def short_address(self) -> str:
        """Return shortened address for display (shadow1ab...wxyz)."""
        if len(self.address) <= 16:
            return self.address
        return f"{self.address[:10]}...{self.address[-4:]}"


# =============================================================================
# Ledger Models
# =============================================================================


class Balance(BaseModel):
    """Snapshot of the two locally tracked balances."""

    model_config = {"frozen": True}

    transparent: float = Field(default=0.0, ge=0, description="Transparent balance in SHOL")
    shielded: float = Field(default=0.0, ge=0, description="Shielded balance in SHOL")

    @property
    def total(self) -> float:
        """Combined holdings across both balances."""
        return self.transparent + self.shielded


# =============================================================================
# Action Models
# =============================================================================


class ActionRequest(BaseModel):
    """A validated user intent ready for dispatch.

    Immutable data structure built from the modal fields on submit.
    """

    model_config = {"frozen": True}

    kind: ActionKind = Field(..., description="Transaction type")
    recipient: str = Field(..., description="Destination address")
    amount: float = Field(..., gt=0, description="Amount in SHOL")
    created_at: float = Field(default_factory=time, description="Submit time")


class ModalState(BaseModel):
    """Snapshot of the action modal's transient form.

    `amount` is the raw text typed by the user; it is only parsed on submit.
    `token` identifies the modal instance so that late responses can be
    matched against the modal that dispatched them.
    """

    model_config = {"frozen": True}

    is_open: bool = False
    kind: ActionKind | None = None
    recipient: str = ""
    amount: str = ""
    error: str | None = None
    token: int = 0


def _first_present(*values: Any) -> str:
    """First non-empty value rendered as text ('' if none)."""
    for value in values:
        if value not in (None, "", False):
            return str(value)
    return ""


class ActionReceipt(BaseModel):
    """Response body of an action endpoint.

    Only a handful of fields are consumed; anything else the backend
    returns is kept as extra data. The display fields accept any JSON
    value since only `success` and `error` decide the outcome.
    """

    model_config = {"frozen": True, "extra": "allow"}

    type: Any = None
    status: Any = None
    signature: Any = None
    bridge_id: Any = None
    success: Any = None
    error: Any = None

    @property
    def accepted(self) -> bool:
        """False when the body itself reports a rejection."""
        return self.success is not False and not self.error

    def summary(self) -> str:
        """Human-readable result line (e.g. 'shield: 5Kx9...')."""
        label = _first_present(self.type, self.status) or "Success"
        reference = _first_present(self.signature, self.bridge_id) or ""
        return f"{label}: {reference}"


class FaucetResponse(BaseModel):
    """Response body of the faucet endpoint."""

    model_config = {"frozen": True, "extra": "ignore"}

    success: bool = False
    amount_shol: float = Field(default=0.0, ge=0, description="Credited amount in SHOL")


class GatewayResult(BaseModel):
    """Uniform outcome of a backend request.

    `ok` is False for any transport, status, or parse failure; `data`
    then is None. Business-level success is left to the body itself.
    """

    model_config = {"frozen": True}

    ok: bool
    data: dict[str, Any] | None = None

    @classmethod
    def success(cls, data: dict[str, Any]) -> "GatewayResult":
        """Build a successful result around a parsed body."""
        return cls(ok=True, data=data)

    @classmethod
    def failed(cls) -> "GatewayResult":
        """The sentinel returned for every failed request."""
        return cls(ok=False, data=None)


def format_amount(value: float) -> str:
    """Format an amount without trailing zeros (1000.0 -> '1000')."""
    text = f"{value:.8f}".rstrip("0").rstrip(".")
    return text or "0"
