"""Custom exceptions for the shadow-wallet client."""


class WalletError(Exception):
    """Base exception for wallet-related errors."""

    pass


class PreconditionError(WalletError):
    """Raised when an action needs an address that has not been generated.

    Attributes:
        advisory: User-facing message explaining what to generate first.
    """

    def __init__(self, advisory: str) -> None:
        super().__init__(advisory)
        self.advisory = advisory


class AmountValidationError(WalletError):
    """Raised when a modal amount is not a positive decimal number."""

    pass


class LedgerError(WalletError):
    """Raised when a ledger update is given a negative or non-finite amount."""

    pass


# =============================================================================
# Gateway Layer Exceptions
# =============================================================================


class GatewayError(Exception):
    """Base exception for backend request errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GatewayTransportError(GatewayError):
    """Raised when the backend cannot be reached or the request times out."""

    pass


class GatewayResponseError(GatewayError):
    """Raised when the backend answers with a non-2xx status or a body
    that is not a JSON object."""

    pass
