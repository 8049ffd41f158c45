"""Address state: the transparent and shielded address records."""

import random

from loguru import logger
from pydantic import ValidationError

from shadow_wallet.gateway import GENERATE_ADDRESS_PATH, RequestGateway
from shadow_wallet.models import ShieldedAddress

TRANSPARENT_PREFIX = "sol1"
TRANSPARENT_HEX_LENGTH = 32


def mock_transparent_address() -> str:
    """Fabricate a transparent address token.

    This is a display placeholder, not a key-backed address: there is no
    key pair behind it and it must not be used to hold real funds.
    """
    suffix = "".join(random.choices("0123456789abcdef", k=TRANSPARENT_HEX_LENGTH))
    return f"{TRANSPARENT_PREFIX}{suffix}"


class AddressBook:
    """Holds the session's transparent and shielded address records.

    Both records start absent and are immutable once set; only `reset()`
    clears them. Which records exist gates which actions are enabled.
    """

    def __init__(self) -> None:
        self._transparent: str | None = None
        self._shielded: ShieldedAddress | None = None
        self._generation = 0

    @property
    def transparent(self) -> str | None:
        """Transparent address, if generated."""
        return self._transparent

    @property
    def shielded(self) -> ShieldedAddress | None:
        """Shielded address record, if generated."""
        return self._shielded

    @property
    def generation(self) -> int:
        """Bumped by `reset()`; requests started before a reset are stale."""
        return self._generation

    @property
    def has_transparent(self) -> bool:
        return self._transparent is not None

    @property
    def has_shielded(self) -> bool:
        return self._shielded is not None

    def generate_transparent(self) -> str:
        """Generate and store a transparent address.

        Always succeeds. If an address already exists it is returned
        unchanged.
        """
        if self._transparent is not None:
            return self._transparent

        self._transparent = mock_transparent_address()
        logger.info("Generated transparent address: {}", self._transparent)
        return self._transparent

    async def generate_shielded(self, gateway: RequestGateway) -> ShieldedAddress | None:
        """Request a shielded address from the backend and store it.

        Args:
            gateway: Gateway used for the address-generation request.

        Returns:
            The stored record, or None if the request or parse failed or
            the book was reset while the request was in flight. On failure
            the address state is left unchanged.
        """
        if self._shielded is not None:
            return self._shielded

        generation = self._generation
        result = await gateway.get(GENERATE_ADDRESS_PATH)
        if generation != self._generation:
            logger.info("Discarding shielded address response from a reset session")
            return None

        if not result.ok or result.data is None:
            logger.error("Failed to generate shielded address: request failed")
            return None

        try:
            record = ShieldedAddress.model_validate(result.data)
        except ValidationError as e:
            logger.error("Failed to generate shielded address: {}", str(e))
            return None

        # A concurrent generation may have completed while this one was awaiting
        if self._shielded is not None:
            return self._shielded

        self._shielded = record
        logger.info("Generated shielded address: {}", record.short_address)
        return record

    def reset(self) -> None:
        """Drop both address records (session teardown)."""
        self._transparent = None
        self._shielded = None
        self._generation += 1
