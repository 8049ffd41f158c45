#!/usr/bin/env python3
"""Verify the shadow backend before using the wallet.

Tests:
1. Base URL reachability
2. Shielded address generation
3. Faucet endpoint for a throwaway transparent address

Usage:
    python scripts/verify_backend.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from shadow_wallet.addresses import mock_transparent_address
from shadow_wallet.config import get_settings
from shadow_wallet.exceptions import GatewayError
from shadow_wallet.gateway import GENERATE_ADDRESS_PATH, RequestGateway, faucet_path
from shadow_wallet.models import FaucetResponse, ShieldedAddress


def validate_base_url(url: str) -> tuple[bool, str]:
    """Validate the configured base URL.

    Returns:
        Tuple of (is_valid, message)
    """
    if not url:
        return False, "Base URL is empty"

    if not url.startswith(("http://", "https://")):
        return False, "Base URL must start with http:// or https://"

    return True, f"Base URL format is valid ({url})"


async def test_address_generation(gateway: RequestGateway) -> tuple[bool, str]:
    """Request a shielded address and check the record shape.

    Returns:
        Tuple of (success, message)
    """
    try:
        body = await gateway.fetch("GET", GENERATE_ADDRESS_PATH)
        record = ShieldedAddress.model_validate(body)
    except GatewayError as e:
        return False, f"Address generation failed: {e}"
    except ValueError as e:
        return False, f"Unexpected address payload: {e}"

    if not record.spending_key or not record.viewing_key:
        return True, f"Address OK ({record.short_address}) but keys are missing"
    return True, f"Address OK ({record.short_address})"


async def test_faucet(gateway: RequestGateway) -> tuple[bool, str]:
    """Request faucet funds for a throwaway transparent address.

    Returns:
        Tuple of (success, message)
    """
    address = mock_transparent_address()

    try:
        body = await gateway.fetch("GET", faucet_path(address))
        response = FaucetResponse.model_validate(body)
    except GatewayError as e:
        return False, f"Faucet request failed: {e}"
    except ValueError as e:
        return False, f"Unexpected faucet payload: {e}"

    if not response.success:
        return False, "Faucet reachable but reported success=false"
    return True, f"Faucet OK | amount_shol={response.amount_shol}"


async def main() -> int:
    """Run all verification tests."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="INFO",
    )

    settings = get_settings()
    base_url = settings.backend.base_url

    print("\n" + "=" * 60)
    print("  SHADOW BACKEND VERIFICATION")
    print("=" * 60)
    print(f"\n  Backend: {base_url}")
    print(f"  Timeout: {settings.backend.timeout_seconds}s")
    print()

    all_passed = True

    # Test 1: Base URL format
    print("  [1/3] Validating base URL...")
    success, msg = validate_base_url(base_url)
    status = "PASS" if success else "FAIL"
    print(f"        {status}: {msg}")
    if not success:
        print("\n" + "=" * 60)
        print("  BASE URL INVALID - Cannot continue")
        print("\n  Fix your .env file:")
        print("    SHADOW_API_BASE_URL=http://localhost:8080/api")
        print("=" * 60 + "\n")
        return 1

    async with RequestGateway(base_url, timeout=settings.backend.timeout_seconds) as gateway:
        # Test 2: Address generation
        print("\n  [2/3] Testing shielded address generation...")
        success, msg = await test_address_generation(gateway)
        status = "PASS" if success else "FAIL"
        print(f"        {status}: {msg}")
        all_passed = all_passed and success

        # Test 3: Faucet
        print("\n  [3/3] Testing faucet endpoint...")
        success, msg = await test_faucet(gateway)
        status = "PASS" if success else "FAIL"
        print(f"        {status}: {msg}")
        all_passed = all_passed and success

    print("\n" + "=" * 60)
    if all_passed:
        print("  ALL TESTS PASSED - Backend is ready!")
        print("\n  Next steps:")
        print("    1. Run: python main.py")
        print("    2. Press 't' then 'z' to generate both addresses")
    else:
        print("  SOME TESTS FAILED - Check the backend and try again")
    print("=" * 60 + "\n")

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
