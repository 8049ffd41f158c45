"""Main entry point for the shadow wallet."""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from shadow_wallet.config import LogConfig, Settings, get_settings
from shadow_wallet.gateway import RequestGateway
from shadow_wallet.models import ActionKind, MessageChannel
from shadow_wallet.orchestrator import WalletOrchestrator


def setup_logging(config: LogConfig) -> None:
    """Configure loguru logging."""
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=config.level,
    )
    logger.add(
        f"{config.directory}/wallet_{{time}}.log",
        rotation="50 MB",
        retention="7 days",
        level="DEBUG",
    )


async def run_demo_step(
    wallet: WalletOrchestrator,
    kind: ActionKind,
    amount: str,
    recipient: str | None = None,
) -> bool:
    """Open, fill, and submit one action through the orchestrator."""
    if not await wallet.open_action(kind):
        logger.warning("{} skipped: {}", kind.title, wallet.message(MessageChannel.ACTION))
        return False

    if recipient is not None:
        wallet.set_recipient(recipient)
    wallet.set_amount(amount)

    ok = await wallet.submit_action()
    if not ok:
        await wallet.cancel_action()
    return ok


async def main(settings: Settings) -> int:
    """Run a scripted wallet session without the TUI.

    Walks through the same flow a user would: generate both addresses,
    fund the transparent address from the faucet, then run each action
    once.
    """
    logger.info("Starting shadow wallet (headless) | backend={}", settings.backend.base_url)

    async with RequestGateway(
        settings.backend.base_url,
        timeout=settings.backend.timeout_seconds,
    ) as gateway:
        wallet = WalletOrchestrator(gateway, config=settings.wallet)
        try:
            transparent = await wallet.generate_transparent()
            logger.info("Transparent address: {}", transparent)

            shielded = await wallet.generate_shielded()
            if shielded is None:
                logger.error("Backend did not return a shielded address. Exiting.")
                return 1
            logger.info("Shielded address: {}", shielded.address)

            if not await wallet.request_faucet():
                logger.error("Faucet request failed. Exiting.")
                return 1
            logger.info("Balance after faucet: {}", wallet.balance)

            steps = [
                (ActionKind.SHIELD, "400", None),
                (ActionKind.UNSHIELD, "100", None),
                (ActionKind.SEND_PRIVATE, "50", shielded.address),
                (ActionKind.SEND_PUBLIC, "10", transparent),
            ]
            failures = 0
            for kind, amount, recipient in steps:
                ok = await run_demo_step(wallet, kind, amount, recipient)
                logger.info(
                    "{} {} -> {} | balance={}",
                    kind.title,
                    amount,
                    "ok" if ok else "failed",
                    wallet.balance,
                )
                failures += 0 if ok else 1

            logger.info(
                "Session complete | transparent={} shielded={} failures={}",
                wallet.balance.transparent,
                wallet.balance.shielded,
                failures,
            )
            return 0 if failures == 0 else 1
        finally:
            await wallet.aclose()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Shadow Wallet - transparent & shielded address client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run a scripted session against the backend instead of the TUI",
    )
    parser.add_argument(
        "--backend",
        metavar="URL",
        help="Override the backend base URL (default: SHADOW_API_BASE_URL)",
    )
    return parser.parse_args()


async def main_tui(settings: Settings) -> None:
    """Run the wallet with TUI."""
    from shadow_wallet.tui import ShadowWalletApp

    app = ShadowWalletApp(settings=settings)
    await app.run_async()


if __name__ == "__main__":
    args = parse_args()
    settings = get_settings()
    if args.backend:
        settings.backend.base_url = args.backend

    # Create logs directory if it doesn't exist
    Path(settings.log.directory).mkdir(parents=True, exist_ok=True)

    if args.headless:
        setup_logging(settings.log)
        sys.exit(asyncio.run(main(settings)))
    else:
        # The TUI installs its own log sink
        asyncio.run(main_tui(settings))
