"""Ephemeral user-facing messages with auto-clear."""

import asyncio
from collections.abc import Awaitable, Callable

from loguru import logger

from shadow_wallet.models import MessageChannel

MessageListener = Callable[[MessageChannel, str], Awaitable[None]]


class MessageBoard:
    """One message slot per channel, each cleared after a fixed delay.

    A new message replaces the current one wholesale and cancels its
    pending clear; nothing is queued or stacked.
    """

    def __init__(self, listener: MessageListener | None = None) -> None:
        """Initialize the board.

        Args:
            listener: Awaited with (channel, text) whenever a slot changes.
        """
        self._listener = listener
        self._messages: dict[MessageChannel, str] = {channel: "" for channel in MessageChannel}
        self._clear_tasks: dict[MessageChannel, asyncio.Task[None]] = {}

    def get(self, channel: MessageChannel) -> str:
        """Current text of a channel ('' when empty)."""
        return self._messages[channel]

    async def show(self, channel: MessageChannel, text: str, clear_after: float) -> None:
        """Show a message and schedule it to clear.

        Args:
            channel: Slot to write to.
            text: Message text.
            clear_after: Seconds before the slot is emptied.
        """
        self._cancel_clear(channel)
        self._messages[channel] = text
        logger.debug("Message [{}]: {}", channel.value, text)
        self._clear_tasks[channel] = asyncio.create_task(
            self._clear_later(channel, clear_after)
        )
        await self._emit(channel, text)

    async def clear(self, channel: MessageChannel) -> None:
        """Empty a channel immediately."""
        self._cancel_clear(channel)
        if self._messages[channel]:
            self._messages[channel] = ""
            await self._emit(channel, "")

    async def _clear_later(self, channel: MessageChannel, delay: float) -> None:
        """Empty the slot after the delay unless replaced first."""
        await asyncio.sleep(delay)
        self._clear_tasks.pop(channel, None)
        self._messages[channel] = ""
        await self._emit(channel, "")

    def _cancel_clear(self, channel: MessageChannel) -> None:
        task = self._clear_tasks.pop(channel, None)
        if task is not None and not task.done():
            task.cancel()

    async def _emit(self, channel: MessageChannel, text: str) -> None:
        if self._listener is None:
            return
        try:
            await self._listener(channel, text)
        except Exception as e:
            logger.debug("Message listener error: {}", str(e))

    async def aclose(self) -> None:
        """Cancel all pending clears."""
        tasks = list(self._clear_tasks.values())
        self._clear_tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
