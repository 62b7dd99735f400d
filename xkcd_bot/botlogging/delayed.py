"""Module for delayed logging."""

from __future__ import annotations

import asyncio
from typing import Any, Self

from botlogging import logger
from botlogging.common import LogLevel


class DelayedLogger(logger.BotLogger):
    """Logging interface that spaces discord log sends out over time.
    Useful when a burst of logs would otherwise trip discord's rate limits

    Args:
        *args (tuple): Passed through to BotLogger
        wait_time (float): the time to wait between log sends
        queue_size (int): the max number of queued log events
        **kwargs (dict[str, Any]): Passed through to BotLogger
    """

    def __init__(
        self: Self,
        *args: tuple,
        wait_time: float = 1,
        queue_size: int = 1000,
        **kwargs: dict[str, Any],
    ) -> None:
        self.wait_time = wait_time
        self.queue_size = queue_size
        self.send_queue: asyncio.Queue | None = None
        super().__init__(*args, **kwargs)

    async def send_log(self: Self, *args: tuple, **kwargs: dict[str, Any]) -> None:
        """Queues a log to be sent by the run loop
        Debug logs are dropped right away when debug is off

        Args:
            *args (tuple): Passed through to BotLogger.send_log
            **kwargs (dict[str, Any]): Passed through to BotLogger.send_log
        """
        if kwargs.get("level") == LogLevel.DEBUG and not logger.debug_enabled():
            return

        await self.send_queue.put(super().send_log(*args, **kwargs))

    def register_queue(self: Self) -> None:
        """Creates the queue. Must be called from inside the running loop"""
        self.send_queue = asyncio.Queue(maxsize=self.queue_size)

    async def run(self: Self) -> None:
        """A forever loop that pulls from the queue and then waits"""
        while True:
            coro = await self.send_queue.get()
            try:
                await coro
            except Exception as exception:
                self.console.error(f"Queued log failed to send: {exception}")
            await asyncio.sleep(self.wait_time)
