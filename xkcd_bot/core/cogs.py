"""Base cogs for making extentions."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Self

from botlogging import LogLevel
from discord.ext import commands

if TYPE_CHECKING:
    import bot


class BaseCog(commands.Cog):
    """The base cog to use when making extensions.

    Attrs:
        COG_TYPE (str): The string representation for the type of cog
        KEEP_COG_ON_FAILURE (bool): Whether or not to keep the cog loaded if there was an error

    Args:
        bot (bot.XkcdBot): the bot object
        extension_name(str): The name of the extension
            if it needs to be different than the file name
    """

    COG_TYPE = "Base"
    KEEP_COG_ON_FAILURE = False

    def __init__(self: Self, bot: bot.XkcdBot, extension_name: str = None) -> None:
        self.bot = bot
        self.extension_name = extension_name or self.__module__.split(".")[-1]

        asyncio.create_task(self._preconfig())

    async def _handle_preconfig(
        self: Self, handler: Callable[..., Awaitable[None]]
    ) -> None:
        """Wrapper for performing preconfig on an extension.

        This makes the extension unload when there is an error.

        Args:
            handler (Callable[..., Awaitable[None]]): the preconfig handler
        """
        await self.bot.wait_until_ready()

        try:
            await handler()
        except Exception as exception:
            await self.bot.logger.send_log(
                message=f"Cog preconfig error: {handler.__name__}!",
                level=LogLevel.ERROR,
                exception=exception,
            )
            if not self.KEEP_COG_ON_FAILURE:
                await self.bot.remove_cog(self.qualified_name)

    async def _preconfig(self: Self) -> None:
        """Blocks the preconfig until the bot is ready."""
        await self._handle_preconfig(self.preconfig)

    async def preconfig(self: Self) -> None:
        """Preconfigures the environment before starting the cog."""


class LoopCog(BaseCog):
    """Cog that runs execute() forever, sleeping with wait() in between

    Attrs:
        COG_TYPE (str): The string representation for the type of cog
        DEFAULT_WAIT (int): The default time to sleep for
        ON_START (bool): True if execute should run once before the first wait

    Args:
        *args (tuple): Args to pass to the BaseCog init
        **kwargs (dict[str, Any]): Args to pass to the BaseCog init
    """

    COG_TYPE: str = "Loop"
    DEFAULT_WAIT: int = 300
    ON_START: bool = False

    def __init__(self: Self, *args: tuple, **kwargs: dict[str, Any]) -> None:
        super().__init__(*args, **kwargs)
        asyncio.create_task(self._loop_preconfig())

    async def _loop_preconfig(self: Self) -> None:
        """Blocks the loop until the bot is ready, then starts it"""
        await self._handle_preconfig(self.loop_preconfig)

        await self.bot.logger.send_log(
            message=f"Creating loop task for {self.extension_name}",
            level=LogLevel.DEBUG,
            console_only=True,
        )
        asyncio.create_task(self._loop_execute())

    async def loop_preconfig(self: Self) -> None:
        """Preconfigures the environment before starting the loop."""

    def loop_active(self: Self) -> bool:
        """The loop keeps going as long as the extension is loaded

        Returns:
            bool: True if the extension owning this cog is still loaded
        """
        return self.bot.extensions.get(self.__module__) is not None

    async def _loop_execute(self: Self) -> None:
        """Loops through the execution method."""
        if not self.ON_START:
            await self.wait()

        while self.loop_active():
            try:
                await self.execute()
            except Exception as exception:
                # always try to wait even when execute fails
                await self.bot.logger.send_log(
                    message=f"Loop cog execute error: {self.__class__.__name__}!",
                    level=LogLevel.ERROR,
                    exception=exception,
                )

            try:
                await self.wait()
            except Exception as exception:
                await self.bot.logger.send_log(
                    message=f"Loop wait cog error: {self.__class__.__name__}!",
                    level=LogLevel.ERROR,
                    exception=exception,
                )
                # avoid spamming
                await self._default_wait()

    async def execute(self: Self) -> None:
        """Runs sequentially after each wait method."""

    async def _default_wait(self: Self) -> None:
        """The default method used for waiting."""
        await asyncio.sleep(self.DEFAULT_WAIT)

    async def wait(self: Self) -> None:
        """The default wait method."""
        await self._default_wait()
