"""Module for logging bot events to the console and to discord."""

from __future__ import annotations

import logging
import os
import traceback
from typing import TYPE_CHECKING, Self

import discord

from .common import LogContext, LogLevel
from .embed import LogEmbed

if TYPE_CHECKING:
    import bot


def debug_enabled() -> bool:
    """Reads the DEBUG environment variable

    Returns:
        bool: True if DEBUG is set to a non zero integer
    """
    try:
        return bool(int(os.environ.get("DEBUG", 0)))
    except ValueError:
        return False


class BotLogger:
    """Logging interface for the bot.
    Every log goes to the console, and optionally to a discord channel

    Args:
        discord_bot (bot.XkcdBot): the bot object
        name (str): the name of the console logger
        send (bool): Whether or not to allow sending of logs to discord
    """

    def __init__(self: Self, discord_bot: bot.XkcdBot, name: str, send: bool) -> None:
        self.bot = discord_bot
        self.console = logging.getLogger(name if name else "root")
        self.send = send
        self.console_methods = {
            LogLevel.DEBUG: self.console.debug,
            LogLevel.INFO: self.console.info,
            LogLevel.WARNING: self.console.warning,
            LogLevel.ERROR: self.console.error,
        }

    def check_if_should_log(self: Self, level: LogLevel, context: LogContext) -> bool:
        """A way to check if the log should be logged
        This takes into account:
            If the env is set to DEBUG
            The level logged at
            The private channels config

        Args:
            level (LogLevel): The level that the log is being logged at
            context (LogContext): The context that the log was made in. This can be empty

        Returns:
            bool: True if the log should be logged, False if the log should be ignored
        """
        if debug_enabled():
            return True

        if level == LogLevel.DEBUG:
            return False

        # Errors are always logged, even from private channels
        if level == LogLevel.ERROR:
            return True

        if not context or not context.channel:
            return True

        private_channels = [
            str(channel_id)
            for channel_id in (self.bot.file_config.logging.private_channels or [])
        ]
        return str(getattr(context.channel, "id", "")) not in private_channels

    async def get_discord_target(
        self: Self, channel_id: str | None
    ) -> discord.abc.Messageable | None:
        """Finds the discord channel logs should be sent to
        This will either be the passed channel or the configured logging channel

        Args:
            channel_id (str | None): The ID of the channel that the log should go to

        Returns:
            discord.abc.Messageable | None: The channel object to log to, if one exists
        """
        for candidate in (channel_id, self.bot.file_config.logging.logging_channel):
            if not candidate:
                continue
            channel = self.bot.get_channel(int(candidate))
            if channel:
                return channel
        return None

    async def send_log(
        self: Self,
        message: str,
        level: LogLevel,
        context: LogContext = None,
        channel: str = None,
        console_only: bool = False,
        embed: discord.Embed = None,
        exception: Exception = None,
    ) -> None:
        """Logs a message, embed, and/or exception to the console and discord

        Args:
            message (str): The simple string representation of the message
            level (LogLevel): The enum of the level the log should be logged at
            context (LogContext, optional): The context the log was made in. Defaults to None.
            channel (str, optional): The string ID of the channel to log to. Defaults to None.
            console_only (bool, optional): If this log should only be sent to the console.
                Defaults to False.
            embed (discord.Embed, optional): A pre-filled embed to send to discord.
                The title, description, and color will be overwritten. Defaults to None.
            exception (Exception, optional): An exception to log with this message.
                Exceptions will be logged in plain text. Defaults to None.
        """
        if not self.check_if_should_log(level, context):
            return

        console = self.console_methods[level]
        location = context.describe() if context else ""
        console(f"[{location}] {message}" if location else message)

        exception_string = None
        if exception:
            exception_string = "".join(
                traceback.format_exception(
                    type(exception), exception, exception.__traceback__
                )
            )
            console(exception_string)

        if console_only or not self.send:
            return

        log_channel = await self.get_discord_target(channel)
        if not log_channel:
            return

        # Embed descriptions cap out at 4096 characters
        if len(message) > 4000:
            message = f"{message[:4000]}..."

        log_embed = LogEmbed(level, message)
        if embed:
            log_embed = log_embed.modify_embed(embed)

        try:
            await log_channel.send(embed=log_embed)
            if exception_string:
                exception_string = exception_string.replace("```", "{CODE_BLOCK}")
                for index in range(0, len(exception_string), 1990):
                    await log_channel.send(
                        f"```py\n{exception_string[index : index + 1990]}```"
                    )
        except discord.Forbidden:
            self.console.warning("Failed to send log")
