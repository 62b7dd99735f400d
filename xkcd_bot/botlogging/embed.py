"""Embeds used when a log event is mirrored to a Discord channel."""

from __future__ import annotations

import datetime
from typing import Self

import discord

from .common import LogLevel

LEVEL_COLORS: dict[LogLevel, discord.Color] = {
    LogLevel.DEBUG: discord.Color.dark_green(),
    LogLevel.INFO: discord.Color.green(),
    LogLevel.WARNING: discord.Color.gold(),
    LogLevel.ERROR: discord.Color.red(),
}


class LogEmbed(discord.Embed):
    """An embed styled after the level it is logging at

    Args:
        level (LogLevel): The level of the log event
        message (str): The message to log. Will become the description of the embed
    """

    def __init__(self: Self, level: LogLevel, message: str) -> None:
        super().__init__(
            title=level.value.upper(),
            description=message,
            color=LEVEL_COLORS[level],
        )
        self.level = level
        self.timestamp = datetime.datetime.now(datetime.timezone.utc)

    def modify_embed(self: Self, embed: discord.Embed) -> discord.Embed:
        """Restyles a caller supplied embed to look like this log embed
        Fields, images and footers of the supplied embed are kept

        Args:
            embed (discord.Embed): The embed to modify

        Returns:
            discord.Embed: The modified embed
        """
        embed.title = self.title
        embed.color = self.color
        embed.description = self.description
        embed.timestamp = self.timestamp

        return embed
