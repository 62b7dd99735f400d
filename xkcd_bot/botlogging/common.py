"""A few common types shared by the logging system"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import discord


class LogLevel(Enum):
    """The levels a log can be sent at

    Attrs:
        DEBUG (str): Representation of debug
        INFO (str): Representation of info
        WARNING (str): Representation of warning
        ERROR (str): Representation of error
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class LogContext:
    """Where a log event came from
    Logs from channels listed in the private channels config are kept off discord

    Attrs:
        guild (discord.Guild | None): The guild the log occured in. Optional
        channel (discord.abc.Messageable | None): The channel, DM, thread,
            or other messagable the log occured in
    """

    guild: discord.Guild | None = None
    channel: discord.abc.Messageable | None = None

    def describe(self) -> str:
        """Short human readable location, used as a console prefix

        Returns:
            str: The guild and channel names, or an empty string
        """
        parts = []
        if self.guild:
            parts.append(getattr(self.guild, "name", str(self.guild)))
        if self.channel:
            parts.append(f"#{getattr(self.channel, 'name', 'DM')}")
        return "/".join(parts)
