"""Console and discord logging for the bot."""

from .common import LogContext, LogLevel
from .delayed import DelayedLogger
from .logger import BotLogger
