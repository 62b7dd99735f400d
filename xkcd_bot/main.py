"""xkcd bot main thread."""

import asyncio
import logging

import bot
import discord
from botlogging.logger import debug_enabled

MODULE_LOG_LEVELS = {
    "discord": logging.INFO,
    "aiohttp": logging.WARNING,
}

for module_name, level in MODULE_LOG_LEVELS.items():
    logging.getLogger(module_name).setLevel(level)

logging.basicConfig(
    level=logging.DEBUG if debug_enabled() else logging.INFO,
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Slash commands and buttons need no privileged intents
intents = discord.Intents.default()

bot_ = bot.XkcdBot(
    intents=intents,
    allowed_mentions=discord.AllowedMentions(everyone=False, roles=False),
)

asyncio.run(bot_.start())
