"""
This is the core bot file. It contains config loading, logger setup,
extension loading, app command syncing and the app command error boundary
"""

from __future__ import annotations

import asyncio
import glob
import os
from typing import Self

import botlogging
import discord
import munch
import yaml
from botlogging import LogContext, LogLevel
from core import auxiliary, custom_errors, http
from discord import app_commands
from discord.ext import commands


class XkcdBot(commands.Bot):
    """Sets up a new XkcdBot object.
    This does NOT start the bot, the start function must be called for that

    Args:
        intents (discord.Intents): The list of intents that
            the bot needs to request from discord
        allowed_mentions (discord.AllowedMentions): What the bot is, or is not,
            allowed to mention

    Attrs:
        VERSION (str): The version shown in /xkcd help
        CONFIG_PATH (str): The path to the yaml config file,
            overridden by the CONFIG_PATH environment variable
        EXTENSIONS_DIR_NAME (str): The hardcoded folder for commands
        EXTENSIONS_DIR (str): The full path of the EXTENSIONS_DIR_NAME folder
    """

    VERSION: str = "1.2"
    CONFIG_PATH: str = os.environ.get("CONFIG_PATH", "./config.yml")
    EXTENSIONS_DIR_NAME: str = "commands"
    EXTENSIONS_DIR: str = (
        f"{os.path.join(os.path.dirname(__file__))}/{EXTENSIONS_DIR_NAME}"
    )

    def __init__(
        self: Self, intents: discord.Intents, allowed_mentions: discord.AllowedMentions
    ) -> None:
        self.file_config = None
        self.extension_name_list: list[str] = []

        # Loads the file config, which includes things like the token
        self.load_file_config()

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            allowed_mentions=allowed_mentions,
            activity=discord.Activity(
                type=discord.ActivityType.watching,
                name=self.file_config.bot_config.status or "xkcd",
            ),
        )

        # Setup the regular or delayed logger, depending on the file config
        if self.file_config.logging.queue_enabled:
            self.logger = botlogging.DelayedLogger(
                discord_bot=self,
                name=self.__class__.__name__,
                send=not self.file_config.logging.block_discord_send,
                wait_time=self.file_config.logging.queue_wait_seconds,
            )
        else:
            self.logger = botlogging.BotLogger(
                discord_bot=self,
                name=self.__class__.__name__,
                send=not self.file_config.logging.block_discord_send,
            )

        self.http_functions = http.HTTPCalls(self)

        # Set the app command on error function to log errors in slash commands
        self.tree.on_error = self.on_app_command_error

    # Entry point

    async def start(self: Self) -> None:
        """Starts the bot and connects to discord
        Any discord interactions should be done with setup_hook
        """
        if isinstance(self.logger, botlogging.DelayedLogger):
            self.logger.register_queue()
            asyncio.create_task(self.logger.run())

        await self.logger.send_log(
            message=f"Starting xkcd bot v{self.VERSION}",
            level=LogLevel.INFO,
            console_only=True,
        )
        await super().start(self.file_config.bot_config.auth_token)

    # Discord.py called functions

    async def setup_hook(self: Self) -> None:
        """This function is automatically called after the bot has been logged into discord
        This loads extensions and syncs the app command tree

        This function is called only one time, and should never be manually called
        """
        await self.logger.send_log(
            message="Loading extensions...", level=LogLevel.DEBUG, console_only=True
        )
        await self.load_extensions()
        await self.sync_app_commands()

    async def on_ready(self: Self) -> None:
        """Callback for when the bot is finished starting up.
        This function may be called more than once and should not have discord interactions in it
        """
        await self.logger.send_log(
            message="Bot online", level=LogLevel.INFO, console_only=True
        )

    def get_default_guild(self: Self) -> discord.Object | None:
        """Reads the default guild from the file config

        Returns:
            discord.Object | None: The guild to register commands to,
                or None if commands should be registered globally
        """
        try:
            return discord.Object(id=int(self.file_config.bot_config.default_guild))
        except (TypeError, ValueError):
            return None

    async def sync_app_commands(self: Self) -> list[app_commands.AppCommand]:
        """Registers the slash commands with discord.
        With a default guild they show up there instantly, otherwise globally

        Returns:
            list[app_commands.AppCommand]: The commands discord now knows about
        """
        guild = self.get_default_guild()
        if guild:
            self.tree.copy_global_to(guild=guild)
        synced = await self.tree.sync(guild=guild)
        await self.logger.send_log(
            message=(
                f"Synced {len(synced)} app commands"
                + (f" to guild {guild.id}" if guild else " globally")
            ),
            level=LogLevel.INFO,
            console_only=True,
        )
        return synced

    # File config loading functions

    def load_file_config(self: Self, validate: bool = True) -> None:
        """Loads the config yaml file into a bot object.

        Args:
            validate (bool): True if validations should be ran on the file
        """
        with open(self.CONFIG_PATH, encoding="utf8") as iostream:
            config_ = yaml.safe_load(iostream)

        self.file_config = munch.DefaultMunch.fromDict(config_, None)

        if not validate:
            return

        self.validate_bot_config_subsection("bot_config", ["auth_token"])
        self.validate_bot_config_subsection(
            "xkcd",
            [
                "base_url",
                "archive_url",
                "meta_selector",
                "meta_index",
                "max_range",
                "refresh_hours",
                "navigator_timeout",
                "navigator_limit",
            ],
        )

    def validate_bot_config_subsection(
        self: Self, section: str, required: list[str]
    ) -> None:
        """Checks a config section for missing values.

        Args:
            section (str): the section name
            required (list[str]): the keys that must have a value

        Raises:
            ValueError: If the section is missing any keys
        """
        values = self.file_config.get(section) or {}
        for key in required:
            if values.get(key) is None:
                raise ValueError(f"Config key {key} from {section} not supplied")

    # Error handling and logging functions

    async def on_app_command_error(
        self: Self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        """This is called upon any error originating from an app command

        Args:
            interaction (discord.Interaction): The interaction where the error occured at
            error (app_commands.AppCommandError): The error object that occured
        """
        error_message = await self.handle_error(
            exception=error, channel=interaction.channel, guild=interaction.guild
        )

        if not error_message:
            return

        embed = auxiliary.prepare_deny_embed(message=error_message)

        if interaction.response.is_done():
            await interaction.followup.send(embed=embed)
        else:
            await interaction.response.send_message(embed=embed)

    async def handle_error(
        self: Self,
        exception: Exception,
        channel: discord.abc.Messageable,
        guild: discord.Guild,
    ) -> str | None:
        """Handles the formatting and logging of app command errors

        Args:
            exception (Exception): The exception object generated
            channel (discord.abc.Messageable): The channel the command was run in
            guild (discord.Guild): The guild the command was run in

        Returns:
            str | None: The pretty string format that should be shared with the user,
                or None if the error should not be reported
        """
        # Errors raised inside the command body arrive wrapped
        if isinstance(exception, app_commands.CommandInvokeError):
            exception = exception.original

        if exception.__class__ in custom_errors.IGNORED_ERRORS:
            return None

        message_template = custom_errors.COMMAND_ERROR_RESPONSES.get(
            exception.__class__, custom_errors.ErrorResponse()
        )
        error_message = message_template.get_message(exception)

        # Ensure that error messages aren't too long.
        # This ONLY changes the user facing error, the stack trace isn't impacted
        if len(error_message) > 1000:
            error_message = f"{error_message[:1000]}..."

        dont_print_trace = message_template.dont_print_trace or getattr(
            exception, "dont_print_trace", False
        )
        await self.logger.send_log(
            message=f"Command error: {exception}",
            level=LogLevel.WARNING if dont_print_trace else LogLevel.ERROR,
            context=LogContext(guild=guild, channel=channel),
            exception=None if dont_print_trace else exception,
        )

        return error_message

    # Extension loading

    async def get_potential_extensions(self: Self) -> list[str]:
        """Gets the current list of extensions in the defined directory.

        Returns:
            list[str]: Gets a list of the string names of every python file
                in the commands folder
        """
        self.logger.console.info(f"Searching {self.EXTENSIONS_DIR} for extensions")
        return [
            os.path.basename(f)[:-3]
            for f in glob.glob(f"{self.EXTENSIONS_DIR}/*.py")
            if os.path.isfile(f) and not f.endswith("__init__.py")
        ]

    async def load_extensions(self: Self, graceful: bool = True) -> None:
        """Loads all extensions currently in the extensions directory.

        Args:
            graceful (bool, optional): True if extensions should gracefully fail to load.
                Defaults to True.

        Raises:
            exception: If graceful is false, this will raise ANY
                exception generated by loading extensions
        """
        disabled = self.file_config.bot_config.disabled_extensions or []
        for extension_name in await self.get_potential_extensions():
            if extension_name in disabled:
                self.logger.console.debug(
                    f"{extension_name} is disabled on startup - ignoring load"
                )
                continue

            try:
                await self.load_extension(
                    f"{self.EXTENSIONS_DIR_NAME}.{extension_name}"
                )
                self.extension_name_list.append(extension_name)
            except Exception as exception:
                self.logger.console.error(
                    f"Failed to load extension {extension_name}: {exception}"
                )
                if not graceful:
                    raise exception
