"""
Commands for showing xkcd comics
The cog in the file is named:
    XKCD

This file contains 6 commands:
    /xkcd latest
    /xkcd random
    /xkcd range
    /xkcd get
    /xkcd lookup
    /xkcd help
"""

from __future__ import annotations

import asyncio
import random
from typing import TYPE_CHECKING, Self

import discord
import ui
from botlogging import LogContext, LogLevel
from core import auxiliary, cogs, comics, custom_errors, names
from discord import app_commands

if TYPE_CHECKING:
    import bot


async def setup(bot: bot.XkcdBot) -> None:
    """Loading the XKCD plugin into the bot

    Args:
        bot (bot.XkcdBot): The bot object to register the cogs to
    """
    await bot.add_cog(XKCD(bot=bot, extension_name="xkcd"))


class XKCD(cogs.LoopCog):
    """The xkcd commands, and the loop that keeps the comic name index fresh

    Attrs:
        ON_START (bool): The name index is built as soon as the bot is ready
        xkcd_group (app_commands.Group): The group for the /xkcd commands

    Args:
        *args (tuple): Args to pass to the LoopCog init
        **kwargs (dict): Args to pass to the LoopCog init
    """

    ON_START: bool = True

    xkcd_group: app_commands.Group = app_commands.Group(
        name="xkcd",
        description="xkcd related commands",
        extras={"module": "xkcd"},
        default_permissions=discord.Permissions(embed_links=True),
    )

    def __init__(self: Self, *args: tuple, **kwargs: dict) -> None:
        super().__init__(*args, **kwargs)
        settings = self.bot.file_config.xkcd
        self.settings = settings
        self.fetcher = comics.ComicFetcher(
            self.bot,
            base_url=settings.base_url,
            meta_selector=settings.meta_selector,
            meta_index=settings.meta_index,
        )
        self.names = names.NameIndex(self.bot, archive_url=settings.archive_url)
        self.navigators = ui.NavigatorRegistry(
            max_len=settings.navigator_limit,
            max_age_seconds=settings.navigator_timeout,
        )

    async def execute(self: Self) -> None:
        """Rebuilds the comic name index"""
        await self.names.rebuild()

    async def wait(self: Self) -> None:
        """Sleeps until the next name index refresh"""
        await asyncio.sleep(self.settings.refresh_hours * 3600)

    async def send_comic(
        self: Self,
        interaction: discord.Interaction,
        comic: comics.Comic,
        buttons: bool,
    ) -> discord.Message:
        """Posts a comic as a followup, with navigation if requested

        Args:
            interaction (discord.Interaction): The deferred interaction
            comic (comics.Comic): The comic to show
            buttons (bool): Whether to attach the navigation buttons

        Returns:
            discord.Message: The message the comic was posted in
        """
        message = await interaction.followup.send(embed=comic.to_embed(), wait=True)
        if buttons:
            navigator = ui.ComicNavigator(
                self.fetcher,
                comic,
                self.navigators,
                timeout=self.settings.navigator_timeout,
            )
            await navigator.start(message)
        return message

    async def fetch_required(self: Self, number: int | None = None) -> comics.Comic:
        """Gets a comic the command can't continue without

        Args:
            number (int | None, optional): The comic to get. Defaults to the newest.

        Raises:
            ComicFetchError: Raised if the comic didn't load

        Returns:
            comics.Comic: The comic
        """
        if number is None:
            result = await self.fetcher.fetch_latest()
        else:
            result = await self.fetcher.fetch_by_number(number)
        if not result.ok:
            raise custom_errors.ComicFetchError(result.url, result.status)
        return result.comic

    @xkcd_group.command(
        name="latest",
        description="Gets the latest xkcd",
        extras={"module": "xkcd"},
    )
    async def latest(self: Self, interaction: discord.Interaction) -> None:
        """Discord entry point for /xkcd latest

        Args:
            interaction (discord.Interaction): The interaction that called the command
        """
        await self.latest_command(interaction)

    async def latest_command(self: Self, interaction: discord.Interaction) -> None:
        """The core logic for /xkcd latest

        Args:
            interaction (discord.Interaction): The interaction that called the command
        """
        await interaction.response.defer(thinking=True)
        comic = await self.fetch_required()
        await self.send_comic(interaction, comic, buttons=True)

    @xkcd_group.command(
        name="random",
        description="Get a random xkcd",
        extras={"module": "xkcd"},
    )
    async def random_comic(self: Self, interaction: discord.Interaction) -> None:
        """Discord entry point for /xkcd random

        Args:
            interaction (discord.Interaction): The interaction that called the command
        """
        await self.random_command(interaction)

    async def random_command(self: Self, interaction: discord.Interaction) -> None:
        """The core logic for /xkcd random

        Args:
            interaction (discord.Interaction): The interaction that called the command
        """
        await interaction.response.defer(thinking=True)
        latest = await self.fetch_required()
        comic = await self.fetch_required(random.randint(1, latest.number))
        await self.send_comic(interaction, comic, buttons=True)

    @xkcd_group.command(
        name="range",
        description="Gets a range of xkcd comics",
        extras={"module": "xkcd"},
    )
    @app_commands.describe(
        first="The first comic to get",
        last="The last comic to get",
        buttons="Whether to show navigation buttons",
    )
    async def range_comics(
        self: Self,
        interaction: discord.Interaction,
        first: int,
        last: int,
        buttons: bool = False,
    ) -> None:
        """Discord entry point for /xkcd range

        Args:
            interaction (discord.Interaction): The interaction that called the command
            first (int): The first comic to get
            last (int): The last comic to get
            buttons (bool, optional): Whether to show navigation buttons. Defaults to False.
        """
        await self.range_command(interaction, first, last, buttons)

    async def range_command(
        self: Self,
        interaction: discord.Interaction,
        first: int,
        last: int,
        buttons: bool = False,
    ) -> None:
        """The core logic for /xkcd range
        Comics that fail to load are skipped

        Args:
            interaction (discord.Interaction): The interaction that called the command
            first (int): The first comic to get
            last (int): The last comic to get
            buttons (bool, optional): Whether to show navigation buttons. Defaults to False.
        """
        max_range = self.settings.max_range
        if abs(last - first) > max_range:
            await interaction.response.send_message(
                content=f"Cannot get more than {max_range} comics at once!"
            )
            return

        await interaction.response.defer(thinking=True)
        sent = 0
        for number in range(first, last + 1):
            result = await self.fetcher.fetch_by_number(number)
            if not result.ok:
                continue
            await self.send_comic(interaction, result.comic, buttons)
            sent += 1

        if not sent:
            await interaction.followup.send(
                content=f"Could not find any comics from #{first} to #{last}"
            )

    @xkcd_group.command(
        name="get",
        description="Get a specific xkcd comic",
        extras={"module": "xkcd"},
    )
    @app_commands.describe(
        num="The comic to get",
        buttons="Whether to show navigation buttons",
    )
    async def get_comic(
        self: Self, interaction: discord.Interaction, num: int, buttons: bool = False
    ) -> None:
        """Discord entry point for /xkcd get

        Args:
            interaction (discord.Interaction): The interaction that called the command
            num (int): The comic to get
            buttons (bool, optional): Whether to show navigation buttons. Defaults to False.
        """
        await self.get_command(interaction, num, buttons)

    async def get_command(
        self: Self, interaction: discord.Interaction, num: int, buttons: bool = False
    ) -> None:
        """The core logic for /xkcd get

        Args:
            interaction (discord.Interaction): The interaction that called the command
            num (int): The comic to get
            buttons (bool, optional): Whether to show navigation buttons. Defaults to False.
        """
        await interaction.response.defer(thinking=True)
        result = await self.fetcher.fetch_by_number(num)
        if not result.ok:
            await interaction.followup.send(content=f"Could not find comic #{num}")
            return
        await self.send_comic(interaction, result.comic, buttons)

    @xkcd_group.command(
        name="lookup",
        description="Get a comic by its name",
        extras={"module": "xkcd"},
    )
    @app_commands.describe(
        name="The name of the comic to get",
        buttons="Whether to show navigation buttons",
    )
    async def lookup_comic(
        self: Self, interaction: discord.Interaction, name: str, buttons: bool = False
    ) -> None:
        """Discord entry point for /xkcd lookup

        Args:
            interaction (discord.Interaction): The interaction that called the command
            name (str): The name of the comic to get
            buttons (bool, optional): Whether to show navigation buttons. Defaults to False.
        """
        await self.lookup_command(interaction, name, buttons)

    async def lookup_command(
        self: Self, interaction: discord.Interaction, name: str, buttons: bool = False
    ) -> None:
        """The core logic for /xkcd lookup

        Args:
            interaction (discord.Interaction): The interaction that called the command
            name (str): The name of the comic to get
            buttons (bool, optional): Whether to show navigation buttons. Defaults to False.
        """
        number = self.names.lookup(name)
        if number is None:
            await self.bot.logger.send_log(
                message=f"No comic named {name!r} in the name index",
                level=LogLevel.DEBUG,
                context=LogContext(
                    guild=interaction.guild, channel=interaction.channel
                ),
                console_only=True,
            )
            await interaction.response.send_message(content="Could not find comic!")
            return

        await interaction.response.defer(thinking=True)
        result = await self.fetcher.fetch_by_number(number)
        if not result.ok:
            await interaction.followup.send(content="Could not find comic!")
            return
        await self.send_comic(interaction, result.comic, buttons)

    @xkcd_group.command(
        name="help",
        description="Bot information and help",
        extras={"module": "xkcd"},
    )
    async def help_info(self: Self, interaction: discord.Interaction) -> None:
        """Discord entry point for /xkcd help

        Args:
            interaction (discord.Interaction): The interaction that called the command
        """
        await self.help_command(interaction)

    async def help_command(self: Self, interaction: discord.Interaction) -> None:
        """Sends the about and usage information, only to the caller

        Args:
            interaction (discord.Interaction): The interaction that called the command
        """
        embed = self.generate_help_embed()
        view = discord.ui.View()
        view.add_item(auxiliary.link_button("GitHub", self.settings.source_url))
        view.add_item(
            auxiliary.link_button("Report an Issue", self.settings.issues_url)
        )
        await interaction.response.send_message(embed=embed, view=view, ephemeral=True)

    def generate_help_embed(self: Self) -> discord.Embed:
        """Builds the help embed

        Returns:
            discord.Embed: The about and usage embed
        """
        embed = auxiliary.generate_basic_embed(title=f"xkcd Bot v{self.bot.VERSION}")
        embed.add_field(
            name="About",
            value=(
                "This bot provides commands for the xkcd webcomic"
                f" ({self.fetcher.latest_url})"
            ),
            inline=False,
        )
        embed.add_field(
            name="Commands",
            value=(
                "`/xkcd get <num>            `- Get a specific xkcd comic by its number\n"
                "`/xkcd range <first> <last> `- Get a range of xkcd comics from first"
                " to last\n"
                "`/xkcd random               `- Get a random xkcd comic\n"
                "`/xkcd lookup <name>        `- Get a specific comic by its name\n"
                "`/xkcd latest               `- Get the latest xkcd\n\n"
                'Any parameter named "buttons" controls whether to attach the'
                " navigation buttons to the message."
            ),
            inline=False,
        )
        return embed
