"""This is a file to house the comic navigation view
It lets anyone step through comics on a posted message"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Self

import discord
import expiringdict
from botlogging import LogLevel
from core import auxiliary

if TYPE_CHECKING:
    from core import comics


class NavigatorRegistry:
    """Tracks the navigator attached to each message

    Entries are dropped when their view times out, when they are older than
    max_age_seconds, or when more than max_len navigators are live

    Args:
        max_len (int): The most navigators to keep at once
        max_age_seconds (float): How long a navigator may live
    """

    def __init__(self: Self, max_len: int = 500, max_age_seconds: float = 3600) -> None:
        self.navigators: expiringdict.ExpiringDict[int, ComicNavigator] = (
            expiringdict.ExpiringDict(
                max_len=max_len, max_age_seconds=max_age_seconds
            )
        )

    def __len__(self: Self) -> int:
        return len(self.navigators)

    def __contains__(self: Self, message_id: int) -> bool:
        return message_id in self.navigators

    def register(self: Self, message_id: int, navigator: ComicNavigator) -> None:
        """Stores the navigator for a message, replacing any older one

        Args:
            message_id (int): The ID of the message the navigator controls
            navigator (ComicNavigator): The navigator
        """
        self.navigators[message_id] = navigator

    def get(self: Self, message_id: int) -> ComicNavigator | None:
        """Finds the navigator for a message

        Args:
            message_id (int): The ID of the message

        Returns:
            ComicNavigator | None: The navigator, if it is still alive
        """
        return self.navigators.get(message_id)

    def evict(self: Self, message_id: int) -> None:
        """Forgets the navigator for a message, if there is one

        Args:
            message_id (int): The ID of the message
        """
        self.navigators.pop(message_id, None)


class ComicNavigator(discord.ui.View):
    """The previous/random/next controls for a comic message

    To use this, call the start function. Everything else is automatic

    Args:
        fetcher (comics.ComicFetcher): Where comics are loaded from
        comic (comics.Comic): The comic the message starts on
        registry (NavigatorRegistry): The registry this navigator lives in
        timeout (float | None): Seconds of inactivity before the controls are removed
    """

    EXPLAIN_URL = "https://www.explainxkcd.com/{}"
    MAX_SKIPPED = 10

    def __init__(
        self: Self,
        fetcher: comics.ComicFetcher,
        comic: comics.Comic,
        registry: NavigatorRegistry,
        timeout: float | None = 900,
    ) -> None:
        super().__init__(timeout=timeout)
        self.fetcher = fetcher
        self.registry = registry
        self.current = comic.number
        self.message = None
        self.rebuild_items()

    def rebuild_items(self: Self) -> None:
        """Lays out a fresh set of controls
        The link buttons point at the current comic, so they are redone on every move
        """
        self.clear_items()
        self.add_item(self.previous_button)
        self.add_item(self.random_button)
        self.add_item(self.next_button)
        self.add_item(
            auxiliary.link_button("xkcd.com", self.fetcher.comic_url(self.current))
        )
        self.add_item(
            auxiliary.link_button("explain", self.EXPLAIN_URL.format(self.current))
        )

    async def start(self: Self, message: discord.Message) -> None:
        """Entry point for the navigator. Attaches the controls to a message

        Args:
            message (discord.Message): The message showing the starting comic
        """
        self.message = message
        self.registry.register(message.id, self)
        await message.edit(view=self)

    async def move_to(
        self: Self,
        interaction: discord.Interaction,
        number: int,
        direction: int,
        latest: int | None = None,
    ) -> None:
        """Loads a comic and redraws the message with it
        Comics that don't exist, like #404, are skipped in the direction of travel.
        The cursor only moves if a comic loaded

        Args:
            interaction (discord.Interaction): The button press, already deferred
            number (int): The comic to show
            direction (int): 1 or -1, which way to skip past missing comics
            latest (int | None, optional): The newest comic number, if already known.
                It is only looked up once a fetch fails. Defaults to None.
        """
        result = await self.fetcher.fetch_by_number(number)
        skipped = 0
        while not result.ok:
            if latest is None:
                latest_result = await self.fetcher.fetch_latest()
                if not latest_result.ok:
                    break
                latest = latest_result.comic.number
            if number > latest:
                await interaction.followup.send(
                    "There is no later comic!", ephemeral=True
                )
                return
            if skipped >= self.MAX_SKIPPED or not 1 <= number + direction <= latest:
                break
            skipped += 1
            number += direction
            result = await self.fetcher.fetch_by_number(number)

        if not result.ok:
            await interaction.followup.send(
                f"Could not load comic #{number}", ephemeral=True
            )
            return

        self.current = number
        self.rebuild_items()
        if self.message:
            # Keeps an active navigator from aging out of the registry
            self.registry.register(self.message.id, self)
        await interaction.edit_original_response(
            content=None, embed=result.comic.to_embed(), view=self
        )

    async def step(self: Self, interaction: discord.Interaction, offset: int) -> None:
        """Moves the cursor forward or backward

        Args:
            interaction (discord.Interaction): The button press
            offset (int): How far to move, negative to go back
        """
        await interaction.response.defer()
        target = self.current + offset
        if target < 1:
            await interaction.followup.send("There is no earlier comic!", ephemeral=True)
            return
        await self.move_to(interaction, target, 1 if offset > 0 else -1)

    async def roll(self: Self, interaction: discord.Interaction) -> None:
        """Jumps to a random comic, up to and including the newest one

        Args:
            interaction (discord.Interaction): The button press
        """
        await interaction.response.defer()
        latest = await self.fetcher.fetch_latest()
        if not latest.ok:
            await interaction.followup.send(
                "I had trouble looking up the newest comic", ephemeral=True
            )
            return
        await self.move_to(
            interaction,
            random.randint(1, latest.comic.number),
            1,
            latest=latest.comic.number,
        )

    @discord.ui.button(label="Previous", style=discord.ButtonStyle.primary)
    async def previous_button(
        self: Self, interaction: discord.Interaction, _: discord.ui.Button
    ) -> None:
        """This declares the previous button, and what should happen when it's pressed

        Args:
            interaction (discord.Interaction): The interaction that pressed the button
        """
        await self.step(interaction, -1)

    @discord.ui.button(emoji="🎲", style=discord.ButtonStyle.secondary)
    async def random_button(
        self: Self, interaction: discord.Interaction, _: discord.ui.Button
    ) -> None:
        """This declares the random button, and what should happen when it's pressed

        Args:
            interaction (discord.Interaction): The interaction that pressed the button
        """
        await self.roll(interaction)

    @discord.ui.button(label="Next", style=discord.ButtonStyle.primary)
    async def next_button(
        self: Self, interaction: discord.Interaction, _: discord.ui.Button
    ) -> None:
        """This declares the next button, and what should happen when it's pressed

        Args:
            interaction (discord.Interaction): The interaction that pressed the button
        """
        await self.step(interaction, 1)

    async def on_timeout(self: Self) -> None:
        """This removes the buttons and forgets the navigator after the timeout"""
        if not self.message:
            return
        self.registry.evict(self.message.id)
        try:
            await self.message.edit(view=None)
        except discord.HTTPException as exception:
            await self.fetcher.bot.logger.send_log(
                message=f"Could not remove navigation from message {self.message.id}",
                level=LogLevel.DEBUG,
                console_only=True,
                exception=exception,
            )
