"""
This is a collection of embed helpers shared by the commands and the bot
"""

from __future__ import annotations

import discord

default_color = discord.Color.blurple()


def generate_basic_embed(
    title: str = "",
    description: str = "",
    color: discord.Color = default_color,
    url: str = "",
) -> discord.Embed:
    """Generates a basic embed

    Args:
        title (str, optional): The title to be assigned to the embed. Defaults to "".
        description (str, optional): The description to be assigned to the embed. Defaults to "".
        color (discord.Color, optional): The color to be assigned to the embed.
            Defaults to blurple.
        url (str, optional): A URL for a thumbnail picture. Defaults to "".

    Returns:
        discord.Embed: The formatted embed, styled with the 4 above options
    """
    embed = discord.Embed()
    embed.title = title
    embed.description = description
    embed.color = color
    if url != "":
        embed.set_thumbnail(url=url)
    return embed


def prepare_deny_embed(message: str) -> discord.Embed:
    """Prepares a formatted deny embed
    This just calls generate_basic_embed with a pre-loaded set of args

    Args:
        message (str): The reason for deny

    Returns:
        discord.Embed: The formatted embed
    """
    return generate_basic_embed(
        title="😕 👎",
        description=message,
        color=discord.Color.red(),
    )


def link_button(label: str, url: str) -> discord.ui.Button:
    """Builds a button that opens a URL

    Args:
        label (str): The text on the button
        url (str): Where the button leads

    Returns:
        discord.ui.Button: The link button
    """
    return discord.ui.Button(label=label, url=url, style=discord.ButtonStyle.link)
