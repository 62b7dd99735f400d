"""
The comic name index, built from the xkcd archive listing
This has no commands
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Self

from botlogging import LogLevel
from bs4 import BeautifulSoup
from core import custom_errors

if TYPE_CHECKING:
    import bot


def normalize_name(name: str) -> str:
    """Puts a comic name in the form used as an index key

    Args:
        name (str): The raw title or search text

    Returns:
        str: The lowercased name with whitespace collapsed
    """
    return " ".join(name.split()).lower()


class NameIndex:
    """Maps lowercase comic titles to comic numbers

    The mapping is rebuilt off to the side and swapped in whole,
    so lookups never see a half built index

    Args:
        bot (bot.XkcdBot): The bot object, for HTTP calls and logging
        archive_url (str): The page listing every comic
    """

    def __init__(
        self: Self, bot: bot.XkcdBot, archive_url: str = "https://xkcd.com/archive/"
    ) -> None:
        self.bot = bot
        self.archive_url = archive_url
        self.names: dict[str, int] = {}
        self.last_refresh: datetime.datetime | None = None

    def __len__(self: Self) -> int:
        return len(self.names)

    @staticmethod
    def parse_archive(html: str) -> dict[str, int]:
        """Reads every comic link out of the archive page
        Links look like <a href="/1234/">Title</a>, anything else is skipped

        Args:
            html (str): The archive page body

        Returns:
            dict[str, int]: The name to number mapping. Later duplicates win
        """
        soup = BeautifulSoup(html, "html.parser")
        names = {}
        for link in soup.find_all("a"):
            try:
                number = int(link.get("href", "").split("/")[1])
            except (IndexError, ValueError):
                continue
            names[normalize_name(link.get_text())] = number
        return names

    async def rebuild(self: Self) -> None:
        """Replaces the index with a fresh copy of the archive

        Raises:
            ArchiveUnavailable: Raised if the archive page didn't load.
                The current index is kept
        """
        await self.bot.logger.send_log(
            message="Updating comic name map",
            level=LogLevel.DEBUG,
            console_only=True,
        )
        response = await self.bot.http_functions.http_call("get", self.archive_url)
        if response.status != 200:
            raise custom_errors.ArchiveUnavailable(self.archive_url, response.status)

        names = self.parse_archive(response.text)
        self.names = names
        self.last_refresh = datetime.datetime.now(datetime.timezone.utc)

        await self.bot.logger.send_log(
            message=f"Finished updating comic name map ({len(names)} comics)",
            level=LogLevel.INFO,
            console_only=True,
        )

    def lookup(self: Self, name: str) -> int | None:
        """Finds a comic number by its exact title, ignoring case

        Args:
            name (str): The title to search for

        Returns:
            int | None: The comic number, or None if no comic has that title
        """
        return self.names.get(normalize_name(name))
